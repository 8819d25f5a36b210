"""An inverted index recording term and document frequencies."""

from __future__ import annotations

import threading
from collections import Counter, defaultdict
from typing import DefaultDict, Dict, List, Set

from .document import Document


class Indexer:
    """Thread-safe inverted index over documents' terms."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._postings: DefaultDict[str, Set[int]] = defaultdict(set)
        self._term_frequency: DefaultDict[str, Dict[int, int]] = defaultdict(dict)
        self._document_frequency: Counter[str] = Counter()
        self._document_count = 0

    def add_document(self, doc: Document) -> None:
        """Index every term of ``doc``."""
        counts = Counter(doc.terms)
        with self._lock:
            for term, freq in counts.items():
                self._postings[term].add(doc.id)
                self._term_frequency[term][doc.id] = freq
                self._document_frequency[term] += 1
            self._document_count += 1

    def documents_for_term(self, term: str) -> List[int]:
        """Ids of the documents containing ``term``, in ascending order."""
        with self._lock:
            return sorted(self._postings.get(term, ()))

    def term_frequency(self, term: str, doc_id: int) -> int:
        """How many times ``term`` occurs in document ``doc_id``."""
        with self._lock:
            return self._term_frequency.get(term, {}).get(doc_id, 0)

    def document_frequency(self, term: str) -> int:
        """How many documents contain ``term``."""
        with self._lock:
            return self._document_frequency.get(term, 0)

    def document_count(self) -> int:
        """Total number of documents added."""
        with self._lock:
            return self._document_count