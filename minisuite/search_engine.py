"""A small TF-IDF search engine over in-memory documents."""

from __future__ import annotations

import math
import threading
from typing import Dict, List, Optional, Tuple

from .document import Document
from .indexer import Indexer
from .query_processor import QueryProcessor

# IDF given to a term that occurs in every document.
UBIQUITOUS_TERM_IDF = 0.0001


class SearchEngine:
    """Indexes documents and ranks them against queries by TF-IDF."""

    def __init__(self) -> None:
        self._indexer = Indexer()
        self._query_processor = QueryProcessor(self._indexer)
        self._lock = threading.Lock()
        self._documents: Dict[int, Document] = {}

    def add_document(self, doc: Document) -> None:
        """Index ``doc`` and keep it for retrieval by id."""
        self._indexer.add_document(doc)
        with self._lock:
            self._documents[doc.id] = doc

    def search(self, query: str, max_results: int = 10) -> List[Tuple[int, float]]:
        """The best ``max_results`` (document id, score) pairs, highest score first."""
        terms = self._query_processor.process_query(query)
        if not terms:
            return []

        scores: Dict[int, float] = {}
        for term in terms:
            for doc_id in self._indexer.documents_for_term(term):
                scores[doc_id] = scores.get(doc_id, 0.0) + self._tfidf(term, doc_id)

        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        return ranked[:max_results]

    def get_document(self, doc_id: int) -> Optional[Document]:
        """The document with ``doc_id``, or None if there is none."""
        with self._lock:
            return self._documents.get(doc_id)

    def _tfidf(self, term: str, doc_id: int) -> float:
        tf = self._indexer.term_frequency(term, doc_id)
        if tf == 0:
            return 0.0
        df = self._indexer.document_frequency(term)
        if df == 0:
            return 0.0
        total = self._indexer.document_count()
        idf = UBIQUITOUS_TERM_IDF if df == total else math.log(total / df)
        return tf * idf