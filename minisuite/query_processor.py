"""Turning query strings into search terms."""

from __future__ import annotations

from typing import List

from .document import tokenize
from .indexer import Indexer


class QueryProcessor:
    """Normalises queries the same way documents are tokenized."""

    def __init__(self, indexer: Indexer) -> None:
        self.indexer = indexer

    def process_query(self, query: str) -> List[str]:
        """The terms of ``query``: lower case, punctuation removed."""
        return tokenize(query)