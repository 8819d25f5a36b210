"""Interactive command line search over a fixed set of sample documents."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from .document import Document
from .search_engine import SearchEngine

PROMPT = "\nEnter a search query (or 'quit' to exit): "


def sample_documents() -> List[Document]:
    """The documents the interactive search starts with."""
    return [
        Document(1, "The quick brown fox jumps over the lazy dog", "Doc 1"),
        Document(2, "A quick brown dog jumps over a lazy fox", "Doc 2"),
        Document(3, "The lazy dog and fox are quick and brown", "Doc 3"),
        Document(4, "Programming in C++ is fun and challenging", "Doc 4"),
        Document(5, "C++ is a powerful programming language", "Doc 5"),
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Answer queries read from standard input until 'quit' or end of input."""
    engine = SearchEngine()
    print("Adding sample documents...")
    for doc in sample_documents():
        engine.add_document(doc)
    print("Documents added successfully!")

    while True:
        print(PROMPT, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            break
        query = line.rstrip("\n")
        if query == "quit":
            break
        if not query:
            continue

        results = engine.search(query, 5)
        if not results:
            print("No results found.")
            continue

        print("Search results:")
        for doc_id, score in results:
            doc = engine.get_document(doc_id)
            if doc is None:
                continue
            print(f"Document {doc_id} (Score: {score:g})")
            print(f"  Title: {doc.title}")
            print(f"  Content: {doc.content}")

    print("Goodbye!")
    return 0