"""Documents and the tokenizer that turns their text into terms."""

from __future__ import annotations

import string
from typing import List, Tuple

_STRIP_PUNCTUATION = str.maketrans("", "", string.punctuation)


def tokenize(text: str) -> List[str]:
    """Lower-case ``text``, split on whitespace and drop punctuation characters."""
    terms = (word.translate(_STRIP_PUNCTUATION) for word in text.lower().split())
    return [term for term in terms if term]


class Document:
    """A searchable document with an id, content, optional title and its terms."""

    def __init__(self, id: int, content: str, title: str = "") -> None:
        self.id = id
        self.content = content
        self.title = title
        self._terms: Tuple[str, ...] = tuple(tokenize(content))

    @property
    def terms(self) -> Tuple[str, ...]:
        """The terms of the content, in order, duplicates kept."""
        return self._terms

    def __repr__(self) -> str:
        return f"Document(id={self.id!r}, title={self.title!r}, content={self.content!r})"