"""Text helpers for query and document tokenization."""

from __future__ import annotations

from typing import List


def split_query(query: str) -> List[str]:
    """Split a raw query on the space character.

    Repeated or leading spaces produce empty terms, which take part in
    scoring like any other term.
    """
    return query.split(" ")


def normalize_term(term: str) -> str:
    return term.strip().lower()


def count_tokens(text: str, term: str) -> int:
    """Count space-separated tokens of text that equal term once stripped."""
    return sum(1 for token in text.split(" ") if token.strip() == term)
