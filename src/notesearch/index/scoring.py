"""Per-document term statistics.

Both primitives re-read the document from disk on every call; nothing is
cached between calls.
"""

from __future__ import annotations

from pathlib import Path

from notesearch.utils.text import count_tokens


class DocumentReadError(RuntimeError):
    """Raised when a document's content cannot be read as UTF-8 text."""

    def __init__(self, path: Path, reason: Exception) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def read_document(path: Path) -> str:
    """Return the lowercased text of a document."""
    try:
        return path.read_text(encoding="utf-8").lower()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, exc) from exc


def term_frequency(term: str, path: Path) -> float:
    """Raw number of exact token matches of term in the document.

    Not normalized by document length.
    """
    return float(count_tokens(read_document(path), term))


def contains_term(term: str, path: Path) -> bool:
    """Whether term occurs anywhere in the document as a substring."""
    return term in read_document(path)
