"""Utility helpers for walking the notes corpus."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List


class CorpusError(RuntimeError):
    """Raised when the corpus directory tree cannot be enumerated."""


def _entry_name(item: Path) -> str:
    name = item.name
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        # os.fsdecode smuggles undecodable bytes through as surrogates
        raise CorpusError(f"Cannot decode file name: {item!r}") from exc
    return name


def iter_note_paths(root: Path) -> Iterator[Path]:
    """Yield every non-hidden regular file below root, pruning hidden directories."""
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise CorpusError(f"Cannot read directory {root}: {exc}") from exc

    for item in entries:
        if _entry_name(item).startswith("."):
            continue
        try:
            is_file = item.is_file()
            is_dir = not is_file and item.is_dir()
        except OSError as exc:
            raise CorpusError(f"Cannot resolve entry {item}: {exc}") from exc

        if is_file:
            yield item
        elif is_dir:
            yield from iter_note_paths(item)
        else:
            raise CorpusError(f"Cannot resolve entry {item}")


def find_notes(root: Path) -> List[Path]:
    """Return all documents of the corpus rooted at root."""
    return list(iter_note_paths(root))
