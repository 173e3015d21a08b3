"""Shared fixtures for notesearch tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """Three geography notes plus hidden entries that must never be scored."""
    root = tmp_path / "notes"
    root.mkdir()
    (root / "doc1.txt").write_text("lake lake river")
    (root / "doc2.txt").write_text("river river river")
    (root / "doc3.txt").write_text("forest")

    drafts = root / ".drafts"
    drafts.mkdir()
    (drafts / "secret.txt").write_text("lake ocean ocean")
    (root / ".hidden.txt").write_text("ocean lake")
    return root
