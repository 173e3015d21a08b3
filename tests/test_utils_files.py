"""Tests for corpus walking helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from unittest.mock import patch

import pytest

from notesearch.utils.files import CorpusError, find_notes, iter_note_paths


class TestIterNotePaths:
    """Test iter_note_paths function."""

    def test_flat_directory(self, tmp_path: Path) -> None:
        """Should yield every regular file."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "no_extension").write_text("c")

        names = {p.name for p in iter_note_paths(tmp_path)}

        assert names == {"a.txt", "b.md", "no_extension"}

    def test_nested_directories(self, tmp_path: Path) -> None:
        """Should descend into subdirectories."""
        deep = tmp_path / "europe" / "alps"
        deep.mkdir(parents=True)
        (tmp_path / "root.txt").write_text("root")
        (deep / "glacier.txt").write_text("ice")

        paths = set(iter_note_paths(tmp_path))

        assert paths == {tmp_path / "root.txt", deep / "glacier.txt"}

    def test_skips_hidden_files(self, tmp_path: Path) -> None:
        """Files starting with a dot are not documents."""
        (tmp_path / ".notes.swp").write_text("swap")
        (tmp_path / "visible.txt").write_text("text")

        paths = list(iter_note_paths(tmp_path))

        assert paths == [tmp_path / "visible.txt"]

    def test_prunes_hidden_directories(self, corpus: Path) -> None:
        """Nothing below a hidden directory is visited."""
        paths = find_notes(corpus)

        assert {p.name for p in paths} == {"doc1.txt", "doc2.txt", "doc3.txt"}
        assert all(".drafts" not in p.parts for p in paths)

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Should handle an empty corpus."""
        assert find_notes(tmp_path) == []

    def test_empty_subdirectory(self, tmp_path: Path) -> None:
        """Directories contribute only their files."""
        (tmp_path / "empty").mkdir()

        assert find_notes(tmp_path) == []

    def test_paths_are_under_root(self, corpus: Path) -> None:
        """Yielded paths are joined onto the root they were walked from."""
        for path in find_notes(corpus):
            assert path.parent == corpus


class TestCorpusErrors:
    """Walk failures surface as CorpusError."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """An unreadable directory aborts the walk."""
        with pytest.raises(CorpusError, match="Cannot read directory"):
            find_notes(tmp_path / "missing")

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """An entry that resolves to nothing aborts the walk."""
        (tmp_path / "note.txt").write_text("text")
        (tmp_path / "broken").symlink_to(tmp_path / "nowhere")

        with pytest.raises(CorpusError, match="Cannot resolve entry"):
            find_notes(tmp_path)

    def test_hidden_dangling_symlink_is_ignored(self, tmp_path: Path) -> None:
        """Hidden entries are skipped before they are resolved."""
        (tmp_path / ".broken").symlink_to(tmp_path / "nowhere")

        assert find_notes(tmp_path) == []

    def test_unstattable_entry(self, tmp_path: Path) -> None:
        """A stat failure on an entry surfaces as CorpusError, not a raw OSError."""
        (tmp_path / "note.txt").write_text("lake")

        with patch.object(Path, "is_file", side_effect=PermissionError("Permission denied")):
            with pytest.raises(CorpusError, match="Cannot resolve entry"):
                find_notes(tmp_path)

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a byte-oriented filesystem")
    def test_undecodable_file_name(self, tmp_path: Path) -> None:
        """A file name that is not valid UTF-8 aborts the walk."""
        raw = os.path.join(os.fsencode(tmp_path), b"caf\xe9.txt")
        with open(raw, "wb") as handle:
            handle.write(b"lake")

        with pytest.raises(CorpusError, match="Cannot decode file name"):
            find_notes(tmp_path)
