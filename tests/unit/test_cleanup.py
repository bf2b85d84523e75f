"""Unit tests for listing and deleting draft files."""

from __future__ import annotations

from pathlib import Path

from quillpen.services.writing.cleanup import delete_files, list_draft_files


class TestListDraftFiles:
    def test_top_level_visible_files_only(self, drafts_dir: Path) -> None:
        for name in ("b.md", "a.md", "notes.txt", ".DS_Store"):
            (drafts_dir / name).write_text("x", encoding="utf-8")
        (drafts_dir / "nested").mkdir()
        (drafts_dir / "nested" / "c.md").write_text("x", encoding="utf-8")

        assert [p.name for p in list_draft_files(drafts_dir)] == ["a.md", "b.md", "notes.txt"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert list_draft_files(tmp_path / "nope") == []


class TestDeleteFiles:
    def test_deletes_all(self, drafts_dir: Path) -> None:
        files = [drafts_dir / "a.md", drafts_dir / "b.md"]
        for path in files:
            path.write_text("x", encoding="utf-8")

        result = delete_files(files)

        assert result.deleted == files
        assert result.failed == 0
        assert list(drafts_dir.iterdir()) == []

    def test_one_failure_does_not_stop_the_rest(self, drafts_dir: Path) -> None:
        # unlink() refuses directories, which gives a real OSError.
        stuck = drafts_dir / "stuck"
        stuck.mkdir()
        gone = drafts_dir / "gone.md"
        gone.write_text("x", encoding="utf-8")

        result = delete_files([stuck, gone])

        assert result.deleted == [gone]
        assert result.failed == 1
        assert str(stuck) in result.errors
        assert stuck.is_dir()
        assert not gone.exists()
