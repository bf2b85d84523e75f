"""Listing and deleting files in ``writing/drafts/``."""

from __future__ import annotations

from pathlib import Path

import structlog

from quillpen.models.writing import CleanupResult

logger = structlog.get_logger(logger_name=__name__)


def list_draft_files(drafts_dir: Path) -> list[Path]:
    """Return the regular, non-hidden files directly inside *drafts_dir*, sorted.

    Subdirectories are not descended into.  A missing directory yields an
    empty list.
    """
    if not drafts_dir.is_dir():
        return []
    return sorted(
        p for p in drafts_dir.iterdir() if p.is_file() and not p.name.startswith(".")
    )


def delete_files(files: list[Path]) -> CleanupResult:
    """Delete each of *files*; one failure does not stop the rest."""
    deleted: list[Path] = []
    errors: dict[str, str] = {}
    for path in files:
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("draft_delete_failed", path=str(path), error=str(exc))
            errors[str(path)] = str(exc)
        else:
            deleted.append(path)

    logger.info("drafts_cleaned", deleted=len(deleted), failed=len(errors))
    return CleanupResult(deleted=deleted, errors=errors)
