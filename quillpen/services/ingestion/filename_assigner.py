"""Destination filenames for ingested documents: ``<date>_<slug>.md``."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from quillpen.models.ingestion import ExtractedMetadata
from quillpen.utils.text import slugify


def assign_filename(metadata: ExtractedMetadata, today: date) -> str:
    """Build the destination filename for *metadata*.

    The date part is the extracted date, or *today* when the model found
    none.  The slug may be empty for titles with no ASCII alphanumerics,
    giving e.g. ``2024-03-15_.md``.
    """
    date_part = metadata.date or today.isoformat()
    return f"{date_part}_{slugify(metadata.title)}.md"


def resolve_destination(directory: Path, filename: str) -> Path:
    """Return a path in *directory* for *filename* that does not exist yet.

    Collisions get a numeric suffix: ``name.md``, ``name-2.md``,
    ``name-3.md`` and so on.  Existing files are never overwritten.
    """
    candidate = directory / filename
    if not candidate.exists():
        return candidate

    stem, suffix = candidate.stem, candidate.suffix
    counter = 2
    while True:
        candidate = directory / f"{stem}-{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1
