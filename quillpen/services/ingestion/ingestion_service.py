"""Orchestrator for batch markdown ingestion.

Pipeline stages per file: **decode -> skip? -> extract -> write -> delete**.

The :class:`IngestionService` coordinates the frontmatter codec, the
:class:`MetadataExtractor` and the filename assigner.  Every candidate file
ends in exactly one terminal state:

    Ingested -- metadata extracted, destination written, source removed
    Skipped  -- source already has a ``title`` in its frontmatter
    Failed   -- any per-file error; the source is left in place

Files are processed strictly one at a time, so at most one completion
request is in flight.  A source file is only deleted once its destination
exists on disk and is non-empty, which makes the move crash-safe in the
"never lose writing" direction: an interrupted run can at worst leave a
document in both places.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from quillpen.models.ingestion import (
    IngestedFrontmatter,
    IngestionSummary,
    Platform,
    RunOutcome,
)
from quillpen.services.frontmatter import list_markdown_files, read_document, write_document
from quillpen.services.ingestion.filename_assigner import assign_filename, resolve_destination
from quillpen.utils.errors import IngestionError, QuillpenError
from quillpen.utils.text import count_words

if TYPE_CHECKING:
    from quillpen.services.ingestion.metadata_extractor import MetadataExtractor

logger = structlog.get_logger(logger_name=__name__)

SKIP_REASON_HAS_METADATA = "already has metadata"


class IngestionService:
    """Moves raw markdown files into the corpus with extracted frontmatter.

    Parameters
    ----------
    extractor:
        Metadata extractor used once per non-skipped file.
    today:
        Clock for the fallback date; injected so tests can pin it.
    """

    def __init__(
        self,
        extractor: MetadataExtractor,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._extractor = extractor
        self._today = today

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def ingest_directory(
        self,
        source_dir: Path,
        destination_dir: Path,
        platform: Platform | str,
    ) -> IngestionSummary:
        """Ingest every ``*.md`` file under *source_dir*, recursively, skipping hidden paths.

        Parameters
        ----------
        source_dir:
            Directory holding raw markdown files.
        destination_dir:
            Directory the ingested documents are written to.  Created on
            first write if missing.
        platform:
            Target platform recorded in each document's frontmatter.

        Returns
        -------
        IngestionSummary
            One outcome per candidate file, in processing order.

        Raises
        ------
        IngestionError
            Before any file is touched, if the platform is unknown or the
            source directory is missing or unreadable.
        """
        platform = self._validate_platform(platform)
        candidates = self._list_candidates(source_dir)

        logger.info(
            "ingestion_started",
            source_dir=str(source_dir),
            destination_dir=str(destination_dir),
            platform=platform.value,
            candidates=len(candidates),
        )

        outcomes: list[RunOutcome] = []
        for path in candidates:
            outcomes.append(await self._ingest_file(path, destination_dir, platform))

        summary = IngestionSummary(
            source_dir=source_dir,
            destination_dir=destination_dir,
            platform=platform,
            outcomes=outcomes,
        )
        logger.info(
            "directory_ingestion_complete",
            source_dir=str(source_dir),
            ingested=summary.ingested,
            skipped=summary.skipped,
            failed=summary.failed,
        )
        return summary

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_platform(platform: Platform | str) -> Platform:
        try:
            return Platform(platform)
        except ValueError as exc:
            raise IngestionError(
                f"Invalid platform: {platform}. Valid options: {', '.join(Platform.values())}"
            ) from exc

    @staticmethod
    def _list_candidates(source_dir: Path) -> list[Path]:
        if not source_dir.is_dir():
            raise IngestionError(f"Directory not found: {source_dir}")
        try:
            return list_markdown_files(source_dir)
        except OSError as exc:
            raise IngestionError(f"Cannot list {source_dir}: {exc}") from exc

    # ------------------------------------------------------------------
    # Per-file state machine
    # ------------------------------------------------------------------

    async def _ingest_file(
        self,
        path: Path,
        destination_dir: Path,
        platform: Platform,
    ) -> RunOutcome:
        """Run one file to a terminal state; never raises.

        Anything that goes wrong with a single file, including errors no
        layer anticipated, is recorded as that file's ``Failed`` outcome so
        the rest of the batch still runs and the summary stays complete.
        """
        try:
            outcome = await self._process(path, destination_dir, platform)
        except (QuillpenError, OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "file_ingestion_failed",
                source=str(path),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return RunOutcome.failed(path, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "file_ingestion_unexpected_error",
                source=str(path),
                error=str(exc),
                error_type=type(exc).__name__,
                exc_info=True,
            )
            return RunOutcome.failed(path, f"{type(exc).__name__}: {exc}")

        if outcome.output_path is not None:
            logger.info("file_ingested", source=str(path), destination=str(outcome.output_path))
        else:
            logger.info("file_skipped", source=str(path), reason=outcome.reason)
        return outcome

    async def _process(
        self,
        path: Path,
        destination_dir: Path,
        platform: Platform,
    ) -> RunOutcome:
        frontmatter, body = read_document(path)
        if "title" in frontmatter:
            return RunOutcome.skipped(path, SKIP_REASON_HAS_METADATA)

        result = await self._extractor.extract(body)
        if result.is_defaulted:
            logger.warning("metadata_defaulted", source=str(path))

        today = self._today()
        metadata = result.metadata
        ingested = IngestedFrontmatter(
            title=metadata.title,
            date=metadata.date or today.isoformat(),
            platform=platform,
            word_count=count_words(body),
            tags=metadata.tags,
            summary=metadata.summary,
        )

        destination = resolve_destination(destination_dir, assign_filename(metadata, today))
        write_document(destination, ingested.to_frontmatter(), body)

        if not destination.is_file() or destination.stat().st_size == 0:
            raise IngestionError(f"Destination {destination} is missing or empty after write; source kept")
        try:
            path.unlink()
        except OSError as exc:
            raise IngestionError(f"Wrote {destination} but could not remove source: {exc}") from exc

        return RunOutcome.ingested(path, destination)
