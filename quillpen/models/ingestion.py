"""Ingestion data models for the quillpen content pipeline.

Defines Pydantic v2 models for the values that flow through a batch
ingestion run: the metadata extracted from one source document, the
frontmatter written into the destination corpus, the per-file outcome, and
the run summary.  All models use frozen config, so every value is created
once and never mutated.

Lifecycle of one source file:

    source .md  --decode-->  (frontmatter, body)
                --extract--> ExtractionResult(ExtractedMetadata, status)
                --assemble-> IngestedFrontmatter
                --write/delete--> RunOutcome

The orchestrator collects one :class:`RunOutcome` per candidate file into
an :class:`IngestionSummary`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ---------------------------------------------------------------------------
# Platform -- closed set of publishing targets.
# ---------------------------------------------------------------------------
class Platform(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Publishing platforms a piece of writing can target."""

    BLOG = "blog"
    LINKEDIN = "linkedin"
    SUBSTACK = "substack"
    TWITTER = "twitter"

    @classmethod
    def values(cls) -> list[str]:
        return [p.value for p in cls]


# ---------------------------------------------------------------------------
# Extraction -- what the model tells us about one document.
# ---------------------------------------------------------------------------
class ExtractedMetadata(BaseModel):
    """Structured metadata derived from a document body by one completion.

    Transient: it only lives long enough to build the destination
    frontmatter and filename.
    """

    model_config = ConfigDict(frozen=True)

    title: str = "Untitled"
    # ISO 8601 calendar date (YYYY-MM-DD); None lets the caller pick today.
    date: str | None = None
    tags: list[str] = Field(default_factory=list)
    summary: str = ""


class ExtractionStatus(str, Enum):  # noqa: UP042
    """Whether the completion response could be parsed at all."""

    PARSED = "parsed"        # Well-formed mapping (fields may still be defaulted)
    DEFAULTED = "defaulted"  # Unparsable response, every field is a default


class ExtractionResult(BaseModel):
    """Extracted metadata tagged with how it was obtained."""

    model_config = ConfigDict(frozen=True)

    metadata: ExtractedMetadata
    status: ExtractionStatus

    @classmethod
    def defaulted(cls) -> ExtractionResult:
        return cls(metadata=ExtractedMetadata(), status=ExtractionStatus.DEFAULTED)

    @property
    def is_defaulted(self) -> bool:
        return self.status is ExtractionStatus.DEFAULTED


# ---------------------------------------------------------------------------
# IngestedFrontmatter -- the frontmatter block of a destination document.
# ---------------------------------------------------------------------------
class IngestedFrontmatter(BaseModel):
    """Frontmatter written at the top of every ingested document.

    ``word_count`` is always computed from the body at write time; it is
    never copied from the source file or from the model's response.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    platform: Platform
    word_count: int = Field(ge=0)
    tags: list[str] = Field(default_factory=list)
    summary: str = ""

    def to_frontmatter(self) -> dict[str, object]:
        """Return a plain, YAML-serialisable mapping in canonical key order."""
        return {
            "title": self.title,
            "date": self.date,
            "platform": self.platform.value,
            "word_count": self.word_count,
            "tags": list(self.tags),
            "summary": self.summary,
        }


# ---------------------------------------------------------------------------
# RunOutcome -- terminal state of one source file within a run.
# ---------------------------------------------------------------------------
class OutcomeKind(str, Enum):  # noqa: UP042
    """Terminal states of the per-file ingestion state machine."""

    INGESTED = "ingested"
    SKIPPED = "skipped"
    FAILED = "failed"


class RunOutcome(BaseModel):
    """What happened to one candidate file.

    Exactly one of ``output_path`` (ingested), ``reason`` (skipped) or
    ``error`` (failed) is set; use the factory classmethods.
    """

    model_config = ConfigDict(frozen=True)

    source_path: Path
    kind: OutcomeKind
    output_path: Path | None = None
    reason: str | None = None
    error: str | None = None

    @classmethod
    def ingested(cls, source_path: Path, output_path: Path) -> RunOutcome:
        return cls(source_path=source_path, kind=OutcomeKind.INGESTED, output_path=output_path)

    @classmethod
    def skipped(cls, source_path: Path, reason: str) -> RunOutcome:
        return cls(source_path=source_path, kind=OutcomeKind.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, source_path: Path, error: str) -> RunOutcome:
        return cls(source_path=source_path, kind=OutcomeKind.FAILED, error=error)


# ---------------------------------------------------------------------------
# IngestionSummary -- aggregate of a whole run.
# ---------------------------------------------------------------------------
class IngestionSummary(BaseModel):
    """Aggregate result of an ingestion run.

    The three counts are derived from ``outcomes``, so they always sum to
    ``total`` (the number of candidate files).
    """

    model_config = ConfigDict(frozen=True)

    source_dir: Path
    destination_dir: Path
    platform: Platform
    outcomes: list[RunOutcome] = Field(default_factory=list)

    def _count(self, kind: OutcomeKind) -> int:
        return sum(1 for o in self.outcomes if o.kind is kind)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ingested(self) -> int:
        return self._count(OutcomeKind.INGESTED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skipped(self) -> int:
        return self._count(OutcomeKind.SKIPPED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return self._count(OutcomeKind.FAILED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.outcomes)
