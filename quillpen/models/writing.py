"""Writing command data models.

Values produced by the generation commands that turn notes into published
writing:

    notes  --draft-->  draft  --review-->  <stem>-review.md
                        |  --refine-->  <stem>-<timestamp>-refined.md
                        +--ship--> promotional posts, or the draft finalised in place

plus the style analysis over published content and the drafts cleanup.
All models are frozen.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from quillpen.models.ingestion import Platform


class DraftFrontmatter(BaseModel):
    """Frontmatter written at the top of a generated draft."""

    model_config = ConfigDict(frozen=True)

    format: Platform
    created: str  # ISO 8601 timestamp
    source: str
    word_count: int = Field(ge=0)

    def to_frontmatter(self) -> dict[str, object]:
        return {
            "format": self.format.value,
            "created": self.created,
            "source": self.source,
            "word_count": self.word_count,
        }


class DraftResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_path: Path
    format: Platform
    word_count: int


class RefineResult(BaseModel):
    """A refined copy of a draft; the original is never modified."""

    model_config = ConfigDict(frozen=True)

    source_path: Path
    output_path: Path
    original_word_count: int
    refined_word_count: int
    used_review: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def word_delta(self) -> int:
        return self.refined_word_count - self.original_word_count


class ReviewResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_path: Path
    output_path: Path


# ---------------------------------------------------------------------------
# Ship
# ---------------------------------------------------------------------------
class ShipMode(str, Enum):  # noqa: UP042
    """How a draft is shipped, decided by its ``format`` frontmatter."""

    PROMOTE = "promote"    # Blog posts: one promotional post per social platform
    FINALIZE = "finalize"  # Everything else: the draft is rewritten in place


class ShipPost(BaseModel):
    """One platform's output.  Exactly one of ``output_path`` or ``error`` is set."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    output_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ShipResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_path: Path
    format: Platform
    mode: ShipMode
    posts: list[ShipPost] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> int:
        return sum(1 for p in self.posts if p.ok)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return sum(1 for p in self.posts if not p.ok)


# ---------------------------------------------------------------------------
# Style analysis
# ---------------------------------------------------------------------------
class StyleSample(BaseModel):
    """One published piece used as evidence of the author's style."""

    model_config = ConfigDict(frozen=True)

    title: str
    platform: Platform
    content: str


class StyleAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_path: Path
    sample_count: int
    platforms: list[Platform] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------
class CleanupResult(BaseModel):
    """Which draft files were deleted and which could not be."""

    model_config = ConfigDict(frozen=True)

    deleted: list[Path] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def failed(self) -> int:
        return len(self.errors)
