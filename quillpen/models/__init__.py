"""quillpen domain models -- re-exports all public model classes.

The models are organized by concern:
    - ingestion.py  -- Extraction results, destination frontmatter, run outcomes
    - writing.py    -- Draft, refine, review, ship, style analysis and cleanup results
    - workspace.py  -- ``.quillpen/config.yaml`` schema
"""

from __future__ import annotations

from quillpen.models.ingestion import (
    ExtractedMetadata,
    ExtractionResult,
    ExtractionStatus,
    IngestedFrontmatter,
    IngestionSummary,
    OutcomeKind,
    Platform,
    RunOutcome,
)
from quillpen.models.workspace import LLMConfig, WorkspaceConfig
from quillpen.models.writing import (
    CleanupResult,
    DraftFrontmatter,
    DraftResult,
    RefineResult,
    ReviewResult,
    ShipMode,
    ShipPost,
    ShipResult,
    StyleAnalysis,
    StyleSample,
)

__all__ = [
    "CleanupResult",
    "DraftFrontmatter",
    "DraftResult",
    "ExtractedMetadata",
    "ExtractionResult",
    "ExtractionStatus",
    "IngestedFrontmatter",
    "IngestionSummary",
    "LLMConfig",
    "OutcomeKind",
    "Platform",
    "RefineResult",
    "ReviewResult",
    "RunOutcome",
    "ShipMode",
    "ShipPost",
    "ShipResult",
    "StyleAnalysis",
    "StyleSample",
    "WorkspaceConfig",
]
