"""Unit tests for the ingestion, writing and workspace Pydantic models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

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
    DraftFrontmatter,
    RefineResult,
    ShipMode,
    ShipPost,
    ShipResult,
)


class TestPlatform:
    def test_values(self) -> None:
        assert Platform.values() == ["blog", "linkedin", "substack", "twitter"]

    def test_from_string(self) -> None:
        assert Platform("substack") is Platform.SUBSTACK

    def test_unknown_platform(self) -> None:
        with pytest.raises(ValueError):
            Platform("myspace")


class TestExtraction:
    def test_defaults(self) -> None:
        metadata = ExtractedMetadata()
        assert metadata.title == "Untitled"
        assert metadata.date is None
        assert metadata.tags == []
        assert metadata.summary == ""

    def test_defaulted_result(self) -> None:
        result = ExtractionResult.defaulted()
        assert result.status is ExtractionStatus.DEFAULTED
        assert result.is_defaulted
        assert result.metadata == ExtractedMetadata()

    def test_frozen(self) -> None:
        metadata = ExtractedMetadata(title="T")
        with pytest.raises(ValidationError):
            metadata.title = "Other"  # type: ignore[misc]


class TestIngestedFrontmatter:
    def test_canonical_key_order_and_plain_values(self) -> None:
        frontmatter = IngestedFrontmatter(
            title="T",
            date="2024-03-15",
            platform=Platform.BLOG,
            word_count=3,
            tags=["a"],
            summary="S",
        )
        data = frontmatter.to_frontmatter()
        assert list(data) == ["title", "date", "platform", "word_count", "tags", "summary"]
        assert data["platform"] == "blog"
        assert type(data["platform"]) is str

    def test_negative_word_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IngestedFrontmatter(title="T", date="2024-03-15", platform="blog", word_count=-1)


class TestIngestionSummary:
    def test_counts_are_derived_from_outcomes(self, tmp_path: Path) -> None:
        summary = IngestionSummary(
            source_dir=tmp_path,
            destination_dir=tmp_path / "out",
            platform=Platform.BLOG,
            outcomes=[
                RunOutcome.ingested(tmp_path / "a.md", tmp_path / "out" / "x.md"),
                RunOutcome.skipped(tmp_path / "b.md", "already has metadata"),
                RunOutcome.failed(tmp_path / "c.md", "boom"),
                RunOutcome.failed(tmp_path / "d.md", "boom"),
            ],
        )
        assert (summary.ingested, summary.skipped, summary.failed) == (1, 1, 2)
        assert summary.total == 4
        assert summary.ingested + summary.skipped + summary.failed == summary.total

    def test_outcome_factories(self, tmp_path: Path) -> None:
        failed = RunOutcome.failed(tmp_path / "c.md", "boom")
        assert failed.kind is OutcomeKind.FAILED
        assert failed.error == "boom"
        assert failed.output_path is None

    def test_computed_counts_are_serialised(self, tmp_path: Path) -> None:
        summary = IngestionSummary(
            source_dir=tmp_path, destination_dir=tmp_path, platform=Platform.TWITTER
        )
        dumped = summary.model_dump()
        assert dumped["total"] == 0
        assert dumped["ingested"] == 0


class TestWorkspaceConfig:
    def test_defaults(self) -> None:
        config = WorkspaceConfig()
        assert config.author == ""
        assert config.llm.provider == "anthropic"
        assert config.llm.api_key_env == "ANTHROPIC_API_KEY"

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LLMConfig(provider="cohere")  # type: ignore[arg-type]


class TestWritingModels:
    def test_draft_frontmatter_order(self) -> None:
        fm = DraftFrontmatter(
            format=Platform.SUBSTACK, created="2024-06-01T09:00:00", source="stdin", word_count=5
        )
        assert list(fm.to_frontmatter().items()) == [
            ("format", "substack"),
            ("created", "2024-06-01T09:00:00"),
            ("source", "stdin"),
            ("word_count", 5),
        ]

    def test_refine_word_delta(self, tmp_path: Path) -> None:
        result = RefineResult(
            source_path=tmp_path / "a.md",
            output_path=tmp_path / "b.md",
            original_word_count=120,
            refined_word_count=95,
        )
        assert result.word_delta == -25
        assert result.model_dump()["word_delta"] == -25

    def test_ship_counts(self, tmp_path: Path) -> None:
        result = ShipResult(
            source_path=tmp_path / "a.md",
            format=Platform.BLOG,
            mode=ShipMode.PROMOTE,
            posts=[
                ShipPost(platform=Platform.LINKEDIN, output_path=tmp_path / "a-linkedin.md"),
                ShipPost(platform=Platform.TWITTER, error="quota"),
            ],
        )
        assert (result.succeeded, result.failed) == (1, 1)
        assert not result.posts[1].ok
