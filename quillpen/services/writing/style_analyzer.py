"""Derive a style guide from the author's published writing.

Samples come from ``writing/content/<platform>/``.  The prompt is capped at
:data:`MAX_SAMPLE_CHARS` characters of sample text, split evenly between the
platforms that have any content, so one prolific platform cannot crowd out
the others.  Within a platform, files are taken in sorted order until the
share is spent; the file that crosses the limit is truncated to fit, unless
fewer than :data:`MIN_TRUNCATED_CHARS` characters of the share remain.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from quillpen.config.workspace import WorkspacePaths
from quillpen.interfaces.llm_provider import ILLMProvider
from quillpen.models.ingestion import Platform
from quillpen.models.writing import StyleAnalysis, StyleSample
from quillpen.services.frontmatter import list_markdown_files, read_document, write_document
from quillpen.services.prompts import interpolate, load_prompt

logger = structlog.get_logger(logger_name=__name__)

MAX_SAMPLE_CHARS = 400_000
MIN_TRUNCATED_CHARS = 1_000
SAMPLE_SEPARATOR = "\n\n---\n\n"


def collect_samples(paths: WorkspacePaths) -> list[StyleSample]:
    """Read every published document, grouped by platform in declaration order."""
    samples: list[StyleSample] = []
    for platform in Platform:
        directory = paths.content_dir(platform)
        if not directory.is_dir():
            continue
        for path in list_markdown_files(directory):
            frontmatter, body = read_document(path)
            if not body.strip():
                continue
            title = frontmatter.get("title") or "Untitled"
            samples.append(StyleSample(title=str(title), platform=platform, content=body.strip()))
    return samples


def select_samples(
    samples: list[StyleSample], max_chars: int = MAX_SAMPLE_CHARS
) -> list[StyleSample]:
    """Keep samples within each platform's equal share of *max_chars*."""
    platforms = list(dict.fromkeys(s.platform for s in samples))
    if not platforms:
        return []
    share = max_chars // len(platforms)

    selected: list[StyleSample] = []
    for platform in platforms:
        used = 0
        for sample in (s for s in samples if s.platform is platform):
            remaining = share - used
            if len(sample.content) <= remaining:
                selected.append(sample)
                used += len(sample.content)
                continue
            if remaining > MIN_TRUNCATED_CHARS:
                selected.append(sample.model_copy(update={"content": sample.content[:remaining]}))
            break
    return selected


def format_samples(samples: list[StyleSample]) -> str:
    return SAMPLE_SEPARATOR.join(
        f"## Sample {i}: {s.title} ({s.platform.value})\n\n{s.content}"
        for i, s in enumerate(samples, start=1)
    )


class StyleAnalyzer:
    """Writes ``writing/_style_guide.md`` from the published corpus."""

    _SYSTEM_PROMPT = "You are an expert writing style analyst."

    def __init__(
        self,
        llm: ILLMProvider,
        paths: WorkspacePaths,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._llm = llm
        self._paths = paths
        self._now = now

    async def analyze(self) -> StyleAnalysis | None:
        """Generate and write the style guide.

        Returns ``None``, without calling the model, when there is no
        published content to learn from.
        """
        samples = select_samples(collect_samples(self._paths))
        if not samples:
            logger.info("style_analysis_no_samples")
            return None

        platforms = list(dict.fromkeys(s.platform for s in samples))
        user_prompt = interpolate(
            load_prompt("analyze", root=self._paths.root),
            {
                "samples": format_samples(samples),
                "platforms": ", ".join(p.value for p in platforms),
            },
        )
        response = await self._llm.complete(
            system_prompt=self._SYSTEM_PROMPT,
            user_prompt=user_prompt,
            temperature=0.3,
            max_tokens=4096,
        )

        output_path = self._paths.style_guide_path
        write_document(
            output_path,
            {
                "generated": self._now().isoformat(timespec="seconds"),
                "sample_count": len(samples),
                "platforms": [p.value for p in platforms],
            },
            f"{response.strip()}\n",
        )
        logger.info(
            "style_guide_written",
            path=str(output_path),
            samples=len(samples),
            platforms=len(platforms),
        )
        return StyleAnalysis(
            output_path=output_path, sample_count=len(samples), platforms=platforms
        )
