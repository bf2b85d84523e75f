"""Generation commands over drafts: draft, review, refine and ship.

Every command follows the same shape:
  1. LOAD      -- Read the input document and, where the prompt uses it,
                  the workspace style guide (``writing/_style_guide.md``).
  2. PROMPT    -- Load the named template (workspace override first, then
                  the bundled copy) and fill its ``{{placeholders}}``.
  3. COMPLETE  -- One completion per output document.
  4. WRITE     -- Encode frontmatter and body and write the result.

Input documents are never modified, except when ``ship`` finalises a
non-blog draft: that rewrites the draft in place and keeps its frontmatter.

Completion errors propagate to the caller, except while shipping promotional
posts for a blog draft, where one platform's failure is recorded and the
remaining platforms still run.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import structlog

from quillpen.config.workspace import WorkspacePaths
from quillpen.interfaces.llm_provider import ILLMProvider
from quillpen.models.ingestion import Platform
from quillpen.models.writing import (
    DraftFrontmatter,
    DraftResult,
    RefineResult,
    ReviewResult,
    ShipMode,
    ShipPost,
    ShipResult,
)
from quillpen.services.frontmatter import decode, read_document, write_document
from quillpen.services.prompts import interpolate, load_prompt
from quillpen.services.writing.style_guide import load_style_guide
from quillpen.utils.errors import QuillpenError, WritingError
from quillpen.utils.text import count_words

logger = structlog.get_logger(logger_name=__name__)

STDIN_SOURCE = "stdin"
REVIEW_SUFFIX = "-review"
REFINED_SUFFIX = "-refined"

# Platforms a blog post is promoted on.
PROMOTION_PLATFORMS: tuple[Platform, ...] = (Platform.LINKEDIN, Platform.TWITTER)


def review_path_for(draft_path: Path) -> Path:
    """``notes.md`` -> ``notes-review.md`` next to it."""
    return draft_path.with_name(f"{draft_path.stem}{REVIEW_SUFFIX}.md")


def latest_draft(drafts_dir: Path) -> Path | None:
    """Return the most recently modified draft, ignoring review files."""
    if not drafts_dir.is_dir():
        return None
    candidates = [
        p
        for p in drafts_dir.glob("*.md")
        if p.is_file() and not p.stem.endswith(REVIEW_SUFFIX) and not p.name.startswith(".")
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda p: (p.stat().st_mtime, p.name))


class WritingService:
    """Turns notes into drafts and drafts into publishable writing."""

    _DRAFT_SYSTEM_PROMPT = (
        "You are a skilled ghostwriter helping an author structure their thoughts "
        "while preserving their unique voice."
    )
    _REVIEW_SYSTEM_PROMPT = (
        "You are an insightful editor who provides actionable feedback. Identify "
        "weaknesses and suggest specific improvements without rewriting."
    )
    _REFINE_SYSTEM_PROMPT = (
        "You are a skilled editor helping improve writing while preserving the "
        "author's unique voice. Apply the refinements carefully based on the "
        "provided feedback and instructions."
    )
    _PROMOTE_SYSTEM_PROMPT = (
        "You are a marketing expert creating engaging promotional content for "
        "{platform} that drives traffic and creates curiosity."
    )
    _FINALIZE_SYSTEM_PROMPT = (
        "You are finalizing content for {format}, ensuring it meets platform best practices."
    )

    _DRAFT_STYLE_FALLBACK = (
        "No style guide available. Use a clear, professional tone appropriate for the content."
    )
    _REFINE_STYLE_FALLBACK = "No style guide available. Preserve the existing tone and style."
    _SHIP_STYLE_FALLBACK = (
        "No style guide available. Create promotional content that is clear and engaging."
    )

    _DEFAULT_DRAFT_INSTRUCTION = (
        "Transform the notes into a well-structured draft while preserving the author's voice."
    )
    _DEFAULT_REFINE_INSTRUCTION = (
        "Apply general improvements to enhance clarity, flow, and impact."
    )
    _DEFAULT_PROMOTE_INSTRUCTION = "Create engaging promotional content that drives clicks."
    _DEFAULT_FINALIZE_INSTRUCTION = (
        "Finalize the content for publication with platform-specific formatting."
    )
    _NO_REVIEW_FEEDBACK = "No review feedback available."

    def __init__(
        self,
        llm: ILLMProvider,
        paths: WorkspacePaths,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._llm = llm
        self._paths = paths
        self._now = now

    # ── Public API ─────────────────────────────────────────────────────

    async def draft(
        self,
        notes: str,
        fmt: Platform | str = Platform.BLOG,
        source_path: Path | None = None,
        instruction: str | None = None,
        output_path: Path | None = None,
    ) -> DraftResult:
        """Turn raw notes into a structured draft.

        Args:
            notes: The notes text.  Frontmatter, if any, is dropped.
            fmt: Target format, recorded in the draft's frontmatter.
            source_path: Where the notes came from; ``None`` for stdin.
            instruction: Custom instruction replacing the default one.
            output_path: Destination.  Defaults to ``writing/drafts/<stem>.md``,
                or ``draft-<YYYY-MM-DD>.md`` for notes read from stdin
                (``<stem>-draft.md`` when that would be the notes file itself).

        Raises:
            WritingError: If the notes are empty or *fmt* is not a platform.
        """
        platform = _coerce_format(fmt)
        _, notes = decode(notes)
        if not notes.strip():
            raise WritingError("No notes to draft from")

        now = self._now()
        if output_path is None:
            filename = (
                f"{source_path.stem}.md" if source_path else f"draft-{now.strftime('%Y-%m-%d')}.md"
            )
            output_path = self._paths.drafts_dir / filename
            # Notes already in drafts/ would otherwise be overwritten by their own draft.
            if source_path is not None and output_path.resolve() == source_path.resolve():
                output_path = output_path.with_name(f"{source_path.stem}-draft.md")

        style_guide = load_style_guide(self._paths, self._DRAFT_STYLE_FALLBACK)
        user_prompt = interpolate(
            load_prompt("draft", root=self._paths.root),
            {
                "style_guide": style_guide,
                "notes": notes,
                "custom_instruction": instruction or self._DEFAULT_DRAFT_INSTRUCTION,
            },
        )
        body = await self._generate(self._DRAFT_SYSTEM_PROMPT, user_prompt, max_tokens=8000)

        frontmatter = DraftFrontmatter(
            format=platform,
            created=now.isoformat(timespec="seconds"),
            source=str(source_path) if source_path else STDIN_SOURCE,
            word_count=count_words(body),
        )
        write_document(output_path, frontmatter.to_frontmatter(), body)
        logger.info(
            "draft_written",
            output=str(output_path),
            format=platform.value,
            word_count=frontmatter.word_count,
        )
        return DraftResult(
            output_path=output_path, format=platform, word_count=frontmatter.word_count
        )

    async def review(self, draft_path: Path, output_path: Path | None = None) -> ReviewResult:
        """Write editorial feedback on *draft_path* to ``<stem>-review.md``."""
        _, body = self._read_draft(draft_path)
        output_path = output_path or review_path_for(draft_path)

        user_prompt = interpolate(load_prompt("review", root=self._paths.root), {"content": body})
        feedback = await self._generate(self._REVIEW_SYSTEM_PROMPT, user_prompt, max_tokens=4096)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(feedback, encoding="utf-8")
        logger.info("review_written", source=str(draft_path), output=str(output_path))
        return ReviewResult(source_path=draft_path, output_path=output_path)

    async def refine(
        self,
        draft_path: Path,
        instruction: str | None = None,
        output_path: Path | None = None,
    ) -> RefineResult:
        """Write an improved copy of *draft_path*; the draft itself is kept.

        Feedback from a sibling ``<stem>-review.md`` is included when one
        exists.  The copy keeps the draft's frontmatter with ``word_count``
        recomputed, and by default is written next to the draft as
        ``<stem>-<YYYYMMDD-HHMMSS>-refined.md``.
        """
        frontmatter, body = self._read_draft(draft_path)

        review_file = review_path_for(draft_path)
        used_review = review_file.is_file()
        feedback = (
            review_file.read_text(encoding="utf-8").strip() if used_review else ""
        ) or self._NO_REVIEW_FEEDBACK

        if output_path is None:
            stamp = self._now().strftime("%Y%m%d-%H%M%S")
            output_path = draft_path.with_name(f"{draft_path.stem}-{stamp}{REFINED_SUFFIX}.md")

        user_prompt = interpolate(
            load_prompt("refine", root=self._paths.root),
            {
                "style_guide": load_style_guide(self._paths, self._REFINE_STYLE_FALLBACK),
                "content": body,
                "review_feedback": feedback,
                "custom_instruction": instruction or self._DEFAULT_REFINE_INSTRUCTION,
            },
        )
        refined = await self._generate(self._REFINE_SYSTEM_PROMPT, user_prompt, max_tokens=8000)

        refined_words = count_words(refined)
        if frontmatter:
            frontmatter = {**frontmatter, "word_count": refined_words}
        write_document(output_path, frontmatter, refined)
        logger.info(
            "draft_refined",
            source=str(draft_path),
            output=str(output_path),
            used_review=used_review,
        )
        return RefineResult(
            source_path=draft_path,
            output_path=output_path,
            original_word_count=count_words(body),
            refined_word_count=refined_words,
            used_review=used_review,
        )

    async def ship(self, draft_path: Path, instruction: str | None = None) -> ShipResult:
        """Prepare *draft_path* for publication according to its ``format``.

        Blog drafts get one promotional post per platform in
        :data:`PROMOTION_PLATFORMS`, written next to the draft as
        ``<stem>-<platform>.md``; a failed platform is recorded in the result.
        Any other format is finalised in place, and a failure raises.

        Raises:
            WritingError: If the draft is missing, empty, or its ``format``
                is not a known platform.
        """
        frontmatter, body = self._read_draft(draft_path)
        platform = _coerce_format(frontmatter.get("format") or Platform.BLOG.value)
        style_guide = load_style_guide(self._paths, self._SHIP_STYLE_FALLBACK)

        if platform is Platform.BLOG:
            posts = [
                await self._promote(draft_path, body, target, style_guide, instruction)
                for target in PROMOTION_PLATFORMS
            ]
            return ShipResult(
                source_path=draft_path, format=platform, mode=ShipMode.PROMOTE, posts=posts
            )

        user_prompt = interpolate(
            load_prompt(f"ship/{platform.value}-finalize", root=self._paths.root),
            {
                "style_guide": style_guide,
                "content": body,
                "custom_instruction": instruction or self._DEFAULT_FINALIZE_INSTRUCTION,
            },
        )
        finalized = await self._generate(
            self._FINALIZE_SYSTEM_PROMPT.format(format=platform.value),
            user_prompt,
            max_tokens=2000,
        )
        write_document(draft_path, {**frontmatter, "word_count": count_words(finalized)}, finalized)
        logger.info("draft_finalized", path=str(draft_path), format=platform.value)
        return ShipResult(
            source_path=draft_path,
            format=platform,
            mode=ShipMode.FINALIZE,
            posts=[ShipPost(platform=platform, output_path=draft_path)],
        )

    # ── Internals ──────────────────────────────────────────────────────

    async def _promote(
        self,
        draft_path: Path,
        body: str,
        target: Platform,
        style_guide: str,
        instruction: str | None,
    ) -> ShipPost:
        output_path = draft_path.with_name(f"{draft_path.stem}-{target.value}.md")
        try:
            user_prompt = interpolate(
                load_prompt(f"ship/{target.value}", root=self._paths.root),
                {
                    "style_guide": style_guide,
                    "content": body,
                    "custom_instruction": instruction or self._DEFAULT_PROMOTE_INSTRUCTION,
                },
            )
            post = await self._generate(
                self._PROMOTE_SYSTEM_PROMPT.format(platform=target.value),
                user_prompt,
                max_tokens=1000,
            )
            output_path.write_text(post, encoding="utf-8")
        except (QuillpenError, OSError) as exc:
            logger.warning(
                "promotion_failed", source=str(draft_path), platform=target.value, error=str(exc)
            )
            return ShipPost(platform=target, error=str(exc))

        logger.info("promotion_written", platform=target.value, output=str(output_path))
        return ShipPost(platform=target, output_path=output_path)

    async def _generate(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        response = await self._llm.complete(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=0.7,
            max_tokens=max_tokens,
        )
        return f"{response.strip()}\n"

    @staticmethod
    def _read_draft(path: Path) -> tuple[dict, str]:
        if not path.is_file():
            raise WritingError(f"Draft not found: {path}")
        frontmatter, body = read_document(path)
        if not body.strip():
            raise WritingError(f"Draft is empty: {path}")
        return frontmatter, body


def _coerce_format(value: Platform | str) -> Platform:
    try:
        return Platform(value)
    except ValueError as exc:
        raise WritingError(
            f"Invalid format: {value} (valid: {', '.join(Platform.values())})"
        ) from exc
