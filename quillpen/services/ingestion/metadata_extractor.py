"""LLM-powered metadata extraction for raw documents.

Uses an :class:`~quillpen.interfaces.llm_provider.ILLMProvider` to derive a
title, date, tags and summary from a document body.

The extraction flow:
1. The body is interpolated into the ``ingest`` prompt template at ``{{content}}``
2. The LLM answers with a YAML (or JSON) mapping, possibly inside a code fence
3. The response is parsed, fields are normalised and defaulted individually
4. The result is tagged PARSED, or DEFAULTED when nothing could be parsed

Unparsable responses are logged and degrade to default metadata so the
document is still ingested.  Completion failures are *not* absorbed here:
they propagate so the orchestrator can leave the source file untouched.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import structlog
import yaml

from quillpen.models.ingestion import ExtractedMetadata, ExtractionResult, ExtractionStatus
from quillpen.services.prompts import interpolate

if TYPE_CHECKING:
    from quillpen.interfaces.llm_provider import ILLMProvider

logger = structlog.get_logger(logger_name=__name__)

EXTRACTION_SYSTEM_PROMPT = "You are a metadata extraction assistant."
EXTRACTION_MAX_TOKENS = 500
EXTRACTION_TEMPERATURE = 0.1

_CODE_FENCE_RE = re.compile(r"```(?:ya?ml|json)?[ \t]*\r?\n(.*?)```", re.DOTALL | re.IGNORECASE)
# A reply cut off at the token limit opens a fence it never closes.
_OPENING_FENCE_RE = re.compile(r"\A```[A-Za-z]*[ \t]*(?:\r?\n|\Z)")
_CLOSING_FENCE_RE = re.compile(r"\r?\n?```[ \t]*\Z")
_ISO_DATE_PREFIX_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")


class MetadataExtractor:
    """Extracts document metadata with one completion per document.

    Parameters
    ----------
    llm:
        The LLM provider used for extraction (injected, swappable).
    prompt_template:
        Template text containing a ``{{content}}`` placeholder, usually from
        :func:`~quillpen.services.prompts.load_prompt`.
    """

    def __init__(self, llm: ILLMProvider, prompt_template: str) -> None:
        self._llm = llm
        self._prompt_template = prompt_template

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def extract(self, body: str) -> ExtractionResult:
        """Extract metadata from a document *body*.

        Returns
        -------
        ExtractionResult
            PARSED metadata (individual fields may be defaulted), or the
            DEFAULTED result when the response could not be parsed.

        Raises
        ------
        LLMError
            Propagated unchanged from the provider (including
            :class:`RateLimitError`), as is :class:`ProviderUnavailableError`.
        """
        response = await self._llm.complete(
            system_prompt=EXTRACTION_SYSTEM_PROMPT,
            user_prompt=interpolate(self._prompt_template, {"content": body}),
            temperature=EXTRACTION_TEMPERATURE,
            max_tokens=EXTRACTION_MAX_TOKENS,
        )
        result = self.parse_response(response)
        logger.debug(
            "metadata_extracted",
            status=result.status.value,
            title=result.metadata.title,
        )
        return result

    @staticmethod
    def parse_response(response: str) -> ExtractionResult:
        """Parse the LLM's response into an :class:`ExtractionResult`.

        Handles the common response shapes:
        1. Bare YAML or JSON mapping
        2. Fenced: ```` ```yaml ````, ```` ```yml ````, ```` ```json ```` or ```` ``` ````,
           in any letter case
        3. A fence left open because the completion hit its token limit

        Never raises.
        """
        cleaned = _strip_code_fence(response)

        try:
            data = yaml.safe_load(cleaned)
        except (yaml.YAMLError, ValueError) as exc:
            logger.warning(
                "metadata_parse_failed",
                error=str(exc),
                response_preview=response[:120],
            )
            return ExtractionResult.defaulted()

        if not isinstance(data, dict):
            logger.warning(
                "metadata_not_mapping",
                type=type(data).__name__,
                response_preview=response[:120],
            )
            return ExtractionResult.defaulted()

        metadata = ExtractedMetadata(
            title=_normalise_title(data.get("title")),
            date=_normalise_date(data.get("date")),
            tags=_normalise_tags(data.get("tags")),
            summary=_normalise_text(data.get("summary")),
        )
        return ExtractionResult(metadata=metadata, status=ExtractionStatus.PARSED)


# ---------------------------------------------------------------------------
# Field normalisation
# ---------------------------------------------------------------------------

def _strip_code_fence(response: str) -> str:
    cleaned = response.strip()
    fence_match = _CODE_FENCE_RE.search(cleaned)
    if fence_match:
        return fence_match.group(1).strip()
    # Opening and closing markers are removed independently.
    cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _normalise_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _normalise_title(value: Any) -> str:
    return _normalise_text(value) or "Untitled"


def _normalise_tags(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    tags = [_normalise_text(item) for item in value]
    return [tag for tag in tags if tag]


def _normalise_date(value: Any) -> str | None:
    """Return *value* as a ``YYYY-MM-DD`` string, or ``None``."""
    if value is None:
        return None
    # datetime is a date subclass, so check it first.
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        match = _ISO_DATE_PREFIX_RE.match(value)
        if match:
            try:
                return date.fromisoformat(match.group(1)).isoformat()
            except ValueError:
                pass
        if not value.strip():
            return None

    logger.warning("metadata_date_invalid", value=str(value))
    return None
