"""Prompt template loading and placeholder interpolation.

Templates are markdown files.  A workspace can override any bundled
template by dropping a file with the same name into
``.quillpen/prompts/``; the bundled copies live in ``quillpen/prompts/``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

import structlog

from quillpen.config.loader import find_project_root
from quillpen.config.workspace import WorkspacePaths
from quillpen.utils.errors import PromptNotFoundError

logger = structlog.get_logger(logger_name=__name__)

BUNDLED_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def load_prompt(name: str, root: Path | None = None) -> str:
    """Load the prompt template called *name*.

    Args:
        name: Template name, with or without the ``.md`` suffix.
        root: Workspace root.  Discovered from the current directory when
            omitted; outside a workspace only bundled prompts are searched.

    Returns:
        The template text.

    Raises:
        PromptNotFoundError: If neither the workspace nor the package has it.
    """
    filename = name if name.endswith(".md") else f"{name}.md"
    workspace_root = root if root is not None else find_project_root()

    candidates: list[Path] = []
    if workspace_root is not None:
        candidates.append(WorkspacePaths(workspace_root).prompts_dir / filename)
    candidates.append(BUNDLED_PROMPTS_DIR / filename)

    for path in candidates:
        if path.is_file():
            logger.debug("prompt_loaded", name=filename, path=str(path))
            return path.read_text(encoding="utf-8")

    raise PromptNotFoundError(
        f"Prompt not found: {filename} (searched {', '.join(str(p.parent) for p in candidates)})"
    )


def interpolate(template: str, mapping: Mapping[str, object]) -> str:
    """Replace ``{{key}}`` placeholders with values from *mapping*.

    Placeholders without a matching key are left as written.
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in mapping:
            return str(mapping[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_substitute, template)
