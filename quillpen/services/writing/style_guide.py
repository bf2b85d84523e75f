"""Reading the workspace style guide written by ``quillpen analyze``."""

from __future__ import annotations

import structlog

from quillpen.config.workspace import WorkspacePaths
from quillpen.services.frontmatter import read_document

logger = structlog.get_logger(logger_name=__name__)


def load_style_guide(paths: WorkspacePaths, fallback: str) -> str:
    """Return the style guide body, or *fallback* when there is none yet.

    The guide's frontmatter (generation time, sample count) is dropped; only
    the prose is useful to a prompt.  An empty guide counts as missing.
    """
    path = paths.style_guide_path
    if not path.is_file():
        logger.debug("style_guide_missing", path=str(path))
        return fallback
    _, body = read_document(path)
    return body.strip() or fallback
