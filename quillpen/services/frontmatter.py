"""YAML frontmatter codec for markdown documents.

A document may start with a frontmatter block::

    ---
    title: My Post
    tags:
      - writing
    ---

    Body text...

:func:`decode` splits a document into ``(frontmatter, body)`` and never
raises: absent, unterminated or malformed frontmatter all degrade to
``({}, raw)`` so the whole file is treated as body.  :func:`encode` is the
inverse; ``decode(encode(fm, body)) == (fm, body)`` for any non-empty
mapping of scalars and sequences.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(logger_name=__name__)

FRONTMATTER_DELIMITER = "---"

# Opening delimiter line, lazily captured YAML region, closing delimiter line.
# The closing line may end the file without a trailing newline.
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def decode(raw: str) -> tuple[dict[str, Any], str]:
    """Split *raw* into its frontmatter mapping and body.

    Args:
        raw: Full document text.

    Returns:
        ``(frontmatter, body)``.  The body excludes the single blank line
        that separates it from the closing delimiter.  On any frontmatter
        problem, ``({}, raw)``.
    """
    match = _FRONTMATTER_RE.match(raw)
    if match is None:
        return {}, raw

    try:
        frontmatter = yaml.safe_load(match.group("yaml"))
    except (yaml.YAMLError, ValueError) as exc:
        logger.debug("frontmatter_yaml_invalid", error=str(exc))
        return {}, raw

    if frontmatter is None:
        frontmatter = {}
    elif not isinstance(frontmatter, dict):
        logger.debug("frontmatter_not_mapping", type=type(frontmatter).__name__)
        return {}, raw

    body = raw[match.end():]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return frontmatter, body


def encode(frontmatter: dict[str, Any], body: str) -> str:
    """Serialise *frontmatter* and *body* into a markdown document.

    An empty mapping emits no frontmatter block at all: *body* is returned
    unchanged.
    """
    if not frontmatter:
        return body

    frontmatter_str = yaml.safe_dump(
        frontmatter,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"{FRONTMATTER_DELIMITER}\n{frontmatter_str}{FRONTMATTER_DELIMITER}\n\n{body}"


def read_document(path: Path) -> tuple[dict[str, Any], str]:
    """Read and decode the markdown file at *path*."""
    return decode(path.read_text(encoding="utf-8"))


def write_document(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Encode and write a markdown file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(frontmatter, body), encoding="utf-8")


def list_markdown_files(directory: Path) -> list[Path]:
    """Return every ``*.md`` file under *directory*, recursively, in sorted order.

    Hidden files and anything inside a hidden directory (``.git/``,
    ``.obsidian/``, ...) are left out.  Listing errors propagate as
    :class:`OSError`.
    """
    files = []
    for path in directory.rglob("*.md"):
        if any(part.startswith(".") for part in path.relative_to(directory).parts):
            continue
        if path.is_file():
            files.append(path)
    return sorted(files)
