"""Directory layout of a quillpen workspace.

::

    <root>/
      .quillpen/config.yaml
      .quillpen/prompts/          user prompt overrides
      writing/import/             files waiting for ``quillpen ingest``
      writing/raw/                unstructured notes
      writing/drafts/             ingested or generated drafts
      writing/content/<platform>/ published writing, one folder per platform
      writing/_style_guide.md     written by ``quillpen analyze``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from quillpen.config.loader import CONFIG_DIR, find_project_root, save_workspace_config
from quillpen.models.ingestion import Platform
from quillpen.models.workspace import WorkspaceConfig

logger = structlog.get_logger(logger_name=__name__)

WRITING_DIR = "writing"
PROMPTS_DIR = "prompts"
STYLE_GUIDE_FILE = "_style_guide.md"

WORKSPACE_DIRECTORIES: list[str] = [
    f"{CONFIG_DIR}/{PROMPTS_DIR}",
    f"{WRITING_DIR}/import",
    f"{WRITING_DIR}/raw",
    f"{WRITING_DIR}/drafts",
    *(f"{WRITING_DIR}/content/{p.value}" for p in Platform),
]

GITIGNORE_CONTENT = "# quillpen\nwriting/raw/\nwriting/drafts/\nwriting/import/\n"


@dataclass(frozen=True)
class WorkspacePaths:
    """Resolved paths inside one workspace root."""

    root: Path

    @property
    def prompts_dir(self) -> Path:
        return self.root / CONFIG_DIR / PROMPTS_DIR

    @property
    def import_dir(self) -> Path:
        return self.root / WRITING_DIR / "import"

    @property
    def drafts_dir(self) -> Path:
        return self.root / WRITING_DIR / "drafts"

    def content_dir(self, platform: Platform) -> Path:
        return self.root / WRITING_DIR / "content" / platform.value

    @property
    def style_guide_path(self) -> Path:
        return self.root / WRITING_DIR / STYLE_GUIDE_FILE

    def ingest_destination(self, platform: Platform, published: bool) -> Path:
        """Published writing goes to its platform folder, everything else to drafts."""
        return self.content_dir(platform) if published else self.drafts_dir

    def relative(self, path: Path) -> str:
        """Render *path* relative to the root when possible, for display."""
        try:
            return f"{path.relative_to(self.root).as_posix()}/"
        except ValueError:
            return str(path)


@dataclass
class InitResult:
    """What ``init_workspace`` created."""

    root: Path
    created: list[str] = field(default_factory=list)
    already_initialized: bool = False


def init_workspace(root: Path, config: WorkspaceConfig) -> InitResult:
    """Create the workspace skeleton and config under *root*.

    Does nothing if *root* is already inside a workspace.  Existing
    directories are left alone, and an existing ``.gitignore`` is never
    overwritten.
    """
    existing = find_project_root(root)
    if existing is not None:
        logger.info("workspace_already_initialized", root=str(existing))
        return InitResult(root=existing, already_initialized=True)

    result = InitResult(root=root)
    for rel in WORKSPACE_DIRECTORIES:
        (root / rel).mkdir(parents=True, exist_ok=True)
        result.created.append(f"{rel}/")

    config_path = save_workspace_config(root, config)
    result.created.append(config_path.relative_to(root).as_posix())

    gitignore = root / ".gitignore"
    if not gitignore.exists():
        gitignore.write_text(GITIGNORE_CONTENT, encoding="utf-8")
        result.created.append(".gitignore")

    logger.info("workspace_initialized", root=str(root), entries=len(result.created))
    return result
