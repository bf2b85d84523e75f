"""Configuration module -- exports Settings, workspace loading and layout helpers."""

from quillpen.config.loader import (
    find_project_root,
    get_project_root,
    load_workspace_config,
    save_workspace_config,
)
from quillpen.config.settings import Settings
from quillpen.config.workspace import WorkspacePaths, init_workspace

__all__ = [
    "Settings",
    "WorkspacePaths",
    "find_project_root",
    "get_project_root",
    "init_workspace",
    "load_workspace_config",
    "save_workspace_config",
]
