"""Workspace discovery and YAML configuration loading.

A quillpen workspace is any directory containing a ``.quillpen/`` folder.
Commands can be run from anywhere inside it: :func:`find_project_root`
walks up from the current directory until it finds one.

Configuration is loaded in layers (later layers override earlier):

  1. Built-in defaults (:class:`~quillpen.models.workspace.WorkspaceConfig`)
  2. ``.quillpen/config.yaml`` -- written by ``quillpen init``, user-editable

The YAML is deep-merged onto the defaults, so a config file that only sets
``llm.model`` keeps the default provider and key variable.  A file that only
switches ``llm.provider`` gets that provider's default model and key
variable rather than Anthropic's.  Environment
settings (:class:`~quillpen.config.settings.Settings`) are applied later, when
the LLM provider is built.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from quillpen.models.workspace import DEFAULT_API_KEY_ENVS, DEFAULT_MODELS, WorkspaceConfig
from quillpen.utils.errors import ConfigurationError, WorkspaceNotFoundError

logger = structlog.get_logger(logger_name=__name__)

CONFIG_DIR = ".quillpen"
CONFIG_FILE = "config.yaml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Return the nearest ancestor of *start* (inclusive) containing ``.quillpen/``.

    Args:
        start: Directory to start from. Defaults to the current working directory.

    Returns:
        The workspace root, or ``None`` when no ancestor is a workspace.
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_DIR).is_dir():
            return candidate
    return None


def get_project_root(start: Path | None = None) -> Path:
    """Like :func:`find_project_root` but raises when there is no workspace."""
    root = find_project_root(start)
    if root is None:
        raise WorkspaceNotFoundError()
    return root


def load_workspace_config(root: Path) -> WorkspaceConfig:
    """Load ``<root>/.quillpen/config.yaml`` merged over the defaults.

    Args:
        root: Workspace root directory.

    Returns:
        The validated workspace configuration.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            does not match the expected schema.
    """
    config_path = root / CONFIG_DIR / CONFIG_FILE
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"Expected a mapping in {config_path}")

    merged = WorkspaceConfig().model_dump()
    _deep_merge(merged, yaml_config)
    _apply_provider_defaults(merged, yaml_config)

    try:
        config = WorkspaceConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config in {config_path}: {exc}") from exc

    logger.debug("workspace_config_loaded", path=str(config_path), provider=config.llm.provider)
    return config


def save_workspace_config(root: Path, config: WorkspaceConfig) -> Path:
    """Write *config* to ``<root>/.quillpen/config.yaml`` and return its path."""
    config_dir = root / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / CONFIG_FILE
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, sort_keys=False, allow_unicode=True)
    return config_path


def _apply_provider_defaults(merged: dict, overrides: dict) -> None:
    """Default ``llm.model`` and ``llm.api_key_env`` per provider when the file omits them.

    The built-in defaults describe the Anthropic provider, so a file that
    only switches ``llm.provider`` must not inherit Anthropic's model and key
    variable.
    """
    llm_overrides = overrides.get("llm")
    if not isinstance(llm_overrides, dict):
        return
    provider = llm_overrides.get("provider")
    if not isinstance(provider, str) or provider not in DEFAULT_MODELS:
        return
    if "model" not in llm_overrides:
        merged["llm"]["model"] = DEFAULT_MODELS[provider]
    if "api_key_env" not in llm_overrides:
        merged["llm"]["api_key_env"] = DEFAULT_API_KEY_ENVS[provider]


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
