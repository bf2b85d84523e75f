"""Shared pytest fixtures for the quillpen test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from quillpen.config.workspace import init_workspace
from quillpen.interfaces.llm_provider import ILLMProvider
from quillpen.models.workspace import WorkspaceConfig

METADATA_RESPONSE = """\
```yaml
title: My Raw Thoughts on Writing
date: 2024-03-15
tags:
  - writing
  - craft
summary: Notes on building a daily writing habit.
```"""


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider that returns a fenced YAML metadata response.

    Override with mock_llm_provider.complete.return_value = "custom" or
    mock_llm_provider.complete.side_effect = [...] for specific tests.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.get_model_name.return_value = "mock-model"
    mock.is_available.return_value = True
    mock.validate_credentials = AsyncMock(return_value=True)
    mock.complete = AsyncMock(return_value=METADATA_RESPONSE)
    return mock


# ---------------------------------------------------------------------------
# Workspace fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An initialised workspace rooted at a fresh temporary directory."""
    root = tmp_path / "project"
    root.mkdir()
    init_workspace(root, WorkspaceConfig(author="Test Writer"))
    return root


@pytest.fixture
def import_dir(workspace: Path) -> Path:
    return workspace / "writing" / "import"


@pytest.fixture
def drafts_dir(workspace: Path) -> Path:
    return workspace / "writing" / "drafts"
