"""Unit tests for settings, workspace discovery, config loading and init."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from quillpen.config.loader import (
    find_project_root,
    get_project_root,
    load_workspace_config,
    save_workspace_config,
)
from quillpen.config.settings import Settings
from quillpen.config.workspace import WORKSPACE_DIRECTORIES, WorkspacePaths, init_workspace
from quillpen.models.ingestion import Platform
from quillpen.models.workspace import LLMConfig, WorkspaceConfig
from quillpen.utils.errors import ConfigurationError, WorkspaceNotFoundError


def _settings(**overrides) -> Settings:
    defaults = {
        "anthropic_api_key": "",
        "openai_api_key": "",
        "openai_base_url": "",
        "ollama_base_url": "http://localhost:11434",
        "quillpen_model": "",
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ======================================================================
# Settings
# ======================================================================


class TestSettings:
    def test_available_providers(self) -> None:
        settings = _settings(anthropic_api_key="sk-ant", ollama_base_url="")
        assert settings.get_available_llm_providers() == ["anthropic"]

    def test_all_providers(self) -> None:
        settings = _settings(anthropic_api_key="a", openai_api_key="o")
        assert settings.get_available_llm_providers() == ["anthropic", "openai", "ollama"]

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUILLPEN_MODEL", "haiku")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.quillpen_model == "haiku"
        assert settings.log_level == "DEBUG"


# ======================================================================
# Workspace discovery
# ======================================================================


class TestFindProjectRoot:
    def test_finds_root_from_nested_directory(self, workspace: Path) -> None:
        nested = workspace / "writing" / "drafts"
        assert find_project_root(nested) == workspace.resolve()

    def test_none_outside_workspace(self, tmp_path: Path) -> None:
        assert find_project_root(tmp_path) is None

    def test_get_project_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceNotFoundError, match="quillpen init"):
            get_project_root(tmp_path)

    def test_defaults_to_cwd(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(workspace / "writing")
        assert find_project_root() == workspace.resolve()


# ======================================================================
# Config file
# ======================================================================


class TestWorkspaceConfigFile:
    def test_save_then_load(self, tmp_path: Path) -> None:
        config = WorkspaceConfig(
            author="Ada",
            llm=LLMConfig(provider="openai", model="gpt-4o", api_key_env="MY_KEY"),
        )
        save_workspace_config(tmp_path, config)
        assert load_workspace_config(tmp_path) == config

    def test_saved_yaml_is_readable(self, tmp_path: Path) -> None:
        path = save_workspace_config(tmp_path, WorkspaceConfig(author="Ada"))
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["author"] == "Ada"
        assert data["llm"]["provider"] == "anthropic"

    def test_partial_file_is_merged_over_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text(
            "llm:\n  model: sonnet\n", encoding="utf-8"
        )
        config = load_workspace_config(tmp_path)
        assert config.llm.model == "sonnet"
        assert config.llm.provider == "anthropic"
        assert config.llm.api_key_env == "ANTHROPIC_API_KEY"

    @pytest.mark.parametrize(
        "provider, model, key_env",
        [
            ("openai", "gpt-4o-mini", "OPENAI_API_KEY"),
            ("ollama", "llama3.1", ""),
            ("anthropic", "claude-sonnet-4-20250514", "ANTHROPIC_API_KEY"),
        ],
    )
    def test_provider_only_file_uses_that_providers_defaults(
        self, tmp_path: Path, provider: str, model: str, key_env: str
    ) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text(
            f"llm:\n  provider: {provider}\n", encoding="utf-8"
        )
        config = load_workspace_config(tmp_path)
        assert config.llm.provider == provider
        assert config.llm.model == model
        assert config.llm.api_key_env == key_env

    def test_explicit_model_kept_when_switching_provider(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text(
            "llm:\n  provider: openai\n  model: gpt-4o\n", encoding="utf-8"
        )
        config = load_workspace_config(tmp_path)
        assert config.llm.model == "gpt-4o"
        assert config.llm.api_key_env == "OPENAI_API_KEY"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text("", encoding="utf-8")
        assert load_workspace_config(tmp_path) == WorkspaceConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_workspace_config(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text("llm: [oops", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_workspace_config(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text("- a\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_workspace_config(tmp_path)

    def test_invalid_provider(self, tmp_path: Path) -> None:
        (tmp_path / ".quillpen").mkdir()
        (tmp_path / ".quillpen" / "config.yaml").write_text(
            "llm:\n  provider: cohere\n", encoding="utf-8"
        )
        with pytest.raises(ConfigurationError, match="Invalid config"):
            load_workspace_config(tmp_path)


# ======================================================================
# Workspace layout and init
# ======================================================================


class TestInitWorkspace:
    def test_creates_layout(self, tmp_path: Path) -> None:
        result = init_workspace(tmp_path, WorkspaceConfig(author="Ada"))

        assert not result.already_initialized
        for rel in WORKSPACE_DIRECTORIES:
            assert (tmp_path / rel).is_dir(), rel
        for platform in Platform:
            assert (tmp_path / "writing" / "content" / platform.value).is_dir()
        assert (tmp_path / ".quillpen" / "config.yaml").is_file()
        assert "writing/import/" in (tmp_path / ".gitignore").read_text(encoding="utf-8")
        assert ".quillpen/config.yaml" in result.created
        assert load_workspace_config(tmp_path).author == "Ada"

    def test_existing_gitignore_is_kept(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("node_modules/\n", encoding="utf-8")
        result = init_workspace(tmp_path, WorkspaceConfig())
        assert (tmp_path / ".gitignore").read_text(encoding="utf-8") == "node_modules/\n"
        assert ".gitignore" not in result.created

    def test_second_init_is_a_no_op(self, workspace: Path) -> None:
        result = init_workspace(workspace, WorkspaceConfig(author="Someone Else"))
        assert result.already_initialized
        assert result.created == []
        assert load_workspace_config(workspace).author == "Test Writer"


class TestWorkspacePaths:
    def test_ingest_destination(self, tmp_path: Path) -> None:
        paths = WorkspacePaths(tmp_path)
        assert paths.ingest_destination(Platform.BLOG, published=False) == (
            tmp_path / "writing" / "drafts"
        )
        assert paths.ingest_destination(Platform.LINKEDIN, published=True) == (
            tmp_path / "writing" / "content" / "linkedin"
        )

    def test_relative(self, tmp_path: Path) -> None:
        paths = WorkspacePaths(tmp_path)
        assert paths.relative(paths.drafts_dir) == "writing/drafts/"
        assert paths.relative(Path("/elsewhere")) == "/elsewhere"

    def test_style_guide_path(self, tmp_path: Path) -> None:
        assert WorkspacePaths(tmp_path).style_guide_path == tmp_path / "writing" / "_style_guide.md"
