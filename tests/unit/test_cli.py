"""Unit tests for the quillpen CLI -- quillpen.cli.main, init and ingest."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from quillpen.cli.main import main
from quillpen.config.loader import load_workspace_config
from quillpen.interfaces.llm_provider import ILLMProvider


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    """Keep the CLI from reconfiguring structlog onto pytest's captured streams."""
    with patch("quillpen.cli.main.configure_logging"), patch(
        "quillpen.cli.main.get_logger", return_value=MagicMock()
    ):
        yield


@pytest.fixture(autouse=True)
def _no_api_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "QUILLPEN_MODEL", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)


# ======================================================================
# Parser
# ======================================================================


class TestParser:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage: quillpen" in capsys.readouterr().out

    def test_ingest_requires_platform(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["ingest"])
        assert exc_info.value.code == 2

    def test_log_level_is_case_insensitive(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with patch("quillpen.cli.main.configure_logging") as mock_configure:
            assert main(["--log-level", "debug", "--json-logs", "init"]) == 0
        mock_configure.assert_called_once_with(
            log_level="DEBUG", json_output=True, app_env="development"
        )

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(SystemExit):
            main(["--log-level", "LOUD", "init"])


# ======================================================================
# init
# ======================================================================


class TestInitCommand:
    def test_creates_workspace(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert main(["init", "--author", "Ada", "--provider", "openai"]) == 0

        out = capsys.readouterr().out
        assert "Workspace initialized" in out
        assert "writing/import/" in out
        assert "Remember to set OPENAI_API_KEY" in out
        config = load_workspace_config(tmp_path)
        assert config.author == "Ada"
        assert config.llm.provider == "openai"
        assert config.llm.model == "gpt-4o-mini"
        assert config.llm.api_key_env == "OPENAI_API_KEY"

    def test_custom_model_and_key_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert main(["init", "--model", "haiku", "--api-key-env", "MY_KEY"]) == 0

        config = load_workspace_config(tmp_path)
        assert config.llm.model == "haiku"
        assert config.llm.api_key_env == "MY_KEY"

    def test_already_initialized(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(workspace / "writing")

        assert main(["init", "--author", "Someone Else"]) == 0

        assert "Already in a quillpen workspace" in capsys.readouterr().out
        assert load_workspace_config(workspace).author == "Test Writer"


# ======================================================================
# ingest
# ======================================================================


class TestIngestCommand:
    def test_outside_workspace(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert main(["ingest", "--platform", "blog"]) == 1
        assert "Not in a quillpen workspace" in capsys.readouterr().err

    def test_invalid_platform(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(workspace)

        assert main(["ingest", "--platform", "myspace"]) == 1
        err = capsys.readouterr().err
        assert "Invalid platform: myspace" in err
        assert "blog, linkedin, substack, twitter" in err

    def test_missing_directory(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(workspace)

        assert main(["ingest", "does-not-exist", "--platform", "blog"]) == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_missing_api_key(
        self,
        workspace: Path,
        import_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(workspace)
        (import_dir / "raw.md").write_text("Body\n", encoding="utf-8")

        assert main(["ingest", "--platform", "blog"]) == 1
        assert "ANTHROPIC_API_KEY" in capsys.readouterr().err
        assert (import_dir / "raw.md").exists()

    def test_ingests_import_directory(
        self,
        workspace: Path,
        import_dir: Path,
        drafts_dir: Path,
        mock_llm_provider: ILLMProvider,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(workspace)
        (import_dir / "raw.md").write_text("Some raw words\n", encoding="utf-8")

        with patch(
            "quillpen.providers.llm.factory.build_llm_provider", return_value=mock_llm_provider
        ):
            exit_code = main(["ingest", "--platform", "blog"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "ingested  raw.md -> 2024-03-15_my-raw-thoughts-on-writing.md" in out
        assert "Ingested: 1" in out
        assert "Skipped:  0" in out
        assert "Failed:   0" in out
        assert "then publish to writing/content/blog/" in out
        assert (drafts_dir / "2024-03-15_my-raw-thoughts-on-writing.md").is_file()

    def test_published_to_explicit_directory(
        self,
        workspace: Path,
        tmp_path: Path,
        mock_llm_provider: ILLMProvider,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exports = tmp_path / "exports"
        exports.mkdir()
        (exports / "post.md").write_text("Exported words\n", encoding="utf-8")
        monkeypatch.chdir(workspace)

        with patch(
            "quillpen.providers.llm.factory.build_llm_provider", return_value=mock_llm_provider
        ):
            exit_code = main(["ingest", str(exports), "--platform", "substack", "--published"])

        assert exit_code == 0
        assert "ready for analysis in writing/content/substack/" in capsys.readouterr().out
        assert (
            workspace / "writing" / "content" / "substack" / "2024-03-15_my-raw-thoughts-on-writing.md"
        ).is_file()

    def test_failures_do_not_change_exit_code(
        self,
        workspace: Path,
        import_dir: Path,
        mock_llm_provider: ILLMProvider,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from unittest.mock import AsyncMock

        from quillpen.utils.errors import LLMError

        monkeypatch.chdir(workspace)
        (import_dir / "raw.md").write_text("Body\n", encoding="utf-8")
        mock_llm_provider.complete = AsyncMock(side_effect=LLMError("quota", provider_name="mock"))

        with patch(
            "quillpen.providers.llm.factory.build_llm_provider", return_value=mock_llm_provider
        ):
            exit_code = main(["ingest", "--platform", "blog"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "failed    raw.md" in out
        assert "[mock] quota" in out
        assert "Failed:   1" in out

    def test_empty_import_directory(
        self,
        workspace: Path,
        mock_llm_provider: ILLMProvider,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(workspace)

        with patch(
            "quillpen.providers.llm.factory.build_llm_provider", return_value=mock_llm_provider
        ):
            assert main(["ingest", "--platform", "twitter"]) == 0

        assert "No markdown files found" in capsys.readouterr().out

    def test_rejected_credentials_stop_before_any_file(
        self,
        workspace: Path,
        import_dir: Path,
        mock_llm_provider: ILLMProvider,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from unittest.mock import AsyncMock

        monkeypatch.chdir(workspace)
        (import_dir / "raw.md").write_text("Body\n", encoding="utf-8")
        mock_llm_provider.validate_credentials = AsyncMock(return_value=False)

        with patch(
            "quillpen.providers.llm.factory.build_llm_provider", return_value=mock_llm_provider
        ):
            exit_code = main(["ingest", "--platform", "blog"])

        assert exit_code == 1
        assert "[mock-llm] Could not verify credentials" in capsys.readouterr().err
        assert (import_dir / "raw.md").read_text(encoding="utf-8") == "Body\n"
        mock_llm_provider.complete.assert_not_awaited()
