"""Tests for the deploynote CLI."""

from __future__ import annotations

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from conftest import GOOD_NOTE

from deploynote.cli import app
from deploynote.config.loader import DEFAULT_CONFIG_TEMPLATE
from deploynote.errors import SynthesisError
from deploynote.output.store import StoreOutcome, StoreResult
from deploynote.output.validator import DeployNote
from deploynote.pipeline import PipelineResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("REPOSITORY", "acme/shop")
    monkeypatch.setenv("PR_NUMBER", "42")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "ds-test")


@pytest.fixture
def pipeline_result(sample_context):
    return PipelineResult(
        context=sample_context,
        note=DeployNote(text=GOOD_NOTE),
        store=StoreResult(path="dev-utils/deployNotes/42.md", outcome=StoreOutcome.CREATED),
        comment_url="https://github.com/acme/shop/pull/42#issuecomment-1",
    )


class TestRun:
    def test_success(self, pipeline_result):
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            pipeline_cls.return_value.run = AsyncMock(return_value=pipeline_result)
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 0, result.output
        assert "created" in result.output
        cfg = pipeline_cls.call_args.args[0]
        assert cfg.trigger.repository == "acme/shop"
        assert cfg.trigger.pr_number == 42

    def test_cli_overrides_trigger(self, pipeline_result):
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            pipeline_cls.return_value.run = AsyncMock(return_value=pipeline_result)
            result = runner.invoke(app, ["run", "--pr", "7", "--repository", "other/repo"])

        assert result.exit_code == 0, result.output
        cfg = pipeline_cls.call_args.args[0]
        assert cfg.trigger.repository == "other/repo"
        assert cfg.trigger.pr_number == 7

    def test_dry_run_flag_passed(self, pipeline_result):
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            pipeline_cls.return_value.run = AsyncMock(return_value=pipeline_result)
            result = runner.invoke(app, ["run", "--dry-run"])

        assert result.exit_code == 0, result.output
        pipeline_cls.return_value.run.assert_awaited_once_with(dry_run=True)
        assert "dry run" in result.output

    def test_bad_repository_option(self):
        result = runner.invoke(app, ["run", "--repository", "no-slash"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("DEEPSEEK_API_KEY")
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "DEEPSEEK_API_KEY" in result.output
        pipeline_cls.assert_not_called()

    def test_missing_github_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN")
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output

    def test_pipeline_error_exits_nonzero(self):
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            pipeline_cls.return_value.run = AsyncMock(
                side_effect=SynthesisError("Failed to generate deploy note")
            )
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Failed to generate deploy note" in result.output

    def test_unexpected_error_exits_nonzero(self):
        with patch("deploynote.cli.DeployNotePipeline") as pipeline_cls:
            pipeline_cls.return_value.run = AsyncMock(side_effect=RuntimeError("kaboom"))
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Unexpected error" in result.output


class TestValidate:
    def test_valid_file(self, tmp_path):
        note = tmp_path / "42.md"
        note.write_text(GOOD_NOTE)
        result = runner.invoke(app, ["validate", str(note)])
        assert result.exit_code == 0
        assert "valid deploy note" in result.output

    def test_invalid_file(self, tmp_path):
        note = tmp_path / "42.md"
        note.write_text("### [T](u)\n\n**Test Script**\n\n1. Click")
        result = runner.invoke(app, ["validate", str(note), "--title", "T", "--url", "u"])
        assert result.exit_code == 1
        assert "Launch Requirements" in result.output
        assert "Nothing to test" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.md")])
        assert result.exit_code == 1


class TestConfigCommands:
    def test_init_writes_template(self, tmp_path):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (tmp_path / "deploynote.yaml").read_text() == DEFAULT_CONFIG_TEMPLATE

    def test_init_refuses_overwrite(self, tmp_path):
        (tmp_path / "deploynote.yaml").write_text("log_level: info\n")
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert (tmp_path / "deploynote.yaml").read_text() == "log_level: info\n"

    def test_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "deepseek-reasoner" in result.output
        assert "ds-test" not in result.output

    def test_bad_config_file(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("log_level: loud\n")
        result = runner.invoke(app, ["--config", str(tmp_path / "broken.yaml"), "config", "show"])
        assert result.exit_code == 1
        assert "Invalid config" in result.output
