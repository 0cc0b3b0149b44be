"""Tests for the marketbrief command line."""

from unittest.mock import patch

import yaml
from typer.testing import CliRunner

from marketbrief.cli.app import app
from marketbrief.config import load_catalog, load_config

runner = CliRunner()


class TestInitCommand:
    def test_writes_config_and_catalog(self, tmp_path) -> None:
        result = runner.invoke(
            app,
            ["init", "--config-dir", str(tmp_path / "cfg"), "--workspace", str(tmp_path / "ws"),
             "--recipient", "desk@example.com"],
        )

        assert result.exit_code == 0, result.output
        config = load_config(tmp_path / "cfg" / "config.yaml")
        catalog = load_catalog(tmp_path / "cfg" / "catalog.yaml")
        assert config.email.recipients == ["desk@example.com"]
        assert config.workspace_root == str(tmp_path / "ws")
        assert catalog.prompts
        assert len(catalog.sources["daily"]["stock"]) == 5
        assert set(yaml.safe_load((tmp_path / "cfg" / "catalog.yaml").read_text())) == {"sources", "prompts"}
        assert (tmp_path / "ws").is_dir()

    def test_refuses_to_overwrite(self, tmp_path) -> None:
        args = ["init", "--config-dir", str(tmp_path / "cfg"), "--workspace", str(tmp_path / "ws")]
        runner.invoke(app, args)

        result = runner.invoke(app, args)

        assert result.exit_code == 1


class TestSourcesCommand:
    def test_lists_sources(self, tmp_path) -> None:
        runner.invoke(
            app, ["init", "--config-dir", str(tmp_path), "--workspace", str(tmp_path / "ws")]
        )

        result = runner.invoke(app, ["sources", "--config", str(tmp_path / "config.yaml")])

        assert result.exit_code == 0, result.output
        assert "Configured Sources" in result.output

    def test_missing_config(self, tmp_path) -> None:
        result = runner.invoke(app, ["sources", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1


class TestReportCommands:
    def test_news_dry_run(self, tmp_path) -> None:
        with patch("marketbrief.cli.run.build_runner") as build:
            build.return_value.run_news_report.return_value = tmp_path / "report.html"
            runner.invoke(
                app, ["init", "--config-dir", str(tmp_path), "--workspace", str(tmp_path / "ws")]
            )

            result = runner.invoke(app, ["news", "--dry-run", "--config", str(tmp_path / "config.yaml")])

        assert result.exit_code == 0, result.output
        build.return_value.run_news_report.assert_called_once_with(dry_run=True)
        assert build.call_args.kwargs == {"allow_mock_llm": True}

    def test_news_without_api_key_sends_nothing(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        runner.invoke(
            app,
            ["init", "--config-dir", str(tmp_path), "--workspace", str(tmp_path / "ws"),
             "--recipient", "desk@example.com"],
        )

        with patch("marketbrief.pipeline.orchestrator.EmailSender") as sender:
            result = runner.invoke(app, ["news", "--config", str(tmp_path / "config.yaml")])

        assert result.exit_code == 1
        assert "No OpenAI API key" in result.output
        sender.return_value.send.assert_not_called()

    def test_market_failure_exits_non_zero(self, tmp_path) -> None:
        from marketbrief.errors import ProxyUnavailable

        with patch("marketbrief.cli.run.build_runner") as build:
            build.return_value.run_market_report.side_effect = ProxyUnavailable("no proxies")
            runner.invoke(
                app, ["init", "--config-dir", str(tmp_path), "--workspace", str(tmp_path / "ws")]
            )

            result = runner.invoke(app, ["market", "--config", str(tmp_path / "config.yaml")])

        assert result.exit_code == 1
        build.return_value.run_market_report.assert_called_once_with(dry_run=False)
