"""
Tests for the sechub command-line interface.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from sechub.cli import cli
from sechub.extractor.models import ExtractionResult

URL = "https://www.schneier.com/blog/archives/2024/05/story.html"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("sechub.cli.configure_logging") as configure:
        yield configure


class TestExtractCommand:
    def test_json_output(self, runner):
        result = ExtractionResult(content="Full article text", title="Squid", success=True)
        with patch("sechub.cli._extract_once", new=AsyncMock(return_value=result)) as extract_once:
            outcome = runner.invoke(cli, ["extract", URL, "--article-id", "5", "--json"])

        assert outcome.exit_code == 0
        payload = json.loads(outcome.output)
        assert payload["success"] is True
        assert payload["title"] == "Squid"
        assert payload["content"] == "Full article text"
        args = extract_once.await_args.args
        assert args[1:] == (URL, "5")

    def test_failure_exits_non_zero(self, runner):
        result = ExtractionResult.failure("Domain not allowed for content extraction")
        with patch("sechub.cli._extract_once", new=AsyncMock(return_value=result)):
            outcome = runner.invoke(cli, ["extract", "https://example.com/"])

        assert outcome.exit_code == 1
        assert "Domain not allowed" in outcome.output

    def test_rich_output(self, runner):
        result = ExtractionResult(content="Full article text", title="Squid", success=True)
        with patch("sechub.cli._extract_once", new=AsyncMock(return_value=result)):
            outcome = runner.invoke(cli, ["extract", URL])

        assert outcome.exit_code == 0
        assert "Full article text" in outcome.output


class TestOtherCommands:
    def test_domains_lists_allow_list(self, runner):
        outcome = runner.invoke(cli, ["domains"])

        assert outcome.exit_code == 0
        assert "krebsonsecurity.com" in outcome.output

    def test_log_level_override(self, runner, no_logging_setup):
        runner.invoke(cli, ["--log-level", "DEBUG", "domains"])

        monitoring = no_logging_setup.call_args.args[0]
        assert monitoring.log_level == "DEBUG"

    def test_serve_uses_configured_address(self, runner):
        with patch("sechub.cli.uvicorn.run") as run:
            outcome = runner.invoke(cli, ["serve", "--port", "9100"])

        assert outcome.exit_code == 0
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9100

    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("cache:\n  success_ttl_seconds: -5\n")

        outcome = runner.invoke(cli, ["--config", str(path), "domains"])

        assert outcome.exit_code == 1
