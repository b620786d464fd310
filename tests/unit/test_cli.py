"""Tests for the command-line entry point."""

import os
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from mcp_jira_dynamic import main


@pytest.fixture
def run_async():
    with (
        patch.dict(os.environ, {}, clear=True),
        patch("mcp_jira_dynamic.load_dotenv"),
        patch(
            "mcp_jira_dynamic.servers.main_mcp.run_async", new_callable=AsyncMock
        ) as mock_run,
    ):
        yield mock_run


def test_stdio_is_the_default(run_async):
    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    run_async.assert_awaited_once_with(transport="stdio")


def test_options_are_exported_to_environment(run_async):
    result = CliRunner().invoke(
        main,
        [
            "--jira-url",
            "https://jira.example.com",
            "--jira-personal-token",
            "pat",
            "--config-path",
            "/tmp/field-configs",
            "--project-key",
            "PROJ",
            "--read-only",
        ],
    )

    assert result.exit_code == 0, result.output
    assert os.environ["JIRA_URL"] == "https://jira.example.com"
    assert os.environ["JIRA_PERSONAL_TOKEN"] == "pat"
    assert os.environ["JIRA_DYNAMIC_CONFIG_PATH"] == "/tmp/field-configs"
    assert os.environ["JIRA_PROJECT_KEY"] == "PROJ"
    assert os.environ["READ_ONLY_MODE"] == "true"


def test_http_transport_from_environment(run_async):
    os.environ.update(
        {"TRANSPORT": "streamable-http", "PORT": "9000", "HOST": "127.0.0.1"}
    )

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    run_async.assert_awaited_once_with(
        transport="streamable-http",
        host="127.0.0.1",
        port=9000,
        log_level="warning",
    )


def test_cli_option_overrides_environment(run_async):
    os.environ.update({"TRANSPORT": "sse", "PORT": "9000"})

    result = CliRunner().invoke(
        main, ["--transport", "streamable-http", "--port", "8123", "--path", "/x"]
    )

    assert result.exit_code == 0, result.output
    kwargs = run_async.await_args.kwargs
    assert kwargs["transport"] == "streamable-http"
    assert kwargs["port"] == 8123
    assert kwargs["path"] == "/x"


def test_invalid_transport_falls_back_to_stdio(run_async):
    os.environ["TRANSPORT"] = "carrier-pigeon"

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    run_async.assert_awaited_once_with(transport="stdio")
