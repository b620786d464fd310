"""Tests for the main MCP server implementation."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from fastmcp import Client
from fastmcp.client import FastMCPTransport

from mcp_jira_dynamic.fieldconfig.store import ProjectConfigStore
from mcp_jira_dynamic.servers.context import MainAppContext
from mcp_jira_dynamic.servers.main import health_check, main_lifespan, main_mcp

CLOUD_ENV = {
    "JIRA_URL": "https://test.atlassian.net",
    "JIRA_USERNAME": "user@example.com",
    "JIRA_API_TOKEN": "token",
}


@pytest.fixture
def config_env(tmp_path):
    return {"JIRA_DYNAMIC_CONFIG_PATH": str(tmp_path / "configs")}


@pytest.mark.asyncio
async def test_health_check():
    response = await health_check(MagicMock())

    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "ok"}


@pytest.mark.asyncio
async def test_lifespan_with_jira(config_env, tmp_path):
    """Test that the lifespan loads Jira settings and prepares the store."""
    with patch.dict(os.environ, {**CLOUD_ENV, **config_env}, clear=True):
        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]

    assert isinstance(app_context, MainAppContext)
    assert app_context.full_jira_config.url == "https://test.atlassian.net"
    assert app_context.read_only is False
    assert app_context.enabled_tools is None
    assert isinstance(app_context.config_store, ProjectConfigStore)
    assert app_context.field_settings.config_dir == tmp_path / "configs"
    assert (tmp_path / "configs").is_dir()


@pytest.mark.asyncio
async def test_lifespan_without_jira(config_env):
    """Test that the store is available even without Jira credentials."""
    env = {
        **config_env,
        "READ_ONLY_MODE": "true",
        "ENABLED_TOOLS": "jira_list_configured_projects",
        "JIRA_PROJECT_KEY": "ENV",
    }
    with patch.dict(os.environ, env, clear=True):
        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]

    assert app_context.full_jira_config is None
    assert app_context.read_only is True
    assert app_context.enabled_tools == ["jira_list_configured_projects"]
    assert app_context.config_store.default_project_key == "ENV"


@pytest.mark.anyio
async def test_main_server_lists_config_tools_without_jira(config_env):
    with patch.dict(os.environ, config_env, clear=True):
        async with Client(transport=FastMCPTransport(main_mcp)) as client:
            tools = {tool.name for tool in await client.list_tools()}

    assert "jira_get_project_config" in tools
    assert "jira_set_default_project" in tools
    assert "jira_configure_project_fields" not in tools
    assert "jira_create_issue" not in tools


@pytest.mark.anyio
async def test_main_server_lists_all_tools_with_jira(config_env):
    with patch.dict(os.environ, {**CLOUD_ENV, **config_env}, clear=True):
        async with Client(transport=FastMCPTransport(main_mcp)) as client:
            tools = {tool.name for tool in await client.list_tools()}

    assert tools == {
        "jira_configure_project_fields",
        "jira_list_configured_projects",
        "jira_get_project_config",
        "jira_copy_project_config",
        "jira_set_default_project",
        "jira_get_default_project",
        "jira_search_fields",
        "jira_create_issue",
        "jira_update_issue",
    }
