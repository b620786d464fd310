"""Tests for tool utility functions."""

import os
from unittest.mock import patch

import pytest

from mcp_jira_dynamic.utils.tools import get_enabled_tools, should_include_tool


@pytest.mark.parametrize("value", [None, "", "   ", ",,,,", " , , , "])
def test_get_enabled_tools_unset(value):
    """Test that an unset or blank ENABLED_TOOLS enables everything."""
    env = {} if value is None else {"ENABLED_TOOLS": value}
    with patch.dict(os.environ, env, clear=True):
        assert get_enabled_tools() is None


def test_get_enabled_tools_single_tool():
    with patch.dict(
        os.environ, {"ENABLED_TOOLS": "jira_get_project_config"}, clear=True
    ):
        assert get_enabled_tools() == ["jira_get_project_config"]


def test_get_enabled_tools_with_whitespace():
    """Test get_enabled_tools with whitespace around tool names."""
    with patch.dict(
        os.environ,
        {"ENABLED_TOOLS": " jira_create_issue , jira_update_issue ,"},
        clear=True,
    ):
        assert get_enabled_tools() == ["jira_create_issue", "jira_update_issue"]


def test_should_include_tool_none_enabled():
    assert should_include_tool("jira_search_fields", None) is True


def test_should_include_tool():
    enabled_tools = ["jira_create_issue", "jira_get_default_project"]

    assert should_include_tool("jira_create_issue", enabled_tools) is True
    assert should_include_tool("jira_update_issue", enabled_tools) is False
