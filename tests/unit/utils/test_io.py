"""Tests for the I/O utilities module."""

import os
from unittest.mock import patch

import pytest

from mcp_jira_dynamic.utils.io import is_env_truthy, is_read_only_mode


def test_is_read_only_mode_default():
    """Test that is_read_only_mode returns False by default."""
    with patch.dict(os.environ, clear=True):
        assert is_read_only_mode() is False


@pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "y", "on"])
def test_is_read_only_mode_truthy(value):
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is True


@pytest.mark.parametrize("value", ["false", "0", "no", "", "enabled"])
def test_is_read_only_mode_falsy(value):
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is False


def test_is_env_truthy_default():
    """Test that the default applies when the variable is unset."""
    with patch.dict(os.environ, clear=True):
        assert is_env_truthy("MCP_VERBOSE") is False
        assert is_env_truthy("MCP_VERBOSE", default="yes") is True
