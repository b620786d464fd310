"""
Utility functions for the MCP Jira Dynamic server.
"""

from .date import format_date_for_api, parse_date
from .environment import get_available_services
from .io import is_read_only_mode
from .logging import log_config_param, mask_sensitive, setup_logging
from .tools import get_enabled_tools, should_include_tool
from .urls import is_atlassian_cloud_url

__all__ = [
    "format_date_for_api",
    "get_available_services",
    "get_enabled_tools",
    "is_atlassian_cloud_url",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "parse_date",
    "setup_logging",
    "should_include_tool",
]
