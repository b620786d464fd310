"""Server implementations for MCP Jira Dynamic."""

from .jira import jira_mcp
from .main import main_mcp

__all__ = ["jira_mcp", "main_mcp"]
