"""I/O utility functions for MCP Jira Dynamic."""

import os

TRUTHY_VALUES = ("true", "1", "yes", "y", "on")


def is_env_truthy(name: str, default: str = "false") -> bool:
    """Check whether an environment variable holds a truthy value."""
    return os.getenv(name, default).lower() in TRUTHY_VALUES


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and refuses every tool tagged ``write``: discovery
    runs that persist a project configuration, configuration copies, and
    issue creation or updates. Read tools keep working, so an operator can
    inspect stored field mappings against a production instance safely.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_truthy("READ_ONLY_MODE")
