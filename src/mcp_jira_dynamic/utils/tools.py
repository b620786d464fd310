"""Tool filtering driven by the ENABLED_TOOLS environment variable."""

import logging
import os

logger = logging.getLogger("mcp-jira-dynamic.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Tool names listed in ENABLED_TOOLS, or None when every tool is enabled.

    Names are comma-separated and surrounding whitespace is ignored, so
    ``" a, b ,"`` yields ``["a", "b"]``. A variable holding only separators
    counts as unset.
    """
    raw = os.getenv("ENABLED_TOOLS", "")
    names = [name.strip() for name in raw.split(",") if name.strip()]
    if not names:
        logger.debug("No ENABLED_TOOLS filter, exposing all tools.")
        return None
    logger.debug(f"ENABLED_TOOLS filter: {names}")
    return names


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    return enabled_tools is None or tool_name in enabled_tools
