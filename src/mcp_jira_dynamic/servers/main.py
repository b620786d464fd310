"""Main FastMCP server setup for Jira dynamic field integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_jira_dynamic.fieldconfig.settings import FieldConfigSettings
from mcp_jira_dynamic.fieldconfig.store import ProjectConfigStore
from mcp_jira_dynamic.jira.config import JiraConfig
from mcp_jira_dynamic.utils.environment import get_available_services
from mcp_jira_dynamic.utils.io import is_read_only_mode
from mcp_jira_dynamic.utils.tools import get_enabled_tools, should_include_tool

from .context import MainAppContext
from .jira import jira_mcp

logger = logging.getLogger("mcp-jira-dynamic.servers.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def _load_jira_config() -> JiraConfig | None:
    """Jira settings from the environment, or None when Jira is unusable."""
    if not get_available_services().get("jira"):
        return None
    try:
        jira_config = JiraConfig.from_env()
    except ValueError as e:
        logger.error(f"Failed to load Jira configuration: {e}", exc_info=True)
        return None
    if not jira_config.is_auth_configured():
        logger.warning(
            "Jira URL found, but authentication is not fully configured. "
            "Jira tools will be unavailable."
        )
        return None
    logger.info("Jira configuration loaded and authentication is configured.")
    return jira_config


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Jira Dynamic MCP server lifespan starting...")
    field_settings = FieldConfigSettings.from_env()
    config_store = ProjectConfigStore.from_settings(field_settings)
    config_store.ensure_config_dir()
    logger.info(f"Field configurations directory: {field_settings.config_dir}")

    app_context = MainAppContext(
        config_store=config_store,
        field_settings=field_settings,
        full_jira_config=_load_jira_config(),
        read_only=is_read_only_mode(),
        enabled_tools=get_enabled_tools(),
    )
    mode = "ENABLED" if app_context.read_only else "DISABLED"
    logger.info(f"Read-only mode: {mode}")
    logger.info(
        f"Enabled tools filter: {app_context.enabled_tools or 'All tools enabled'}"
    )
    yield {"app_lifespan_context": app_context}
    logger.info("Main Jira Dynamic MCP server lifespan shutting down.")


class JiraDynamicMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class with tool filtering.

    Tools tagged ``jira`` need a Jira connection and are hidden without one.
    Tools tagged only ``config`` work on the local configuration store.
    """

    def _app_context(self) -> MainAppContext | None:
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            return None
        lifespan_ctx_dict = req_context.lifespan_context
        if not isinstance(lifespan_ctx_dict, dict):
            return None
        return lifespan_ctx_dict.get("app_lifespan_context")

    @staticmethod
    def _is_tool_visible(
        name: str, tool: FastMCPTool, app_context: MainAppContext
    ) -> bool:
        if not should_include_tool(name, app_context.enabled_tools):
            logger.debug(f"Excluding tool '{name}' (not enabled)")
            return False
        if app_context.read_only and "write" in tool.tags:
            logger.debug(f"Excluding tool '{name}' due to read-only mode")
            return False
        if "jira" in tool.tags and not app_context.full_jira_config:
            logger.debug(f"Excluding tool '{name}' as Jira is not configured")
            return False
        return True

    async def _mcp_list_tools(self) -> list[MCPTool]:
        app_context = self._app_context()
        if app_context is None:
            logger.warning("Lifespan context not available while listing tools.")
            return []

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        visible = [
            tool.to_mcp_tool(name=name)
            for name, tool in all_tools.items()
            if self._is_tool_visible(name, tool, app_context)
        ]
        logger.debug(f"Listing {len(visible)} of {len(all_tools)} tools")
        return visible


main_mcp = JiraDynamicMCP(name="Jira Dynamic Fields MCP", lifespan=main_lifespan)
main_mcp.mount("jira", jira_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
