"""Dependency providers for the Jira fetcher and the field configuration store.

Provides get_jira_fetcher, get_config_store and get_field_settings for use
in tool functions.
"""

from __future__ import annotations

import logging

from fastmcp import Context
from fastmcp.server.dependencies import get_http_request
from starlette.requests import Request

from mcp_jira_dynamic.fieldconfig.settings import FieldConfigSettings
from mcp_jira_dynamic.fieldconfig.store import ProjectConfigStore
from mcp_jira_dynamic.jira import JiraFetcher
from mcp_jira_dynamic.servers.context import MainAppContext

logger = logging.getLogger("mcp-jira-dynamic.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext:
    """Return the application context stored by the server lifespan.

    Raises:
        ValueError: If the lifespan context is not available.
    """
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    app_lifespan_ctx: MainAppContext | None = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )
    if app_lifespan_ctx is None:
        logger.error("Application context is not available from lifespan context.")
        raise ValueError(
            "Application context not available. Ensure server is configured correctly."
        )
    return app_lifespan_ctx


def get_config_store(ctx: Context) -> ProjectConfigStore:
    """Returns the process-wide project configuration store."""
    return get_app_context(ctx).config_store


def get_field_settings(ctx: Context) -> FieldConfigSettings:
    return get_app_context(ctx).field_settings


async def get_jira_fetcher(ctx: Context) -> JiraFetcher:
    """Returns a JiraFetcher instance appropriate for the current request context.

    Within an HTTP request the fetcher is kept on ``request.state`` so that
    the field catalog is fetched at most once per request.

    Args:
        ctx: The FastMCP context.

    Returns:
        JiraFetcher instance built from the global config.

    Raises:
        ValueError: If Jira is not configured.
    """
    logger.debug(f"get_jira_fetcher: ENTERED. Context ID: {id(ctx)}")
    request: Request | None = None
    try:
        request = get_http_request()
        if getattr(request.state, "jira_fetcher", None):
            logger.debug("get_jira_fetcher: Returning JiraFetcher from request.state.")
            return request.state.jira_fetcher
    except RuntimeError:
        logger.debug("Not in an HTTP request context. Using global JiraFetcher.")

    app_lifespan_ctx = get_app_context(ctx)
    if not app_lifespan_ctx.full_jira_config:
        logger.error("Jira configuration could not be resolved.")
        raise ValueError(
            "Jira client (fetcher) not available. Ensure server is configured correctly."
        )

    logger.debug(
        "get_jira_fetcher: Using global JiraFetcher from lifespan_context. "
        f"Global config auth_type: {app_lifespan_ctx.full_jira_config.auth_type}"
    )
    fetcher = JiraFetcher(config=app_lifespan_ctx.full_jira_config)
    if request is not None:
        request.state.jira_fetcher = fetcher
    return fetcher
