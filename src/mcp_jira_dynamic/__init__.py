import asyncio
import logging
import os
from typing import Any

import click
from dotenv import load_dotenv

from mcp_jira_dynamic.utils.io import is_env_truthy
from mcp_jira_dynamic.utils.logging import setup_logging

__version__ = "0.1.0"

TRANSPORTS = ("stdio", "sse", "streamable-http")

logger = setup_logging(
    logging.DEBUG if is_env_truthy("MCP_VERBOSE") else logging.WARNING
)


def _logging_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    if is_env_truthy("MCP_VERY_VERBOSE"):
        return logging.DEBUG
    if is_env_truthy("MCP_VERBOSE"):
        return logging.INFO
    return logging.WARNING


def _was_option_provided(ctx: click.Context | None, param_name: str) -> bool:
    if ctx is None:
        return False
    return ctx.get_parameter_source(param_name) not in (
        click.core.ParameterSource.DEFAULT,
        click.core.ParameterSource.DEFAULT_MAP,
    )


def _option_or_env(
    ctx: click.Context | None, param_name: str, value: Any, env_value: Any
) -> Any:
    """An explicitly passed CLI option wins over the environment."""
    return value if _was_option_provided(ctx, param_name) else env_value


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(TRANSPORTS),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport (default: 0.0.0.0)",
)
@click.option(
    "--path",
    default="/mcp",
    help="Path for Streamable HTTP transport (e.g., /mcp).",
)
@click.option(
    "--jira-url",
    help="Jira URL (e.g., https://your-domain.atlassian.net or https://jira.your-company.com)",
)
@click.option("--jira-username", help="Jira username/email")
@click.option("--jira-token", help="Jira API token")
@click.option(
    "--jira-personal-token",
    help="Jira Personal Access Token (for Jira Server/Data Center)",
)
@click.option(
    "--jira-ssl-verify/--no-jira-ssl-verify",
    default=True,
    help="Verify SSL certificates for Jira Server/Data Center (default: verify)",
)
@click.option(
    "--config-path",
    type=click.Path(file_okay=False),
    help="Directory holding the per-project field configurations (default: ~/.jira-mcp/configs)",
)
@click.option(
    "--project-key",
    help="Fallback project key when none is given and no default project is configured",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (enables all if not specified)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    jira_url: str | None,
    jira_username: str | None,
    jira_token: str | None,
    jira_personal_token: str | None,
    jira_ssl_verify: bool,
    config_path: str | None,
    project_key: str | None,
    read_only: bool,
    enabled_tools: str | None,
) -> None:
    """MCP Jira Dynamic Server - per-project Jira custom field discovery for MCP

    Discovers which Jira custom field stands for story points, epic link,
    sprint, acceptance criteria and similar concepts in each project, stores
    the mapping, and uses it when creating and updating issues.

    Supports both Atlassian Cloud and Jira Server/Data Center deployments.
    """
    global logger
    logging_level = _logging_level(verbose)
    logger = setup_logging(logging_level)
    logger.debug(f"Logging level set to: {logging.getLevelName(logging_level)}")

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
    load_dotenv(env_file, override=True)

    click_ctx = click.get_current_context(silent=True)

    final_transport = _option_or_env(
        click_ctx, "transport", transport, os.getenv("TRANSPORT", "stdio").lower()
    )
    if final_transport not in TRANSPORTS:
        logger.warning(
            f"Invalid transport '{final_transport}' from env/default, using 'stdio'."
        )
        final_transport = "stdio"

    port_env = os.getenv("PORT", "")
    final_port = _option_or_env(
        click_ctx, "port", port, int(port_env) if port_env.isdigit() else 8000
    )
    final_host = _option_or_env(
        click_ctx, "host", host, os.getenv("HOST", "0.0.0.0")  # noqa: S104
    )
    final_path = _option_or_env(
        click_ctx, "path", path, os.getenv("STREAMABLE_HTTP_PATH")
    )

    # Downstream settings (JiraConfig, FieldConfigSettings...) read the environment
    option_env_vars = {
        "enabled_tools": ("ENABLED_TOOLS", enabled_tools),
        "jira_url": ("JIRA_URL", jira_url),
        "jira_username": ("JIRA_USERNAME", jira_username),
        "jira_token": ("JIRA_API_TOKEN", jira_token),
        "jira_personal_token": ("JIRA_PERSONAL_TOKEN", jira_personal_token),
        "config_path": ("JIRA_DYNAMIC_CONFIG_PATH", config_path),
        "project_key": ("JIRA_PROJECT_KEY", project_key),
        "read_only": ("READ_ONLY_MODE", str(read_only).lower()),
        "jira_ssl_verify": ("JIRA_SSL_VERIFY", str(jira_ssl_verify).lower()),
    }
    for param_name, (env_name, value) in option_env_vars.items():
        if value and _was_option_provided(click_ctx, param_name):
            os.environ[env_name] = value

    from mcp_jira_dynamic.servers import main_mcp

    run_kwargs: dict[str, Any] = {"transport": final_transport}
    if final_transport == "stdio":
        logger.info("Starting server with STDIO transport.")
    else:
        run_kwargs["host"] = final_host
        run_kwargs["port"] = final_port
        run_kwargs["log_level"] = logging.getLevelName(logging_level).lower()
        if final_path is not None:
            run_kwargs["path"] = final_path

        display_path = final_path or (
            main_mcp.settings.sse_path or "/sse"
            if final_transport == "sse"
            else main_mcp.settings.streamable_http_path or "/mcp"
        )
        logger.info(
            f"Starting server with {final_transport.upper()} transport on "
            f"http://{final_host}:{final_port}{display_path}"
        )

    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
