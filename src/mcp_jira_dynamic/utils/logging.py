"""Logging setup for the server and helpers for logging settings safely."""

import logging

LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"

# Loggers whose level follows the CLI verbosity in addition to the root
PACKAGE_LOGGERS = (
    "mcp-jira-dynamic",
    "mcp.server",
    "mcp.server.lowlevel.server",
)

NOT_PROVIDED = "Not Provided"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """Send all log records to a single stderr handler at ``level``.

    Handlers installed earlier are dropped, so calling this again (the CLI
    does once verbosity is known) never duplicates output.

    Returns:
        The ``mcp-jira-dynamic`` logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return logging.getLogger("mcp-jira-dynamic")


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Hide all but ``keep_chars`` characters at each end of a secret.

    Values too short to keep both ends are masked completely.
    """
    if not value:
        return NOT_PROVIDED
    hidden = len(value) - keep_chars * 2
    if hidden <= 0:
        return "*" * len(value)
    return value[:keep_chars] + "*" * hidden + value[-keep_chars:]


def log_config_param(
    logger: logging.Logger,
    service: str,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    if sensitive:
        shown = mask_sensitive(value)
    else:
        shown = value or NOT_PROVIDED
    logger.info(f"{service} {param}: {shown}")
