"""Base client module for Jira API interactions."""

import logging
from collections.abc import Callable
from typing import Any

from atlassian import Jira
from requests.exceptions import HTTPError

from mcp_jira_dynamic.exceptions import MCPJiraAuthenticationError
from mcp_jira_dynamic.utils.logging import log_config_param

from .config import JiraConfig

logger = logging.getLogger("mcp-jira-dynamic.jira.client")


class JiraClient:
    """Holds the ``atlassian.Jira`` connection shared by the mixins."""

    _field_catalog_cache: list[dict[str, Any]] | None

    config: JiraConfig

    def __init__(self, config: JiraConfig | None = None) -> None:
        """Connect using ``config``, or settings read from the environment.

        Raises:
            ValueError: If no config is given and the environment is incomplete
        """
        self.config = config or JiraConfig.from_env()
        self._log_config()

        if self.config.auth_type == "token":
            credentials = {"token": self.config.personal_token}
        else:
            credentials = {
                "username": self.config.username,
                "password": self.config.api_token,
            }
        self.jira = Jira(
            url=self.config.url,
            **credentials,
            cloud=self.config.is_cloud,
            verify_ssl=self.config.ssl_verify,
        )

        if not self.config.ssl_verify:
            logger.warning(
                f"SSL verification is disabled for Jira ({self.config.url}). "
                "This may be insecure."
            )

        self._field_catalog_cache = None

    def _log_config(self) -> None:
        log_config_param(logger, "Jira", "URL", self.config.url)
        log_config_param(logger, "Jira", "Auth type", self.config.auth_type)
        if self.config.auth_type == "token":
            log_config_param(
                logger, "Jira", "Personal token", self.config.personal_token, True
            )
        else:
            log_config_param(logger, "Jira", "Username", self.config.username)
            log_config_param(logger, "Jira", "API token", self.config.api_token, True)

    def _raise_for_auth(self, error: HTTPError, action: str) -> None:
        """Re-raise 401/403 responses as MCPJiraAuthenticationError."""
        response = getattr(error, "response", None)
        if response is not None and response.status_code in (401, 403):
            error_msg = (
                f"Authentication failed for Jira API while {action} "
                f"({response.status_code}). Token may be expired or invalid."
            )
            logger.error(error_msg)
            raise MCPJiraAuthenticationError(error_msg) from error

    def _call_jira(
        self, request: Callable[[], Any], expected: type, action: str
    ) -> Any:
        """Run one API call and check the shape of its response.

        Raises:
            MCPJiraAuthenticationError: If authentication fails (401/403)
            TypeError: If the response is not an instance of ``expected``
            HTTPError: For any other HTTP failure
        """
        try:
            result = request()
        except HTTPError as http_err:
            self._raise_for_auth(http_err, action)
            logger.error(f"Jira request failed while {action}: {http_err}")
            raise
        if not isinstance(result, expected):
            msg = f"Unexpected response while {action}: {type(result)}"
            logger.error(msg)
            raise TypeError(msg)
        return result
