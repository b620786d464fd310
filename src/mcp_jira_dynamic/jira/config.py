"""Connection settings for the Jira instance whose fields are discovered."""

import logging
import os
from dataclasses import dataclass
from typing import Literal

from ..utils.urls import is_atlassian_cloud_url

logger = logging.getLogger("mcp-jira-dynamic.jira.config")

JiraAuthType = Literal["basic", "token"]

_SSL_DISABLED_VALUES = ("false", "0", "no")


def _detect_auth_type(
    url: str,
    username: str | None,
    api_token: str | None,
    personal_token: str | None,
) -> JiraAuthType:
    """Pick the authentication scheme the credentials allow.

    Cloud only accepts an account email with an API token. Server/Data Center
    prefers a personal access token and falls back to basic auth.

    Raises:
        ValueError: If the credentials do not fit the deployment
    """
    has_basic = bool(username and api_token)
    if is_atlassian_cloud_url(url):
        if has_basic:
            return "basic"
        raise ValueError(
            "Cloud authentication requires JIRA_USERNAME and JIRA_API_TOKEN"
        )
    if personal_token:
        return "token"
    if has_basic:
        return "basic"
    raise ValueError(
        "Server/Data Center authentication requires JIRA_PERSONAL_TOKEN or "
        "JIRA_USERNAME and JIRA_API_TOKEN"
    )


@dataclass
class JiraConfig:
    """How to reach and authenticate against one Jira instance."""

    url: str
    auth_type: JiraAuthType
    username: str | None = None  # Account email (Cloud) or user name
    api_token: str | None = None  # API token or password
    personal_token: str | None = None  # Personal access token (Server/DC)
    ssl_verify: bool = True

    @property
    def is_cloud(self) -> bool:
        """Whether the URL points at Atlassian Cloud rather than Server/DC."""
        return is_atlassian_cloud_url(self.url)

    def browse_url(self, issue_key: str) -> str:
        return f"{self.url.rstrip('/')}/browse/{issue_key}"

    @classmethod
    def from_env(cls) -> "JiraConfig":
        """Create configuration from environment variables.

        Returns:
            JiraConfig built from ``JIRA_URL``, the credential variables and
            ``JIRA_SSL_VERIFY``

        Raises:
            ValueError: If the URL is missing or the credentials are incomplete
        """
        url = os.getenv("JIRA_URL")
        if not url:
            raise ValueError("Missing required JIRA_URL environment variable")

        username = os.getenv("JIRA_USERNAME")
        api_token = os.getenv("JIRA_API_TOKEN")
        personal_token = os.getenv("JIRA_PERSONAL_TOKEN")

        return cls(
            url=url,
            auth_type=_detect_auth_type(url, username, api_token, personal_token),
            username=username,
            api_token=api_token,
            personal_token=personal_token,
            ssl_verify=(
                os.getenv("JIRA_SSL_VERIFY", "true").lower()
                not in _SSL_DISABLED_VALUES
            ),
        )

    def is_auth_configured(self) -> bool:
        """Whether the credentials required by ``auth_type`` are all present."""
        if self.auth_type == "token":
            return bool(self.personal_token)
        if self.auth_type == "basic":
            return bool(self.username and self.api_token)
        logger.warning(f"Unsupported auth_type in JiraConfig: {self.auth_type}")
        return False
