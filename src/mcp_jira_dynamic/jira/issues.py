"""Module for Jira issue create and update operations."""

import logging
from typing import Any

from requests.exceptions import HTTPError

from ..fieldconfig.payloads import IssueCreateRequest, IssueUpdateRequest
from .client import JiraClient

logger = logging.getLogger("mcp-jira-dynamic.jira.issues")


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations.

    Request documents are built by the caller with custom field ids already
    resolved; this mixin only sends them.
    """

    def create_issue(self, request: IssueCreateRequest) -> dict[str, Any]:
        """
        Create a new issue.

        Args:
            request: The prepared create request

        Returns:
            The created issue (key, id, url and the fields that were sent)

        Raises:
            MCPJiraAuthenticationError: If authentication fails (401/403)
            TypeError: If Jira returns something other than a dictionary
            ValueError: If the response has no issue key
            Exception: If the request fails
        """
        payload = request.to_api()["fields"]
        response = self._call_jira(
            lambda: self.jira.create_issue(fields=payload), dict, "creating an issue"
        )
        issue_key = response.get("key")
        if not issue_key:
            raise ValueError("No issue key in response")

        logger.info(f"Created issue {issue_key}")
        return self._issue_result(issue_key, request.fields, response.get("id"))

    def update_issue(self, request: IssueUpdateRequest) -> dict[str, Any]:
        """
        Update the fields of an existing issue.

        Args:
            request: The prepared update request

        Returns:
            The issue key, url and the fields that were sent

        Raises:
            MCPJiraAuthenticationError: If authentication fails (401/403)
            ValueError: If the update fails
        """
        issue_key = request.issue_key
        try:
            self.jira.update_issue_field(issue_key, request.to_api()["fields"])
        except Exception as e:
            if isinstance(e, HTTPError):
                self._raise_for_auth(e, f"updating issue {issue_key}")
            logger.error(f"Error updating issue {issue_key}: {e}")
            raise ValueError(f"Failed to update issue {issue_key}: {e}") from e

        logger.info(f"Updated {len(request.fields)} fields on issue {issue_key}")
        return self._issue_result(issue_key, request.fields)

    def _issue_result(
        self, issue_key: str, fields: dict[str, Any], issue_id: str | None = None
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            "key": issue_key,
            "url": self.config.browse_url(issue_key),
            "fields": dict(fields),
        }
        if issue_id:
            result["id"] = issue_id
        return result
