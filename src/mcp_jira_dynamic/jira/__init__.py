"""Jira API module for mcp_jira_dynamic.

This module provides the Jira client used for field discovery and for
sending issue requests built with resolved field ids.
"""

from .client import JiraClient
from .config import JiraConfig
from .fields import FieldsMixin
from .issues import IssuesMixin


class JiraFetcher(FieldsMixin, IssuesMixin):
    """
    The main Jira client class.

    - FieldsMixin: Field catalog operations
    - IssuesMixin: Issue create and update operations
    """

    pass


__all__ = ["JiraFetcher", "JiraConfig", "JiraClient"]
