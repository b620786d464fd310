"""Test fixtures for Jira unit tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from mcp_jira_dynamic.jira import JiraFetcher
from mcp_jira_dynamic.jira.client import JiraClient
from mcp_jira_dynamic.jira.config import JiraConfig


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "JIRA_URL": "https://test.atlassian.net",
            "JIRA_USERNAME": "test_username",
            "JIRA_API_TOKEN": "test_token",
        },
        clear=True,  # Clear existing environment variables
    ):
        yield


@pytest.fixture
def mock_config():
    """Create a mock JiraConfig instance."""
    return JiraConfig(
        url="https://test.atlassian.net",
        auth_type="basic",
        username="test_username",
        api_token="test_token",
    )


@pytest.fixture
def server_config():
    """Create a JiraConfig for a Server/Data Center instance."""
    return JiraConfig(
        url="https://jira.example.com",
        auth_type="token",
        personal_token="test_personal_token",
    )


@pytest.fixture
def mock_atlassian_jira():
    """Mock the Atlassian Jira client."""
    mock_jira = MagicMock()

    mock_jira.get_all_fields.return_value = [
        {
            "id": "summary",
            "key": "summary",
            "name": "Summary",
            "clauseNames": ["summary"],
            "schema": {"type": "string", "system": "summary"},
        },
        {"id": "description", "name": "Description", "schema": {"type": "string"}},
        {"id": "issuetype", "name": "Issue Type", "schema": {"type": "issuetype"}},
        {
            "id": "labels",
            "name": "Labels",
            "schema": {"type": "array", "items": "string"},
        },
        {"id": "assignee", "name": "Assignee", "schema": {"type": "user"}},
        {
            "id": "customfield_10010",
            "key": "customfield_10010",
            "name": "Epic Link",
            "clauseNames": ["cf[10010]", "Epic Link"],
            "schema": {
                "type": "any",
                "custom": "com.pyxis.greenhopper.jira:gh-epic-link",
                "customId": 10010,
            },
        },
        {
            "id": "customfield_10011",
            "name": "Epic Name",
            "schema": {
                "type": "string",
                "custom": "com.pyxis.greenhopper.jira:gh-epic-label",
            },
        },
        {
            "id": "customfield_10016",
            "key": "customfield_10016",
            "name": "Story Points",
            "clauseNames": ["cf[10016]", "Story Points"],
            "schema": {"type": "number"},
        },
    ]

    # Set up common method returns
    mock_jira.get_issue.return_value = {
        "key": "TEST-123",
        "fields": {
            "summary": "Test Issue",
            "description": None,
            "issuetype": {"name": "Bug"},
            "labels": [],
            "customfield_10016": 5.0,
            "customfield_10010": None,
        },
    }
    mock_jira.create_issue.return_value = {
        "id": "10001",
        "key": "TEST-124",
        "self": "https://test.atlassian.net/rest/api/2/issue/10001",
    }

    yield mock_jira


@pytest.fixture
def jira_client(mock_config, mock_atlassian_jira):
    """Create a JiraClient instance with mocked dependencies."""
    with patch("mcp_jira_dynamic.jira.client.Jira") as mock_jira_class:
        mock_jira_class.return_value = mock_atlassian_jira

        client = JiraClient(config=mock_config)
        yield client


@pytest.fixture
def jira_fetcher(mock_config, mock_atlassian_jira):
    """Create a JiraFetcher instance with mocked dependencies."""
    with patch("mcp_jira_dynamic.jira.client.Jira") as mock_jira_class:
        mock_jira_class.return_value = mock_atlassian_jira

        fetcher = JiraFetcher(config=mock_config)
        yield fetcher


@pytest.fixture
def server_fetcher(server_config, mock_atlassian_jira):
    """Create a JiraFetcher for a Server/Data Center instance."""
    with patch("mcp_jira_dynamic.jira.client.Jira") as mock_jira_class:
        mock_jira_class.return_value = mock_atlassian_jira

        fetcher = JiraFetcher(config=server_config)
        yield fetcher
