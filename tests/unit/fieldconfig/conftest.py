"""Test fixtures for field configuration unit tests."""

from unittest.mock import MagicMock

import pytest

from mcp_jira_dynamic.fieldconfig.store import ProjectConfigStore
from mcp_jira_dynamic.jira import JiraFetcher
from mcp_jira_dynamic.models.jira import DiscoveredField

RAW_FIELD_CATALOG = [
    {
        "id": "summary",
        "key": "summary",
        "name": "Summary",
        "custom": False,
        "clauseNames": ["summary"],
        "schema": {"type": "string", "system": "summary"},
    },
    {
        "id": "duedate",
        "key": "duedate",
        "name": "Due date",
        "custom": False,
        "clauseNames": ["due", "duedate"],
        "schema": {"type": "date", "system": "duedate"},
    },
    {
        "id": "customfield_10010",
        "key": "customfield_10010",
        "name": "Epic Link",
        "custom": True,
        "clauseNames": ["cf[10010]", "Epic Link"],
        "schema": {
            "type": "any",
            "custom": "com.pyxis.greenhopper.jira:gh-epic-link",
            "customId": 10010,
        },
    },
    {
        "id": "customfield_10011",
        "key": "customfield_10011",
        "name": "Epic Name",
        "custom": True,
        "clauseNames": ["cf[10011]", "Epic Name"],
        "schema": {
            "type": "string",
            "custom": "com.pyxis.greenhopper.jira:gh-epic-label",
            "customId": 10011,
        },
    },
    {
        "id": "customfield_10016",
        "key": "customfield_10016",
        "name": "Story Points",
        "custom": True,
        "clauseNames": ["cf[10016]", "Story Points"],
        "schema": {
            "type": "number",
            "custom": "com.atlassian.jira.plugin.system.customfieldtypes:float",
            "customId": 10016,
        },
    },
    {
        "id": "customfield_10020",
        "key": "customfield_10020",
        "name": "Sprint",
        "custom": True,
        "clauseNames": ["cf[10020]", "Sprint"],
        "schema": {
            "type": "array",
            "items": "json",
            "custom": "com.pyxis.greenhopper.jira:gh-sprint",
            "customId": 10020,
        },
    },
    {
        "id": "customfield_10030",
        "key": "customfield_10030",
        "name": "Acceptance Criteria",
        "custom": True,
        "clauseNames": ["cf[10030]", "Acceptance Criteria"],
        "schema": {
            "type": "string",
            "custom": "com.atlassian.jira.plugin.system.customfieldtypes:textarea",
            "customId": 10030,
        },
    },
]


@pytest.fixture
def raw_field_catalog():
    """Return the field listing as Jira sends it."""
    return [dict(field) for field in RAW_FIELD_CATALOG]


@pytest.fixture
def field_catalog(raw_field_catalog):
    """Return the field listing as DiscoveredField models."""
    return [DiscoveredField.from_api_response(field) for field in raw_field_catalog]


@pytest.fixture
def mock_fetcher(field_catalog):
    """Create a mock JiraFetcher serving the field catalog."""
    fetcher = MagicMock(spec=JiraFetcher)
    fetcher.get_field_catalog.return_value = field_catalog
    fetcher.get_fields_in_use.return_value = set()
    return fetcher


@pytest.fixture
def config_dir(tmp_path):
    """Return an empty configuration directory."""
    return tmp_path / "configs"


@pytest.fixture
def config_store(config_dir):
    """Create a ProjectConfigStore writing to a temporary directory."""
    return ProjectConfigStore(config_dir)


@pytest.fixture
def make_field():
    """Return a factory building a DiscoveredField with only the given properties."""

    def _make_field(field_id, name, schema_type=None, custom=None, clause_names=None):
        data = {"id": field_id, "name": name}
        schema = {}
        if schema_type:
            schema["type"] = schema_type
        if custom:
            schema["custom"] = custom
        if schema:
            data["schema"] = schema
        if clause_names is not None:
            data["clauseNames"] = clause_names
        return DiscoveredField.from_api_response(data)

    return _make_field
