"""
Tests for the persisted field configuration models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from mcp_jira_dynamic.models import (
    DiscoveredField,
    FieldMapping,
    ProjectConfig,
    ProjectConfigSummary,
)

STORED_DOCUMENT = {
    "projectKey": "VIP",
    "lastUpdated": "2024-05-01T08:00:00Z",
    "isDefault": True,
    "fields": {
        "storyPoints": {
            "id": "customfield_10016",
            "name": "Story Points",
            "type": "number",
            "confidence": 90,
        },
        "epicLink": {"id": "customfield_10010", "name": "Epic Link"},
    },
    "fieldCache": {
        "customfield_10016": {
            "id": "customfield_10016",
            "name": "Story Points",
            "schema": {"type": "number"},
        }
    },
}


class TestFieldMapping:
    """Tests for the FieldMapping model."""

    def test_defaults(self):
        mapping = FieldMapping(id="customfield_1", name="Team")

        assert mapping.type == "string"
        assert mapping.confidence is None

    def test_from_field(self):
        field = DiscoveredField.from_api_response(
            {
                "id": "customfield_10016",
                "name": "Story Points",
                "schema": {"type": "number"},
            }
        )

        mapping = FieldMapping.from_field(field, 90)

        assert mapping == FieldMapping(
            id="customfield_10016", name="Story Points", type="number", confidence=90
        )

    def test_from_field_without_schema(self):
        field = DiscoveredField.from_api_response({"id": "customfield_1", "name": "X"})

        assert FieldMapping.from_field(field).type == "string"

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_bounds(self, confidence):
        with pytest.raises(ValidationError):
            FieldMapping(id="customfield_1", name="X", confidence=confidence)


class TestProjectConfig:
    """Tests for the ProjectConfig model."""

    def test_from_stored_document(self):
        config = ProjectConfig.from_api_response(STORED_DOCUMENT)

        assert config.project_key == "VIP"
        assert config.is_default is True
        assert config.last_updated == datetime(2024, 5, 1, 8, tzinfo=timezone.utc)
        assert config.fields["storyPoints"].confidence == 90
        assert config.fields["epicLink"].type == "string"
        assert config.field_cache["customfield_10016"].schema_type == "number"

    def test_new(self):
        config = ProjectConfig.new("ABC")

        assert config.project_key == "ABC"
        assert config.fields == {}
        assert config.field_cache == {}
        assert config.is_default is False
        assert config.last_updated is None

    def test_to_document(self):
        document = ProjectConfig.from_api_response(STORED_DOCUMENT).to_document()

        assert document["projectKey"] == "VIP"
        assert document["lastUpdated"] == "2024-05-01T08:00:00Z"
        assert document["isDefault"] is True
        assert document["fields"]["epicLink"] == {
            "id": "customfield_10010",
            "name": "Epic Link",
            "type": "string",
        }
        assert document["fieldCache"] == STORED_DOCUMENT["fieldCache"]

    def test_to_document_omits_missing_timestamp(self):
        document = ProjectConfig.new("ABC").to_document()

        assert "lastUpdated" not in document
        assert document == {
            "projectKey": "ABC",
            "fields": {},
            "isDefault": False,
            "fieldCache": {},
        }

    def test_unknown_keys_are_kept(self):
        document = dict(STORED_DOCUMENT, owner="platform-team")

        config = ProjectConfig.from_api_response(document)

        assert config.to_document()["owner"] == "platform-team"

    def test_missing_project_key(self):
        with pytest.raises(ValidationError):
            ProjectConfig.from_api_response({"fields": {}})

    def test_to_simplified_dict(self):
        config = ProjectConfig.from_api_response(STORED_DOCUMENT)

        simplified = config.to_simplified_dict()

        assert simplified["project_key"] == "VIP"
        assert simplified["last_updated"] == "2024-05-01 08:00:00"
        assert simplified["is_default"] is True
        assert simplified["cached_field_count"] == 1
        assert simplified["fields"]["storyPoints"] == {
            "id": "customfield_10016",
            "name": "Story Points",
            "type": "number",
            "confidence": 90,
        }


def test_project_config_summary():
    config = ProjectConfig.from_api_response(STORED_DOCUMENT)

    summary = ProjectConfigSummary.from_project_config(config)

    assert summary.to_simplified_dict() == {
        "project_key": "VIP",
        "last_updated": "2024-05-01 08:00:00",
        "field_count": 2,
        "fields": ["storyPoints", "epicLink"],
        "is_default": True,
    }
