"""
Tests for the Jira field catalog models.
"""

import pytest

from mcp_jira_dynamic.models.jira import DiscoveredField, FieldSchema

SPRINT_FIELD = {
    "id": "customfield_10020",
    "key": "customfield_10020",
    "name": "Sprint",
    "custom": True,
    "orderable": True,
    "clauseNames": ["cf[10020]", "Sprint"],
    "schema": {
        "type": "array",
        "items": "json",
        "custom": "com.pyxis.greenhopper.jira:gh-sprint",
        "customId": 10020,
    },
}


class TestDiscoveredField:
    """Tests for the DiscoveredField model."""

    def test_from_api_response(self):
        field = DiscoveredField.from_api_response(SPRINT_FIELD)

        assert field.id == "customfield_10020"
        assert field.name == "Sprint"
        assert field.schema_type == "array"
        assert field.custom_type_id == "com.pyxis.greenhopper.jira:gh-sprint"
        assert field.field_schema.custom_id == 10020
        assert field.clause_names == ["cf[10020]", "Sprint"]
        assert field.is_custom is True

    def test_system_field_without_schema(self):
        field = DiscoveredField.from_api_response({"id": "issuekey", "name": "Key"})

        assert field.schema_type is None
        assert field.custom_type_id is None
        assert field.clause_names is None
        assert field.is_custom is False

    @pytest.mark.parametrize("data", [{}, {"name": "No id"}, {"id": ""}, "summary"])
    def test_invalid_definitions(self, data):
        with pytest.raises(ValueError, match="Invalid field definition"):
            DiscoveredField.from_api_response(data)

    def test_to_raw_keeps_unknown_keys(self):
        raw = DiscoveredField.from_api_response(SPRINT_FIELD).to_raw()

        assert raw["key"] == "customfield_10020"
        assert raw["custom"] is True
        assert raw["orderable"] is True
        assert raw["clauseNames"] == ["cf[10020]", "Sprint"]
        assert raw["schema"]["customId"] == 10020
        assert raw["schema"]["items"] == "json"

    def test_to_raw_round_trip(self):
        field = DiscoveredField.from_api_response(SPRINT_FIELD)

        assert DiscoveredField.from_api_response(field.to_raw()) == field

    def test_to_simplified_dict(self):
        field = DiscoveredField.from_api_response(SPRINT_FIELD)

        simplified = field.to_simplified_dict()

        assert simplified == {
            "id": "customfield_10020",
            "name": "Sprint",
            "schema_type": "array",
            "custom_type_id": "com.pyxis.greenhopper.jira:gh-sprint",
            "clause_names": ["cf[10020]", "Sprint"],
        }

    def test_is_immutable(self):
        field = DiscoveredField.from_api_response(SPRINT_FIELD)

        with pytest.raises(ValueError):
            field.name = "Iteration"


def test_field_schema_alias():
    schema = FieldSchema.model_validate({"type": "number", "customId": 10016})

    assert schema.custom_id == 10016
    assert schema.custom is None
