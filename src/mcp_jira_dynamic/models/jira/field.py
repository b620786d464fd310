"""
Jira field catalog models.

A Jira instance describes every field it knows about through the field
listing endpoint. Custom fields are addressed by opaque ids such as
``customfield_10016`` that differ between instances, so these models are
the raw material for semantic field discovery.
"""

import logging
from typing import Any

from pydantic import ConfigDict, Field

from ..base import ApiModel
from ..constants import EMPTY_STRING

logger = logging.getLogger("mcp-jira-dynamic.models.jira.field")


class FieldSchema(ApiModel):
    """Schema block of a field definition (``type``, ``custom``, ``customId``)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str | None = None
    custom: str | None = None
    custom_id: int | None = Field(default=None, alias="customId")


class DiscoveredField(ApiModel):
    """
    One entry of a Jira instance's field catalog.

    Keys the model does not declare (``key``, ``custom``, ``orderable``,
    ``navigable``, ``searchable``...) are kept as extras so a cached catalog
    entry is written back exactly as it was received.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str
    name: str = EMPTY_STRING
    field_schema: FieldSchema | None = Field(default=None, alias="schema")
    clause_names: list[str] | None = Field(default=None, alias="clauseNames")

    @property
    def schema_type(self) -> str | None:
        return self.field_schema.type if self.field_schema else None

    @property
    def custom_type_id(self) -> str | None:
        return self.field_schema.custom if self.field_schema else None

    @property
    def is_custom(self) -> bool:
        return self.id.startswith("customfield_")

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "DiscoveredField":
        """
        Create a DiscoveredField from a field listing entry.

        Args:
            data: One element of the ``/rest/api/2/field`` response

        Returns:
            A DiscoveredField instance

        Raises:
            ValueError: If the entry is not a dictionary or has no id
        """
        if not isinstance(data, dict) or not data.get("id"):
            raise ValueError(f"Invalid field definition: {data!r}")
        return cls.model_validate(data)

    def to_raw(self) -> dict[str, Any]:
        """Return the field definition in the shape Jira returned it."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.schema_type:
            result["schema_type"] = self.schema_type
        if self.custom_type_id:
            result["custom_type_id"] = self.custom_type_id
        if self.clause_names:
            result["clause_names"] = list(self.clause_names)
        return result
