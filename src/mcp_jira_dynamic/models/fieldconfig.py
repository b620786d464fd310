"""
Persisted field-configuration models.

A ProjectConfig is stored as one JSON document per project key. The
document uses camelCase keys (``projectKey``, ``lastUpdated``,
``fieldCache``) and tolerates keys it does not know about, which are written
back unchanged.
"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from .base import ApiModel, TimestampMixin
from .constants import DEFAULT_FIELD_TYPE
from .jira.field import DiscoveredField


class FieldMapping(ApiModel):
    """A semantic field name resolved to a concrete Jira field id."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    type: str = DEFAULT_FIELD_TYPE
    confidence: int | None = Field(default=None, ge=0, le=100)

    @classmethod
    def from_field(
        cls, field: DiscoveredField, confidence: int | None = None
    ) -> "FieldMapping":
        return cls(
            id=field.id,
            name=field.name,
            type=field.schema_type or DEFAULT_FIELD_TYPE,
            confidence=confidence,
        )


class ProjectConfig(ApiModel, TimestampMixin):
    """
    Field configuration of one Jira project.

    ``fields`` maps semantic names (``storyPoints``, ``epicLink``...) to
    their resolved mapping. ``field_cache`` is a snapshot of the whole field
    catalog keyed by field id, taken when the project was last configured.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    project_key: str = Field(alias="projectKey")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")
    fields: dict[str, FieldMapping] = Field(default_factory=dict)
    field_cache: dict[str, DiscoveredField] = Field(
        default_factory=dict, alias="fieldCache"
    )
    is_default: bool = Field(default=False, alias="isDefault")

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "ProjectConfig":
        return cls.model_validate(data)

    @classmethod
    def new(cls, project_key: str) -> "ProjectConfig":
        return cls(project_key=project_key, fields={}, field_cache={})

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document stored on disk."""
        document = self.model_dump(
            by_alias=True, mode="json", exclude_none=True, exclude={"field_cache"}
        )
        document["fieldCache"] = {
            field_id: field.to_raw() for field_id, field in self.field_cache.items()
        }
        return document

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "project_key": self.project_key,
            "last_updated": self.format_timestamp(self.last_updated),
            "is_default": self.is_default,
            "fields": {
                name: mapping.to_simplified_dict()
                for name, mapping in self.fields.items()
            },
            "cached_field_count": len(self.field_cache),
        }


class ProjectConfigSummary(ApiModel, TimestampMixin):
    """Display projection of a ProjectConfig used when listing projects."""

    project_key: str
    last_updated: datetime | None = None
    field_count: int = 0
    fields: list[str] = Field(default_factory=list)
    is_default: bool = False

    @classmethod
    def from_project_config(cls, config: ProjectConfig) -> "ProjectConfigSummary":
        return cls(
            project_key=config.project_key,
            last_updated=config.last_updated,
            field_count=len(config.fields),
            fields=list(config.fields),
            is_default=config.is_default,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "project_key": self.project_key,
            "last_updated": self.format_timestamp(self.last_updated),
            "field_count": self.field_count,
            "fields": self.fields,
            "is_default": self.is_default,
        }
