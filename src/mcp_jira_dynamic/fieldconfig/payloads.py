"""
Request documents for issue create and update.

Semantic values (story points, epic link, sprint...) never name a field id
directly. :func:`map_semantic_fields` is the single place where they are
resolved through a FieldResolver and turned into ``{field_id: value}``
entries, which the builders then merge into the request document.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from ..utils.date import format_date_for_api
from .constants import FIELD_ENV_OVERRIDES
from .resolver import FieldResolver
from .results import Resolved

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.payloads")

# Tool argument name -> semantic field name
SEMANTIC_ARGUMENTS: dict[str, str] = {
    "story_points": "storyPoints",
    "epic_link": "epicLink",
    "acceptance_criteria": "acceptanceCriteria",
    "sprint": "sprint",
    "due_date": "dueDate",
    "origination": "origination",
    "product": "product",
    "category": "category",
    "story_readiness": "storyReadiness",
}


class SemanticFieldValues(BaseModel):
    """Values addressed by semantic name rather than by field id."""

    story_points: float | None = None
    epic_link: str | None = None
    acceptance_criteria: str | None = None
    sprint: int | str | None = None
    due_date: str | None = None
    origination: str | None = None
    product: str | None = None
    category: str | None = None
    story_readiness: str | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    def to_semantic_dict(self) -> dict[str, Any]:
        """Return the provided values keyed by semantic field name."""
        values: dict[str, Any] = {}
        for argument, semantic_name in SEMANTIC_ARGUMENTS.items():
            value = getattr(self, argument)
            if value is not None:
                values[semantic_name] = value
        for semantic_name, value in self.custom_fields.items():
            values.setdefault(semantic_name, value)
        return values


class IssueCreateRequest(BaseModel):
    """Body of an issue create call: ``{"fields": {...}}``."""

    fields: dict[str, Any]

    def to_api(self) -> dict[str, Any]:
        return {"fields": dict(self.fields)}


class IssueUpdateRequest(BaseModel):
    """An issue key and the fields to set on it."""

    issue_key: str
    fields: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.fields

    def to_api(self) -> dict[str, Any]:
        return {"fields": dict(self.fields)}


class _Skip:
    pass


_SKIP = _Skip()


def _format_sprint(value: Any) -> int | _Skip:
    if isinstance(value, bool):
        return _SKIP
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    logger.warning(
        f"Sprint field requires a numeric sprint id, skipping value: {value!r}"
    )
    return _SKIP


def _format_due_date(value: Any) -> str | _Skip:
    try:
        return format_date_for_api(value)
    except (ValueError, OverflowError):
        logger.warning(
            f"Due date is not a recognizable date, skipping value: {value!r}"
        )
        return _SKIP


def format_field_value(
    field_name: str, value: Any, field_type: str | None = None
) -> Any:
    """
    Shape a value for the field it resolved to.

    Args:
        field_name: Semantic field name
        value: Value given by the caller
        field_type: Schema type recorded in the project mapping, if known

    Returns:
        The value to put in the request, or the module's skip marker when
        the value cannot be sent
    """
    if field_name == "sprint":
        return _format_sprint(value)
    if field_name == "dueDate" and isinstance(value, str | int):
        return _format_due_date(value)
    if field_name == "storyPoints" and isinstance(value, float):
        return int(value) if value.is_integer() else value
    if field_type == "option" and isinstance(value, str):
        return {"value": value}
    if field_type == "array" and not isinstance(value, list):
        return [value]
    return value


def map_semantic_fields(
    resolver: FieldResolver, values: dict[str, Any]
) -> dict[str, Any]:
    """
    Resolve semantic names to field ids and format their values.

    Every name is resolved before anything is reported, so the resolver ends
    up holding all unconfigured names of the operation at once.

    Args:
        resolver: The resolver of the current operation
        values: Values keyed by semantic field name

    Returns:
        Values keyed by field id, for the names that resolved
    """
    fields: dict[str, Any] = {}
    for field_name, value in values.items():
        resolution = resolver.resolve(field_name, FIELD_ENV_OVERRIDES.get(field_name))
        if not isinstance(resolution, Resolved):
            logger.debug(f"No field id for '{field_name}', value not sent")
            continue
        formatted = format_field_value(field_name, value, resolution.field_type)
        if formatted is _SKIP:
            continue
        fields[resolution.field_id] = formatted
    return fields


def _standard_fields(
    *,
    summary: str | None = None,
    description: str | None = None,
    labels: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
    components: list[str] | None = None,
    environment: str | None = None,
    cloud: bool = True,
) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if summary is not None:
        fields["summary"] = summary
    if description is not None:
        fields["description"] = description
    if labels is not None:
        fields["labels"] = list(labels)
    if priority:
        fields["priority"] = {"name": priority}
    if assignee:
        fields["assignee"] = {"accountId": assignee} if cloud else {"name": assignee}
    if components is not None:
        fields["components"] = [{"name": name} for name in components if name]
    if environment is not None:
        fields["environment"] = environment
    return fields


def build_create_request(
    project_key: str,
    summary: str,
    issue_type: str,
    *,
    description: str | None = None,
    labels: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
    components: list[str] | None = None,
    custom_fields: dict[str, Any] | None = None,
    cloud: bool = True,
) -> IssueCreateRequest:
    """
    Build the request document of an issue create call.

    Args:
        project_key: Project the issue is created in
        summary: Issue summary
        issue_type: Issue type name, e.g. 'Task'
        description: Optional description
        labels: Optional labels
        priority: Optional priority name
        assignee: Optional account id (Cloud) or user name (Server/DC)
        components: Optional component names
        custom_fields: Values keyed by field id, from :func:`map_semantic_fields`
        cloud: Whether the target is Jira Cloud

    Returns:
        The request document

    Raises:
        ValueError: If the project key or summary is empty
    """
    if not project_key:
        raise ValueError("A project key is required to create an issue")
    if not summary:
        raise ValueError("A summary is required to create an issue")

    fields: dict[str, Any] = {
        "project": {"key": project_key},
        "issuetype": {"name": issue_type},
    }
    fields.update(
        _standard_fields(
            summary=summary,
            description=description,
            labels=labels,
            priority=priority,
            assignee=assignee,
            components=components,
            cloud=cloud,
        )
    )
    fields.update(custom_fields or {})
    return IssueCreateRequest(fields=fields)


def build_update_request(
    issue_key: str,
    *,
    summary: str | None = None,
    description: str | None = None,
    labels: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
    components: list[str] | None = None,
    environment: str | None = None,
    custom_fields: dict[str, Any] | None = None,
    cloud: bool = True,
) -> IssueUpdateRequest:
    """Build the request document of an issue update; unset arguments are left out."""
    if not issue_key:
        raise ValueError("An issue key is required to update an issue")

    fields = _standard_fields(
        summary=summary,
        description=description,
        labels=labels,
        priority=priority,
        assignee=assignee,
        components=components,
        environment=environment,
        cloud=cloud,
    )
    fields.update(custom_fields or {})
    return IssueUpdateRequest(issue_key=issue_key, fields=fields)
