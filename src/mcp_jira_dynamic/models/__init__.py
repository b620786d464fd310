"""
Pydantic models for Jira API responses and persisted field configuration.
"""

from .base import ApiModel, TimestampMixin
from .constants import DEFAULT_FIELD_TYPE, EMPTY_STRING
from .fieldconfig import FieldMapping, ProjectConfig, ProjectConfigSummary
from .jira import DiscoveredField, FieldSchema

__all__ = [
    "ApiModel",
    "TimestampMixin",
    "DEFAULT_FIELD_TYPE",
    "EMPTY_STRING",
    "DiscoveredField",
    "FieldSchema",
    "FieldMapping",
    "ProjectConfig",
    "ProjectConfigSummary",
]
