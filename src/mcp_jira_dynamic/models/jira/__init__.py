"""
Jira models.

This package provides Pydantic models for Jira API data used by the field
discovery subsystem.
"""

from .field import DiscoveredField, FieldSchema

__all__ = ["DiscoveredField", "FieldSchema"]
