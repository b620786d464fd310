"""
Base models and utility classes for the MCP Jira Dynamic models.

This module provides the base class and mixins shared by the Jira catalog
models and the persisted field-configuration models.
"""

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel

from .constants import DISPLAY_TIMESTAMP_FORMAT, EMPTY_STRING

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API models with common conversion methods.

    This provides a standard interface for converting API responses
    to models and for converting models to simplified dictionaries
    for tool responses.
    """

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Args:
            data: The API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to a simplified dictionary for tool responses.

        Returns:
            A dictionary with only the essential fields
        """
        return self.model_dump(exclude_none=True)


class TimestampMixin:
    """
    Mixin for handling timestamp display.
    """

    @staticmethod
    def format_timestamp(timestamp: datetime | str | None) -> str:
        """
        Format a timestamp to a human-readable format.

        Args:
            timestamp: A datetime or an ISO 8601 timestamp string

        Returns:
            A formatted date string or empty string if the input is missing
        """
        if not timestamp:
            return EMPTY_STRING

        if isinstance(timestamp, datetime):
            return timestamp.strftime(DISPLAY_TIMESTAMP_FORMAT)

        try:
            dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
            return dt.strftime(DISPLAY_TIMESTAMP_FORMAT)
        except (ValueError, TypeError):
            return timestamp
