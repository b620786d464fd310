"""Exceptions raised by MCP Jira Dynamic."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MCPJiraAuthenticationError(Exception):
    """Raised when Jira API authentication fails (401/403)."""

    pass


class ConfigurationErrorCode(str, Enum):
    """Machine-readable reasons a semantic field could not be resolved."""

    PROJECT_NOT_CONFIGURED = "PROJECT_NOT_CONFIGURED"
    FIELD_NOT_CONFIGURED = "FIELD_NOT_CONFIGURED"


@dataclass
class ConfigurationErrorDetails:
    """Structured details attached to a ConfigurationError."""

    project: str | None = None
    field: str | None = None
    message: str | None = None
    suggested_fields: list[dict[str, Any]] = dataclasses.field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "project": self.project,
            "field": self.field,
            "message": self.message,
        }
        if self.suggested_fields:
            result["suggested_fields"] = self.suggested_fields
        return result


class ConfigurationError(Exception):
    """Raised when a project or one of its semantic fields is not configured.

    Call sites catch this error separately from generic failures: it means
    "run configure_project_fields" rather than "something broke".
    """

    def __init__(
        self,
        code: ConfigurationErrorCode,
        details: ConfigurationErrorDetails | None = None,
    ) -> None:
        self.code = code
        self.details = details or ConfigurationErrorDetails()
        super().__init__(self.details.message or f"Configuration error: {code.value}")

    @classmethod
    def project_not_configured(cls, project_key: str) -> "ConfigurationError":
        return cls(
            ConfigurationErrorCode.PROJECT_NOT_CONFIGURED,
            ConfigurationErrorDetails(
                project=project_key,
                message=f"Project {project_key} has not been configured yet",
            ),
        )

    @classmethod
    def field_not_configured(
        cls, project_key: str, field_name: str
    ) -> "ConfigurationError":
        return cls(
            ConfigurationErrorCode.FIELD_NOT_CONFIGURED,
            ConfigurationErrorDetails(
                project=project_key,
                field=field_name,
                message=f"Field {field_name} not configured for project {project_key}",
            ),
        )
