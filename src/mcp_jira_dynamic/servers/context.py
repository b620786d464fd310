from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_jira_dynamic.fieldconfig.settings import FieldConfigSettings
    from mcp_jira_dynamic.fieldconfig.store import ProjectConfigStore
    from mcp_jira_dynamic.jira.config import JiraConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context built once at server startup.

    Holds the Jira connection settings loaded from environment variables (None
    when Jira is not configured) and the process-wide project configuration
    store shared by every tool invocation.
    """

    config_store: ProjectConfigStore
    field_settings: FieldConfigSettings
    full_jira_config: JiraConfig | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
