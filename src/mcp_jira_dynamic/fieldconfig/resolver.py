"""Per-operation resolution of semantic field names to field ids."""

import logging
import os
import re

from .results import Resolution, Resolved, Unconfigured
from .store import ProjectConfigStore

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.resolver")

CONFIGURE_TOOL_NAME = "jira_configure_project_fields"

_ISSUE_KEY_PROJECT = re.compile(r"^([A-Z][A-Z0-9_]*)-")


def _env_value(env_name: str | None) -> str | None:
    if not env_name:
        return None
    return os.getenv(env_name) or None


class FieldResolver:
    """
    Resolve semantic field names for one tool invocation.

    Resolution tries the project's stored mapping, then the environment
    override. A name that fails both while a project is bound is recorded
    rather than raised, so the caller can check :meth:`has_errors` once after
    resolving every field of the operation and report them together.

    Example:
        resolver = FieldResolver(store, "PROJ")
        story_points = resolver.resolve_field_id("storyPoints", "JIRA_STORY_POINTS_FIELD")
        if resolver.has_errors():
            return resolver.format_errors()
    """

    def __init__(
        self, store: ProjectConfigStore, project_key: str | None = None
    ) -> None:
        self.store = store
        self.project_key = project_key or None
        self._errors: dict[str, Unconfigured] = {}

    def set_project_key(self, project_key: str | None) -> None:
        self.project_key = project_key or None

    def resolve(
        self, field_name: str, fallback_env_name: str | None = None
    ) -> Resolution | None:
        """
        Resolve one semantic field name.

        Args:
            field_name: Semantic name, e.g. ``storyPoints``
            fallback_env_name: Environment variable holding an override field id

        Returns:
            Resolved on success. Unconfigured (also recorded) when a project is
            bound but neither its mapping nor the override exists. None when no
            project is bound and no override is set.
        """
        if not self.project_key:
            env_value = _env_value(fallback_env_name)
            if env_value:
                return Resolved(field_name, env_value, "env")
            return None

        resolution = self.store.lookup(self.project_key, field_name)
        if isinstance(resolution, Resolved):
            return resolution

        env_value = _env_value(fallback_env_name)
        if env_value:
            logger.debug(
                f"Using {fallback_env_name} for '{field_name}' in project "
                f"{self.project_key}"
            )
            return Resolved(field_name, env_value, "env")

        self.record(resolution)
        return resolution

    def resolve_field_id(
        self, field_name: str, fallback_env_name: str | None = None
    ) -> str | None:
        """Return just the field id, or None when the name did not resolve."""
        resolution = self.resolve(field_name, fallback_env_name)
        if isinstance(resolution, Resolved):
            return resolution.field_id
        return None

    def record(self, unconfigured: Unconfigured) -> None:
        logger.warning(
            f"Unresolved field '{unconfigured.field_name}': {unconfigured.message}"
        )
        self._errors[unconfigured.field_name] = unconfigured

    def has_errors(self) -> bool:
        return bool(self._errors)

    def get_errors(self) -> list[Unconfigured]:
        return list(self._errors.values())

    def clear_errors(self) -> None:
        self._errors.clear()

    def format_errors(self) -> str:
        """One message naming every unresolved field of the operation."""
        lines = [f"Configuration needed for project {self.project_key}:"]
        lines.extend(
            f"{unconfigured.field_name}: {unconfigured.message}"
            for unconfigured in self._errors.values()
        )
        lines.append("")
        lines.append(
            f"Use the '{CONFIGURE_TOOL_NAME}' tool to set up field mappings for "
            "this project, or set the corresponding environment variables."
        )
        return "\n".join(lines)


def extract_project_key(
    explicit_key: str | None = None,
    issue_key: str | None = None,
    env_key: str | None = None,
) -> str | None:
    """
    Work out which project an operation is about.

    Args:
        explicit_key: Project key given by the caller
        issue_key: Issue key such as ``VIP-123``; matched case-insensitively
        env_key: Fallback key; ``JIRA_PROJECT_KEY`` when not given

    Returns:
        The first available of the explicit key, the issue key's project
        segment and the fallback key, or None
    """
    if explicit_key:
        return explicit_key

    if issue_key:
        match = _ISSUE_KEY_PROJECT.match(issue_key.strip().upper())
        if match:
            return match.group(1)

    return env_key or os.getenv("JIRA_PROJECT_KEY") or None
