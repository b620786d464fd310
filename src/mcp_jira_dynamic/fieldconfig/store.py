"""
File-backed store of per-project field configurations.

Each project lives in ``<config_dir>/<PROJECT_KEY>.json``. The store keeps a
process-wide in-memory copy that is loaded lazily on first access and only
reloaded after :meth:`ProjectConfigStore.clear_cache`. There is no locking:
two concurrent saves of the same project race and the last write wins.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..models.fieldconfig import ProjectConfig, ProjectConfigSummary
from .constants import CONFIG_FILE_SUFFIX, PROJECT_KEY_PATTERN
from .results import Resolution, Resolved, Unconfigured
from .settings import FieldConfigSettings

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.store")


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def _next_timestamp(previous: datetime | None) -> datetime:
    """Current UTC time, never earlier than ``previous``."""
    now = datetime.now(timezone.utc)
    if previous is not None and _as_utc(previous) > now:
        return _as_utc(previous)
    return now


def validate_project_key(project_key: str) -> str:
    """Return ``project_key`` if it is a valid Jira project key.

    Raises:
        ValueError: Unless the key is uppercase letters, digits and
            underscores starting with a letter
    """
    if not PROJECT_KEY_PATTERN.fullmatch(project_key or ""):
        raise ValueError(
            f"Invalid project key '{project_key}': expected uppercase letters, "
            "digits and underscores, starting with a letter"
        )
    return project_key


class ProjectConfigStore:
    """Durable, cache-backed store of ProjectConfig by project key.

    Configs handed out by the store are copies: mutating one has no effect
    until it is passed back to :meth:`save`.
    """

    def __init__(
        self, config_dir: Path | str, default_project_key: str | None = None
    ) -> None:
        self.config_dir = Path(config_dir)
        self.default_project_key = default_project_key
        self._projects: dict[str, ProjectConfig] | None = None

    @classmethod
    def from_settings(cls, settings: FieldConfigSettings) -> "ProjectConfigStore":
        return cls(settings.config_dir, settings.default_project_key)

    def ensure_config_dir(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create config directory {self.config_dir}: {e}")

    def load(self) -> dict[str, ProjectConfig]:
        """
        Load every project configuration, once per process.

        Files that cannot be parsed are logged and skipped.

        Returns:
            The cached mapping of project key to configuration
        """
        if self._projects is not None:
            return self._projects

        self.ensure_config_dir()
        projects: dict[str, ProjectConfig] = {}

        try:
            config_files = sorted(self.config_dir.glob(f"*{CONFIG_FILE_SUFFIX}"))
        except OSError as e:
            logger.error(f"Failed to read config directory {self.config_dir}: {e}")
            config_files = []

        for config_file in config_files:
            project_key = config_file.stem
            try:
                with open(config_file, encoding="utf-8") as f:
                    document = json.load(f)
                if not isinstance(document, dict):
                    raise ValueError("document is not a JSON object")
                document.setdefault("projectKey", project_key)
                projects[project_key] = ProjectConfig.from_api_response(document)
            except (OSError, ValueError, ValidationError) as e:
                logger.error(f"Failed to load config for {project_key}: {e}")

        logger.debug(f"Loaded {len(projects)} project configs from {self.config_dir}")
        self._projects = projects
        return projects

    def clear_cache(self) -> None:
        """Drop the in-memory copy so the next access reloads from disk."""
        self._projects = None

    def get_project_config(self, project_key: str) -> ProjectConfig | None:
        config = self.load().get(project_key)
        return config.model_copy(deep=True) if config is not None else None

    def save(
        self, project_key: str, config: ProjectConfig, set_as_default: bool = False
    ) -> ProjectConfig:
        """
        Persist a project configuration and update the cache.

        The first project ever saved becomes the default project. With
        ``set_as_default`` the flag moves to this project and is cleared (and
        persisted) on every other one.

        Args:
            project_key: Key the configuration is stored under
            config: The configuration to store
            set_as_default: Make this the default project

        Returns:
            A copy of the stored configuration

        Raises:
            ValueError: If the project key is not a valid Jira project key
            OSError: If the configuration file cannot be written
        """
        validate_project_key(project_key)
        projects = self.load()
        is_first_project = not projects or list(projects) == [project_key]
        make_default = set_as_default or is_first_project

        stored = config.model_copy(deep=True)
        stored.project_key = project_key
        if make_default:
            stored.is_default = True

        previous = projects.get(project_key)
        known_stamps = [
            _as_utc(timestamp)
            for timestamp in (
                config.last_updated,
                previous.last_updated if previous else None,
            )
            if timestamp is not None
        ]
        stored.last_updated = _next_timestamp(max(known_stamps, default=None))
        self._write(stored)
        projects[project_key] = stored

        # Other projects lose the flag only after the new default is written
        if make_default:
            for other_key, other in list(projects.items()):
                if other_key != project_key and other.is_default:
                    cleared = other.model_copy(deep=True)
                    cleared.is_default = False
                    self._write(cleared)
                    projects[other_key] = cleared
        logger.info(f"Saved field configuration for project {project_key}")
        return stored.model_copy(deep=True)

    def _write(self, config: ProjectConfig) -> None:
        self.ensure_config_dir()
        config_path = self.config_dir / f"{config.project_key}{CONFIG_FILE_SUFFIX}"
        try:
            with open(config_path, "w", encoding="utf-8") as f:
                json.dump(config.to_document(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to write config file {config_path}: {e}")
            raise

    def lookup(self, project_key: str, field_name: str) -> Resolution:
        """Resolve a semantic field from the stored mapping only."""
        config = self.load().get(project_key)
        if config is None:
            return Unconfigured(
                field_name, ConfigurationError.project_not_configured(project_key)
            )
        mapping = config.fields.get(field_name)
        if mapping is None:
            return Unconfigured(
                field_name,
                ConfigurationError.field_not_configured(project_key, field_name),
            )
        return Resolved(field_name, mapping.id, "config", mapping.type)

    def get_field_mapping(self, project_key: str, field_name: str) -> str:
        """
        Get the field id mapped to a semantic name.

        Raises:
            ConfigurationError: PROJECT_NOT_CONFIGURED or FIELD_NOT_CONFIGURED
        """
        resolution = self.lookup(project_key, field_name)
        if isinstance(resolution, Unconfigured):
            raise resolution.error
        return resolution.field_id

    def get_field_mapping_with_fallback(
        self, project_key: str, field_name: str, fallback_env_name: str | None
    ) -> str | None:
        """Like :meth:`get_field_mapping`, falling back to an environment override.

        Never raises for a missing configuration; returns None when the
        override is absent too.
        """
        resolution = self.lookup(project_key, field_name)
        if isinstance(resolution, Resolved):
            return resolution.field_id
        return (os.getenv(fallback_env_name) if fallback_env_name else None) or None

    def copy(self, source_project_key: str, target_project_key: str) -> ProjectConfig:
        """
        Duplicate a project's configuration under another key.

        An existing target is replaced; guarding against that is up to the
        caller.

        Raises:
            ValueError: If the source project is not configured or the target
                key is not a valid Jira project key
            OSError: If the target file cannot be written
        """
        validate_project_key(target_project_key)
        source = self.get_project_config(source_project_key)
        if source is None:
            raise ValueError(f"Source project {source_project_key} not found")

        target = source.model_copy(deep=True)
        target.project_key = target_project_key
        target.is_default = False
        logger.info(
            f"Copying field configuration {source_project_key} -> {target_project_key}"
        )
        return self.save(target_project_key, target)

    def list_projects(self) -> list[ProjectConfigSummary]:
        return [
            ProjectConfigSummary.from_project_config(config)
            for config in self.load().values()
        ]

    def get_default_project(self) -> str | None:
        """The flagged default project, else the first known project, else None."""
        projects = self.load()
        for project_key, config in projects.items():
            if config.is_default:
                return project_key
        return next(iter(projects), None)

    def set_default_project(self, project_key: str) -> None:
        """
        Flag one project as the default.

        Raises:
            ValueError: If the project is not configured
        """
        projects = self.load()
        if project_key not in projects:
            raise ValueError(f"Project {project_key} not found")

        # The new default is written before any other project loses the flag
        ordered = sorted(projects.items(), key=lambda item: item[0] != project_key)
        for key, config in ordered:
            should_be_default = key == project_key
            if config.is_default != should_be_default:
                updated = config.model_copy(deep=True)
                updated.is_default = should_be_default
                self._write(updated)
                projects[key] = updated
        logger.info(f"Default project set to {project_key}")

    def get_project_key_with_fallback(self, requested: str | None = None) -> str | None:
        """The requested key, else the default project, else the configured fallback."""
        if requested:
            return requested
        return self.get_default_project() or self.default_project_key or None
