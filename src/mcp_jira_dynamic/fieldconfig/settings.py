"""Settings of the field configuration subsystem."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .constants import (
    CONFIG_PATH_ENV,
    DEFAULT_ACCEPTANCE_THRESHOLD,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_SAMPLE_USAGE_BONUS,
)

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.settings")


def _int_from_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: '{raw_value}', using {default}")
        return default


@dataclass
class FieldConfigSettings:
    """Where project configurations live and how discovery decides.

    The acceptance threshold and the sample-usage bonus are tuning knobs
    rather than fixed rules.
    """

    config_dir: Path = field(default_factory=lambda: Path.home() / DEFAULT_CONFIG_SUBDIR)
    acceptance_threshold: int = DEFAULT_ACCEPTANCE_THRESHOLD
    sample_usage_bonus: int = DEFAULT_SAMPLE_USAGE_BONUS
    default_project_key: str | None = None  # Last-resort project key

    @classmethod
    def from_env(cls) -> "FieldConfigSettings":
        """Create settings from environment variables.

        Never raises: malformed numbers fall back to their defaults.
        """
        config_path = os.getenv(CONFIG_PATH_ENV)
        config_dir = (
            Path(config_path).expanduser()
            if config_path
            else Path.home() / DEFAULT_CONFIG_SUBDIR
        )
        return cls(
            config_dir=config_dir,
            acceptance_threshold=_int_from_env(
                "JIRA_FIELD_ACCEPTANCE_THRESHOLD", DEFAULT_ACCEPTANCE_THRESHOLD
            ),
            sample_usage_bonus=_int_from_env(
                "JIRA_FIELD_SAMPLE_BONUS", DEFAULT_SAMPLE_USAGE_BONUS
            ),
            default_project_key=os.getenv("JIRA_PROJECT_KEY") or None,
        )
