"""Tests for field configuration settings."""

from pathlib import Path

import pytest

from mcp_jira_dynamic.fieldconfig.settings import FieldConfigSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "JIRA_DYNAMIC_CONFIG_PATH",
        "JIRA_FIELD_ACCEPTANCE_THRESHOLD",
        "JIRA_FIELD_SAMPLE_BONUS",
        "JIRA_PROJECT_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = FieldConfigSettings.from_env()

    assert settings.config_dir == Path.home() / ".jira-mcp" / "configs"
    assert settings.acceptance_threshold == 70
    assert settings.sample_usage_bonus == 15
    assert settings.default_project_key is None


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("JIRA_DYNAMIC_CONFIG_PATH", str(tmp_path))
    monkeypatch.setenv("JIRA_FIELD_ACCEPTANCE_THRESHOLD", "80")
    monkeypatch.setenv("JIRA_FIELD_SAMPLE_BONUS", "5")
    monkeypatch.setenv("JIRA_PROJECT_KEY", "PROJ")

    settings = FieldConfigSettings.from_env()

    assert settings.config_dir == tmp_path
    assert settings.acceptance_threshold == 80
    assert settings.sample_usage_bonus == 5
    assert settings.default_project_key == "PROJ"


def test_config_path_expands_user(monkeypatch):
    monkeypatch.setenv("JIRA_DYNAMIC_CONFIG_PATH", "~/jira-configs")

    settings = FieldConfigSettings.from_env()

    assert settings.config_dir == Path.home() / "jira-configs"


@pytest.mark.parametrize("raw_value", ["high", "7.5", "  "])
def test_malformed_numbers_use_defaults(monkeypatch, raw_value):
    monkeypatch.setenv("JIRA_FIELD_ACCEPTANCE_THRESHOLD", raw_value)

    assert FieldConfigSettings.from_env().acceptance_threshold == 70


def test_empty_project_key_is_none(monkeypatch):
    monkeypatch.setenv("JIRA_PROJECT_KEY", "")

    assert FieldConfigSettings.from_env().default_project_key is None
