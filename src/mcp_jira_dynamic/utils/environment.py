"""Checks for which backing services the environment has credentials for."""

import logging
import os

from .urls import is_atlassian_cloud_url

logger = logging.getLogger("mcp-jira-dynamic.utils.environment")


def _jira_credentials_present(url: str) -> bool:
    basic = bool(os.getenv("JIRA_USERNAME") and os.getenv("JIRA_API_TOKEN"))
    if is_atlassian_cloud_url(url):
        # Cloud does not accept personal access tokens
        return basic
    return basic or bool(os.getenv("JIRA_PERSONAL_TOKEN"))


def get_available_services() -> dict[str, bool]:
    """Report which services can be used with the current environment.

    The field-configuration store is local and always available. Jira needs
    ``JIRA_URL`` plus credentials that suit the deployment type.
    """
    jira_url = os.getenv("JIRA_URL")
    jira_available = bool(jira_url) and _jira_credentials_present(jira_url)
    if jira_available:
        deployment = "Cloud" if is_atlassian_cloud_url(jira_url) else "Server/DC"
        logger.info(f"Jira {deployment} credentials found for {jira_url}")
    else:
        logger.info("Jira is not configured; only field-configuration tools apply.")
    return {"jira": jira_available, "field_config": True}
