"""Module for Jira field catalog operations."""

import logging
from typing import Any

from thefuzz import fuzz

from ..models.jira import DiscoveredField
from .client import JiraClient

logger = logging.getLogger("mcp-jira-dynamic.jira.fields")


class FieldsMixin(JiraClient):
    """Mixin for Jira field catalog operations.

    Custom field ids differ between Jira instances, so the catalog returned
    here is the input of semantic field discovery. The raw catalog is cached
    on the client for its lifetime.

    ``get_field_catalog`` and ``get_fields_in_use`` raise on failure because
    discovery must tell "no fields" from "could not ask". ``search_fields``
    only browses, so it logs and falls back to an empty answer instead.
    """

    def get_field_catalog(self, refresh: bool = False) -> list[DiscoveredField]:
        """Every field of the instance, in the order Jira lists them.

        Raises:
            MCPJiraAuthenticationError: If authentication fails (401/403)
            TypeError: If Jira returns something other than a list
            Exception: If the request fails
        """
        if self._field_catalog_cache is None or refresh:
            self._field_catalog_cache = self._call_jira(
                self.jira.get_all_fields, list, "fetching the field catalog"
            )
            logger.debug(
                f"Fetched {len(self._field_catalog_cache)} field definitions"
            )
            for raw in self._field_catalog_cache:
                schema_type = (raw.get("schema") or {}).get("type", "")
                logger.debug(f"  {raw.get('id')}: {raw.get('name')} ({schema_type})")

        catalog: list[DiscoveredField] = []
        for raw_field in self._field_catalog_cache:
            try:
                catalog.append(DiscoveredField.from_api_response(raw_field))
            except ValueError as e:
                logger.debug(f"Skipping unusable field definition: {e}")
        return catalog

    def get_fields_in_use(self, issue_key: str) -> set[str]:
        """Ids of the fields that hold a non-null value on ``issue_key``.

        Raises:
            MCPJiraAuthenticationError: If authentication fails (401/403)
            TypeError: If Jira returns something other than a dictionary
            Exception: If the request fails
        """
        issue_data = self._call_jira(
            lambda: self.jira.get_issue(issue_key), dict, f"fetching issue {issue_key}"
        )
        fields = issue_data.get("fields") or {}
        in_use = {field_id for field_id, value in fields.items() if value is not None}
        logger.debug(f"Issue {issue_key} has {len(in_use)} populated fields")
        return in_use

    def search_fields(
        self, keyword: str, limit: int = 10, *, refresh: bool = False
    ) -> list[dict[str, Any]]:
        """Fields ranked by fuzzy similarity of ``keyword`` to their names.

        A field is scored by its best ``partial_ratio`` over its id, key,
        display name and JQL clause names. An empty keyword returns the first
        ``limit`` fields unranked.
        """
        try:
            catalog = self.get_field_catalog(refresh)
        except Exception as e:
            logger.error(f"Could not search Jira fields: {e}")
            return []

        if keyword:
            needle = keyword.lower()

            def relevance(field: DiscoveredField) -> int:
                labels = [
                    field.id,
                    (field.model_extra or {}).get("key") or "",
                    field.name,
                    *(field.clause_names or []),
                ]
                return max(
                    fuzz.partial_ratio(needle, label.lower()) for label in labels
                )

            catalog = sorted(catalog, key=relevance, reverse=True)
        return [field.to_simplified_dict() for field in catalog[:limit]]
