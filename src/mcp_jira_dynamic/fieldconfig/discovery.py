"""Discovery of a project's semantic fields from the Jira field catalog."""

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models.fieldconfig import FieldMapping, ProjectConfig
from ..models.jira import DiscoveredField
from .constants import (
    DEFAULT_ACCEPTANCE_THRESHOLD,
    DEFAULT_SAMPLE_USAGE_BONUS,
    IN_USE_EXPLORATORY_CONFIDENCE,
    MAX_CONFIDENCE,
    MAX_SUGGESTIONS,
    UNUSED_EXPLORATORY_CONFIDENCE,
)
from .matching import FieldMatch, clamp_confidence, find_field_matches

if TYPE_CHECKING:
    from ..jira import JiraFetcher

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.discovery")

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def normalize_field_name(name: str) -> str:
    """Lower-case a display name and collapse non-alphanumeric runs to "_".

    >>> normalize_field_name("  Story Points (Estimate) ")
    'story_points_estimate'
    """
    return _NON_ALNUM_RUN.sub("_", name.lower()).strip("_")


@dataclass
class DiscoveryResult:
    """Outcome of one discovery pass over a project.

    ``mappings`` only holds the names that were resolved. Requested names
    that were not are listed in ``unresolved``, with their best rejected
    candidates in ``suggestions``.
    """

    project_key: str
    mappings: dict[str, FieldMapping] = field(default_factory=dict)
    catalog: list[DiscoveredField] = field(default_factory=list)
    fields_in_use: set[str] = field(default_factory=set)
    unresolved: list[str] = field(default_factory=list)
    suggestions: dict[str, list[FieldMatch]] = field(default_factory=dict)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class FieldDiscovery:
    """Resolve semantic field names for a project against the field catalog.

    Targeted discovery ranks candidates with the match scorer and only
    accepts a candidate at or above ``acceptance_threshold``. Exploratory
    discovery, used when no names are requested, returns the whole catalog
    keyed by normalized display name so a human can pick associations.
    """

    def __init__(
        self,
        fetcher: "JiraFetcher",
        acceptance_threshold: int = DEFAULT_ACCEPTANCE_THRESHOLD,
        sample_usage_bonus: int = DEFAULT_SAMPLE_USAGE_BONUS,
    ) -> None:
        self.fetcher = fetcher
        self.acceptance_threshold = acceptance_threshold
        self.sample_usage_bonus = sample_usage_bonus

    def discover_project_fields(
        self,
        project_key: str,
        sample_issue_key: str | None = None,
        fields_to_discover: list[str] | None = None,
    ) -> DiscoveryResult:
        """
        Run one discovery pass.

        Args:
            project_key: The project being configured
            sample_issue_key: Optional issue whose populated fields corroborate matches
            fields_to_discover: Semantic names to resolve; all catalog fields when empty

        Returns:
            A DiscoveryResult. Fetch failures are reported through its ``error``
            and leave ``mappings`` empty.
        """
        result = DiscoveryResult(project_key=project_key)

        try:
            result.catalog = self.fetcher.get_field_catalog()
        except Exception as e:
            error_msg = f"Could not fetch the field catalog: {str(e)}"
            logger.error(f"Discovery for project {project_key} failed. {error_msg}")
            result.error = error_msg
            return result

        if sample_issue_key:
            try:
                result.fields_in_use = self.fetcher.get_fields_in_use(sample_issue_key)
            except Exception as e:
                error_msg = f"Could not fetch sample issue {sample_issue_key}: {str(e)}"
                logger.error(f"Discovery for project {project_key} failed. {error_msg}")
                result.error = error_msg
                return result

        requested = [name for name in dict.fromkeys(fields_to_discover or []) if name]
        if requested:
            for field_name in requested:
                self._discover_field(field_name, result)
        else:
            self._explore_catalog(result)

        logger.info(
            f"Discovery for project {project_key}: {len(result.mappings)} resolved, "
            f"{len(result.unresolved)} unresolved"
        )
        return result

    def _discover_field(self, field_name: str, result: DiscoveryResult) -> None:
        matches = find_field_matches(field_name, result.catalog)

        if result.fields_in_use:
            # Rank on the unclamped boosted score so that a field in use beats
            # an unused one that also sits at the maximum confidence
            boosted = [
                (
                    match.confidence + self.sample_usage_bonus
                    if match.field.id in result.fields_in_use
                    else match.confidence,
                    match,
                )
                for match in matches
            ]
            boosted.sort(key=lambda item: item[0], reverse=True)
            matches = [
                FieldMatch(
                    field=match.field,
                    confidence=clamp_confidence(score),
                    reason=match.reason,
                )
                for score, match in boosted
            ]

        if matches and matches[0].confidence >= self.acceptance_threshold:
            best = matches[0]
            result.mappings[field_name] = FieldMapping.from_field(
                best.field, best.confidence
            )
            logger.debug(
                f"Accepted {best.field.id} for '{field_name}' at {best.confidence}"
            )
            return

        result.unresolved.append(field_name)
        result.suggestions[field_name] = matches[:MAX_SUGGESTIONS]
        if matches:
            logger.warning(
                f"No confident match for '{field_name}' in project "
                f"{result.project_key}: best was {matches[0].field.id} at "
                f"{matches[0].confidence}"
            )
        else:
            logger.warning(
                f"No candidate for '{field_name}' in project {result.project_key}"
            )

    def _explore_catalog(self, result: DiscoveryResult) -> None:
        for catalog_field in result.catalog:
            key = normalize_field_name(catalog_field.name) or normalize_field_name(
                catalog_field.id
            )
            if key in result.mappings:
                # Display names are not unique
                key = normalize_field_name(f"{catalog_field.name} {catalog_field.id}")
            confidence = (
                IN_USE_EXPLORATORY_CONFIDENCE
                if catalog_field.id in result.fields_in_use
                else UNUSED_EXPLORATORY_CONFIDENCE
            )
            result.mappings[key] = FieldMapping.from_field(catalog_field, confidence)


def apply_discovery_result(
    config: ProjectConfig,
    result: DiscoveryResult,
    user_hints: dict[str, str] | None = None,
) -> list[str]:
    """
    Merge a successful discovery pass and user hints into a project config.

    Mappings already in ``config`` are kept unless discovery resolved the same
    name again. A hint is used for every name that is still unmapped after
    discovery; hinted mappings carry full confidence. The field cache is
    replaced with the catalog fetched during discovery.

    Args:
        config: The project configuration to update in place
        result: A successful DiscoveryResult
        user_hints: Optional semantic name to field id associations

    Returns:
        One report line per resolved, hinted or unresolved field
    """
    catalog_by_id = {catalog_field.id: catalog_field for catalog_field in result.catalog}
    hints = dict(user_hints or {})
    report: list[str] = []

    for field_name, mapping in result.mappings.items():
        config.fields[field_name] = mapping
        report.append(
            f"✓ {field_name}: {mapping.name} ({mapping.id}) - "
            f"{mapping.confidence}% confidence"
        )

    for field_name in result.unresolved:
        if field_name in hints:
            field_id = hints.pop(field_name)
            report.append(_apply_hint(config, catalog_by_id, field_name, field_id))
            continue
        report.append(f"✗ {field_name}: No match found")
        candidates = result.suggestions.get(field_name) or []
        if candidates:
            suggestions = ", ".join(
                f"{match.field.name} ({match.field.id}) {match.confidence}%"
                for match in candidates
            )
            report.append(f"  Candidates below threshold: {suggestions}")

    for field_name, field_id in hints.items():
        if field_name not in config.fields:
            report.append(_apply_hint(config, catalog_by_id, field_name, field_id))

    config.field_cache = catalog_by_id
    return report


def _apply_hint(
    config: ProjectConfig,
    catalog_by_id: dict[str, DiscoveredField],
    field_name: str,
    field_id: str,
) -> str:
    catalog_field = catalog_by_id.get(field_id)
    if catalog_field is None:
        logger.warning(f"Ignoring hint for '{field_name}': unknown field id {field_id}")
        return f"✗ {field_name}: Field {field_id} does not exist (hint ignored)"
    config.fields[field_name] = FieldMapping.from_field(catalog_field, MAX_CONFIDENCE)
    return f"✓ {field_name}: {catalog_field.name} ({field_id}) - user provided"
