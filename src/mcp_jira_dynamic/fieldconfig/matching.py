"""Scoring of catalog fields against a semantic field name.

Every catalog field is scored by the first rule whose condition holds:

1. exact case-insensitive name equality,
2. one of the name patterns registered for the semantic name,
3. a query-language clause name containing the semantic name,
4. normalized Levenshtein similarity of the lower-cased names above a cutoff.

A type bonus is then added for fields whose schema confirms the match, and
the result is clamped to 0..100.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from rapidfuzz.distance import Levenshtein

from ..models.jira import DiscoveredField
from .constants import (
    CLAUSE_NAME_MATCH_CONFIDENCE,
    CUSTOM_TYPE_BONUS,
    EPIC_LINK_CUSTOM_TYPE,
    EXACT_MATCH_CONFIDENCE,
    FIELD_PATTERNS,
    FUZZY_MATCH_WEIGHT,
    FUZZY_SIMILARITY_CUTOFF,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    NUMERIC_SCHEMA_TYPES,
    NUMERIC_TYPE_BONUS,
    PATTERN_MATCH_CONFIDENCE,
    SPRINT_CUSTOM_TYPE,
)

logger = logging.getLogger("mcp-jira-dynamic.fieldconfig.matching")


@dataclass(frozen=True)
class FieldMatch:
    """A catalog field proposed for a semantic field name."""

    field: DiscoveredField
    confidence: int
    reason: str

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.field.id,
            "name": self.field.name,
            "confidence": self.confidence,
            "reason": self.reason,
        }


def similarity_ratio(first: str, second: str) -> float:
    """Return ``1 - distance / longest length`` of two lower-cased strings.

    Two empty strings are not considered similar.
    """
    if not first and not second:
        return 0.0
    return Levenshtein.normalized_similarity(first.lower(), second.lower())


def clamp_confidence(confidence: int) -> int:
    return max(MIN_CONFIDENCE, min(confidence, MAX_CONFIDENCE))


def _base_confidence(field_name: str, field: DiscoveredField) -> tuple[int, str]:
    wanted = field_name.lower()

    if field.name.lower() == wanted:
        return EXACT_MATCH_CONFIDENCE, "Exact name match"

    patterns = FIELD_PATTERNS.get(field_name, [])
    if any(pattern.search(field.name) for pattern in patterns):
        return PATTERN_MATCH_CONFIDENCE, "Pattern match"

    if field.clause_names and any(
        wanted in clause_name.lower() for clause_name in field.clause_names
    ):
        return CLAUSE_NAME_MATCH_CONFIDENCE, "Clause name match"

    similarity = similarity_ratio(field.name, field_name)
    if similarity > FUZZY_SIMILARITY_CUTOFF:
        # Halves round up
        return math.floor(similarity * FUZZY_MATCH_WEIGHT + 0.5), "Fuzzy match"

    return 0, ""


def _apply_type_bonus(
    field_name: str, field: DiscoveredField, confidence: int, reason: str
) -> tuple[int, str]:
    if field_name == "storyPoints" and field.schema_type in NUMERIC_SCHEMA_TYPES:
        return confidence + NUMERIC_TYPE_BONUS, reason
    if field_name == "epicLink" and field.custom_type_id == EPIC_LINK_CUSTOM_TYPE:
        return confidence + CUSTOM_TYPE_BONUS, "Epic link type match"
    if field_name == "sprint" and field.custom_type_id == SPRINT_CUSTOM_TYPE:
        return confidence + CUSTOM_TYPE_BONUS, "Sprint type match"
    return confidence, reason


def score_field(field_name: str, field: DiscoveredField) -> FieldMatch | None:
    """Score one catalog field, or return None when it does not match at all."""
    confidence, reason = _base_confidence(field_name, field)
    if confidence <= 0:
        return None
    confidence, reason = _apply_type_bonus(field_name, field, confidence, reason)
    return FieldMatch(field=field, confidence=clamp_confidence(confidence), reason=reason)


def find_field_matches(
    field_name: str, available_fields: list[DiscoveredField]
) -> list[FieldMatch]:
    """
    Rank the catalog fields that plausibly correspond to a semantic field name.

    Args:
        field_name: Semantic name such as ``storyPoints``, or any free-form key
        available_fields: The field catalog of the Jira instance

    Returns:
        Matches sorted by confidence, highest first. Ties keep catalog order.
    """
    matches = [
        match
        for match in (score_field(field_name, field) for field in available_fields)
        if match is not None
    ]
    matches.sort(key=lambda match: match.confidence, reverse=True)

    if matches:
        best = matches[0]
        logger.debug(
            f"'{field_name}': {len(matches)} candidates, best {best.field.id} "
            f"({best.field.name}) at {best.confidence} [{best.reason}]"
        )
    else:
        logger.debug(f"'{field_name}': no candidates")
    return matches
