"""Constants for semantic field discovery and resolution."""

import re
from pathlib import Path

# Semantic field names with built-in name patterns, most specific first.
FIELD_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    "storyPoints": [
        re.compile(r"story\s*points?", re.IGNORECASE),
        re.compile(r"points?", re.IGNORECASE),
        re.compile(r"estimation", re.IGNORECASE),
        re.compile(r"effort", re.IGNORECASE),
    ],
    "epicLink": [
        re.compile(r"epic\s*link", re.IGNORECASE),
        re.compile(r"parent\s*epic", re.IGNORECASE),
        re.compile(r"epic", re.IGNORECASE),
    ],
    "acceptanceCriteria": [
        re.compile(r"acceptance\s*criteria", re.IGNORECASE),
        re.compile(r"ac", re.IGNORECASE),
        re.compile(r"requirements?", re.IGNORECASE),
    ],
    "sprint": [
        re.compile(r"sprint", re.IGNORECASE),
        re.compile(r"iteration", re.IGNORECASE),
    ],
    "dueDate": [
        re.compile(r"due\s*date", re.IGNORECASE),
        re.compile(r"deadline", re.IGNORECASE),
        re.compile(r"target\s*date", re.IGNORECASE),
    ],
    "origination": [
        re.compile(r"origination", re.IGNORECASE),
        re.compile(r"source", re.IGNORECASE),
        re.compile(r"origin", re.IGNORECASE),
        re.compile(r"reported\s*by", re.IGNORECASE),
    ],
    "product": [
        re.compile(r"product", re.IGNORECASE),
        re.compile(r"application", re.IGNORECASE),
        re.compile(r"component", re.IGNORECASE),
    ],
    "category": [
        re.compile(r"category", re.IGNORECASE),
        re.compile(r"type", re.IGNORECASE),
        re.compile(r"classification", re.IGNORECASE),
    ],
}

SEMANTIC_FIELD_NAMES = tuple(FIELD_PATTERNS)

# Vendor custom-type identifiers (schema.custom) of Jira Software fields
EPIC_LINK_CUSTOM_TYPE = "com.pyxis.greenhopper.jira:gh-epic-link"
SPRINT_CUSTOM_TYPE = "com.pyxis.greenhopper.jira:gh-sprint"

NUMERIC_SCHEMA_TYPES = frozenset({"number"})

# Base confidences of the match rules
EXACT_MATCH_CONFIDENCE = 100
PATTERN_MATCH_CONFIDENCE = 80
CLAUSE_NAME_MATCH_CONFIDENCE = 70
FUZZY_MATCH_WEIGHT = 60
FUZZY_SIMILARITY_CUTOFF = 0.6

# Additive type bonuses
NUMERIC_TYPE_BONUS = 10
CUSTOM_TYPE_BONUS = 20

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100

# Discovery defaults
DEFAULT_ACCEPTANCE_THRESHOLD = 70
DEFAULT_SAMPLE_USAGE_BONUS = 15
IN_USE_EXPLORATORY_CONFIDENCE = 90
UNUSED_EXPLORATORY_CONFIDENCE = 50
MAX_SUGGESTIONS = 3

# Environment override consulted when a project has no mapping for a field
FIELD_ENV_OVERRIDES: dict[str, str] = {
    "storyPoints": "JIRA_STORY_POINTS_FIELD",
    "epicLink": "JIRA_EPIC_LINK_FIELD",
    "acceptanceCriteria": "JIRA_ACCEPTANCE_CRITERIA_FIELD",
    "sprint": "JIRA_SPRINT_FIELD",
    "dueDate": "JIRA_DUE_DATE_FIELD",
    "origination": "JIRA_ORIGINATION_FIELD",
    "product": "JIRA_PRODUCT_FIELD",
    "category": "JIRA_CATEGORY_FIELD",
    "storyReadiness": "JIRA_STORY_READINESS_FIELD",
}

CONFIG_PATH_ENV = "JIRA_DYNAMIC_CONFIG_PATH"
# Relative to the home directory
DEFAULT_CONFIG_SUBDIR = Path(".jira-mcp") / "configs"
CONFIG_FILE_SUFFIX = ".json"

# Project keys double as configuration file names
PROJECT_KEY_REGEX = r"^[A-Z][A-Z0-9_]*$"
PROJECT_KEY_PATTERN = re.compile(PROJECT_KEY_REGEX)
