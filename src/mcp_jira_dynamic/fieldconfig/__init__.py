"""Semantic field discovery, per-project field configuration and resolution.

Jira custom fields are addressed by ids such as ``customfield_10016`` that
differ between instances. This package finds which id stands for which
semantic concept, stores the result per project and resolves it at request
time.
"""

from .discovery import (
    DiscoveryResult,
    FieldDiscovery,
    apply_discovery_result,
    normalize_field_name,
)
from .matching import FieldMatch, find_field_matches, similarity_ratio
from .payloads import (
    IssueCreateRequest,
    IssueUpdateRequest,
    SemanticFieldValues,
    build_create_request,
    build_update_request,
    map_semantic_fields,
)
from .resolver import FieldResolver, extract_project_key
from .results import Resolution, Resolved, Unconfigured
from .settings import FieldConfigSettings
from .store import ProjectConfigStore

__all__ = [
    "DiscoveryResult",
    "FieldConfigSettings",
    "FieldDiscovery",
    "FieldMatch",
    "FieldResolver",
    "IssueCreateRequest",
    "IssueUpdateRequest",
    "ProjectConfigStore",
    "Resolution",
    "Resolved",
    "SemanticFieldValues",
    "Unconfigured",
    "apply_discovery_result",
    "build_create_request",
    "build_update_request",
    "extract_project_key",
    "find_field_matches",
    "map_semantic_fields",
    "normalize_field_name",
    "similarity_ratio",
]
