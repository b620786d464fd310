"""Jira FastMCP server instance and tool definitions."""

import json
import logging
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_jira_dynamic.exceptions import MCPJiraAuthenticationError
from mcp_jira_dynamic.fieldconfig import (
    FieldDiscovery,
    FieldResolver,
    SemanticFieldValues,
    apply_discovery_result,
    build_create_request,
    build_update_request,
    extract_project_key,
    map_semantic_fields,
)
from mcp_jira_dynamic.fieldconfig.constants import PROJECT_KEY_REGEX
from mcp_jira_dynamic.models.fieldconfig import ProjectConfig
from mcp_jira_dynamic.servers.dependencies import (
    get_config_store,
    get_field_settings,
    get_jira_fetcher,
)
from mcp_jira_dynamic.utils.decorators import (
    check_write_access,
    convert_empty_defaults_to_none,
)

from .context import MainAppContext

logger = logging.getLogger("mcp-jira-dynamic.servers.jira")

jira_mcp = FastMCP(
    name="Jira Dynamic Fields MCP Service",
    description=(
        "Discovers and stores per-project Jira custom field mappings and uses "
        "them to create and update issues."
    ),
)


def _dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
@convert_empty_defaults_to_none
async def configure_project_fields(
    ctx: Context,
    project_key: Annotated[
        str,
        Field(
            description="The Jira project key (e.g., 'PROJ')",
            pattern=PROJECT_KEY_REGEX,
        ),
    ],
    fields_to_discover: Annotated[
        list[str] | None,
        Field(
            description=(
                "(Optional) Semantic field names to resolve, e.g. "
                "['storyPoints', 'epicLink', 'sprint', 'acceptanceCriteria']. "
                "When omitted, every field of the instance is listed under a "
                "normalized name."
            ),
            default=None,
        ),
    ] = None,
    sample_issue_key: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) An existing issue of the project (e.g., 'PROJ-123'). "
                "Fields populated on it get a confidence bonus."
            ),
            default=None,
        ),
    ] = None,
    user_hints: Annotated[
        dict[str, str] | None,
        Field(
            description=(
                "(Optional) Known associations of semantic field name to field "
                "id, e.g. {'storyPoints': 'customfield_10016'}. Used when no "
                "confident match is found."
            ),
            default=None,
        ),
    ] = None,
    set_as_default: Annotated[
        bool,
        Field(
            description="Make this project the default project",
            default=False,
        ),
    ] = False,
) -> str:
    """Discover and store the custom field mapping of a Jira project.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.
        fields_to_discover: Semantic field names to resolve.
        sample_issue_key: Issue used to corroborate matches.
        user_hints: Semantic name to field id associations.
        set_as_default: Make this the default project.

    Returns:
        A per-field report of the configuration.

    Raises:
        ValueError: If in read-only mode or Jira client is unavailable.
    """
    jira = await get_jira_fetcher(ctx)
    store = get_config_store(ctx)
    settings = get_field_settings(ctx)

    discovery = FieldDiscovery(
        jira,
        acceptance_threshold=settings.acceptance_threshold,
        sample_usage_bonus=settings.sample_usage_bonus,
    )
    result = discovery.discover_project_fields(
        project_key,
        sample_issue_key=sample_issue_key,
        fields_to_discover=fields_to_discover,
    )
    if not result.success:
        return f"Error configuring project {project_key}: {result.error}"

    config = store.get_project_config(project_key) or ProjectConfig.new(project_key)
    report = apply_discovery_result(config, result, user_hints)

    try:
        store.save(project_key, config, set_as_default=set_as_default)
    except OSError as e:
        logger.error(f"Could not save configuration of project {project_key}: {e}")
        return f"Error configuring project {project_key}: {str(e)}"

    lines = [f"Project {project_key} configuration updated:", ""]
    lines.extend(report or ["No fields were configured."])
    return "\n".join(lines)


@jira_mcp.tool(tags={"config", "read"})
async def list_configured_projects(ctx: Context) -> str:
    """List all projects with a stored field configuration.

    Args:
        ctx: The FastMCP context.

    Returns:
        JSON string with the project summaries and the default project.
    """
    store = get_config_store(ctx)
    projects = [summary.to_simplified_dict() for summary in store.list_projects()]
    return _dumps(
        {
            "projects": projects,
            "total": len(projects),
            "default_project": store.get_default_project(),
        }
    )


@jira_mcp.tool(tags={"config", "read"})
async def get_project_config(
    ctx: Context,
    project_key: Annotated[
        str,
        Field(
            description="The Jira project key (e.g., 'PROJ')",
            pattern=PROJECT_KEY_REGEX,
        ),
    ],
) -> str:
    """Get the stored field mapping of a project.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.

    Returns:
        JSON string with the mapping table, or a not-configured notice.
    """
    config = get_config_store(ctx).get_project_config(project_key)
    if config is None:
        return _dumps(
            {
                "configured": False,
                "project_key": project_key,
                "message": f"Project {project_key} has not been configured yet.",
            }
        )
    return _dumps({"configured": True, **config.to_simplified_dict()})


@jira_mcp.tool(tags={"config", "write"})
@check_write_access
async def copy_project_config(
    ctx: Context,
    source_project: Annotated[
        str, Field(description="Project key to copy from", pattern=PROJECT_KEY_REGEX)
    ],
    target_project: Annotated[
        str, Field(description="Project key to copy to", pattern=PROJECT_KEY_REGEX)
    ],
    overwrite: Annotated[
        bool,
        Field(
            description="Replace the target configuration if it already exists",
            default=False,
        ),
    ] = False,
) -> str:
    """Copy the field configuration of one project to another.

    Args:
        ctx: The FastMCP context.
        source_project: Project to copy from.
        target_project: Project to copy to.
        overwrite: Replace an existing target configuration.

    Returns:
        JSON string with the outcome.

    Raises:
        ValueError: If in read-only mode.
    """
    store = get_config_store(ctx)

    if not overwrite and store.get_project_config(target_project) is not None:
        return _dumps(
            {
                "success": False,
                "message": (
                    f"Project {target_project} already has a configuration. "
                    "Set overwrite to true to replace it."
                ),
            }
        )

    try:
        copied = store.copy(source_project, target_project)
    except (ValueError, OSError) as e:
        logger.warning(f"Could not copy {source_project} to {target_project}: {e}")
        return _dumps({"success": False, "message": str(e)})

    return _dumps(
        {
            "success": True,
            "message": (
                f"Copied {len(copied.fields)} field mappings from {source_project} "
                f"to {target_project}"
            ),
        }
    )


@jira_mcp.tool(tags={"config", "write"})
@check_write_access
async def set_default_project(
    ctx: Context,
    project_key: Annotated[
        str,
        Field(
            description="The Jira project key (e.g., 'PROJ')",
            pattern=PROJECT_KEY_REGEX,
        ),
    ],
) -> str:
    """Make a configured project the default project.

    Args:
        ctx: The FastMCP context.
        project_key: The project key.

    Returns:
        JSON string with the outcome.

    Raises:
        ValueError: If in read-only mode.
    """
    try:
        get_config_store(ctx).set_default_project(project_key)
    except (ValueError, OSError) as e:
        return _dumps({"success": False, "message": str(e)})
    return _dumps(
        {"success": True, "message": f"Default project set to {project_key}"}
    )


@jira_mcp.tool(tags={"config", "read"})
async def get_default_project(ctx: Context) -> str:
    """Get the default project and how it was determined.

    Args:
        ctx: The FastMCP context.

    Returns:
        JSON string with the default project key (or null).
    """
    store = get_config_store(ctx)
    stored_default = store.get_default_project()
    if stored_default:
        return _dumps({"default_project": stored_default, "source": "config"})
    if store.default_project_key:
        return _dumps(
            {"default_project": store.default_project_key, "source": "env"}
        )
    return _dumps({"default_project": None, "source": None})


@jira_mcp.tool(tags={"jira", "read"})
async def search_fields(
    ctx: Context,
    keyword: Annotated[
        str,
        Field(
            description=(
                "Keyword for fuzzy search. If left empty, lists the first "
                "'limit' available fields in their default order."
            ),
            default="",
        ),
    ] = "",
    limit: Annotated[
        int, Field(description="Maximum number of results", default=10, ge=1)
    ] = 10,
    refresh: Annotated[
        bool,
        Field(description="Whether to force refresh the field list", default=False),
    ] = False,
) -> str:
    """Search the Jira field catalog by keyword with fuzzy match.

    Args:
        ctx: The FastMCP context.
        keyword: The search keyword.
        limit: Maximum number of results to return.
        refresh: Whether to force refresh the field list.

    Returns:
        JSON string representing a list of matching field definitions.
    """
    jira = await get_jira_fetcher(ctx)
    result = jira.search_fields(keyword, limit=limit, refresh=refresh)
    return _dumps(result)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
@convert_empty_defaults_to_none
async def create_issue(
    ctx: Context,
    summary: Annotated[str, Field(description="Summary (title) of the issue")],
    issue_type: Annotated[
        str,
        Field(
            description="Issue type (e.g. 'Task', 'Bug', 'Story')",
            default="Task",
        ),
    ] = "Task",
    project_key: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) The Jira project key. Defaults to the default "
                "project, then JIRA_PROJECT_KEY."
            ),
            default=None,
        ),
    ] = None,
    description: Annotated[
        str | None, Field(description="Issue description", default=None)
    ] = None,
    assignee: Annotated[
        str | None,
        Field(
            description="(Optional) Account id (Cloud) or user name (Server/DC)",
            default=None,
        ),
    ] = None,
    labels: Annotated[
        list[str] | None, Field(description="(Optional) Labels", default=None)
    ] = None,
    priority: Annotated[
        str | None, Field(description="(Optional) Priority name", default=None)
    ] = None,
    components: Annotated[
        list[str] | None,
        Field(description="(Optional) Component names", default=None),
    ] = None,
    story_points: Annotated[
        float | None, Field(description="(Optional) Story points", default=None)
    ] = None,
    epic_link: Annotated[
        str | None,
        Field(description="(Optional) Key of the parent epic", default=None),
    ] = None,
    sprint: Annotated[
        str | None,
        Field(description="(Optional) Numeric sprint id", default=None),
    ] = None,
    acceptance_criteria: Annotated[
        str | None,
        Field(description="(Optional) Acceptance criteria", default=None),
    ] = None,
    due_date: Annotated[
        str | None,
        Field(description="(Optional) Due date (YYYY-MM-DD)", default=None),
    ] = None,
    origination: Annotated[
        str | None, Field(description="(Optional) Origination", default=None)
    ] = None,
    product: Annotated[
        str | None, Field(description="(Optional) Product", default=None)
    ] = None,
    category: Annotated[
        str | None, Field(description="(Optional) Category", default=None)
    ] = None,
    story_readiness: Annotated[
        str | None,
        Field(description="(Optional) Story readiness (e.g. 'Yes')", default=None),
    ] = None,
    custom_fields: Annotated[
        dict[str, Any] | None,
        Field(
            description=(
                "(Optional) Further values keyed by configured semantic field "
                "name, e.g. {'storyReadiness': 'Yes'}"
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Create a Jira issue, resolving custom fields through the project configuration.

    Args:
        ctx: The FastMCP context.
        summary: Summary of the issue.
        issue_type: Issue type.
        project_key: The project key.
        description: Issue description.
        assignee: Assignee.
        labels: Labels.
        priority: Priority name.
        components: Component names.
        story_points: Story points.
        epic_link: Parent epic key.
        sprint: Numeric sprint id.
        acceptance_criteria: Acceptance criteria.
        due_date: Due date.
        origination: Origination.
        product: Product.
        category: Category.
        story_readiness: Story readiness.
        custom_fields: Values keyed by semantic field name.

    Returns:
        JSON string with the created issue, or a message naming every field
        that needs configuration.

    Raises:
        ValueError: If in read-only mode, Jira client is unavailable or no
            project key can be determined.
    """
    jira = await get_jira_fetcher(ctx)
    store = get_config_store(ctx)

    resolved_project_key = store.get_project_key_with_fallback(project_key)
    if not resolved_project_key:
        raise ValueError(
            "No project key given and no default project configured. "
            "Pass project_key or set JIRA_PROJECT_KEY."
        )

    values = SemanticFieldValues(
        story_points=story_points,
        epic_link=epic_link,
        sprint=sprint,
        acceptance_criteria=acceptance_criteria,
        due_date=due_date,
        origination=origination,
        product=product,
        category=category,
        story_readiness=story_readiness,
        custom_fields=custom_fields or {},
    )
    resolver = FieldResolver(store, resolved_project_key)
    resolved_fields = map_semantic_fields(resolver, values.to_semantic_dict())
    if resolver.has_errors():
        return resolver.format_errors()

    request = build_create_request(
        resolved_project_key,
        summary,
        issue_type,
        description=description,
        labels=labels,
        priority=priority,
        assignee=assignee,
        components=components,
        custom_fields=resolved_fields,
        cloud=jira.config.is_cloud,
    )
    try:
        issue = jira.create_issue(request)
    except MCPJiraAuthenticationError:
        raise
    except Exception as e:
        logger.error(f"Error creating issue in {resolved_project_key}: {e}")
        raise ValueError(
            f"Error creating issue: {str(e)}. If a custom field was rejected, "
            f"use 'jira_configure_project_fields' to update the field mappings "
            f"of project {resolved_project_key}."
        ) from e
    return _dumps({"message": "Issue created successfully", "issue": issue})


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
@convert_empty_defaults_to_none
async def update_issue(
    ctx: Context,
    issue_key: Annotated[
        str, Field(description="Jira issue key (e.g., 'PROJ-123')", min_length=1)
    ],
    summary: Annotated[
        str | None, Field(description="(Optional) New summary", default=None)
    ] = None,
    description: Annotated[
        str | None, Field(description="(Optional) New description", default=None)
    ] = None,
    assignee: Annotated[
        str | None,
        Field(
            description="(Optional) Account id (Cloud) or user name (Server/DC)",
            default=None,
        ),
    ] = None,
    labels: Annotated[
        list[str] | None, Field(description="(Optional) Labels", default=None)
    ] = None,
    priority: Annotated[
        str | None, Field(description="(Optional) Priority name", default=None)
    ] = None,
    components: Annotated[
        list[str] | None,
        Field(description="(Optional) Component names", default=None),
    ] = None,
    environment: Annotated[
        str | None, Field(description="(Optional) Environment", default=None)
    ] = None,
    story_points: Annotated[
        float | None, Field(description="(Optional) Story points", default=None)
    ] = None,
    epic_link: Annotated[
        str | None,
        Field(description="(Optional) Key of the parent epic", default=None),
    ] = None,
    sprint: Annotated[
        str | None,
        Field(description="(Optional) Numeric sprint id", default=None),
    ] = None,
    acceptance_criteria: Annotated[
        str | None,
        Field(description="(Optional) Acceptance criteria", default=None),
    ] = None,
    due_date: Annotated[
        str | None,
        Field(description="(Optional) Due date (YYYY-MM-DD)", default=None),
    ] = None,
    origination: Annotated[
        str | None, Field(description="(Optional) Origination", default=None)
    ] = None,
    product: Annotated[
        str | None, Field(description="(Optional) Product", default=None)
    ] = None,
    category: Annotated[
        str | None, Field(description="(Optional) Category", default=None)
    ] = None,
    story_readiness: Annotated[
        str | None,
        Field(description="(Optional) Story readiness (e.g. 'Yes')", default=None),
    ] = None,
    custom_fields: Annotated[
        dict[str, Any] | None,
        Field(
            description=(
                "(Optional) Further values keyed by configured semantic field "
                "name, e.g. {'storyReadiness': 'Yes'}"
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Update a Jira issue, resolving custom fields through its project's configuration.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        summary: New summary.
        description: New description.
        assignee: Assignee.
        labels: Labels.
        priority: Priority name.
        components: Component names.
        environment: Environment.
        story_points: Story points.
        epic_link: Parent epic key.
        sprint: Numeric sprint id.
        acceptance_criteria: Acceptance criteria.
        due_date: Due date.
        origination: Origination.
        product: Product.
        category: Category.
        story_readiness: Story readiness.
        custom_fields: Values keyed by semantic field name.

    Returns:
        JSON string with the updated fields, or a message naming every field
        that needs configuration.

    Raises:
        ValueError: If in read-only mode, Jira client is unavailable or the
            update fails.
    """
    jira = await get_jira_fetcher(ctx)
    store = get_config_store(ctx)

    values = SemanticFieldValues(
        story_points=story_points,
        epic_link=epic_link,
        sprint=sprint,
        acceptance_criteria=acceptance_criteria,
        due_date=due_date,
        origination=origination,
        product=product,
        category=category,
        story_readiness=story_readiness,
        custom_fields=custom_fields or {},
    )
    resolver = FieldResolver(store, extract_project_key(issue_key=issue_key))
    resolved_fields = map_semantic_fields(resolver, values.to_semantic_dict())
    if resolver.has_errors():
        return resolver.format_errors()

    request = build_update_request(
        issue_key,
        summary=summary,
        description=description,
        labels=labels,
        priority=priority,
        assignee=assignee,
        components=components,
        environment=environment,
        custom_fields=resolved_fields,
        cloud=jira.config.is_cloud,
    )
    if request.is_empty:
        return _dumps({"message": "No fields provided to update.", "issue": None})

    issue = jira.update_issue(request)
    return _dumps({"message": "Issue updated successfully", "issue": issue})
