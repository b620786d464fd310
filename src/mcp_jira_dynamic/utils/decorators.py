import inspect
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context

logger = logging.getLogger("mcp-jira-dynamic.utils.decorators")

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

_EMPTY_VALUES = ("", {}, [])


def _nullable_params(sig: inspect.Signature) -> set[str]:
    """Parameters whose default is None or an empty string, dict or list."""
    return {
        name
        for name, param in sig.parameters.items()
        if param.default is None or param.default in _EMPTY_VALUES
    }


def convert_empty_defaults_to_none(func: F) -> F:
    """Turn empty strings, dicts and lists into None for optional parameters.

    Some MCP clients send ``""`` or ``{}`` instead of leaving an optional
    argument out (https://github.com/jlowin/fastmcp/issues/224). Tools can
    then test ``if user_hints:`` without caring which form arrived.
    """
    sig = inspect.signature(func)
    nullable = _nullable_params(sig)

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        for name in nullable:
            value = bound.arguments.get(name)
            if isinstance(value, str | dict | list) and not value:
                bound.arguments[name] = None
        return await func(*bound.args, **bound.kwargs)

    return wrapper  # type: ignore


def check_write_access(func: F) -> F:
    """Refuse to run a modifying tool while the server is read-only.

    The tool must be async and take the FastMCP ``ctx`` first. The error
    message is derived from the function name, e.g. ``copy_project_config``
    becomes "Cannot copy project config in read-only mode.".
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx = ctx.request_context.lifespan_context
        app_ctx = (
            lifespan_ctx.get("app_lifespan_context")
            if isinstance(lifespan_ctx, dict)
            else None
        )
        if app_ctx is not None and app_ctx.read_only:
            logger.warning(f"Refused '{func.__name__}': server is read-only.")
            action = func.__name__.replace("_", " ")
            raise ValueError(f"Cannot {action} in read-only mode.")
        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore
