"""
Handler Registry - Maps tool names to handler functions

Every handler has the same shape:

    async def handle_<tool_name>(services: ServiceContainer, arguments: dict) -> str

and returns the text of a successful response. Handlers raise on failure
(ToolError for bad arguments, driver exceptions for database errors); the
dispatcher turns those into error responses.

Usage:
    from handlers import get_handler

    handler = get_handler(tool_name)
    if handler:
        text = await handler(services, arguments)
"""

from typing import Any, Awaitable, Callable, Optional

from . import schema_handlers
from . import query_handlers
from . import mutation_handlers
from . import seed_handlers
from . import export_handlers
from . import format_handlers

Handler = Callable[[Any, dict[str, Any]], Awaitable[str]]


# Handler registry: {tool_name: handler_function}
HANDLER_REGISTRY: dict[str, Handler] = {
    # Schema introspection
    "list_tables": schema_handlers.handle_list_tables,
    "describe_table": schema_handlers.handle_describe_table,
    "get_relationships": schema_handlers.handle_get_relationships,

    # Raw SQL (execute_query is prefix-checked in SAFE_MODE)
    "execute_query": query_handlers.handle_execute_query,
    "explain_query": query_handlers.handle_explain_query,

    # Mutations - disabled in SAFE_MODE
    "insert_data": mutation_handlers.handle_insert_data,
    "seed_data": seed_handlers.handle_seed_data,
    "update_data": mutation_handlers.handle_update_data,
    "delete_data": mutation_handlers.handle_delete_data,
    "execute_migration": mutation_handlers.handle_execute_migration,

    # Utilities
    "format_sql": format_handlers.handle_format_sql,
    "export_data": export_handlers.handle_export_data,
}


def get_handler(tool_name: str) -> Optional[Handler]:
    """
    Get the handler function for a tool.

    Returns:
        The handler, or None for an unregistered tool name
    """
    return HANDLER_REGISTRY.get(tool_name)


def list_all_handlers() -> list[str]:
    """Get list of all registered tool names"""
    return list(HANDLER_REGISTRY.keys())


__all__ = [
    'get_handler',
    'list_all_handlers',
    'HANDLER_REGISTRY'
]
