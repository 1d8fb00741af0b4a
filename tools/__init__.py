"""
MCP Tools Package
Static catalog of the tools the server advertises.

- Schema tools: list_tables, describe_table, get_relationships
- Query tools: execute_query, explain_query
- Mutation tools (disabled in SAFE_MODE): insert_data, seed_data, update_data,
  delete_data, execute_migration
- Utility tools: format_sql, export_data
"""

from functools import lru_cache

from mcp import types

from .schema_tools import get_schema_tools
from .query_tools import get_query_tools
from .mutation_tools import get_mutation_tools
from .utility_tools import get_utility_tools, EXPORT_FORMATS


@lru_cache(maxsize=1)
def _build_catalog() -> tuple[types.Tool, ...]:
    return (
        *get_schema_tools(),
        *get_query_tools(),
        *get_mutation_tools(),
        *get_utility_tools(),
    )


def get_tool_catalog() -> list[types.Tool]:
    """
    Get all MCP tools in a fixed order. Built once per process, so repeated
    calls return the same descriptors.
    """
    return list(_build_catalog())


def get_tool_names() -> list[str]:
    return [tool.name for tool in _build_catalog()]


__all__ = [
    'get_tool_catalog',
    'get_tool_names',
    'get_schema_tools',
    'get_query_tools',
    'get_mutation_tools',
    'get_utility_tools',
    'EXPORT_FORMATS',
]
