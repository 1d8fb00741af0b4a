"""
Schema MCP Tools
Tools for exploring tables, columns and foreign keys.
"""

from mcp import types


def list_tables() -> types.Tool:
    """Returns the table listing tool."""
    return types.Tool(
        name="list_tables",
        description="List all tables in the database",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": []
        }
    )


def describe_table() -> types.Tool:
    """Returns the column metadata tool."""
    return types.Tool(
        name="describe_table",
        description="Get schema/columns for a specific table: type, max length, nullability and default value per column",
        inputSchema={
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "description": "Table name"
                }
            },
            "required": ["table"]
        }
    )


def get_relationships() -> types.Tool:
    return types.Tool(
        name="get_relationships",
        description="Discover foreign key relationships between tables (MySQL and SQLite)",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": []
        }
    )


def get_schema_tools() -> list[types.Tool]:
    return [list_tables(), describe_table(), get_relationships()]
