"""
Utility MCP Tools
SQL formatting and query result export.
"""

from mcp import types

EXPORT_FORMATS = ("json", "csv")


def format_sql() -> types.Tool:
    return types.Tool(
        name="format_sql",
        description="Pretty-print and format a raw SQL query",
        inputSchema={
            "type": "object",
            "properties": {
                "sql": {"type": "string"}
            },
            "required": ["sql"]
        }
    )


def export_data() -> types.Tool:
    """Export tool. Writes a local file; does not modify the database."""
    return types.Tool(
        name="export_data",
        description="Export query results to a file (JSON or CSV)",
        inputSchema={
            "type": "object",
            "properties": {
                "sql": {"type": "string"},
                "format": {
                    "type": "string",
                    "enum": list(EXPORT_FORMATS),
                    "default": "json"
                },
                "filename": {
                    "type": "string",
                    "description": "Output path, relative to the server's working directory or absolute"
                }
            },
            "required": ["sql", "filename"]
        }
    )


def get_utility_tools() -> list[types.Tool]:
    return [format_sql(), export_data()]
