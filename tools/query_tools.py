"""
Query MCP Tools
Raw SQL execution and query plan analysis.
"""

from mcp import types


def execute_query() -> types.Tool:
    """
    Returns the raw SQL tool. In SAFE_MODE only SELECT, SHOW and DESCRIBE
    statements are accepted.
    """
    return types.Tool(
        name="execute_query",
        description="Execute a raw SQL query (SELECT only in SAFE_MODE). Returns the result rows as JSON.",
        inputSchema={
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "description": "SQL statement to execute"
                }
            },
            "required": ["sql"]
        }
    )


def explain_query() -> types.Tool:
    return types.Tool(
        name="explain_query",
        description="Run EXPLAIN on a query to analyze performance",
        inputSchema={
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "description": "Query to explain (without the EXPLAIN keyword)"
                }
            },
            "required": ["sql"]
        }
    )


def get_query_tools() -> list[types.Tool]:
    return [execute_query(), explain_query()]
