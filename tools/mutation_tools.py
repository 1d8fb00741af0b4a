"""
Mutation MCP Tools
Row inserts, updates and deletes, synthetic seeding and schema migrations.
All of these are disabled in SAFE_MODE.
"""

from mcp import types


def insert_data() -> types.Tool:
    return types.Tool(
        name="insert_data",
        description="Insert a row into a table (Disabled in SAFE_MODE)",
        inputSchema={
            "type": "object",
            "properties": {
                "table": {"type": "string"},
                "data": {
                    "type": "object",
                    "description": "Column/value mapping for the new row. An array of such objects inserts several rows."
                }
            },
            "required": ["table", "data"]
        }
    )


def seed_data() -> types.Tool:
    """Seeding tool - values come from Faker providers."""
    return types.Tool(
        name="seed_data",
        description="Seed a table with dummy data using Faker (Disabled in SAFE_MODE)",
        inputSchema={
            "type": "object",
            "properties": {
                "table": {"type": "string"},
                "count": {
                    "type": "number",
                    "default": 10,
                    "description": "Number of rows to generate"
                },
                "mapping": {
                    "type": "object",
                    "description": "Mapping of columns to Faker methods (e.g. { name: 'person.fullName', email: 'internet.email' })"
                }
            },
            "required": ["table", "mapping"]
        }
    )


def update_data() -> types.Tool:
    return types.Tool(
        name="update_data",
        description="Update rows (Disabled in SAFE_MODE)",
        inputSchema={
            "type": "object",
            "properties": {
                "table": {"type": "string"},
                "data": {
                    "type": "object",
                    "description": "Column/value mapping to set"
                },
                "where": {
                    "type": "object",
                    "description": "Column/value equality filter"
                }
            },
            "required": ["table", "data", "where"]
        }
    )


def delete_data() -> types.Tool:
    return types.Tool(
        name="delete_data",
        description="Delete rows (Disabled in SAFE_MODE)",
        inputSchema={
            "type": "object",
            "properties": {
                "table": {"type": "string"},
                "where": {
                    "type": "object",
                    "description": "Column/value equality filter"
                }
            },
            "required": ["table", "where"]
        }
    )


def execute_migration() -> types.Tool:
    return types.Tool(
        name="execute_migration",
        description="Run CREATE/ALTER/DROP commands (Disabled in SAFE_MODE)",
        inputSchema={
            "type": "object",
            "properties": {
                "sql": {"type": "string"}
            },
            "required": ["sql"]
        }
    )


def get_mutation_tools() -> list[types.Tool]:
    return [insert_data(), seed_data(), update_data(), delete_data(), execute_migration()]
