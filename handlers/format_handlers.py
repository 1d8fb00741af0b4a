"""
Format Handler
Handles: format_sql
"""

from typing import Any

from sql_formatter import format_sql
from query.validators import require_string


async def handle_format_sql(services, arguments: dict[str, Any]) -> str:
    sql = require_string(arguments, "sql")
    return format_sql(sql)
