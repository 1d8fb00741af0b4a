"""
Raw Query Handlers
Handles: execute_query, explain_query

Rows are normalized by the backend (fetch_rows), so results look the same
whichever engine is configured.
"""

import logging
from typing import Any

from query.validators import require_string
from utils.serialization import to_json

logger = logging.getLogger(__name__)


async def handle_execute_query(services, arguments: dict[str, Any]) -> str:
    sql = require_string(arguments, "sql")

    services.query_log.log("execute_query", sql, "RAW")
    logger.info(f"📊 execute_query: {sql[:100]}")

    rows = await services.db.fetch_rows(sql)
    return to_json(rows)


async def handle_explain_query(services, arguments: dict[str, Any]) -> str:
    sql = require_string(arguments, "sql")
    explain_sql = f"EXPLAIN {sql}"

    services.query_log.log("explain_query", explain_sql, "EXPLAIN")

    rows = await services.db.fetch_rows(explain_sql)
    return to_json(rows)
