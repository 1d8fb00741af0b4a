"""
Mutation Handlers
Handles: insert_data, update_data, delete_data, execute_migration

An empty `where` object has no filter at all: update_data and delete_data
then affect every row of the table.
"""

import json
import logging
from typing import Any

from query.validators import require_object, require_rows, require_string

logger = logging.getLogger(__name__)


async def handle_insert_data(services, arguments: dict[str, Any]) -> str:
    table = require_string(arguments, "table")
    rows = require_rows(arguments, "data")

    ids = await services.db.insert(table, rows)
    logger.info(f"✏️  Inserted {len(rows)} row(s) into {table}")
    return f"Inserted ID: {json.dumps(ids)}"


async def handle_update_data(services, arguments: dict[str, Any]) -> str:
    table = require_string(arguments, "table")
    data = require_object(arguments, "data")
    where = require_object(arguments, "where")

    count = await services.db.update(table, data, where)
    logger.info(f"✏️  Updated {count} row(s) in {table}")
    return f"Updated {count} rows."


async def handle_delete_data(services, arguments: dict[str, Any]) -> str:
    table = require_string(arguments, "table")
    where = require_object(arguments, "where")

    count = await services.db.delete(table, where)
    logger.info(f"✏️  Deleted {count} row(s) from {table}")
    return f"Deleted {count} rows."


async def handle_execute_migration(services, arguments: dict[str, Any]) -> str:
    sql = require_string(arguments, "sql")

    services.query_log.log("execute_migration", sql, "MIGRATION")
    logger.info(f"🔧 Running migration: {sql[:100]}")

    await services.db.execute_script(sql)
    return "Migration executed successfully."
