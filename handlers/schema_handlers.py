"""
Schema Handlers
Handles: list_tables, describe_table, get_relationships
"""

import logging
from typing import Any

from query.validators import require_string
from utils.serialization import to_json

logger = logging.getLogger(__name__)

RELATIONSHIPS_UNSUPPORTED = "Relationship discovery for this DB type is coming soon."


async def handle_list_tables(services, arguments: dict[str, Any]) -> str:
    tables = await services.db.list_tables()
    return to_json(tables)


async def handle_describe_table(services, arguments: dict[str, Any]) -> str:
    table = require_string(arguments, "table")
    columns = await services.db.column_info(table)
    return to_json(columns)


async def handle_get_relationships(services, arguments: dict[str, Any]) -> str:
    """
    Foreign-key discovery. Engines without an implementation get an
    explanatory message rather than an error.
    """
    relationships = await services.db.foreign_keys()
    if relationships is None:
        logger.info(f"Relationship discovery not available for {services.db.engine.value}")
        return RELATIONSHIPS_UNSUPPORTED
    return to_json(relationships)
