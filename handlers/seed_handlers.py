"""
Seed Handler
Handles: seed_data

Builds `count` rows from a column -> "category.method" mapping and inserts
them in one call. A column whose generator cannot be resolved, or whose
generator fails, is left out of the row; the rest of the batch still goes in.
"""

import logging
from typing import Any, Callable, Optional

from errors import InvalidArgumentError
from query.validators import optional_count, require_object, require_string

logger = logging.getLogger(__name__)

DEFAULT_SEED_COUNT = 10


def build_rows(generator, mapping: dict[str, Any], count: int) -> list[dict[str, Any]]:
    """Generate `count` rows. Unresolvable columns are logged once and skipped."""
    resolved: dict[str, Optional[Callable[[], Any]]] = {}
    for column, path in mapping.items():
        fn = generator.resolve_path(path) if isinstance(path, str) else None
        if fn is None:
            logger.warning(f"⚠️  No generator for '{path}' (column '{column}'), column will be omitted")
        resolved[column] = fn

    rows = []
    for _ in range(count):
        row = {}
        for column, fn in resolved.items():
            if fn is None:
                continue
            try:
                row[column] = fn()
            except Exception as e:
                logger.warning(f"⚠️  Generator '{mapping[column]}' failed for column '{column}': {e}")
        rows.append(row)
    return rows


async def handle_seed_data(services, arguments: dict[str, Any]) -> str:
    table = require_string(arguments, "table")
    mapping = require_object(arguments, "mapping")
    count = optional_count(arguments, "count", DEFAULT_SEED_COUNT)

    if not mapping:
        raise InvalidArgumentError("Argument 'mapping' must name at least one column")

    rows = build_rows(services.generator, mapping, count)
    await services.db.insert(table, rows)

    logger.info(f"🌱 Seeded {count} rows into {table}")
    return f"Successfully seeded {count} rows into {table}"
