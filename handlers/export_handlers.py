"""
Export Handler
Handles: export_data

JSON exports are a pretty-printed array of row objects. CSV exports take the
header from the first row's keys and join values with commas as-is: values
containing commas, quotes or newlines are NOT escaped.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from errors import UnsupportedFormatError
from query.validators import require_string
from tools.utility_tools import EXPORT_FORMATS
from utils.serialization import to_json

logger = logging.getLogger(__name__)


def _csv_value(value: Any) -> str:
    return "" if value is None else str(value)


def rows_to_csv(rows: list[dict[str, Any]]) -> str:
    """
    Naive CSV: header line plus one line per row, no trailing newline.
    An empty result gives an empty string.
    """
    header = ",".join(rows[0].keys()) if rows else ""
    lines = [",".join(_csv_value(v) for v in row.values()) for row in rows]
    return "\n".join([header, *lines]) if rows else header


def render_export(rows: list[dict[str, Any]], fmt: str) -> str:
    if fmt == "json":
        return to_json(rows)
    if fmt == "csv":
        return rows_to_csv(rows)
    raise UnsupportedFormatError(fmt, EXPORT_FORMATS)


def _write_file(path: Path, content: str):
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


async def handle_export_data(services, arguments: dict[str, Any]) -> str:
    sql = require_string(arguments, "sql")
    filename = require_string(arguments, "filename")
    fmt = str(arguments.get("format") or "json").lower()

    # Reject the format before touching the database
    if fmt not in EXPORT_FORMATS:
        raise UnsupportedFormatError(fmt, EXPORT_FORMATS)

    services.query_log.log("export_data", sql, "EXPORT")
    rows = await services.db.fetch_rows(sql)
    content = render_export(rows, fmt)

    path = Path(filename).expanduser().resolve()
    await asyncio.to_thread(_write_file, path, content)

    logger.info(f"📁 Exported {len(rows)} rows to {path}")
    return f"Data exported to {path}"
