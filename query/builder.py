"""
Mutation Builder

Translates table/data/where mappings into parameterized SQL for each engine.
Values are always passed as driver parameters, never interpolated; only
identifiers are quoted into the statement text.

Supports:
- Single and multi-row INSERT (rows padded to the union of their columns)
- INSERT of rows with no columns (engine-specific default-row syntax)
- UPDATE/DELETE with equality filters (None becomes IS NULL)
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class Dialect:
    """Identifier quoting and parameter style for one engine"""
    name: str
    quote_char: str
    placeholder: Callable[[int], str]
    empty_insert: str  # appended after INSERT INTO <table>

    def quote(self, identifier: str) -> str:
        """Quote an identifier; dotted names (schema.table) are quoted per part."""
        q = self.quote_char
        parts = str(identifier).split(".")
        return ".".join(f"{q}{part.replace(q, q + q)}{q}" for part in parts)


POSTGRES_DIALECT = Dialect(
    name="postgres",
    quote_char='"',
    placeholder=lambda i: f"${i}",
    empty_insert="DEFAULT VALUES",
)

MYSQL_DIALECT = Dialect(
    name="mysql",
    quote_char="`",
    placeholder=lambda i: "%s",
    empty_insert="() VALUES ()",
)

SQLITE_DIALECT = Dialect(
    name="sqlite",
    quote_char='"',
    placeholder=lambda i: "?",
    empty_insert="DEFAULT VALUES",
)


def _union_columns(rows: list[dict[str, Any]]) -> list[str]:
    """Columns of all rows, in first-seen order."""
    columns: list[str] = []
    seen = set()
    for row in rows:
        for column in row:
            if column not in seen:
                seen.add(column)
                columns.append(column)
    return columns


class MutationBuilder:
    """Builds parameterized INSERT/UPDATE/DELETE statements for a dialect."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def _where_clause(self, where: dict[str, Any], params: list) -> str:
        if not where:
            return ""
        conditions = []
        for column, value in where.items():
            quoted = self.dialect.quote(column)
            if value is None:
                conditions.append(f"{quoted} IS NULL")
            else:
                params.append(value)
                conditions.append(f"{quoted} = {self.dialect.placeholder(len(params))}")
        return " WHERE " + " AND ".join(conditions)

    def build_insert(self, table: str, rows: list[dict[str, Any]]) -> list[tuple[str, list]]:
        """
        Build INSERT statements for rows.

        Returns a list of (sql, params). Rows sharing at least one column are
        written as a single multi-row INSERT; a batch with no columns at all
        becomes one default-row INSERT per row.
        """
        if not rows:
            return []

        table_sql = self.dialect.quote(table)
        columns = _union_columns(rows)

        if not columns:
            sql = f"INSERT INTO {table_sql} {self.dialect.empty_insert}"
            return [(sql, []) for _ in rows]

        params: list = []
        values_sql = []
        for row in rows:
            placeholders = []
            for column in columns:
                params.append(row.get(column))
                placeholders.append(self.dialect.placeholder(len(params)))
            values_sql.append(f"({', '.join(placeholders)})")

        column_sql = ", ".join(self.dialect.quote(c) for c in columns)
        sql = f"INSERT INTO {table_sql} ({column_sql}) VALUES {', '.join(values_sql)}"
        return [(sql, params)]

    def build_update(
        self,
        table: str,
        data: dict[str, Any],
        where: Optional[dict[str, Any]],
    ) -> tuple[str, list]:
        """Build an UPDATE. An empty where mapping updates every row."""
        if not data:
            raise ValueError("Empty data passed to update")

        params: list = []
        assignments = []
        for column, value in data.items():
            params.append(value)
            assignments.append(f"{self.dialect.quote(column)} = {self.dialect.placeholder(len(params))}")

        sql = f"UPDATE {self.dialect.quote(table)} SET {', '.join(assignments)}"
        sql += self._where_clause(where or {}, params)
        return sql, params

    def build_delete(self, table: str, where: Optional[dict[str, Any]]) -> tuple[str, list]:
        """Build a DELETE. An empty where mapping deletes every row."""
        params: list = []
        sql = f"DELETE FROM {self.dialect.quote(table)}"
        sql += self._where_clause(where or {}, params)
        return sql, params
