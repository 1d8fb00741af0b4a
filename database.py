"""
Database backends and result normalization
One long-lived async connection to MySQL (aiomysql), PostgreSQL (asyncpg) or SQLite (aiosqlite)
"""

import asyncio
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional, Sequence
from uuid import UUID

import aiomysql
import aiosqlite
import asyncpg

from config import DatabaseConfig, DatabaseEngine
from query.builder import (
    Dialect,
    MutationBuilder,
    MYSQL_DIALECT,
    POSTGRES_DIALECT,
    SQLITE_DIALECT,
)

logger = logging.getLogger(__name__)

_LENGTH_RE = re.compile(r"\((\d+)\)")

# asyncpg binds by the placeholder's inferred type and rejects strings for
# dates or numbers and dicts for json; tool arguments arrive as JSON values
_PG_PARSERS = {
    'date': date.fromisoformat,
    'timestamp': datetime.fromisoformat,
    'timestamptz': datetime.fromisoformat,
    'time': time.fromisoformat,
    'timetz': time.fromisoformat,
    'int2': int,
    'int4': int,
    'int8': int,
    'float4': float,
    'float8': float,
    'numeric': Decimal,
    'uuid': UUID,
}

_PG_BOOLEANS = {'true': True, 't': True, 'yes': True, '1': True,
                'false': False, 'f': False, 'no': False, '0': False}


def _coerce_pg_param(value: Any, type_name: str) -> Any:
    if type_name in ('json', 'jsonb'):
        return json.dumps(value) if isinstance(value, (dict, list)) else value
    if not isinstance(value, str):
        return value
    if type_name == 'bool':
        return _PG_BOOLEANS.get(value.strip().lower(), value)
    parser = _PG_PARSERS.get(type_name)
    if parser is None:
        return value
    try:
        return parser(value.strip())
    except (ValueError, ArithmeticError):
        # asyncpg reports the mismatch against the column type
        return value


def coerce_pg_params(params: Sequence[Any], parameter_types: Sequence[Any]) -> list[Any]:
    """Convert JSON-shaped arguments to the Python types asyncpg expects for each placeholder."""
    if len(params) != len(parameter_types):
        return list(params)
    return [_coerce_pg_param(value, param_type.name) for value, param_type in zip(params, parameter_types)]


@dataclass
class PostgresResult:
    """Native result of a raw PostgreSQL statement"""
    rows: list = field(default_factory=list)
    status: str = ""


@dataclass
class MutationResult:
    rowcount: int = 0
    lastrowid: Optional[int] = None


def normalize_rows(engine: DatabaseEngine, result: Any) -> list[dict[str, Any]]:
    """
    Convert a driver-native raw result into a list of row dicts.

    Shapes by engine:
    - MySQL: (rows, description) two-tuple, rows from a DictCursor
    - PostgreSQL: PostgresResult with a `rows` list of asyncpg.Record
    - SQLite: list of aiosqlite.Row
    """
    if engine == DatabaseEngine.MYSQL:
        rows, _description = result
        return [dict(row) for row in rows]
    if engine == DatabaseEngine.POSTGRES:
        return [dict(row) for row in result.rows]
    if engine == DatabaseEngine.SQLITE:
        return [dict(row) for row in result]
    raise ValueError(f"Unknown database engine: {engine}")


def _affected_rows(status: str) -> int:
    """Row count from a PostgreSQL command tag such as 'UPDATE 3' or 'INSERT 0 2'."""
    last = (status or "").rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


class DatabaseBackend(ABC):
    """
    A single connection to one relational engine.

    Every statement runs under one asyncio.Lock so concurrent tool calls never
    interleave on the driver connection. There is no transaction scope beyond
    a single statement.
    """

    engine: DatabaseEngine
    dialect: Dialect

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.connection = None
        self.builder = MutationBuilder(self.dialect)
        self._lock = asyncio.Lock()

    def _require_connection(self):
        if self.connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.connection

    @abstractmethod
    async def connect(self):
        """Open the connection"""

    @abstractmethod
    async def disconnect(self):
        """Close the connection"""

    @abstractmethod
    async def raw(self, sql: str, params: Sequence[Any] = ()) -> Any:
        """Run one statement and return the driver-native result"""

    @abstractmethod
    async def execute(self, sql: str, params: Sequence[Any] = ()) -> MutationResult:
        """Run one statement and return the affected row count"""

    @abstractmethod
    async def execute_script(self, sql: str):
        """Run a migration script"""

    @abstractmethod
    async def list_tables(self) -> list[str]:
        """Names of the user tables"""

    @abstractmethod
    async def column_info(self, table: str) -> dict[str, dict[str, Any]]:
        """Column metadata keyed by column name; {} for an unknown table"""

    async def foreign_keys(self) -> Optional[list[dict[str, Any]]]:
        """
        Foreign-key links as {table, column, referencedTable, referencedColumn}.
        Returns None when the engine has no implementation.
        """
        return None

    async def fetch_rows(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run a statement and return its rows as dicts"""
        return normalize_rows(self.engine, await self.raw(sql, params))

    async def insert(self, table: str, rows: list[dict[str, Any]]) -> list[int]:
        """
        Insert rows and return the last inserted id where the engine reports one.
        """
        ids: list[int] = []
        for sql, params in self.builder.build_insert(table, rows):
            result = await self.execute(sql, params)
            ids = [result.lastrowid] if result.lastrowid else []
        return ids

    async def update(self, table: str, data: dict[str, Any], where: dict[str, Any]) -> int:
        sql, params = self.builder.build_update(table, data, where)
        result = await self.execute(sql, params)
        return result.rowcount

    async def delete(self, table: str, where: dict[str, Any]) -> int:
        sql, params = self.builder.build_delete(table, where)
        result = await self.execute(sql, params)
        return result.rowcount

    async def check_connection(self) -> bool:
        """
        Check if database connection is healthy

        Returns:
            True if connection is healthy
        """
        try:
            rows = await self.fetch_rows("SELECT 1 AS ok")
            return bool(rows) and rows[0].get("ok") == 1
        except Exception as e:
            logger.error(f"Connection check failed: {e}")
            return False


class PostgresBackend(DatabaseBackend):
    engine = DatabaseEngine.POSTGRES
    dialect = POSTGRES_DIALECT

    async def connect(self):
        if self.connection is not None:
            logger.warning("Connection already initialized")
            return

        # asyncpg expects: True (require SSL), False (disable SSL), or 'prefer'
        if self.config.ssl_mode == 'require':
            ssl_setting = True
        elif self.config.ssl_mode == 'disable':
            ssl_setting = False
        else:
            ssl_setting = 'prefer'

        try:
            self.connection = await asyncpg.connect(
                host=self.config.host,
                port=self.config.port,
                database=self.config.database,
                user=self.config.user,
                password=self.config.password,
                ssl=ssl_setting,
            )
            logger.info(f"✅ Connected to PostgreSQL at {self.config.host}:{self.config.port}")
        except Exception as e:
            logger.error(f"❌ Failed to connect to database: {e}")
            raise

    async def disconnect(self):
        if self.connection is not None:
            await self.connection.close()
            self.connection = None
            logger.info("PostgreSQL connection closed")

    async def _run_prepared(self, sql: str, params: Sequence[Any]) -> PostgresResult:
        conn = self._require_connection()
        async with self._lock:
            statement = await conn.prepare(sql)
            args = coerce_pg_params(params, statement.get_parameters())
            rows = await statement.fetch(*args)
            return PostgresResult(rows=list(rows), status=statement.get_statusmsg() or "")

    async def raw(self, sql: str, params: Sequence[Any] = ()) -> PostgresResult:
        return await self._run_prepared(sql, params)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> MutationResult:
        result = await self._run_prepared(sql, params)
        return MutationResult(rowcount=_affected_rows(result.status))

    async def execute_script(self, sql: str):
        conn = self._require_connection()
        async with self._lock:
            # Without arguments asyncpg uses the simple query protocol,
            # which accepts several ;-separated statements
            await conn.execute(sql)

    async def list_tables(self) -> list[str]:
        rows = await self.fetch_rows(
            """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = 'public'
            ORDER BY table_name
            """
        )
        return [row['table_name'] for row in rows]

    async def column_info(self, table: str) -> dict[str, dict[str, Any]]:
        schema, _, name = table.rpartition(".")
        rows = await self.fetch_rows(
            """
            SELECT
                column_name,
                data_type,
                character_maximum_length,
                is_nullable,
                column_default
            FROM information_schema.columns
            WHERE table_name = $1
            AND table_schema = COALESCE(NULLIF($2, ''), current_schema())
            ORDER BY ordinal_position
            """,
            (name, schema),
        )
        return {
            row['column_name']: {
                'type': row['data_type'],
                'maxLength': row['character_maximum_length'],
                'nullable': row['is_nullable'] == 'YES',
                'defaultValue': row['column_default'],
            }
            for row in rows
        }


class MySQLBackend(DatabaseBackend):
    engine = DatabaseEngine.MYSQL
    dialect = MYSQL_DIALECT

    async def connect(self):
        if self.connection is not None:
            logger.warning("Connection already initialized")
            return

        try:
            self.connection = await aiomysql.connect(
                host=self.config.host,
                port=self.config.port,
                user=self.config.user,
                password=self.config.password,
                db=self.config.database,
                autocommit=True,
                cursorclass=aiomysql.DictCursor,
            )
            logger.info(f"✅ Connected to MySQL at {self.config.host}:{self.config.port}")
        except Exception as e:
            logger.error(f"❌ Failed to connect to database: {e}")
            raise

    async def disconnect(self):
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.info("MySQL connection closed")

    async def raw(self, sql: str, params: Sequence[Any] = ()) -> tuple[list, Any]:
        conn = self._require_connection()
        async with self._lock:
            async with conn.cursor() as cursor:
                # args=None keeps literal % signs in the SQL untouched
                await cursor.execute(sql, tuple(params) or None)
                rows = await cursor.fetchall()
                return list(rows or []), cursor.description

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> MutationResult:
        conn = self._require_connection()
        async with self._lock:
            async with conn.cursor() as cursor:
                await cursor.execute(sql, tuple(params) or None)
                return MutationResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)

    async def execute_script(self, sql: str):
        # One statement per call; the connection is not opened with MULTI_STATEMENTS
        await self.execute(sql)

    async def list_tables(self) -> list[str]:
        # Rows look like {"Tables_in_<database>": "<name>"}
        rows = await self.fetch_rows("SHOW TABLES")
        return sorted(next(iter(row.values())) for row in rows if row)

    async def column_info(self, table: str) -> dict[str, dict[str, Any]]:
        rows = await self.fetch_rows(
            """
            SELECT
                COLUMN_NAME AS column_name,
                DATA_TYPE AS data_type,
                CHARACTER_MAXIMUM_LENGTH AS character_maximum_length,
                IS_NULLABLE AS is_nullable,
                COLUMN_DEFAULT AS column_default
            FROM information_schema.columns
            WHERE table_schema = DATABASE() AND table_name = %s
            ORDER BY ORDINAL_POSITION
            """,
            (table,),
        )
        return {
            row['column_name']: {
                'type': row['data_type'],
                'maxLength': row['character_maximum_length'],
                'nullable': row['is_nullable'] == 'YES',
                'defaultValue': row['column_default'],
            }
            for row in rows
        }

    async def foreign_keys(self) -> Optional[list[dict[str, Any]]]:
        rows = await self.fetch_rows(
            """
            SELECT TABLE_NAME AS table_name, COLUMN_NAME AS column_name,
                   REFERENCED_TABLE_NAME AS referenced_table_name,
                   REFERENCED_COLUMN_NAME AS referenced_column_name
            FROM information_schema.KEY_COLUMN_USAGE
            WHERE TABLE_SCHEMA = %s AND REFERENCED_TABLE_NAME IS NOT NULL
            """,
            (self.config.database,),
        )
        return [
            {
                'table': row['table_name'],
                'column': row['column_name'],
                'referencedTable': row['referenced_table_name'],
                'referencedColumn': row['referenced_column_name'],
            }
            for row in rows
        ]


class SQLiteBackend(DatabaseBackend):
    engine = DatabaseEngine.SQLITE
    dialect = SQLITE_DIALECT

    async def connect(self):
        if self.connection is not None:
            logger.warning("Connection already initialized")
            return

        try:
            # isolation_level=None: autocommit, every statement stands alone
            self.connection = await aiosqlite.connect(self.config.sqlite_path, isolation_level=None)
            self.connection.row_factory = aiosqlite.Row
            logger.info(f"✅ Opened SQLite database {self.config.display_target}")
        except Exception as e:
            logger.error(f"❌ Failed to open database: {e}")
            raise

    async def disconnect(self):
        if self.connection is not None:
            await self.connection.close()
            self.connection = None
            logger.info("SQLite connection closed")

    async def raw(self, sql: str, params: Sequence[Any] = ()) -> list:
        conn = self._require_connection()
        async with self._lock:
            async with conn.execute(sql, tuple(params)) as cursor:
                return list(await cursor.fetchall())

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> MutationResult:
        conn = self._require_connection()
        async with self._lock:
            async with conn.execute(sql, tuple(params)) as cursor:
                return MutationResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)

    async def execute_script(self, sql: str):
        conn = self._require_connection()
        async with self._lock:
            await conn.executescript(sql)

    async def list_tables(self) -> list[str]:
        rows = await self.fetch_rows(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        return [row['name'] for row in rows]

    async def column_info(self, table: str) -> dict[str, dict[str, Any]]:
        rows = await self.fetch_rows(f"PRAGMA table_info({self.dialect.quote(table)})")
        info = {}
        for row in rows:
            declared = row['type'] or ''
            length = _LENGTH_RE.search(declared)
            info[row['name']] = {
                'type': _LENGTH_RE.sub('', declared).strip().lower(),
                'maxLength': int(length.group(1)) if length else None,
                'nullable': not row['notnull'],
                'defaultValue': row['dflt_value'],
            }
        return info

    async def foreign_keys(self) -> Optional[list[dict[str, Any]]]:
        # No catalog view for foreign keys: one PRAGMA per table
        relationships = []
        for table in await self.list_tables():
            rows = await self.fetch_rows(f"PRAGMA foreign_key_list({self.dialect.quote(table)})")
            for row in rows:
                relationships.append({
                    'table': table,
                    'column': row['from'],
                    'referencedTable': row['table'],
                    'referencedColumn': row['to'],
                })
        return relationships


BACKENDS: dict[DatabaseEngine, type[DatabaseBackend]] = {
    DatabaseEngine.MYSQL: MySQLBackend,
    DatabaseEngine.POSTGRES: PostgresBackend,
    DatabaseEngine.SQLITE: SQLiteBackend,
}


def create_backend(config: DatabaseConfig) -> DatabaseBackend:
    """
    Create the backend for the configured engine (not yet connected)

    Args:
        config: Database configuration

    Returns:
        DatabaseBackend instance
    """
    return BACKENDS[config.engine](config)
