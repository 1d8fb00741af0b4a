"""
Pytest configuration and shared fixtures for the Universal DB MCP Server tests

APPROACH: Use a real SQLiteBackend on a temporary file
- Each test gets a fresh database file and connection
- Complete test isolation (no shared state)
- Tools are called through the same ToolDispatcher the server uses
- MySQL/PostgreSQL specifics are covered with mocks in test_database.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import DatabaseConfig, GeneratorConfig
from container import ServiceContainer
from database import SQLiteBackend
from dispatcher import ToolDispatcher
from generators import FakerGenerator
from safety import SafetyPolicy
from utils.query_log import QueryLogger
from tests.handler_test_utils import HandlerTestHelper


SCHEMA_SQL = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    name TEXT,
    email VARCHAR(255),
    age INTEGER
);

CREATE TABLE posts (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL REFERENCES users(id),
    title TEXT NOT NULL DEFAULT 'untitled'
);
"""

SAMPLE_USERS = [
    {"name": "Ada Lovelace", "email": "ada@example.com", "age": 36},
    {"name": "Alan Turing", "email": "alan@example.com", "age": 41},
    {"name": "Grace Hopper", "email": "grace@example.com", "age": 85},
]


@pytest.fixture
def sqlite_path(tmp_path) -> Path:
    return tmp_path / "test.sqlite"


@pytest.fixture
async def db_connection(sqlite_path):
    """
    Connected SQLiteBackend with the test schema loaded.

    This is what handlers use in production when DB_TYPE=sqlite3.
    """
    db = SQLiteBackend(DatabaseConfig.for_sqlite(str(sqlite_path)))
    await db.connect()
    await db.execute_script(SCHEMA_SQL)

    yield db

    await db.disconnect()


@pytest.fixture
async def seeded_db(db_connection):
    """db_connection with SAMPLE_USERS inserted"""
    await db_connection.insert("users", [dict(u) for u in SAMPLE_USERS])
    return db_connection


@pytest.fixture
def query_log_dir(tmp_path) -> Path:
    return tmp_path / "query_logs"


@pytest.fixture
def services(db_connection, query_log_dir):
    """ServiceContainer with a deterministic generator and an active query log"""
    return ServiceContainer(
        db_connection,
        generator=FakerGenerator(GeneratorConfig(seed=1234)),
        query_log=QueryLogger(query_log_dir, engine=db_connection.engine.value),
    )


@pytest.fixture
def dispatcher(services):
    return ToolDispatcher(services, SafetyPolicy(read_only=False))


@pytest.fixture
def safe_dispatcher(services):
    """Dispatcher running with SAFE_MODE enabled"""
    return ToolDispatcher(services, SafetyPolicy(read_only=True))


@pytest.fixture
def helper(dispatcher):
    return HandlerTestHelper(dispatcher)


@pytest.fixture
def safe_helper(safe_dispatcher):
    return HandlerTestHelper(safe_dispatcher)

