"""
Server configuration
Supports MySQL, PostgreSQL and SQLite backends
Environment-aware configuration based on APP_ENV
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes")


class DatabaseEngine(str, Enum):
    """Supported relational engines. Values match the DB_TYPE setting."""
    MYSQL = "mysql2"
    POSTGRES = "pg"
    SQLITE = "sqlite3"

    @classmethod
    def parse(cls, value: str) -> "DatabaseEngine":
        """Resolve a DB_TYPE value (or a common alias) to an engine"""
        normalized = (value or "").strip().lower()
        aliases = {
            "mysql": cls.MYSQL,
            "mysql2": cls.MYSQL,
            "pg": cls.POSTGRES,
            "postgres": cls.POSTGRES,
            "postgresql": cls.POSTGRES,
            "sqlite": cls.SQLITE,
            "sqlite3": cls.SQLITE,
        }
        if normalized not in aliases:
            valid = ", ".join(e.value for e in cls)
            raise ValueError(f"Unsupported DB_TYPE '{value}'. Valid values: {valid}")
        return aliases[normalized]


def load_app_environment(mode: Optional[str] = None, base_path: Optional[Path] = None) -> str:
    """
    Load environment variables from the appropriate .env file.

    Priority:
    1. Explicit 'mode' argument
    2. APP_ENV environment variable
    3. Default to 'development'

    Loads .env.{mode} if it exists, then .env. Variables already present in
    the process environment are never overridden.
    """
    if not mode:
        mode = os.getenv('APP_ENV', 'development')

    base_path = base_path or Path.cwd()
    for env_file in (base_path / f'.env.{mode}', base_path / '.env'):
        if env_file.exists():
            logger.info(f"Loading config from {env_file}")
            load_dotenv(env_file, override=False)

    return mode


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in TRUE_VALUES


@dataclass
class DatabaseConfig:
    """Connection settings for the single configured backend"""

    engine: DatabaseEngine
    host: str = "localhost"
    port: int = 3306
    database: str = "test"
    user: str = "root"
    password: str = ""
    sqlite_path: str = "./database.sqlite"

    # SSL settings (PostgreSQL only)
    ssl_mode: str = "prefer"

    @property
    def asyncpg_dsn(self) -> str:
        """Get asyncpg DSN format"""
        return (
            f"postgresql://{self.user}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.database}"
        )

    @property
    def display_target(self) -> str:
        """Human-readable connection target for logs (never includes the password)"""
        if self.engine == DatabaseEngine.SQLITE:
            return str(Path(self.sqlite_path).resolve())
        return f"{self.database} at {self.host}:{self.port}"

    @classmethod
    def from_environment(cls) -> 'DatabaseConfig':
        """
        Load configuration from environment variables

        Environment variables:
        - DB_TYPE: mysql2, pg or sqlite3 (default: mysql2)
        - DB_HOST: Database host (default: localhost)
        - DB_PORT: Database port (default: 5432 for pg, 3306 otherwise)
        - DB_USER: Database user (default: root)
        - DB_PASSWORD: Database password
        - DB_DATABASE: Database name (default: test)
        - SQLITE_PATH: Database file for sqlite3 (default: ./database.sqlite)
        - DB_SSL_MODE: PostgreSQL SSL mode (default: prefer)
        """
        engine = DatabaseEngine.parse(os.getenv('DB_TYPE', DatabaseEngine.MYSQL.value))
        default_port = '5432' if engine == DatabaseEngine.POSTGRES else '3306'

        return cls(
            engine=engine,
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', default_port)),
            database=os.getenv('DB_DATABASE', 'test'),
            user=os.getenv('DB_USER', 'root'),
            password=os.getenv('DB_PASSWORD', ''),
            sqlite_path=os.getenv('SQLITE_PATH', './database.sqlite'),
            ssl_mode=os.getenv('DB_SSL_MODE', 'prefer'),
        )

    @classmethod
    def for_sqlite(cls, path: str) -> 'DatabaseConfig':
        """Configuration for a local SQLite file"""
        return cls(engine=DatabaseEngine.SQLITE, sqlite_path=path)


@dataclass
class GeneratorConfig:
    """
    Configuration for synthetic data generation (seed_data).

    Environment Variables:
    - FAKER_LOCALE: Faker locale (default: en_US)
    - FAKER_SEED: Optional integer seed for reproducible output
    """
    locale: str = "en_US"
    seed: Optional[int] = None

    @classmethod
    def from_environment(cls) -> "GeneratorConfig":
        seed = os.getenv("FAKER_SEED")
        return cls(
            locale=os.getenv("FAKER_LOCALE", "en_US"),
            seed=int(seed) if seed else None,
        )


@dataclass
class ServerConfig:
    """Everything the server reads from the environment at startup"""

    database: DatabaseConfig
    generator: GeneratorConfig
    safe_mode: bool = False
    query_log_dir: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, mode: Optional[str] = None) -> "ServerConfig":
        """
        Load the full server configuration.

        Environment variables (in addition to DatabaseConfig/GeneratorConfig):
        - SAFE_MODE: 'true' restricts the server to read-only tools
        - QUERY_LOG_DIR: Directory for the JSONL query audit log (disabled if unset)
        - LOG_LEVEL: Logging level (default: INFO)
        """
        load_app_environment(mode)

        query_log_dir = os.getenv('QUERY_LOG_DIR')
        return cls(
            database=DatabaseConfig.from_environment(),
            generator=GeneratorConfig.from_environment(),
            safe_mode=_env_flag('SAFE_MODE'),
            query_log_dir=Path(query_log_dir) if query_log_dir else None,
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        )


# Example .env file content
ENV_TEMPLATE = """
# Application Environment
APP_ENV=development

# Backend: mysql2, pg or sqlite3
DB_TYPE=mysql2

# Server-based engines (mysql2, pg)
DB_HOST=localhost
DB_PORT=3306
DB_USER=root
DB_PASSWORD=your_password_here
DB_DATABASE=test
# DB_SSL_MODE=prefer

# File-based engine (sqlite3)
# SQLITE_PATH=./database.sqlite

# Read-only mode: blocks insert/update/delete/migration/seed tools
SAFE_MODE=false

# Seeding
# FAKER_LOCALE=en_US
# FAKER_SEED=42

# Optional JSONL audit log of raw SQL
# QUERY_LOG_DIR=./query_logs
"""


def create_env_file(filepath: str = ".env"):
    """Create a template .env file"""
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(ENV_TEMPLATE)
    print(f"Created template .env file at {filepath}")
