"""
SQL building and argument validation for the tool handlers.
"""

from .builder import (
    Dialect,
    MutationBuilder,
    MYSQL_DIALECT,
    POSTGRES_DIALECT,
    SQLITE_DIALECT,
)

__all__ = [
    "Dialect",
    "MutationBuilder",
    "MYSQL_DIALECT",
    "POSTGRES_DIALECT",
    "SQLITE_DIALECT",
]
