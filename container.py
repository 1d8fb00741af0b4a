"""
Service Container - shared collaborators for every tool handler

Built once at startup; handlers receive it as their first argument.
"""

from typing import Optional

from database import DatabaseBackend
from generators import FakerGenerator
from utils.query_log import QueryLogger


class ServiceContainer:
    """
    Container for the backend connection and the external helpers.

    Attributes:
        db: The single DatabaseBackend shared by all handlers
        generator: Synthetic value generator used by seed_data
        query_log: Raw SQL audit log (no-op unless configured)
    """
    def __init__(
        self,
        db: DatabaseBackend,
        generator: Optional[FakerGenerator] = None,
        query_log: Optional[QueryLogger] = None,
    ):
        self.db = db
        self.generator = generator or FakerGenerator()
        self.query_log = query_log or QueryLogger(engine=db.engine.value)
