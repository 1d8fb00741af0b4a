"""
Raw SQL audit log

Appends one JSON line per statement run through the raw-SQL tools to
<log_dir>/queries_<YYYY-MM-DD>.jsonl. Disabled when no directory is configured.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class QueryLogger:
    def __init__(self, log_dir: Optional[Path] = None, engine: str = ""):
        self.log_dir = Path(log_dir) if log_dir else None
        self.engine = engine

    @property
    def enabled(self) -> bool:
        return self.log_dir is not None

    def log(self, tool: str, query: str, query_type: str = "READ"):
        """Record a statement. Failures are logged and never raised."""
        if not self.enabled:
            return

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = self.log_dir / f"queries_{datetime.now().strftime('%Y-%m-%d')}.jsonl"

            log_entry = {
                "timestamp": datetime.now().isoformat(),
                "tool": tool,
                "query_type": query_type,
                "engine": self.engine,
                "query": (query or "").strip(),
            }

            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry) + "\n")

        except Exception as e:
            logger.warning(f"Failed to log query: {e}")
