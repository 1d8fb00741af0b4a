"""
Read-only safety policy (SAFE_MODE)

A single check runs before any handler touches the database:
- Mutating tools are refused outright.
- execute_query is limited to statements starting with SELECT, SHOW or DESCRIBE.
- Everything else passes.

Only the leading keyword of execute_query is inspected. A second statement
after a semicolon, or SQL given to explain_query/export_data, is not checked.
"""

from dataclasses import dataclass
from typing import Optional

# Tools that change data or schema
MUTATING_TOOLS = frozenset({
    'insert_data',
    'update_data',
    'delete_data',
    'execute_migration',
    'seed_data',
})

# Statement prefixes execute_query accepts in SAFE_MODE
READ_ONLY_PREFIXES = ('select', 'show', 'describe')


@dataclass(frozen=True)
class SafetyPolicy:
    """Process-wide policy, fixed at startup"""
    read_only: bool = False


def is_read_only_query(sql: str) -> bool:
    return sql.strip().lower().startswith(READ_ONLY_PREFIXES)


def check_safety(policy: SafetyPolicy, tool_name: str, sql: Optional[str] = None) -> tuple[bool, str]:
    """
    Decide whether a tool call may run under the policy.

    Returns: (allowed: bool, reason: str)
    """
    if not policy.read_only:
        return True, ""

    if tool_name in MUTATING_TOOLS:
        return False, f"Tool '{tool_name}' is disabled in SAFE_MODE."

    if tool_name == 'execute_query' and isinstance(sql, str) and sql:
        if not is_read_only_query(sql):
            return False, (
                "Read-only violation: only SELECT, SHOW or DESCRIBE queries "
                "are allowed in SAFE_MODE."
            )

    return True, ""
