"""
Tool Dispatcher

Routes one tool call to its handler and always answers with a
CallToolResult; nothing raised by a handler or the backend escapes.

Flow:
1. Look up the handler (unknown name -> error)
2. Apply the safety policy (deny -> error, handler never runs)
3. Run the handler; any exception -> "Error: <message>"
"""

import logging
from typing import Any, Optional

from mcp import types

from container import ServiceContainer
from errors import PolicyViolationError, UnknownToolError
from handlers import get_handler
from safety import SafetyPolicy, check_safety
from tools import get_tool_catalog

logger = logging.getLogger(__name__)


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    """Uniform response envelope: one text item plus the error flag."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def error_result(error: Exception) -> types.CallToolResult:
    message = getattr(error, "message", None) or str(error) or error.__class__.__name__
    return text_result(f"Error: {message}", is_error=True)


class ToolDispatcher:
    """
    Dispatches tool calls for one backend under one safety policy.

    Both collaborators are fixed at construction; the policy is never read
    from the environment after startup.
    """

    def __init__(self, services: ServiceContainer, policy: SafetyPolicy):
        self.services = services
        self.policy = policy

    def list_tools(self) -> list[types.Tool]:
        return get_tool_catalog()

    async def handle(self, name: str, arguments: Optional[dict[str, Any]] = None) -> types.CallToolResult:
        arguments = arguments or {}

        try:
            handler = get_handler(name)
            if handler is None:
                raise UnknownToolError(name)

            sql = arguments.get("sql") if isinstance(arguments, dict) else None
            allowed, reason = check_safety(self.policy, name, sql)
            if not allowed:
                if isinstance(sql, str):
                    self.services.query_log.log(name, sql, "BLOCKED")
                raise PolicyViolationError(reason)

            text = await handler(self.services, arguments)
            return text_result(text)

        except (UnknownToolError, PolicyViolationError) as e:
            logger.warning(f"🚫 {name}: {e.message}")
            return error_result(e)
        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}", exc_info=True)
            return error_result(e)
