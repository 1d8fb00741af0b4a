"""
Tool error types

Handlers raise these (or let driver exceptions propagate); the dispatcher is
the only place that turns them into error responses.
"""


class ToolError(Exception):
    """Base class for errors raised while serving a tool call"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownToolError(ToolError):
    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class PolicyViolationError(ToolError):
    """Request rejected by the read-only safety policy"""


class MissingArgumentError(ToolError):
    def __init__(self, argument: str):
        super().__init__(f"Missing required argument: {argument}")
        self.argument = argument


class InvalidArgumentError(ToolError):
    pass


class UnsupportedFormatError(ToolError):
    def __init__(self, fmt: str, valid: tuple):
        super().__init__(f"Unsupported export format '{fmt}'. Valid formats: {', '.join(valid)}")
        self.format = fmt
