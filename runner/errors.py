# runner/errors.py
from __future__ import annotations

"""
Error taxonomy for tool execution.

Handlers raise these; the registry turns them into failed ExecutionResults
tagged with `kind`, so nothing escapes the directive boundary.
"""


class ToolError(Exception):
    """Base class for every failure that can happen while running a tool."""

    kind = "ExecutionError"


class ToolNotFoundError(ToolError):
    kind = "NotFound"


class ToolValidationError(ToolError):
    kind = "ValidationError"


class ArgumentDecodeError(ToolError):
    kind = "ArgumentDecodeError"


class SecurityError(ToolError):
    kind = "SecurityError"


class ToolTimeoutError(ToolError):
    kind = "TimeoutError"


class ExecutionError(ToolError):
    kind = "ExecutionError"


class DuplicateToolError(ToolError):
    """Raised by Registry.register when the name is already taken."""

    kind = "DuplicateName"


class PluginDescriptorError(ToolError):
    """A plugin descriptor file could not be turned into a ToolDescriptor."""

    kind = "PluginDescriptorError"
