"""
errors.py - Error taxonomy for the agent.

Only TransportError ends a session. Every ToolDispatchError is turned into
an is_error tool_result so the model can see what went wrong and retry.
"""

from enum import Enum


class AgentError(Exception):
    """Base class for everything raised by this package."""


class ConfigError(AgentError):
    """Bad environment or command-line configuration."""


class SchemaError(AgentError):
    """A tool input field uses a type the schema generator cannot map."""


class DuplicateToolError(AgentError):
    """A tool name was registered twice."""


class ToolErrorKind(Enum):
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_INPUT = "invalid_input"
    EXECUTION_FAILED = "execution_failed"


class ToolDispatchError(AgentError):
    """Recoverable failure while dispatching a tool call."""

    kind = ToolErrorKind.EXECUTION_FAILED


class UnknownToolError(ToolDispatchError):
    kind = ToolErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str):
        super().__init__(f"tool '{name}' not found")
        self.name = name


class ToolInputError(ToolDispatchError):
    kind = ToolErrorKind.INVALID_INPUT


class ToolExecutionError(ToolDispatchError):
    kind = ToolErrorKind.EXECUTION_FAILED


class TransportError(AgentError):
    """The model call failed. Fatal for the session, never retried."""
