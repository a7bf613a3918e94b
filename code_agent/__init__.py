"""Terminal agent that lets Claude read, list and edit local files."""
from .agent import Agent, LoopState
from .errors import (
    AgentError,
    ConfigError,
    DuplicateToolError,
    SchemaError,
    ToolDispatchError,
    ToolErrorKind,
    ToolExecutionError,
    ToolInputError,
    TransportError,
    UnknownToolError,
)
from .file_tools import build_file_tools
from .messages import Conversation, Message, Role, TextBlock, ToolResultBlock, ToolUseBlock
from .schema import Field, InputShape, decode_input, generate_schema
from .tools import ToolDefinition, ToolRegistry, tool
from .transport import AnthropicTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "LoopState",
    "AgentError",
    "ConfigError",
    "DuplicateToolError",
    "SchemaError",
    "ToolDispatchError",
    "ToolErrorKind",
    "ToolExecutionError",
    "ToolInputError",
    "TransportError",
    "UnknownToolError",
    "build_file_tools",
    "Conversation",
    "Message",
    "Role",
    "TextBlock",
    "ToolResultBlock",
    "ToolUseBlock",
    "Field",
    "InputShape",
    "decode_input",
    "generate_schema",
    "ToolDefinition",
    "ToolRegistry",
    "tool",
    "AnthropicTransport",
    "Transport",
]
