"""
tools.py - Tool definitions and the registry that dispatches to them.

A tool is an immutable value: name, description, input schema and a handler
that takes the raw JSON the model sent and returns a string.

    @tool(
        name="read_file",
        description="Read file contents.",
        shape=InputShape([Field("path", "string")]),
    )
    def read_file(args: dict) -> str:
        return Path(args["path"]).read_text()

The registry is built once at startup and handed to the agent. It never
lets a tool failure escape as anything but a ToolDispatchError, and
`execute()` turns those into is_error tool results:

    registry = ToolRegistry([read_file, list_files, edit_file])
    registry.execute(tool_use_block)  -> ToolResultBlock
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from .errors import (
    DuplicateToolError,
    ToolDispatchError,
    ToolExecutionError,
    UnknownToolError,
)
from .messages import ToolResultBlock, ToolUseBlock
from .schema import InputShape, decode_input

Handler = Callable[[bytes], str]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict
    handler: Handler

    def to_schema(self) -> dict:
        """Tool param for the Messages API."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }


def tool(name: str, description: str, shape: InputShape):
    """
    Decorator to create a ToolDefinition from a function taking decoded args.

    The schema is generated here, so an unsupported field type fails when the
    module defining the tool is imported, not when the model calls it.
    """
    schema = shape.json_schema()

    def decorator(func: Callable[[dict], str]) -> ToolDefinition:
        def handler(raw: bytes) -> str:
            return func(decode_input(shape, raw))

        return ToolDefinition(
            name=name,
            description=description,
            input_schema=schema,
            handler=handler,
        )

    return decorator


class ToolRegistry:
    """
    Fixed set of tools for one conversation.

    Registration order is kept, so `specs()` is stable across requests.
    """

    def __init__(self, tools: Iterable[ToolDefinition] = ()):
        self._tools: dict[str, ToolDefinition] = {}
        for t in tools:
            self.register(t)

    def register(self, definition: ToolDefinition) -> "ToolRegistry":
        """Register a tool. Returns self for chaining."""
        if definition.name in self._tools:
            raise DuplicateToolError(f"tool '{definition.name}' is already registered")
        self._tools[definition.name] = definition
        return self

    def names(self) -> list[str]:
        return list(self._tools)

    def specs(self) -> list[dict]:
        return [t.to_schema() for t in self._tools.values()]

    def dispatch(self, name: str, raw_input: bytes) -> str:
        """
        Run a tool by name.

        Raises:
            UnknownToolError: no tool with that name
            ToolInputError: the handler rejected the input
            ToolExecutionError: anything else the handler raised
        """
        definition = self._tools.get(name)
        if definition is None:
            raise UnknownToolError(name)
        try:
            return definition.handler(raw_input)
        except ToolDispatchError:
            raise
        except Exception as e:
            raise ToolExecutionError(str(e) or type(e).__name__) from e

    def execute(self, tool_use: ToolUseBlock) -> ToolResultBlock:
        try:
            output = self.dispatch(tool_use.name, tool_use.input)
        except ToolDispatchError as e:
            return ToolResultBlock(tool_use.id, str(e), is_error=True)
        return ToolResultBlock(tool_use.id, output)

    def __len__(self) -> int:
        return len(self._tools)
