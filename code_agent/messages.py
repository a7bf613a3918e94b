"""
messages.py - Conversation state.

A conversation is an append-only list of messages. Each message has a role
and an ordered list of content blocks:

    TextBlock        plain text from either side
    ToolUseBlock     the assistant asking for a tool (input kept as raw JSON)
    ToolResultBlock  our answer to a ToolUseBlock, matched by tool_use_id

The whole history is resent on every request, so nothing here is ever
mutated or removed once appended.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Role(Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class TextBlock:
    text: str

    def to_param(self) -> dict:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ToolUseBlock:
    id: str
    name: str
    input: bytes  # raw JSON, only the tool's handler interprets it

    def to_param(self) -> dict:
        return {
            "type": "tool_use",
            "id": self.id,
            "name": self.name,
            "input": json.loads(self.input) if self.input else {},
        }


@dataclass(frozen=True)
class ToolResultBlock:
    tool_use_id: str
    content: str
    is_error: bool = False

    def to_param(self) -> dict:
        return {
            "type": "tool_result",
            "tool_use_id": self.tool_use_id,
            "content": self.content,
            "is_error": self.is_error,
        }


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock]


@dataclass(frozen=True)
class Message:
    role: Role
    content: tuple

    def __post_init__(self):
        object.__setattr__(self, "content", tuple(self.content))

    @classmethod
    def user_text(cls, text: str) -> "Message":
        return cls(Role.USER, (TextBlock(text),))

    def tool_uses(self) -> list[ToolUseBlock]:
        return [b for b in self.content if isinstance(b, ToolUseBlock)]

    def texts(self) -> list[str]:
        return [b.text for b in self.content if isinstance(b, TextBlock)]

    def to_param(self) -> dict:
        return {
            "role": self.role.value,
            "content": [b.to_param() for b in self.content],
        }


class Conversation:
    """Ordered history of one interactive session."""

    def __init__(self):
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def messages(self) -> tuple:
        return tuple(self._messages)

    def to_params(self) -> list[dict]:
        return [m.to_param() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)
