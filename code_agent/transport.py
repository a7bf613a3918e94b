"""
transport.py - The single blocking call to the model.

Anything with a `send(messages, tool_specs) -> Message` method can drive the
agent; AnthropicTransport is the real one, tests use scripted fakes.
"""

import json
from typing import Protocol, Sequence

import anthropic

from .debug import log_api_call, log_api_response, observe
from .errors import TransportError
from .messages import Message, Role, TextBlock, ToolUseBlock


class Transport(Protocol):
    def send(self, messages: Sequence[Message], tool_specs: list[dict]) -> Message:
        ...


def from_sdk_content(content) -> list:
    """Convert SDK content blocks to ours. Thinking and other blocks are dropped."""
    blocks = []
    for block in content:
        if block.type == "text":
            blocks.append(TextBlock(block.text))
        elif block.type == "tool_use":
            blocks.append(ToolUseBlock(
                id=block.id,
                name=block.name,
                input=json.dumps(block.input).encode("utf-8"),
            ))
    return blocks


class AnthropicTransport:
    """Messages API over the official SDK. No retries beyond the SDK's own."""

    def __init__(self, client: anthropic.Anthropic, model: str,
                 max_tokens: int = 1024, system_prompt: str = ""):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt

    @observe(name="ModelCall")
    def send(self, messages: Sequence[Message], tool_specs: list[dict]) -> Message:
        kwargs = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [m.to_param() for m in messages],
            "tools": tool_specs,
        }
        if self.system_prompt:
            kwargs["system"] = self.system_prompt
        log_api_call(kwargs)

        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise TransportError(f"model request failed: {e}") from e

        reply = Message(Role.ASSISTANT, from_sdk_content(response.content))
        log_api_response(response, reply.to_param())
        return reply
