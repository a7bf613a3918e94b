"""Shared fakes: scripted model, in-memory terminal."""
import json

import pytest

from code_agent.messages import Message, Role, TextBlock, ToolUseBlock


def assistant(*blocks) -> Message:
    return Message(Role.ASSISTANT, blocks)


def text(value: str) -> TextBlock:
    return TextBlock(value)


def tool_use(id: str, name: str, **input) -> ToolUseBlock:
    return ToolUseBlock(id=id, name=name, input=json.dumps(input).encode())


class ScriptedTransport:
    """Replays canned assistant messages and records what it was sent."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def send(self, messages, tool_specs):
        self.calls.append((tuple(messages), tool_specs))
        if not self.replies:
            raise AssertionError("transport called more times than scripted")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class ListInput:
    def __init__(self, lines):
        self.lines = list(lines)
        self.reads = 0

    def next_line(self):
        self.reads += 1
        if not self.lines:
            return None
        return self.lines.pop(0)


class RecordingOutput:
    def __init__(self):
        self.texts = []
        self.tool_uses = []
        self.notices = []

    def emit(self, text):
        self.texts.append(text)

    def emit_tool_use(self, name, raw_input):
        self.tool_uses.append((name, json.loads(raw_input)))

    def emit_notice(self, text):
        self.notices.append(text)


@pytest.fixture
def output():
    return RecordingOutput()
