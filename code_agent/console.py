"""
console.py - Terminal input and output for the agent.

Output here is a side channel for the person at the keyboard; none of it is
added to the conversation.
"""

import json
from typing import Callable, Optional, Protocol

BLUE = "\u001b[94m"
YELLOW = "\u001b[93m"
GREEN = "\u001b[92m"
RESET = "\u001b[0m"

EXIT_WORDS = ("exit", "quit", "q")
SUMMARY_CHARS = 200


class InputSource(Protocol):
    def next_line(self) -> Optional[str]:
        """Next line of user input, or None at end of input."""
        ...


class OutputSink(Protocol):
    def emit(self, text: str) -> None:
        ...

    def emit_tool_use(self, name: str, raw_input: bytes) -> None:
        ...

    def emit_notice(self, text: str) -> None:
        ...


def summarize_input(raw_input: bytes, limit: int = SUMMARY_CHARS) -> str:
    text = raw_input.decode("utf-8", errors="replace") if isinstance(raw_input, bytes) else str(raw_input)
    try:
        text = json.dumps(json.loads(text), ensure_ascii=False)
    except ValueError:
        pass
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class ConsoleInput:
    def __init__(self, read: Callable[[str], str] = input):
        self._read = read

    def next_line(self) -> Optional[str]:
        while True:
            try:
                line = self._read(f"{BLUE}You{RESET}: ").strip()
            except (EOFError, KeyboardInterrupt):
                return None
            if line.lower() in EXIT_WORDS:
                return None
            if line:
                return line


class ConsoleOutput:
    def __init__(self, write: Callable[[str], None] = print):
        self._write = write

    def emit(self, text: str) -> None:
        self._write(f"{YELLOW}Claude{RESET}: {text}")

    def emit_tool_use(self, name: str, raw_input: bytes) -> None:
        self._write(f"{GREEN}tool{RESET}: {name}({summarize_input(raw_input)})")

    def emit_notice(self, text: str) -> None:
        self._write(f"  {text}")
