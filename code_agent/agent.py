"""
agent.py - The turn controller.

Two states:

    AWAITING_USER  read a line; end of input stops the loop. The line becomes
                   a user message and we move to MODEL_TURN.

    MODEL_TURN     send the whole conversation plus tool specs, append the
                   reply, print its text, run its tool calls in order. If
                   there were tool calls, their results go back as one user
                   message and we stay in MODEL_TURN. Otherwise back to
                   AWAITING_USER.

Tool calls run one at a time in the order the model listed them. Tool
failures become is_error results; a TransportError ends the run.
"""

import uuid
from enum import Enum
from typing import Optional

from .console import InputSource, OutputSink
from .debug import observe, score_trace, update_trace
from .messages import Conversation, Message, Role, TextBlock
from .tools import ToolRegistry
from .transport import Transport

EMPTY_REPLY = "(no response)"


class LoopState(Enum):
    AWAITING_USER = "awaiting_user"
    MODEL_TURN = "model_turn"
    STOPPED = "stopped"


class Agent:
    def __init__(
        self,
        transport: Transport,
        registry: ToolRegistry,
        input_source: InputSource,
        output_sink: OutputSink,
        max_autonomous_turns: Optional[int] = None,
    ):
        self.transport = transport
        self.registry = registry
        self.input_source = input_source
        self.output = output_sink
        self.max_autonomous_turns = max_autonomous_turns
        self.conversation = Conversation()
        self.state = LoopState.AWAITING_USER
        self.session_id = str(uuid.uuid4())
        self._turns_since_user = 0

    @observe(name="AgentSession")
    def run(self) -> Conversation:
        """Run until end of input. TransportError propagates to the caller."""
        update_trace(session_id=self.session_id)
        tool_specs = self.registry.specs()

        try:
            while self.state is not LoopState.STOPPED:
                if self.state is LoopState.AWAITING_USER:
                    self._await_user()
                else:
                    self._model_turn(tool_specs)
        except Exception as e:
            self.state = LoopState.STOPPED
            score_trace(name="completion", value=0, comment=str(e))
            raise

        score_trace(name="completion", value=1, comment="Input exhausted")
        return self.conversation

    def _await_user(self) -> None:
        line = self.input_source.next_line()
        if line is None:
            self.state = LoopState.STOPPED
            return
        self.conversation.append(Message.user_text(line))
        self._turns_since_user = 0
        self.state = LoopState.MODEL_TURN

    def _model_turn(self, tool_specs: list[dict]) -> None:
        reply = self.transport.send(self.conversation.messages(), tool_specs)
        for text in reply.texts():
            self.output.emit(text)

        if not reply.content:
            # The API rejects an assistant turn with empty content on resend.
            reply = Message(Role.ASSISTANT, (TextBlock(EMPTY_REPLY),))
        self.conversation.append(reply)
        self._turns_since_user += 1

        tool_uses = reply.tool_uses()
        if not tool_uses:
            self.state = LoopState.AWAITING_USER
            return

        results = []
        for tool_use in tool_uses:
            self.output.emit_tool_use(tool_use.name, tool_use.input)
            results.append(self.registry.execute(tool_use))
        self.conversation.append(Message(Role.USER, results))

        if self.max_autonomous_turns and self._turns_since_user >= self.max_autonomous_turns:
            self.output.emit_notice(
                f"Reached max autonomous turns ({self.max_autonomous_turns}), waiting for input"
            )
            self.state = LoopState.AWAITING_USER
