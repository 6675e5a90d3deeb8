"""Conversation driver.

Wraps one outermost manager, its front end and its state. The interpreter is
purely reactive: ``start()`` runs until the first expectation (or the end) and
returns; each ``deliver()`` runs one turn and returns.
"""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from nestflow.core.errors import ProtocolViolation
from nestflow.core.interfaces import FrontEnd
from nestflow.flow.manager import FlowManager
from nestflow.observability.logging import ContextLogger
from nestflow.runtime.front_end import RecordingFrontEnd


class Conversation:
    """One conversation: a flow tree, a front end and the shared state.

    Args:
        root: Outermost manager (freshly built, not shared with any other
            conversation).
        front_end: Front end that renders outputs and collects inputs.
        state: Initial shared state.
        conversation_id: Identifier used in log records.
    """

    def __init__(
        self,
        root: FlowManager,
        front_end: FrontEnd,
        state: Mapping[str, Any] | None = None,
        conversation_id: str | None = None,
    ):
        if not root.is_root:
            raise ProtocolViolation(f"Manager '{root.name}' is nested and cannot drive a conversation")
        self.root = root
        self.front_end = front_end
        self.initial_state = dict(state or {})
        self.conversation_id = conversation_id or f"conv_{uuid.uuid4().hex[:8]}"
        self.started = False
        self.turns = 0
        self.log = ContextLogger(__name__).with_context(conversation_id=self.conversation_id)

    def start(self) -> None:
        """Assign the state and run the outermost manager until it waits or ends."""
        if self.started:
            raise ProtocolViolation(f"Conversation {self.conversation_id} already started")
        self.started = True
        self.root.front_end = self.front_end
        self.root.assign(state=self.initial_state)
        self.log.info(f"Conversation {self.conversation_id} started at '{self.root.name}'")
        self.root.execute()

    def deliver(self, value: Any) -> None:
        """Deliver one input to the node waiting for it.

        Raises:
            ProtocolViolation: If the conversation has not started, has ended
                or nothing is waiting for input.
        """
        if not self.started:
            raise ProtocolViolation("Input delivered before the conversation started")
        # Rejected inputs must not reach the transcript or the turn count
        if self.root.is_finished:
            raise ProtocolViolation("Input delivered after the session ended")
        if not self.root.awaiting_input:
            raise ProtocolViolation("Input delivered while no expectation is pending")
        if isinstance(self.front_end, RecordingFrontEnd):
            self.front_end.record_input(value)
        self.turns += 1
        self.log.debug(f"Turn {self.turns} at {' > '.join(self.root.active_path())}")
        self.root.on_input(value)
        if self.root.is_finished:
            self.log.info(f"Conversation {self.conversation_id} ended after {self.turns} turns")

    def run(self, inputs: Iterable[Any]) -> None:
        """Start if needed, then deliver ``inputs`` in order until the session ends."""
        if not self.started:
            self.start()
        for value in inputs:
            if self.is_finished:
                break
            self.deliver(value)

    @property
    def state(self) -> dict[str, Any]:
        return self.root.state

    @property
    def is_finished(self) -> bool:
        return self.root.is_finished

    @property
    def awaiting_input(self) -> bool:
        return self.root.awaiting_input

    @property
    def active_path(self) -> list[str]:
        return self.root.active_path()
