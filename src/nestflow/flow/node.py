"""Leaf node of a flow: optional output, optional expectation, one decision.

Execution protocol:
    1. ``execute()`` runs the output, then the expectation.
    2. Without an expectation the node never blocks: it immediately calls
       ``on_input(None)`` within the same call.
    3. ``on_input(value)`` asks the decision function for the next step,
       merges the returned patch into the shared state *before* moving on, then
       either moves its manager to the named node or ends the manager's
       traversal.
"""

import logging
from typing import Any

from nestflow.core.constants import NodeStatus
from nestflow.core.decision import NodeDecisionFn, coerce_decision
from nestflow.core.errors import ProtocolViolation
from nestflow.core.interfaces import FlowParent
from nestflow.flow.emitters import Expectation, Output

logger = logging.getLogger(__name__)


class Node:
    """Atomic conversation step."""

    def __init__(
        self,
        name: str,
        decide: NodeDecisionFn,
        output: Output | None = None,
        expectation: Expectation | None = None,
    ):
        self.name = name
        self.decide = decide
        self.output = output
        self.expectation = expectation
        self.parent: FlowParent | None = None
        self.status = NodeStatus.idle

    def assign(self, parent: FlowParent) -> None:
        """Attach this node (and its emitters) to the manager that owns it.

        Emitters delegate straight to the manager, not to the node.
        """
        self.parent = parent
        if self.output is not None:
            self.output.assign(parent)
        if self.expectation is not None:
            self.expectation.assign(parent)
        self.status = NodeStatus.assigned

    def _require_parent(self) -> FlowParent:
        if self.parent is None:
            raise ProtocolViolation(f"Node '{self.name}' used before being assigned")
        return self.parent

    def execute(self) -> None:
        self._require_parent()
        self.status = NodeStatus.executing
        logger.debug(f"Executing node '{self.name}'")

        if self.output is not None:
            self.output.execute()
        if self.expectation is not None:
            self.status = NodeStatus.awaiting_input
            self.expectation.execute()
        else:
            # Nothing to wait for
            self.on_input(None)

    def on_input(self, value: Any) -> None:
        """Resolve this node with ``value`` (``None`` when nothing was asked)."""
        parent = self._require_parent()
        decision = coerce_decision(self.decide(value, parent.get_state()))

        if decision.state_patch:
            parent.merge_state(decision.state_patch)

        self.status = NodeStatus.resolved
        if decision.next_node is not None:
            logger.debug(f"Node '{self.name}' -> '{decision.next_node}'")
            parent.move_to_next_node(decision.next_node)
        else:
            logger.debug(f"Node '{self.name}' finished its manager's traversal")
            parent.end_session()

    def __repr__(self) -> str:
        return f"Node(name={self.name!r}, status={self.status.value})"
