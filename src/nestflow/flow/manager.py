"""Flow manager: a node that owns and sequences a named set of children.

A manager exposes the same ``assign``/``execute``/``on_input`` surface as a
``Node`` so it can sit in another manager's node map, which is what lets
sub-flows nest to any depth.

Every upward call (emitting, reading or merging state, reporting completion)
follows one rule: the outermost manager terminates it (front end or the
authoritative state), any other manager forwards it unchanged to its parent.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from nestflow.core.decision import Decision, ManagerDecisionFn, coerce_decision
from nestflow.core.errors import ConfigurationError, ProtocolViolation
from nestflow.core.interfaces import Executable, FlowParent, FrontEnd
from nestflow.core.payloads import ExpectationPayload, OutputPayload
from nestflow.core.state import ConversationState, create_empty_state, merge_state

logger = logging.getLogger(__name__)


def finish_traversal(state: Mapping[str, Any]) -> Decision:
    """Default manager decision: nothing to route to, defer upward."""
    return Decision()


class FlowManager:
    """Composite flow controller.

    Args:
        name: Name under which the manager is known to its parent.
        nodes: Children keyed by name (nodes or other managers).
        root: Name of the child the traversal starts from.
        decide: Own decision function, run with the state only once the
            internal traversal ends. A ``next_node`` names a sibling in the
            parent's node map.
        front_end: Front end; only used when this manager is the outermost one.
    """

    def __init__(
        self,
        name: str,
        nodes: Mapping[str, Executable],
        root: str,
        decide: ManagerDecisionFn | None = None,
        front_end: FrontEnd | None = None,
    ):
        if not nodes:
            raise ConfigurationError(f"Manager '{name}' has no nodes")
        if root not in nodes:
            raise ConfigurationError(
                f"Root node '{root}' of manager '{name}' is not one of: {', '.join(nodes)}"
            )

        self.name = name
        self.nodes: dict[str, Executable] = dict(nodes)
        self.root = root
        self.decide: ManagerDecisionFn = decide or finish_traversal
        self.front_end = front_end
        self.parent: FlowParent | None = None
        self.current_node_name: str | None = root

        # Only meaningful on the outermost manager
        self._state: ConversationState = create_empty_state()
        self._awaiting_input = False
        self._finished = False

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def get_node(self, name: str) -> Executable:
        try:
            return self.nodes[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown node '{name}' in manager '{self.name}'"
            ) from None

    @property
    def current_node(self) -> Executable:
        if self.current_node_name is None:
            raise ProtocolViolation(f"Manager '{self.name}' has no current node")
        return self.get_node(self.current_node_name)

    def active_path(self) -> list[str]:
        """Names of the current child at each level, from here down to the leaf."""
        if self.current_node_name is None:
            return []
        path = [self.current_node_name]
        child = self.nodes.get(self.current_node_name)
        if isinstance(child, FlowManager):
            path.extend(child.active_path())
        return path

    # ------------------------------------------------------------------
    # Executable surface
    # ------------------------------------------------------------------

    def assign(
        self,
        parent: FlowParent | None = None,
        state: Mapping[str, Any] | None = None,
    ) -> None:
        """Record the parent and/or adopt ``state``, then rewire the current child.

        Adopting a state only makes sense on the outermost manager, which owns
        the one authoritative copy.
        """
        if parent is not None:
            self.parent = parent
        if state is not None:
            self._state = dict(state)
        self.current_node.assign(self)

    def execute(self) -> None:
        if self.is_root and self._finished:
            raise ProtocolViolation(f"Session of manager '{self.name}' has already ended")
        self.current_node.execute()

    def on_input(self, value: Any) -> None:
        if self.is_root:
            if self._finished:
                raise ProtocolViolation("Input delivered after the session ended")
            if not self._awaiting_input:
                raise ProtocolViolation("Input delivered while no expectation is pending")
            # Cleared first: a failing decision leaves nothing pending
            self._awaiting_input = False
        self.current_node.on_input(value)

    # ------------------------------------------------------------------
    # Parent surface, used by children
    # ------------------------------------------------------------------

    def move_to_next_node(self, name: str) -> None:
        node = self.get_node(name)
        logger.debug(f"Manager '{self.name}': '{self.current_node_name}' -> '{name}'")
        self.current_node_name = name
        node.assign(self)
        self.execute()

    def end_session(self) -> None:
        """Handle the end of this manager's internal traversal."""
        decision = coerce_decision(self.decide(self.get_state()))

        if decision.state_patch:
            self.merge_state(decision.state_patch)

        if decision.next_node is not None:
            if self.parent is None:
                raise ConfigurationError(
                    f"Manager '{self.name}' routed to '{decision.next_node}' but has no parent"
                )
            logger.debug(f"Manager '{self.name}' routes to sibling '{decision.next_node}'")
            self.current_node_name = self.root
            self.parent.move_to_next_node(decision.next_node)
        elif self.parent is None:
            logger.info(f"Session of manager '{self.name}' ended")
            self._finished = True
            self._require_front_end().end_user_session()
        else:
            logger.debug(f"Manager '{self.name}' finished, deferring to its parent")
            self.current_node_name = self.root
            self.parent.end_session()

    def emit_output(self, payload: OutputPayload | None) -> None:
        if self.parent is not None:
            self.parent.emit_output(payload)
            return
        if payload is None:
            logger.debug("Empty output dropped")
            return
        self._require_front_end().show_output_to_user(payload)

    def emit_expectation(self, expectation: ExpectationPayload | None) -> None:
        if self.parent is not None:
            self.parent.emit_expectation(expectation)
            return
        self._awaiting_input = True
        if expectation is None:
            logger.warning("Empty expectation: waiting for input without asking the front end")
            return
        self._require_front_end().get_input_from_user(expectation)

    def merge_state(self, patch: Mapping[str, Any]) -> None:
        if self.parent is not None:
            self.parent.merge_state(patch)
            return
        self._state = merge_state(self._state, patch)
        logger.debug(f"State keys after merge: {sorted(self._state)}")

    def get_state(self) -> Mapping[str, Any]:
        if self.parent is not None:
            return self.parent.get_state()
        return MappingProxyType(self._state)

    # ------------------------------------------------------------------
    # Session status (outermost manager)
    # ------------------------------------------------------------------

    @property
    def state(self) -> Mapping[str, Any]:
        """Snapshot of the shared conversation state."""
        return dict(self.get_state())

    @property
    def awaiting_input(self) -> bool:
        if self.parent is not None:
            return False
        return self._awaiting_input

    @property
    def is_finished(self) -> bool:
        return self.parent is None and self._finished

    def _require_front_end(self) -> FrontEnd:
        if self.front_end is None:
            raise ConfigurationError(f"Outermost manager '{self.name}' has no front end")
        return self.front_end

    def __repr__(self) -> str:
        return (
            f"FlowManager(name={self.name!r}, current={self.current_node_name!r}, "
            f"nodes={list(self.nodes)!r})"
        )
