"""Core interfaces (Protocols) for the interpreter.

``Node`` and ``FlowManager`` share no base class; both satisfy ``Executable``
so a manager can hold either as a child. ``FlowParent`` is what a child sees
through its assignment link.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from nestflow.core.payloads import ExpectationPayload, OutputPayload


@runtime_checkable
class FrontEnd(Protocol):
    """External collaborator that shows output and collects input.

    Only the outermost manager talks to it.
    """

    def show_output_to_user(self, payload: OutputPayload) -> None:
        """Render content."""
        ...

    def get_input_from_user(self, expectation: ExpectationPayload) -> None:
        """Solicit input; the value comes back later through ``on_input``."""
        ...

    def end_user_session(self) -> None:
        """The conversation is over; no further calls follow."""
        ...


class FlowParent(Protocol):
    """Delegation target held by an assigned child."""

    def emit_output(self, payload: OutputPayload | None) -> None: ...

    def emit_expectation(self, expectation: ExpectationPayload | None) -> None: ...

    def merge_state(self, patch: Mapping[str, Any]) -> None: ...

    def get_state(self) -> Mapping[str, Any]: ...

    def move_to_next_node(self, name: str) -> None: ...

    def end_session(self) -> None: ...


@runtime_checkable
class Executable(Protocol):
    """Anything that can sit in a manager's node map."""

    name: str

    def assign(self, parent: FlowParent) -> None: ...

    def execute(self) -> None: ...

    def on_input(self, value: Any) -> None: ...
