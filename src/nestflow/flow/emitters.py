"""Output and Expectation emitters.

An emitter wraps a static payload and a transform. Right before emitting it
computes the actual payload from the shared state and hands it to the nearest
manager. A transform may return ``None`` to emit nothing.
"""

import logging
import string
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from nestflow.core.errors import ProtocolViolation
from nestflow.core.interfaces import FlowParent
from nestflow.core.payloads import ExpectationPayload, OutputPayload

logger = logging.getLogger(__name__)

P = TypeVar("P")

Transform = Callable[[Mapping[str, Any], Any], Any]


def identity(state: Mapping[str, Any], payload: P) -> P:
    """Emit the static payload unchanged."""
    return payload


def render_template(state: Mapping[str, Any], payload: Any) -> Any:
    """Substitute ``${key}`` placeholders in ``payload.text`` from the state.

    Unknown placeholders are left as they are.
    """
    if payload is None:
        return None
    rendered = string.Template(payload.text).safe_substitute(
        {key: str(value) for key, value in state.items()}
    )
    return payload.model_copy(update={"text": rendered})


def only_when(predicate: Callable[[Mapping[str, Any]], bool], then: Transform = identity) -> Transform:
    """Build a transform that emits nothing unless ``predicate(state)`` holds."""

    def transform(state: Mapping[str, Any], payload: Any) -> Any:
        if not predicate(state):
            return None
        return then(state, payload)

    return transform


class _Emitter:
    def __init__(self, payload: Any = None, transform: Transform = identity):
        self.payload = payload
        self.transform = transform
        self.parent: FlowParent | None = None

    def assign(self, parent: FlowParent) -> None:
        self.parent = parent

    def clone(self) -> "_Emitter":
        """Return an unassigned copy sharing payload and transform."""
        return type(self)(self.payload, self.transform)

    def _compute(self) -> Any:
        if self.parent is None:
            raise ProtocolViolation(f"{type(self).__name__} executed before being assigned")
        result = self.transform(self.parent.get_state(), self.payload)
        if result is None:
            logger.debug(f"{type(self).__name__} transform suppressed emission")
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(payload={self.payload!r})"


class Output(_Emitter):
    """Content shown to the user."""

    payload: OutputPayload | None

    def execute(self) -> None:
        payload = self._compute()
        assert self.parent is not None
        self.parent.emit_output(payload)


class Expectation(_Emitter):
    """Description of the input solicited from the user."""

    payload: ExpectationPayload | None

    def execute(self) -> None:
        expectation = self._compute()
        assert self.parent is not None
        self.parent.emit_expectation(expectation)
