"""Decision results returned by node and manager decision functions."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from nestflow.core.errors import ConfigurationError


@dataclass(frozen=True)
class Decision:
    """Outcome of a decision function.

    ``next_node`` names the next step inside the same manager (or, for a
    manager's own decision, a sibling in its parent). ``None`` means the
    traversal is finished and control goes back to the owner.
    """

    next_node: str | None = None
    state_patch: Mapping[str, Any] | None = field(default=None)

    @property
    def finishes(self) -> bool:
        return self.next_node is None


NodeDecisionFn: TypeAlias = Callable[[Any, Mapping[str, Any]], "Decision | None"]
ManagerDecisionFn: TypeAlias = Callable[[Mapping[str, Any]], "Decision | None"]

_DECISION_KEYS = frozenset({"next_node", "state_patch"})


def goto(next_node: str, **patch: Any) -> Decision:
    """Move to ``next_node``, optionally merging keyword arguments into state."""
    return Decision(next_node=next_node, state_patch=patch or None)


def finish(**patch: Any) -> Decision:
    """End the current traversal, optionally merging keyword arguments into state."""
    return Decision(state_patch=patch or None)


def coerce_decision(value: Any) -> Decision:
    """Normalize what a decision function returned.

    Raises:
        ConfigurationError: If the value is neither None, a Decision nor a
            mapping made of ``next_node``/``state_patch`` keys.
    """
    if value is None:
        return Decision()
    if isinstance(value, Decision):
        return value
    if isinstance(value, Mapping) and set(value) <= _DECISION_KEYS:
        return Decision(
            next_node=value.get("next_node"),
            state_patch=value.get("state_patch"),
        )
    raise ConfigurationError(f"Decision function returned unsupported value: {value!r}")
