"""Shared conversation state helpers.

One mapping per conversation, owned by the outermost manager. It only grows
through shallow merges: keys in a patch overwrite, everything else stays.
"""

from collections.abc import Mapping
from typing import Any

ConversationState = dict[str, Any]


def create_empty_state() -> ConversationState:
    """Create an empty conversation state."""
    return {}


def merge_state(
    current: Mapping[str, Any] | None,
    patch: Mapping[str, Any] | None,
) -> ConversationState:
    """Return a new state with ``patch`` shallow-merged over ``current``.

    Neither argument is modified. Later keys win on collision and no key is
    ever removed, so a ``None`` value in the patch is stored as ``None``.
    """
    merged: ConversationState = dict(current or {})
    if patch:
        merged.update(patch)
    return merged
