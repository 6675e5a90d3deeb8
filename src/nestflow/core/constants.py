"""Core constants and enums."""

from enum import Enum


class NodeStatus(str, Enum):
    """Lifecycle of a node inside its owning manager."""

    idle = "idle"
    assigned = "assigned"
    executing = "executing"
    awaiting_input = "awaiting_input"
    resolved = "resolved"


DEFAULT_MAX_LENGTH = 100
