"""Registry of decision functions and transforms referenced from YAML."""

from collections.abc import Callable
from typing import Any

from nestflow.core.errors import ConfigurationError
from nestflow.flow.emitters import Transform, identity, render_template

DecisionHandler = Callable[..., Any]


class HandlerRegistry:
    """Named decision functions and emitter transforms.

    Node decisions take ``(value, state)``, flow decisions take ``(state)``;
    both return a ``Decision`` (or ``None``). Transforms take
    ``(state, payload)`` and return a payload or ``None``.

    Usage:
        @HandlerRegistry.decision("record_answer")
        def record_answer(value, state):
            return goto("feedback", answer=value)
    """

    _default_instance: "HandlerRegistry | None" = None

    def __init__(self) -> None:
        self._decisions: dict[str, DecisionHandler] = {}
        self._transforms: dict[str, Transform] = {
            "identity": identity,
            "template": render_template,
        }

    @classmethod
    def get_default(cls) -> "HandlerRegistry":
        """Get the default global registry instance."""
        if cls._default_instance is None:
            cls._default_instance = cls()
        return cls._default_instance

    @classmethod
    def reset_default(cls) -> None:
        """Drop the default instance (tests, reloads)."""
        cls._default_instance = None

    def register_decision(self, name: str, handler: DecisionHandler) -> None:
        self._decisions[name] = handler

    def register_transform(self, name: str, transform: Transform) -> None:
        self._transforms[name] = transform

    @classmethod
    def decision(cls, name: str) -> Callable[[DecisionHandler], DecisionHandler]:
        """Decorator registering a decision function on the default registry."""

        def decorator(handler: DecisionHandler) -> DecisionHandler:
            cls.get_default().register_decision(name, handler)
            return handler

        return decorator

    @classmethod
    def transform(cls, name: str) -> Callable[[Transform], Transform]:
        """Decorator registering a transform on the default registry."""

        def decorator(transform: Transform) -> Transform:
            cls.get_default().register_transform(name, transform)
            return transform

        return decorator

    def get_decision(self, name: str) -> DecisionHandler:
        if name not in self._decisions:
            raise ConfigurationError(f"Unknown decision function: {name}")
        return self._decisions[name]

    def get_transform(self, name: str) -> Transform:
        if name not in self._transforms:
            raise ConfigurationError(f"Unknown transform: {name}")
        return self._transforms[name]

    def __contains__(self, name: str) -> bool:
        return name in self._decisions or name in self._transforms
