"""Observability module for Nestflow."""

from nestflow.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
