"""Bundled demo flows."""

from nestflow.demos.language_quiz import build_quiz, create_builder

__all__ = ["build_quiz", "create_builder"]
