"""The YAML version of the quiz behaves like the bundled one."""

import importlib
from pathlib import Path

import pytest

from nestflow.config.compiler import compile_config
from nestflow.config.loader import ConfigLoader
from nestflow.runtime.conversation import Conversation

EXAMPLE_DIR = Path(__file__).parents[2] / "examples" / "language_quiz"


@pytest.fixture
def yaml_quiz(clean_default_registry, front_end) -> Conversation:
    handlers = importlib.import_module("examples.language_quiz.handlers")
    importlib.reload(handlers)
    config = ConfigLoader.load(EXAMPLE_DIR)
    root = compile_config(config).build(config.root)
    return Conversation(root, front_end)


def test_yaml_quiz_retry_loop(yaml_quiz, front_end):
    yaml_quiz.run(["Ada", "Java", "5", "1", "3"])

    assert front_end.texts == [
        "What is your name?",
        "Hello! Ada",
        "What are you comfortable with?",
        "Sweet.",
        "What is 1 + 2 in Java?",
        "You are higher",
        "You are lower",
        "Correct!",
        "That’s it from my end. Hope you liked the chat **Ada**",
    ]
    assert yaml_quiz.state["attempts"] == 3
    assert yaml_quiz.is_finished


def test_yaml_quiz_out_of_attempts(yaml_quiz, front_end):
    yaml_quiz.run(["Ada", "JavaScript", "5", "9", "1"])

    assert "Noted. You are out of attempts." in front_end.texts
    assert front_end.outputs[-1].kind == "markdown"
    assert front_end.ended
