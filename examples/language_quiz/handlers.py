"""Decision functions and transforms used by the YAML language quiz.

Run with:
    nestflow run examples/language_quiz -m examples.language_quiz.handlers
"""

from nestflow import goto
from nestflow.config.registry import HandlerRegistry
from nestflow.demos.language_quiz import (
    MAX_ATTEMPTS,
    answer_feedback,
    first_attempt,
    is_correct,
)
from nestflow.flow.emitters import only_when, render_template

HandlerRegistry.transform("first_attempt_only")(only_when(first_attempt, render_template))
HandlerRegistry.transform("answer_feedback")(answer_feedback)


@HandlerRegistry.decision("record_answer")
def record_answer(value, state):
    return goto("feedback", answer=value, attempts=(state.get("attempts") or 0) + 1)


@HandlerRegistry.decision("retry_or_finish")
def retry_or_finish(value, state):
    if is_correct(state) or (state.get("attempts") or 0) >= MAX_ATTEMPTS:
        return None
    return goto("question")
