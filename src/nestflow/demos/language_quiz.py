"""Bundled demo script: a short programming-language quiz.

    main
    ├── ask_name_flow        What is your name? -> Hello! <name>
    ├── language_flow        Java or JavaScript? -> Sweet. -> 1 + 2 question,
    │                        up to three attempts with higher/lower hints
    └── farewell_flow        That’s it from my end ...

The question is only shown while no attempt was made; retries silently wait
for the next answer.
"""

import math
from collections.abc import Mapping
from typing import Any

from nestflow.core.decision import Decision, finish, goto
from nestflow.core.interfaces import FrontEnd
from nestflow.core.payloads import ChoiceExpectation, FreeTextExpectation, TextOutput
from nestflow.flow.builder import FlowBuilder
from nestflow.flow.emitters import Expectation, Output, only_when, render_template
from nestflow.flow.manager import FlowManager

MAX_ATTEMPTS = 3
EXPECTED_ANSWER = 3
LANGUAGES = ["Java", "JavaScript"]
PREFIX_BASES = {"0x": 16, "0o": 8, "0b": 2}
INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def as_number(value: Any) -> float:
    """Read an answer the way JavaScript's ``Number()`` reads a string.

    Blanks count as 0, ``0x``/``0o``/``0b`` prefixes are honoured (unsigned),
    ``Infinity`` is spelled out, and anything else that is not a plain decimal
    is NaN. Python-only spellings (``inf``, ``nan``, ``1_000``) are NaN too.
    """
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    if text in INFINITIES:
        return INFINITIES[text]
    base = PREFIX_BASES.get(text[:2].lower())
    if base is not None:
        digits = text[2:]
        if not digits.isalnum():
            return math.nan
        try:
            return float(int(digits, base))
        except ValueError:
            return math.nan
    if "_" in text or not any(ch.isdigit() for ch in text):
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def is_correct(state: Mapping[str, Any]) -> bool:
    return as_number(state.get("answer")) == EXPECTED_ANSWER


def first_attempt(state: Mapping[str, Any]) -> bool:
    return not state.get("attempts")


def answer_feedback(state: Mapping[str, Any], payload: TextOutput) -> TextOutput:
    if is_correct(state):
        text = "Correct!"
    elif state.get("attempts") == MAX_ATTEMPTS:
        text = "Noted. You are out of attempts."
    elif as_number(state.get("answer")) < EXPECTED_ANSWER:
        text = "You are lower"
    else:
        text = "You are higher"
    return payload.model_copy(update={"text": text})


def record_answer(response_node: str):
    def decide(value: Any, state: Mapping[str, Any]) -> Decision:
        return goto(response_node, answer=value, attempts=(state.get("attempts") or 0) + 1)

    return decide


def retry_or_finish(question_node: str):
    def decide(value: Any, state: Mapping[str, Any]) -> Decision:
        if is_correct(state) or (state.get("attempts") or 0) >= MAX_ATTEMPTS:
            return finish()
        return goto(question_node)

    return decide


def _add_question(builder: FlowBuilder, language: str, question: str, response: str) -> None:
    builder.node(
        question,
        decide=record_answer(response),
        output=Output(
            TextOutput(text=f"What is 1 + 2 in {language}?"),
            only_when(first_attempt),
        ),
        expectation=Expectation(FreeTextExpectation(max_length=100)),
    )
    builder.node(
        response,
        decide=retry_or_finish(question),
        output=Output(TextOutput(text=""), answer_feedback),
    )


def create_builder() -> FlowBuilder:
    """Register every node and manager of the quiz."""
    builder = FlowBuilder()

    builder.node(
        "ask_name",
        decide=lambda value, state: goto("respond_name", name=value),
        output=Output(TextOutput(text="What is your name?")),
        expectation=Expectation(FreeTextExpectation(max_length=100)),
    )
    builder.node(
        "respond_name",
        decide=lambda value, state: finish(),
        output=Output(TextOutput(text="Hello! ${name}"), render_template),
    )
    builder.manager(
        "ask_name_flow",
        nodes=["ask_name", "respond_name"],
        root="ask_name",
        decide=lambda state: goto("language_flow"),
    )

    builder.node(
        "ask_language",
        decide=lambda value, state: goto("confirm_language", language=value),
        output=Output(TextOutput(text="What are you comfortable with?")),
        expectation=Expectation(ChoiceExpectation(options=LANGUAGES)),
    )
    builder.node(
        "confirm_language",
        decide=lambda value, state: goto(
            "java_question" if state.get("language") == "Java" else "javascript_question"
        ),
        output=Output(TextOutput(text="Sweet.")),
    )
    _add_question(builder, "Java", "java_question", "java_response")
    _add_question(builder, "JavaScript", "javascript_question", "javascript_response")
    builder.manager(
        "language_flow",
        nodes=[
            "ask_language",
            "confirm_language",
            "java_question",
            "java_response",
            "javascript_question",
            "javascript_response",
        ],
        root="ask_language",
        decide=lambda state: goto("farewell_flow"),
    )

    builder.node(
        "farewell",
        decide=lambda value, state: finish(),
        output=Output(
            TextOutput(text="That’s it from my end. Hope you liked the chat ${name}"),
            render_template,
        ),
    )
    builder.manager("farewell_flow", nodes=["farewell"], root="farewell")

    builder.manager(
        "main",
        nodes=["ask_name_flow", "language_flow", "farewell_flow"],
        root="ask_name_flow",
    )
    return builder


def build_quiz(front_end: FrontEnd | None = None) -> FlowManager:
    """Build a fresh quiz tree."""
    return create_builder().build("main", front_end=front_end)
