"""Core domain types shared by the interpreter."""

from nestflow.core.decision import Decision, coerce_decision, finish, goto
from nestflow.core.errors import ConfigurationError, NestflowError, ProtocolViolation
from nestflow.core.interfaces import Executable, FlowParent, FrontEnd
from nestflow.core.payloads import (
    ChoiceExpectation,
    ExpectationPayload,
    FreeTextExpectation,
    MarkdownOutput,
    OutputPayload,
    TextOutput,
)
from nestflow.core.state import ConversationState, create_empty_state, merge_state

__all__ = [
    "Decision",
    "coerce_decision",
    "finish",
    "goto",
    "NestflowError",
    "ConfigurationError",
    "ProtocolViolation",
    "Executable",
    "FlowParent",
    "FrontEnd",
    "TextOutput",
    "MarkdownOutput",
    "FreeTextExpectation",
    "ChoiceExpectation",
    "OutputPayload",
    "ExpectationPayload",
    "ConversationState",
    "create_empty_state",
    "merge_state",
]
