"""Nestflow - hierarchical flow interpreter for scripted conversations.

A flow is a tree of nodes grouped into managers; each manager is seen by its
parent as a single node, so sub-flows nest to any depth.

Quick start:
    from nestflow import Conversation, RecordingFrontEnd
    from nestflow.demos import build_quiz

    front_end = RecordingFrontEnd()
    conversation = Conversation(build_quiz(), front_end)
    conversation.start()
    conversation.deliver("Ada")
"""

from nestflow.__version__ import __version__
from nestflow.core.decision import Decision, finish, goto
from nestflow.core.errors import ConfigurationError, NestflowError, ProtocolViolation
from nestflow.core.payloads import (
    ChoiceExpectation,
    FreeTextExpectation,
    MarkdownOutput,
    TextOutput,
)
from nestflow.flow.builder import FlowBuilder
from nestflow.flow.emitters import Expectation, Output, only_when, render_template
from nestflow.flow.manager import FlowManager
from nestflow.flow.node import Node
from nestflow.runtime.conversation import Conversation
from nestflow.runtime.front_end import RecordingFrontEnd

__all__ = [
    # Version info
    "__version__",
    # Decisions
    "Decision",
    "goto",
    "finish",
    # Errors
    "NestflowError",
    "ConfigurationError",
    "ProtocolViolation",
    # Payloads
    "TextOutput",
    "MarkdownOutput",
    "FreeTextExpectation",
    "ChoiceExpectation",
    # Flow
    "Output",
    "Expectation",
    "only_when",
    "render_template",
    "Node",
    "FlowManager",
    "FlowBuilder",
    # Runtime
    "Conversation",
    "RecordingFrontEnd",
]
