"""Tests for the Conversation driver."""

import pytest

from nestflow.core.decision import finish, goto
from nestflow.core.errors import ProtocolViolation
from nestflow.core.payloads import FreeTextExpectation, TextOutput
from nestflow.flow.builder import FlowBuilder
from nestflow.flow.emitters import Expectation, Output, render_template
from nestflow.runtime.conversation import Conversation


def echo_builder() -> FlowBuilder:
    b = FlowBuilder()
    b.node(
        "ask",
        decide=lambda value, state: goto("echo", last=value, count=state.get("count", 0) + 1),
        output=Output(TextOutput(text="Say something")),
        expectation=Expectation(FreeTextExpectation()),
    )
    b.node(
        "echo",
        decide=lambda value, state: goto("ask") if state["last"] != "stop" else finish(),
        output=Output(TextOutput(text="You said ${last}"), render_template),
    )
    b.manager("main", nodes=["ask", "echo"], root="ask")
    return b


@pytest.fixture
def conversation(front_end) -> Conversation:
    return Conversation(echo_builder().build("main"), front_end, conversation_id="conv_test")


class TestConversation:
    def test_start_runs_until_first_expectation(self, conversation, front_end):
        conversation.start()

        assert front_end.texts == ["Say something"]
        assert conversation.awaiting_input
        assert not conversation.is_finished
        assert conversation.active_path == ["ask"]

    def test_initial_state_is_adopted(self, front_end):
        conversation = Conversation(echo_builder().build("main"), front_end, state={"count": 10})
        conversation.start()

        conversation.deliver("hi")

        assert conversation.state == {"count": 11, "last": "hi"}

    def test_deliver_runs_one_turn(self, conversation, front_end):
        conversation.start()

        conversation.deliver("hi")

        assert front_end.texts == ["Say something", "You said hi", "Say something"]
        assert conversation.state == {"last": "hi", "count": 1}
        assert conversation.turns == 1

    def test_run_feeds_inputs_until_end(self, conversation, front_end):
        conversation.run(["a", "b", "stop", "ignored"])

        assert conversation.is_finished
        assert front_end.ended
        assert conversation.turns == 3
        assert conversation.state["count"] == 3

    def test_transcript_records_inputs(self, conversation, front_end):
        conversation.run(["stop"])

        kinds = [event.kind for event in front_end.transcript]
        assert kinds == ["output", "expectation", "input", "output", "end"]

    def test_start_twice_raises(self, conversation):
        conversation.start()

        with pytest.raises(ProtocolViolation, match="already started"):
            conversation.start()

    def test_deliver_before_start_raises(self, conversation):
        with pytest.raises(ProtocolViolation, match="before the conversation started"):
            conversation.deliver("hi")

    def test_deliver_after_end_raises(self, conversation):
        conversation.run(["stop"])

        with pytest.raises(ProtocolViolation):
            conversation.deliver("again")

    def test_rejected_input_is_not_counted(self, conversation, front_end):
        """
        GIVEN a conversation that already ended
        WHEN another input is delivered
        THEN it is rejected without touching the turn count or the transcript
        """
        conversation.run(["stop"])
        turns, events = conversation.turns, len(front_end.transcript)

        with pytest.raises(ProtocolViolation, match="after the session ended"):
            conversation.deliver("late")

        assert conversation.turns == turns == 1
        assert len(front_end.transcript) == events == 5

    def test_input_with_nothing_pending_is_not_counted(self, front_end):
        """A failed turn leaves nothing pending; later input is rejected uncounted."""

        def explode(value, state):
            raise RuntimeError("decision failed")

        builder = FlowBuilder()
        builder.node("wait", decide=explode, expectation=Expectation(FreeTextExpectation()))
        builder.manager("main", nodes=["wait"], root="wait")
        conversation = Conversation(builder.build("main"), front_end)
        conversation.start()
        with pytest.raises(RuntimeError):
            conversation.deliver("x")

        with pytest.raises(ProtocolViolation, match="no expectation is pending"):
            conversation.deliver("y")

        assert conversation.turns == 1
        assert [event.kind for event in front_end.transcript] == ["expectation", "input"]

    def test_nested_manager_cannot_drive_a_conversation(self, front_end, stub_parent):
        root = echo_builder().build("main")
        root.assign(stub_parent)

        with pytest.raises(ProtocolViolation, match="nested"):
            Conversation(root, front_end)

    def test_conversation_id_is_generated(self, front_end):
        conversation = Conversation(echo_builder().build("main"), front_end)

        assert conversation.conversation_id.startswith("conv_")

    def test_conversations_from_one_builder_are_independent(self, front_end):
        """Each conversation owns its own tree and state."""
        builder = echo_builder()
        first = Conversation(builder.build("main"), front_end)
        second = Conversation(builder.build("main"), type(front_end)())

        first.start()
        second.start()
        first.deliver("one")

        assert first.state == {"last": "one", "count": 1}
        assert second.state == {}
        assert second.awaiting_input
