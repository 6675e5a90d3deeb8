"""Tests for Output/Expectation emitters and built-in transforms."""

import pytest

from nestflow.core.errors import ProtocolViolation
from nestflow.core.payloads import ChoiceExpectation, FreeTextExpectation, TextOutput
from nestflow.flow.emitters import Expectation, Output, identity, only_when, render_template
from tests.mocks import StubParent


class TestOutput:
    def test_execute_emits_static_payload_once(self):
        # Arrange
        parent = StubParent()
        output = Output(TextOutput(text="What is your name?"))
        output.assign(parent)

        # Act
        output.execute()

        # Assert
        assert parent.outputs == [TextOutput(text="What is your name?")]
        assert parent.expectations == []

    def test_transform_receives_state_and_payload(self):
        seen = []

        def transform(state, payload):
            seen.append((dict(state), payload))
            return payload

        parent = StubParent({"name": "Ada"})
        output = Output(TextOutput(text="Hi"), transform)
        output.assign(parent)

        output.execute()

        assert seen == [({"name": "Ada"}, TextOutput(text="Hi"))]

    def test_empty_transform_result_is_forwarded_as_none(self):
        parent = StubParent()
        output = Output(TextOutput(text="Hi"), lambda state, payload: None)
        output.assign(parent)

        output.execute()

        assert parent.outputs == [None]

    def test_unassigned_output_raises(self):
        with pytest.raises(ProtocolViolation):
            Output(TextOutput(text="Hi")).execute()

    def test_clone_is_unassigned_and_shares_payload(self):
        output = Output(TextOutput(text="Hi"), render_template)
        output.assign(StubParent())

        copy = output.clone()

        assert isinstance(copy, Output)
        assert copy.parent is None
        assert copy.payload is output.payload
        assert copy.transform is render_template


class TestExpectation:
    def test_execute_emits_expectation(self):
        parent = StubParent()
        expectation = Expectation(ChoiceExpectation(options=["Java", "JavaScript"]))
        expectation.assign(parent)

        expectation.execute()

        assert parent.expectations == [ChoiceExpectation(options=["Java", "JavaScript"])]
        assert parent.outputs == []

    def test_clone_keeps_type(self):
        assert isinstance(Expectation(FreeTextExpectation()).clone(), Expectation)


class TestTransforms:
    def test_identity(self):
        payload = TextOutput(text="x")

        assert identity({}, payload) is payload

    def test_render_template_substitutes_state(self):
        rendered = render_template({"name": "Ada"}, TextOutput(text="Hello! ${name}"))

        assert rendered == TextOutput(text="Hello! Ada")

    def test_render_template_leaves_unknown_placeholders(self):
        rendered = render_template({}, TextOutput(text="Hello! ${name}"))

        assert rendered.text == "Hello! ${name}"

    def test_render_template_handles_none_payload(self):
        assert render_template({"name": "Ada"}, None) is None

    def test_only_when_suppresses_when_predicate_false(self):
        transform = only_when(lambda state: not state.get("attempts"))

        assert transform({"attempts": 1}, TextOutput(text="Q?")) is None
        assert transform({"attempts": 0}, TextOutput(text="Q?")) == TextOutput(text="Q?")
        assert transform({}, TextOutput(text="Q?")) == TextOutput(text="Q?")

    def test_only_when_chains_inner_transform(self):
        transform = only_when(lambda state: True, render_template)

        assert transform({"lang": "Java"}, TextOutput(text="In ${lang}?")).text == "In Java?"
