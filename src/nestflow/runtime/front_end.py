"""Reference front ends.

``RecordingFrontEnd`` keeps everything the interpreter sends it, which makes
it suitable for tests, batch runs and embedding the interpreter behind another
transport.
"""

from dataclasses import dataclass
from typing import Any, Literal

from nestflow.core.payloads import ExpectationPayload, OutputPayload

EventKind = Literal["output", "expectation", "input", "end"]


@dataclass(frozen=True)
class TranscriptEvent:
    """One entry of a conversation transcript."""

    kind: EventKind
    payload: Any = None


class RecordingFrontEnd:
    """Front end that records outputs, expectations and the end of session."""

    def __init__(self) -> None:
        self.outputs: list[OutputPayload] = []
        self.expectations: list[ExpectationPayload] = []
        self.transcript: list[TranscriptEvent] = []
        self.ended = False

    def show_output_to_user(self, payload: OutputPayload) -> None:
        self.outputs.append(payload)
        self.transcript.append(TranscriptEvent("output", payload))

    def get_input_from_user(self, expectation: ExpectationPayload) -> None:
        self.expectations.append(expectation)
        self.transcript.append(TranscriptEvent("expectation", expectation))

    def end_user_session(self) -> None:
        self.ended = True
        self.transcript.append(TranscriptEvent("end"))

    def record_input(self, value: Any) -> None:
        """Note an input delivered by the caller, for transcript readability."""
        self.transcript.append(TranscriptEvent("input", value))

    @property
    def texts(self) -> list[str]:
        """Text of every output shown so far."""
        return [payload.text for payload in self.outputs]

    @property
    def last_expectation(self) -> ExpectationPayload | None:
        return self.expectations[-1] if self.expectations else None

    def clear(self) -> None:
        """Forget recorded outputs and expectations (keeps ``ended``)."""
        self.outputs.clear()
        self.expectations.clear()
        self.transcript.clear()
