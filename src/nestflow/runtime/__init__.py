"""Runtime: conversation driver and reference front ends."""

from nestflow.runtime.conversation import Conversation
from nestflow.runtime.front_end import RecordingFrontEnd, TranscriptEvent

__all__ = ["Conversation", "RecordingFrontEnd", "TranscriptEvent"]
