"""Payload types exchanged between the interpreter and the front end.

Outputs describe content to show, expectations describe the input being
solicited. Both are closed discriminated unions on ``kind`` so a front end can
handle every case exhaustively.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from nestflow.core.constants import DEFAULT_MAX_LENGTH


class TextOutput(BaseModel):
    """Plain text shown to the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = Field(description="Text to display")


class MarkdownOutput(BaseModel):
    """Markdown content, rendered by front ends that support it."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["markdown"] = "markdown"
    text: str = Field(description="Markdown source")


class FreeTextExpectation(BaseModel):
    """Free text input bounded by a maximum length."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["free_text"] = "free_text"
    max_length: int = Field(default=DEFAULT_MAX_LENGTH, gt=0, description="Max characters")


class ChoiceExpectation(BaseModel):
    """One value among a closed list of options."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["choice"] = "choice"
    options: list[str] = Field(min_length=1, description="Allowed answers")


OutputPayload = Annotated[TextOutput | MarkdownOutput, Field(discriminator="kind")]

ExpectationPayload = Annotated[
    FreeTextExpectation | ChoiceExpectation,
    Field(discriminator="kind"),
]
