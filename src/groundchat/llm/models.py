from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolDeclaration(BaseModel):
    """A callable the model may invoke while answering."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Function name exposed to the model")
    description: str = Field(default="", description="What the function does")
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON schema of the function arguments"
    )


class FunctionCall(BaseModel):
    """A function invocation requested by the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class CandidatePart(BaseModel):
    """One part of a candidate's content (text parts only matter here)."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None


class Candidate(BaseModel):
    """One generation candidate."""

    model_config = ConfigDict(frozen=True)

    parts: list[CandidatePart] = Field(default_factory=list)


class LLMResponse(BaseModel):
    """Provider-neutral response of a "generate with optional tools" call.

    ``text`` is the consolidated text when the provider produced one.
    ``function_calls`` and ``candidates`` expose the structured result for
    callers that need to look past it.
    """

    model_config = ConfigDict(frozen=True)

    text: str | None = Field(default=None, description="Consolidated text, if any")
    function_calls: list[FunctionCall] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    model: str = Field(default="", description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
