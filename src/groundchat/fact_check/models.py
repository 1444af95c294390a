"""Data models for fact checking.

The outward text shown to the user is kept exactly as produced; the verdict
records which of the (otherwise indistinguishable) cases produced it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Outward texts for the non-verdict cases
SKIPPED_OPINION_TEXT = "Statement is an opinion. Skipping fact-check."
UNAVAILABLE_TEXT = "Fact-check service is currently unavailable."
TOOL_CALL_FALLBACK_TEXT = "Unable to complete fact-check due to technical limitations."
NO_RESPONSE_FALLBACK_TEXT = "Unable to verify statement at this time."


class Classification(str, Enum):
    """Whether a statement makes a verifiable claim."""

    FACT = "FACT"
    OPINION = "OPINION"


class Verdict(str, Enum):
    """How a correction came about."""

    CONFIRMED = "confirmed"  # statement already correct
    CORRECTED = "corrected"  # backend supplied a correction
    INCONCLUSIVE = "inconclusive"  # backend gave no usable text
    UNAVAILABLE = "unavailable"  # verification call failed
    SKIPPED = "skipped"  # opinion, never sent to the verifier


class VerificationOutcome(BaseModel):
    """Result of checking one bot statement.

    ``correction`` is None only for CONFIRMED; every other verdict carries the
    text that is shown to the user.
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    text: str | None = Field(default=None, description="Outward correction text")

    @property
    def needs_correction(self) -> bool:
        return self.verdict is not Verdict.CONFIRMED

    @property
    def correction(self) -> str | None:
        return self.text if self.needs_correction else None

    @classmethod
    def confirmed(cls) -> "VerificationOutcome":
        return cls(verdict=Verdict.CONFIRMED)

    @classmethod
    def corrected(cls, text: str) -> "VerificationOutcome":
        return cls(verdict=Verdict.CORRECTED, text=text)

    @classmethod
    def inconclusive(cls, text: str) -> "VerificationOutcome":
        return cls(verdict=Verdict.INCONCLUSIVE, text=text)

    @classmethod
    def unavailable(cls, text: str = UNAVAILABLE_TEXT) -> "VerificationOutcome":
        return cls(verdict=Verdict.UNAVAILABLE, text=text)

    @classmethod
    def skipped(cls, text: str = SKIPPED_OPINION_TEXT) -> "VerificationOutcome":
        return cls(verdict=Verdict.SKIPPED, text=text)
