"""Pure parsers that turn backend text into structured results.

Kept free of I/O so every fallback branch can be tested directly.
"""

from collections.abc import Iterable

from ..llm import LLMResponse
from .models import (
    NO_RESPONSE_FALLBACK_TEXT,
    TOOL_CALL_FALLBACK_TEXT,
    Classification,
    VerificationOutcome,
)

CONFIRMATION_TOKEN = "CORRECT"
CONFIRMATION_PHRASES = frozenset({
    "the statement is correct",
    "this is accurate",
})
FALLBACK_TEXTS = frozenset({TOOL_CALL_FALLBACK_TEXT, NO_RESPONSE_FALLBACK_TEXT})


def parse_classification(raw: str | None) -> Classification:
    """Map a classifier reply to FACT or OPINION.

    Anything mentioning FACT counts as FACT, everything else (including an
    empty reply) is OPINION.
    """
    if raw and "FACT" in raw.strip().upper():
        return Classification.FACT
    return Classification.OPINION


def extract_verification_text(response: LLMResponse) -> str:
    """Pick the text to judge from a grounded verification response.

    Priority:
    1. Direct text, trimmed
    2. If the model asked for tool calls instead, the inline text parts of
       the first candidate joined with spaces, or TOOL_CALL_FALLBACK_TEXT
    3. NO_RESPONSE_FALLBACK_TEXT
    """
    if response.text and response.text.strip():
        return response.text.strip()

    if response.function_calls:
        fragments: list[str] = []
        if response.candidates:
            fragments = [part.text for part in response.candidates[0].parts if part.text]
        joined = " ".join(fragments).strip()
        return joined or TOOL_CALL_FALLBACK_TEXT

    return NO_RESPONSE_FALLBACK_TEXT


def decide_outcome(
    text: str,
    confirmation_phrases: Iterable[str] = CONFIRMATION_PHRASES,
) -> VerificationOutcome:
    """Turn extracted verification text into an outcome.

    Args:
        text: Output of extract_verification_text
        confirmation_phrases: Lower-case phrases that mean "no correction"

    Returns:
        CONFIRMED when the text is exactly CORRECT (any case) or contains a
        confirmation phrase; INCONCLUSIVE for the technical fallbacks;
        CORRECTED with the text otherwise
    """
    if text.upper() == CONFIRMATION_TOKEN:
        return VerificationOutcome.confirmed()

    lowered = text.lower()
    if any(phrase in lowered for phrase in confirmation_phrases):
        return VerificationOutcome.confirmed()

    if text in FALLBACK_TEXTS:
        return VerificationOutcome.inconclusive(text)

    return VerificationOutcome.corrected(text)
