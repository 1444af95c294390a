"""Search-grounded verification of FACT statements."""

import logging
from collections.abc import Iterable

from ..errors import VerificationError
from ..llm import LLMProvider, LLMResponse
from ..prompts import load_prompt, render_prompt
from .models import VerificationOutcome
from .parsing import CONFIRMATION_PHRASES, decide_outcome, extract_verification_text
from .tools import GOOGLE_SEARCH_TOOL

logger = logging.getLogger(__name__)


class GroundedVerifier:
    """Verifies a statement with a search-augmented generation call.

    Hidden design decisions:
    - Prompt and system instruction wording
    - Which search tool is declared to the model
    - How the reply is reduced to a single outcome

    Never raises for backend failures: they become an UNAVAILABLE outcome.
    """

    def __init__(
        self,
        llm: LLMProvider,
        model: str | None = None,
        confirmation_phrases: Iterable[str] = CONFIRMATION_PHRASES,
    ):
        self._llm = llm
        self._model = model
        self._confirmation_phrases = frozenset(p.lower() for p in confirmation_phrases)

    async def verify(self, statement: str) -> VerificationOutcome:
        """Check one statement.

        Args:
            statement: A statement already classified as FACT

        Returns:
            CONFIRMED, CORRECTED, INCONCLUSIVE or UNAVAILABLE outcome
        """
        try:
            response = await self._search_and_answer(statement)
        except VerificationError as e:
            logger.error("Error during fact-checking: %s", e)
            return VerificationOutcome.unavailable()

        text = extract_verification_text(response)
        outcome = decide_outcome(text, self._confirmation_phrases)
        logger.debug("Verification verdict: %s", outcome.verdict.value)
        return outcome

    async def _search_and_answer(self, statement: str) -> LLMResponse:
        try:
            return await self._llm.generate_content(
                render_prompt("verify", statement=statement),
                model=self._model,
                tools=[GOOGLE_SEARCH_TOOL],
                system_instruction=load_prompt("verify_system").strip(),
            )
        except Exception as e:
            raise VerificationError(f"verification call failed: {e!r}") from e
