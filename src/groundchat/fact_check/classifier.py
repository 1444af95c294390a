"""FACT / OPINION classification of generated statements."""

import logging

from ..errors import ClassificationError
from ..llm import LLMProvider
from ..prompts import render_prompt
from .models import Classification
from .parsing import parse_classification

logger = logging.getLogger(__name__)


class StatementClassifier:
    """Decides whether a statement is worth fact-checking.

    Fails safe: any error classifies the statement as OPINION, which only
    skips verification.
    """

    def __init__(self, llm: LLMProvider, model: str | None = None):
        self._llm = llm
        self._model = model

    async def classify(self, text: str) -> Classification:
        try:
            raw = await self._ask(text)
        except ClassificationError as e:
            logger.warning("Error in classifying statement, defaulting to OPINION: %s", e)
            return Classification.OPINION

        result = parse_classification(raw)
        logger.debug("Classified statement as %s", result.value)
        return result

    async def _ask(self, text: str) -> str:
        try:
            prompt = render_prompt("classify", text=text)
            response = await self._llm.generate_content(prompt, model=self._model)
        except Exception as e:
            raise ClassificationError(f"classification call failed: {e!r}") from e

        if response.text is None:
            raise ClassificationError("classification response had no text")
        return response.text
