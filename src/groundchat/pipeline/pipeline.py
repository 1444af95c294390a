"""Per-turn orchestration: context, generation, classification, verification.

State machine:
    IDLE --submit(valid)--> SENDING --(success | failure | cancel)--> IDLE

Submissions while SENDING, or with blank input, are dropped without effect.
"""

import asyncio
import logging

from ..conversation import ContextWindowBuilder, Conversation, Message, Sender
from ..errors import GenerationError
from ..fact_check import Classification, GroundedVerifier, StatementClassifier, VerificationOutcome
from ..generation import GenerationBackend
from .callbacks import PipelineCallback
from .models import PipelineStatus, Toggles

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "Sorry, I'm having trouble connecting. Please try again later."


def normalize_question(text: str) -> str:
    """Trim the input and make sure it ends with a question mark."""
    trimmed = text.strip()
    return trimmed if trimmed.endswith("?") else f"{trimmed}?"


class ResponsePipeline:
    """Single writer of the conversation.

    Hidden design decisions:
    - Order of the backend calls (always sequential)
    - Fallback policy for each failure class
    - Mapping of verification outcomes onto bot messages
    """

    def __init__(
        self,
        generator: GenerationBackend,
        classifier: StatementClassifier,
        verifier: GroundedVerifier,
        conversation: Conversation | None = None,
        toggles: Toggles | None = None,
        context_builder: ContextWindowBuilder | None = None,
        callback: PipelineCallback | None = None,
    ):
        self._generator = generator
        self._classifier = classifier
        self._verifier = verifier
        self._conversation = conversation if conversation is not None else Conversation()
        self._toggles = toggles if toggles is not None else Toggles()
        self._context_builder = context_builder or ContextWindowBuilder()
        self._callback = callback or PipelineCallback()
        self._status = PipelineStatus.IDLE
        self._current_task: asyncio.Task | None = None

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def is_sending(self) -> bool:
        return self._status is PipelineStatus.SENDING

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def toggles(self) -> Toggles:
        return self._toggles

    def set_callback(self, callback: PipelineCallback | None) -> None:
        self._callback = callback or PipelineCallback()

    async def submit(self, user_text: str) -> Message | None:
        """Run one conversational turn.

        Args:
            user_text: Raw user input

        Returns:
            The bot message appended for this turn, or None when the
            submission was rejected (blank input or a turn already running)

        Raises:
            asyncio.CancelledError: If the turn was abandoned via cancel()
        """
        if not user_text.strip():
            logger.debug("Ignoring blank submission")
            return None
        if self.is_sending:
            logger.debug("Ignoring submission while a turn is in flight")
            return None

        # Flip before the first await so a second submit is rejected
        self._set_status(PipelineStatus.SENDING)
        self._current_task = asyncio.current_task()
        try:
            return await self._run_turn(user_text)
        except asyncio.CancelledError:
            logger.info("Turn cancelled before a reply was committed")
            raise
        finally:
            self._current_task = None
            self._set_status(PipelineStatus.IDLE)

    def cancel(self) -> bool:
        """Abandon the in-flight turn.

        Returns:
            True if a running turn was cancelled
        """
        if self._current_task is None or self._current_task.done():
            return False
        return self._current_task.cancel()

    async def _run_turn(self, user_text: str) -> Message:
        question = normalize_question(user_text)
        context_enabled = self._toggles.context_enabled
        fact_check_enabled = self._toggles.fact_check_enabled

        history = self._conversation.snapshot()
        self._append(question, Sender.USER)
        prompt = self._context_builder.build(history, question, context_enabled)

        try:
            reply = await self._generator.generate(prompt)
            verification = await self._check(reply) if fact_check_enabled else None
        except GenerationError as e:
            logger.error("Failed to fetch from LLM endpoint: %s", e)
            return self._append(APOLOGY_TEXT, Sender.BOT, is_error=True)
        except Exception:
            logger.exception("Unexpected error while answering")
            return self._append(APOLOGY_TEXT, Sender.BOT, is_error=True)

        return self._append(reply, Sender.BOT, verification=verification)

    async def _check(self, reply: str) -> VerificationOutcome:
        classification = await self._classifier.classify(reply)
        if classification is Classification.OPINION:
            logger.info("Statement is an opinion. Skipping fact-check.")
            return VerificationOutcome.skipped()
        return await self._verifier.verify(reply)

    def _append(self, text: str, sender: Sender, **kwargs) -> Message:
        message = self._conversation.append(text, sender, **kwargs)
        try:
            self._callback.on_message(message)
        except Exception:
            logger.exception("Pipeline callback failed for message %d", message.id)
        return message

    def _set_status(self, status: PipelineStatus) -> None:
        self._status = status
        try:
            self._callback.on_status_change(status)
        except Exception:
            logger.exception("Pipeline callback failed for status %s", status.value)
