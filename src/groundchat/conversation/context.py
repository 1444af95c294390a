"""Bounded prompt context built from conversation history."""

from collections.abc import Sequence

from .models import Message

DEFAULT_WINDOW_SIZE = 4
CONTEXT_TEMPLATE = "Previous conversation:\n{history}\n\nCurrent question: {question}"


class ContextWindowBuilder:
    """Derives the prompt sent to the generation backend.

    Pure: the same history, input and toggle always give the same prompt.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self._window_size = window_size

    @property
    def window_size(self) -> int:
        return self._window_size

    def build(
        self,
        history: Sequence[Message],
        candidate_input: str,
        context_enabled: bool,
    ) -> str:
        """Build the prompt for one turn.

        Args:
            history: Messages preceding the current question, oldest first
            candidate_input: The normalized user question
            context_enabled: Whether to prepend recent history

        Returns:
            ``candidate_input`` unchanged when context is disabled, otherwise
            the last few message texts followed by the current question
        """
        if not context_enabled:
            return candidate_input

        window = list(history)[-self._window_size:]
        joined = "\n\n".join(message.text for message in window)
        return CONTEXT_TEMPLATE.format(history=joined, question=candidate_input)
