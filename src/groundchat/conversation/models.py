"""Data models for the conversation.

Hides the internal representation of messages and the id scheme.
"""

import itertools
from collections.abc import Iterator
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..fact_check.models import VerificationOutcome


class Sender(str, Enum):
    """Who authored a message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single immutable chat message."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Unique, strictly increasing message id")
    text: str = Field(description="Message text as displayed")
    sender: Sender
    is_error: bool = Field(default=False, description="True for the apology shown on failure")
    verification: VerificationOutcome | None = Field(
        default=None,
        description="Fact-check outcome for bot messages (None when not checked)"
    )
    timestamp: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _only_bot_messages_are_checked(self) -> "Message":
        if self.sender is Sender.USER and (self.verification is not None or self.is_error):
            raise ValueError("only bot messages carry a verification or error flag")
        return self

    @property
    def correction(self) -> str | None:
        """Outward correction text, None when nothing needs to be shown."""
        if self.verification is None:
            return None
        return self.verification.correction


class Conversation:
    """Ordered, append-only list of messages.

    Insertion order is chronological order is display order. The conversation
    issues message ids itself so they stay unique and strictly increasing.
    """

    def __init__(self, greeting: str | None = None):
        self._messages: list[Message] = []
        self._ids = itertools.count(1)
        if greeting:
            self.append(greeting, Sender.BOT)

    def append(
        self,
        text: str,
        sender: Sender,
        *,
        is_error: bool = False,
        verification: VerificationOutcome | None = None,
    ) -> Message:
        """Create a message with the next id and append it.

        Returns:
            The newly created message
        """
        message = Message(
            id=next(self._ids),
            text=text,
            sender=sender,
            is_error=is_error,
            verification=verification,
        )
        self._messages.append(message)
        return message

    def snapshot(self) -> tuple[Message, ...]:
        """Immutable view of the messages at this moment."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
