"""Conversation state and prompt context."""

from .context import ContextWindowBuilder
from .models import Conversation, Message, Sender

__all__ = [
    "ContextWindowBuilder",
    "Conversation",
    "Message",
    "Sender",
]
