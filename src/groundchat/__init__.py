"""
Groundchat: a conversational client whose replies are fact-checked in real time.

Each module hides one design decision: how prompts get their context, how the
generation backend is reached, how statements are classified and verified,
and how a turn is committed to the conversation.
"""

__version__ = "0.1.0"

from .conversation import ContextWindowBuilder, Conversation, Message, Sender
from .errors import (
    ClassificationError,
    GenerationError,
    GroundchatError,
    InvalidPayloadError,
    VerificationError,
)
from .fact_check import (
    Classification,
    GroundedVerifier,
    StatementClassifier,
    Verdict,
    VerificationOutcome,
)
from .generation import GenerationBackend, GenerationClient
from .pipeline import PipelineCallback, PipelineStatus, ResponsePipeline, Toggles
from .settings import Settings

__all__ = [
    "Classification",
    "ClassificationError",
    "ContextWindowBuilder",
    "Conversation",
    "GenerationBackend",
    "GenerationClient",
    "GenerationError",
    "GroundchatError",
    "GroundedVerifier",
    "InvalidPayloadError",
    "Message",
    "PipelineCallback",
    "PipelineStatus",
    "ResponsePipeline",
    "Sender",
    "Settings",
    "StatementClassifier",
    "Toggles",
    "Verdict",
    "VerificationError",
    "VerificationOutcome",
]
