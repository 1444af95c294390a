"""Callback interface for presentation layers.

Hides how a UI learns about pipeline progress. Every method is a no-op by
default so implementations override only what they render.
"""

from ..conversation import Message
from .models import PipelineStatus


class PipelineCallback:
    """Receives conversation and status updates from ResponsePipeline."""

    def on_message(self, message: Message) -> None:
        """Called after a message is appended to the conversation."""

    def on_status_change(self, status: PipelineStatus) -> None:
        """Called whenever the pipeline enters IDLE or SENDING."""
