"""State types owned by the response pipeline."""

from enum import Enum

from pydantic import BaseModel


class PipelineStatus(str, Enum):
    """In-flight state of the pipeline. Exactly one turn runs at a time."""

    IDLE = "idle"
    SENDING = "sending"


class Toggles(BaseModel):
    """User-controlled switches, read once at the start of every turn."""

    context_enabled: bool = True
    fact_check_enabled: bool = True

    def toggle_context(self) -> bool:
        self.context_enabled = not self.context_enabled
        return self.context_enabled

    def toggle_fact_check(self) -> bool:
        self.fact_check_enabled = not self.fact_check_enabled
        return self.fact_check_enabled
