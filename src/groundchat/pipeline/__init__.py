"""Response orchestration pipeline."""

from .callbacks import PipelineCallback
from .models import PipelineStatus, Toggles
from .pipeline import APOLOGY_TEXT, ResponsePipeline, normalize_question

__all__ = [
    "APOLOGY_TEXT",
    "PipelineCallback",
    "PipelineStatus",
    "ResponsePipeline",
    "Toggles",
    "normalize_question",
]
