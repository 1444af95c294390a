"""Primary text-generation backend."""

from .base import GenerationBackend
from .client import GenerationClient

__all__ = [
    "GenerationBackend",
    "GenerationClient",
]
