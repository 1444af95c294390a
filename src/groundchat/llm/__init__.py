from .base import LLMProvider
from .factory import create_llm_provider
from .models import Candidate, CandidatePart, FunctionCall, LLMResponse, ToolDeclaration
from .providers import GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "Candidate",
    "CandidatePart",
    "FunctionCall",
    "LLMResponse",
    "ToolDeclaration",
    "GeminiProvider",
]
