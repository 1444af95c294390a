"""Fact checking: classification and grounded verification."""

from .classifier import StatementClassifier
from .models import Classification, Verdict, VerificationOutcome
from .parsing import decide_outcome, extract_verification_text, parse_classification
from .tools import GOOGLE_SEARCH_TOOL
from .verifier import GroundedVerifier

__all__ = [
    "Classification",
    "GOOGLE_SEARCH_TOOL",
    "GroundedVerifier",
    "StatementClassifier",
    "Verdict",
    "VerificationOutcome",
    "decide_outcome",
    "extract_verification_text",
    "parse_classification",
]
