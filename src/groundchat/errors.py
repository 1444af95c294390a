"""Exception hierarchy for groundchat.

Only GenerationError is allowed to end a turn with a visible error message.
Classification and verification errors are recovered inside their components.
"""


class GroundchatError(Exception):
    """Base class for all groundchat errors."""


class GenerationError(GroundchatError):
    """The primary generation backend failed or returned an unusable reply.

    Attributes:
        status_code: HTTP status code when the failure came from the endpoint
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidPayloadError(GenerationError):
    """The endpoint answered with a success status but no usable ``response``."""


class ClassificationError(GroundchatError):
    """Classifying a statement as FACT or OPINION failed."""


class VerificationError(GroundchatError):
    """The grounded verification call failed."""
