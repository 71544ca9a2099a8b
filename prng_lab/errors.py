"""
Error taxonomy for the engine.

Every rejected request maps to one of these kinds. The HTTP layer and the CLI
render them as {"detail": ..., "error": kind}.
"""


class PrngLabError(Exception):
    """Base class for every reported engine failure."""

    kind = "PrngLabError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"detail": self.message, "error": self.kind}


class InvalidParameterError(PrngLabError):
    """Missing, non-numeric or out-of-domain request parameter."""

    kind = "InvalidParameter"


class InvalidTestInputError(PrngLabError):
    """Sample or options unusable for a goodness-of-fit test."""

    kind = "InvalidTestInput"


class IterationLimitExceededError(PrngLabError):
    """Sampler ran out of trials before collecting enough variates."""

    kind = "IterationLimitExceeded"
    status_code = 422
