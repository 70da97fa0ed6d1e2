"""Domain error types."""


class LiftpalError(Exception):
    """Base class for liftpal errors."""


class AuthError(LiftpalError):
    """No caller identity could be resolved."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(LiftpalError):
    """A referenced workout, exercise, link or catalog entry does not exist."""


class ConflictError(LiftpalError):
    """A uniqueness rule was violated (e.g. a duplicate partner link)."""


class TransportError(LiftpalError):
    """The store failed; the driver error is chained as ``__cause__``."""
