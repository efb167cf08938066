class ConsHashError(Exception):
    """Base class for ring errors."""


class RingEmpty(ConsHashError, LookupError):
    """Raised when a key is located on a ring with no nodes."""

    def __init__(self, message: str = "ring has no nodes"):
        super().__init__(message)
