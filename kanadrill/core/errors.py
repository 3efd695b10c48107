"""Exceptions raised by the kanadrill core."""


class KanadrillError(Exception):
    """Base class for kanadrill errors."""
    pass


class InvalidArgumentError(KanadrillError, ValueError):
    """Raised when a caller passes an unusable pool or draw count."""
    pass


class StatsStoreError(KanadrillError):
    """Raised when a stats file exists but cannot be read."""
    pass
