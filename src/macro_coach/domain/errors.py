"""Domain errors."""


class InvalidInputError(ValueError):
    """Raised when a calculation receives out-of-range or malformed input."""


class GoalNotFoundError(LookupError):
    """Raised when a user has no stored goal."""


class CheckInUnavailableError(RuntimeError):
    """Raised when a check-in is submitted before the interval has elapsed."""
