"""Secret sharing errors.

Every error carries a stable ``code`` so callers (the HTTP layer in
particular) can map each kind to a distinct rejection without parsing
messages.
"""


class SecretSharingError(Exception):
    """Secret sharing operation failed."""

    code = "secret_sharing_error"


class InvalidParametersError(SecretSharingError):
    """Split parameters are malformed or out of range."""

    code = "invalid_parameters"


class InsufficientSharesError(SecretSharingError):
    """Not enough shares to reconstruct."""

    code = "insufficient_shares"


class DivisionByZeroError(SecretSharingError, ZeroDivisionError):
    """Attempted to invert zero in the field.

    During reconstruction this means two shares have the same x coordinate.
    """

    code = "division_by_zero"
