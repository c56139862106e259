"""Secret reconstruction by Lagrange interpolation.

The secret is the sharing polynomial evaluated at zero:

    f(0) = sum_i y_i * prod_{j != i} (0 - x_j) / (x_i - x_j)

Interpolation always uses every supplied share. Given fewer shares than the
original threshold, or shares from different splits, the result is a
well-defined field element that is simply not the original secret; no error
is raised because nothing in the arithmetic can tell.
"""

from typing import Sequence

from shamir_service.core.errors import InsufficientSharesError
from shamir_service.core.field import PrimeField
from shamir_service.core.share import Share

MIN_SHARES = 2


def interpolate_at(shares: Sequence[Share], x: int, field: PrimeField) -> int:
    """Lagrange interpolation of the polynomial through ``shares`` at point ``x``.

    Raises:
        InsufficientSharesError: If fewer than two shares are given
        DivisionByZeroError: If two shares have the same x coordinate
    """
    if len(shares) < MIN_SHARES:
        raise InsufficientSharesError(
            f"Need at least {MIN_SHARES} shares, got {len(shares)}"
        )

    result = 0
    for i, share_i in enumerate(shares):
        numerator = 1
        denominator = 1

        for j, share_j in enumerate(shares):
            if i == j:
                continue
            numerator = field.mul(numerator, field.sub(x, share_j.x))
            denominator = field.mul(denominator, field.sub(share_i.x, share_j.x))

        term = field.mul(field.mul(share_i.y, numerator), field.inverse(denominator))
        result = field.add(result, term)

    return result


def reconstruct_secret(shares: Sequence[Share], field: PrimeField) -> int:
    """Recover the constant term of the sharing polynomial."""
    return interpolate_at(shares, 0, field)
