"""Share generation.

Builds a random polynomial of degree ``k - 1`` whose constant term is the
secret and evaluates it at ``x = 1..n``:

    f(x) = secret + a1*x + a2*x^2 + ... + a_{k-1}*x^{k-1}

The non-constant coefficients are drawn uniformly from the whole field with
a cryptographically secure source, so any ``k - 1`` shares are independent
of the secret.
"""

import secrets
from typing import Callable, Sequence

from shamir_service.core.field import PrimeField
from shamir_service.core.share import Share

RandomElement = Callable[[int], int]


def evaluate_polynomial(coefficients: Sequence[int], x: int, field: PrimeField) -> int:
    """Evaluate polynomial at point x using Horner's method."""
    result = 0
    for coef in reversed(coefficients):
        result = field.add(field.mul(result, x), coef)
    return result


def random_coefficients(
    secret: int,
    threshold: int,
    field: PrimeField,
    random_element: RandomElement = secrets.randbelow,
) -> list[int]:
    """Coefficients ``[secret, a1, ..., a_{threshold-1}]`` with random ``a_i`` in ``[0, P)``."""
    coefficients = [secret]
    for _ in range(threshold - 1):
        coefficients.append(field.element(random_element(field.modulus)))
    return coefficients


def generate_shares(
    secret: int,
    threshold: int,
    total_shares: int,
    field: PrimeField,
    random_element: RandomElement = secrets.randbelow,
) -> list[Share]:
    """Split ``secret`` into ``total_shares`` shares, any ``threshold`` of which recover it.

    Preconditions (enforced by the service): ``0 <= secret < P``,
    ``2 <= threshold <= total_shares < P``.

    Args:
        secret: Constant term of the polynomial
        threshold: Number of coefficients (k)
        total_shares: Number of evaluation points (n)
        field: Field to compute in
        random_element: ``f(P)`` returning a uniform integer in ``[0, P)``

    Returns:
        Shares with x = 1..n in order
    """
    coefficients = random_coefficients(secret, threshold, field, random_element)
    return [
        Share(x=x, y=evaluate_polynomial(coefficients, x, field))
        for x in range(1, total_shares + 1)
    ]
