"""Prime field arithmetic.

All operations work on Python integers, which are unbounded, so products of
two field elements never overflow before reduction. Results are always
normalized into ``[0, modulus)``.
"""

import secrets
from dataclasses import dataclass

from shamir_service.core.errors import DivisionByZeroError, InvalidParametersError


# Witnesses that make Miller-Rabin deterministic for n < 3.3 * 10**24
_DETERMINISTIC_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
_DETERMINISTIC_LIMIT = 3_317_044_064_679_887_385_961_981

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


def is_probable_prime(n: int, rounds: int = 40) -> bool:
    """Miller-Rabin primality test.

    Deterministic below ``_DETERMINISTIC_LIMIT``; above it, ``rounds``
    additional random witnesses give an error probability below 4**-rounds.
    """
    if n < 2:
        return False
    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    d = n - 1
    s = 0
    while d % 2 == 0:
        s += 1
        d //= 2

    witnesses = list(_DETERMINISTIC_WITNESSES)
    if n >= _DETERMINISTIC_LIMIT:
        witnesses.extend(secrets.randbelow(n - 3) + 2 for _ in range(rounds))

    for a in witnesses:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


@dataclass(frozen=True)
class PrimeField:
    """The finite field Z/PZ for a prime P.

    Usage:
        field = PrimeField(2083)
        field.mul(1000, 1000)   # 160
        field.inverse(2)        # 1042
    """

    modulus: int

    def __post_init__(self):
        if isinstance(self.modulus, bool) or not isinstance(self.modulus, int):
            raise InvalidParametersError("Field modulus must be an integer")
        if self.modulus <= 2:
            raise InvalidParametersError("Field modulus must be a prime greater than 2")
        if not is_probable_prime(self.modulus):
            raise InvalidParametersError(f"Field modulus {self.modulus} is not prime")

    @property
    def bits(self) -> int:
        """Bit length of the modulus."""
        return self.modulus.bit_length()

    @property
    def max_element(self) -> int:
        """Largest element of the field (and largest representable secret)."""
        return self.modulus - 1

    def contains(self, a: int) -> bool:
        """Whether ``a`` is already a reduced field element."""
        return 0 <= a < self.modulus

    def element(self, a: int) -> int:
        """Reduce an arbitrary integer into the field."""
        return a % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def neg(self, a: int) -> int:
        return -a % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def pow(self, a: int, e: int) -> int:
        """Raise ``a`` to a non-negative power ``e``."""
        if e < 0:
            raise ValueError("Exponent must be non-negative")
        return pow(a % self.modulus, e, self.modulus)

    def inverse(self, a: int) -> int:
        """Multiplicative inverse via Fermat's little theorem.

        Raises:
            DivisionByZeroError: If ``a`` is congruent to zero
        """
        a = a % self.modulus
        if a == 0:
            raise DivisionByZeroError("Cannot invert zero in the field")
        return self.pow(a, self.modulus - 2)

    def div(self, a: int, b: int) -> int:
        """Division ``a / b`` in the field."""
        return self.mul(a, self.inverse(b))
