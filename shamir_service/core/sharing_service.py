"""Shamir Secret Sharing service.

The boundary the HTTP layer calls. Validates structural preconditions and
delegates to share generation and reconstruction. The service holds only an
immutable field and limits, so a single instance is safe to share across
concurrent requests.

Usage:
    service = SecretSharingService(PrimeField(2083))

    result = service.split(42, threshold=2, total_shares=3)
    service.reconstruct([result.shares[0], result.shares[2]]).secret  # 42
"""

import secrets
from dataclasses import dataclass, field as dataclass_field
from functools import lru_cache
from typing import Any, Iterable

from shamir_service import __version__
from shamir_service.config import get_settings
from shamir_service.core.errors import (
    InsufficientSharesError,
    InvalidParametersError,
    SecretSharingError,
)
from shamir_service.core.field import PrimeField
from shamir_service.core.logging import get_logger
from shamir_service.core.metrics import metrics
from shamir_service.core.polynomial import RandomElement, generate_shares
from shamir_service.core.reconstruction import MIN_SHARES, interpolate_at, reconstruct_secret
from shamir_service.core.share import Share

logger = get_logger(__name__)

ALGORITHM_NAME = "Shamir's Secret Sharing"
MIN_THRESHOLD = 2


@dataclass(frozen=True)
class SplitResult:
    """Shares produced by a split."""

    threshold: int
    total_shares: int
    shares: list[Share] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self.threshold,
            "totalShares": self.total_shares,
            "shares": [share.to_dict() for share in self.shares],
        }


@dataclass(frozen=True)
class ReconstructResult:
    """Secret recovered from shares."""

    secret: int

    def to_dict(self) -> dict[str, Any]:
        return {"secret": str(self.secret)}


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParametersError(f"{name} must be an integer")
    return value


def _coerce_share(value: Share | tuple | dict) -> Share:
    """Accept Share objects, (x, y) pairs, or {"x": .., "y": ..} mappings."""
    if isinstance(value, Share):
        _require_int("x", value.x)
        _require_int("y", value.y)
        return value
    try:
        if isinstance(value, dict):
            return Share.from_dict(value)
        if isinstance(value, (tuple, list)):
            return Share.from_pair(value)
    except (TypeError, ValueError) as e:
        raise InvalidParametersError(f"Malformed share: {e}") from e
    raise InvalidParametersError(
        f"Malformed share: expected a Share, pair or mapping, got {type(value).__name__}"
    )


class SecretSharingService:
    """(k, n)-threshold secret sharing over a prime field."""

    def __init__(
        self,
        field: PrimeField,
        max_shares: int = 255,
        random_element: RandomElement = secrets.randbelow,
    ):
        self.field = field
        self.max_shares = max_shares
        self._random_element = random_element

    @property
    def share_limit(self) -> int:
        """Largest n accepted by split. x coordinates must stay distinct and non-zero mod P."""
        return min(self.max_shares, self.field.modulus - 1)

    def split(self, secret: int, threshold: int, total_shares: int) -> SplitResult:
        """Split a secret into shares.

        Args:
            secret: Integer in [0, P)
            threshold: Minimum shares needed to reconstruct (k)
            total_shares: Total number of shares to create (n)

        Raises:
            InvalidParametersError: If parameters are invalid
        """
        with metrics.track_operation("split", share_count=total_shares):
            try:
                self._validate_split(secret, threshold, total_shares)
            except SecretSharingError as e:
                logger.warning(
                    "Split rejected",
                    error=e.code,
                    reason=str(e),
                    threshold=threshold,
                    total_shares=total_shares,
                )
                raise

            shares = generate_shares(
                secret,
                threshold,
                total_shares,
                self.field,
                self._random_element,
            )

        logger.info("Secret split", threshold=threshold, total_shares=total_shares)
        return SplitResult(threshold=threshold, total_shares=total_shares, shares=shares)

    def reconstruct(
        self,
        shares: Iterable[Share | tuple | dict],
        threshold: int | None = None,
    ) -> ReconstructResult:
        """Reconstruct the secret from shares.

        Every supplied share takes part in the interpolation. With fewer
        shares than the threshold used at split time the result is a valid
        field element but not the original secret.

        Raises:
            InvalidParametersError: A share is malformed, not integer-valued,
                has x < 1, or has y outside [0, P)
            InsufficientSharesError: Fewer than 2 shares, or fewer than ``threshold``
            DivisionByZeroError: Two shares have the same x coordinate
        """
        with metrics.track_operation("reconstruct"):
            try:
                points = self._validate_shares(shares, threshold)
                secret = reconstruct_secret(points, self.field)
            except SecretSharingError as e:
                logger.warning("Reconstruction rejected", error=e.code, reason=str(e))
                raise

        logger.info("Secret reconstructed", share_count=len(points))
        return ReconstructResult(secret=secret)

    def recover_share(
        self,
        shares: Iterable[Share | tuple | dict],
        x: int,
        threshold: int | None = None,
    ) -> Share:
        """Regenerate the share at index ``x`` from existing shares.

        Useful to replace a lost share without reconstructing the secret
        in one place.

        Raises:
            InvalidParametersError: If ``x`` is out of range or already present,
                or a share is invalid as for :meth:`reconstruct`
            InsufficientSharesError: As for :meth:`reconstruct`
            DivisionByZeroError: As for :meth:`reconstruct`
        """
        with metrics.track_operation("recover_share"):
            try:
                _require_int("x", x)
                if not 1 <= x < self.field.modulus:
                    raise InvalidParametersError(
                        f"x must be between 1 and {self.field.modulus - 1}"
                    )
                points = self._validate_shares(shares, threshold)
                if any(self.field.element(p.x) == x for p in points):
                    raise InvalidParametersError(f"Share with x={x} already exists")
                share = Share(x=x, y=interpolate_at(points, x, self.field))
            except SecretSharingError as e:
                logger.warning("Share recovery rejected", error=e.code, reason=str(e))
                raise

        logger.info("Share recovered", x=x, share_count=len(points))
        return share

    def info(self) -> dict[str, Any]:
        """Describe the algorithm and field in use."""
        return {
            "algorithm": ALGORITHM_NAME,
            "description": "Splits a secret into n shares, requires k shares to reconstruct",
            "prime": str(self.field.modulus),
            "primeBits": self.field.bits,
            "maxSecret": str(self.field.max_element),
            "maxShares": self.share_limit,
            "minThreshold": MIN_THRESHOLD,
            "coefficients": "uniform over [0, prime) from a CSPRNG",
        }

    def _validate_split(self, secret: int, threshold: int, total_shares: int):
        _require_int("secret", secret)
        _require_int("k", threshold)
        _require_int("n", total_shares)

        if secret < 0:
            raise InvalidParametersError("secret must be a non-negative integer")
        if secret >= self.field.modulus:
            raise InvalidParametersError(
                f"secret must be less than the field modulus {self.field.modulus}"
            )
        if threshold < MIN_THRESHOLD:
            raise InvalidParametersError(f"k must be at least {MIN_THRESHOLD}")
        if threshold > total_shares:
            raise InvalidParametersError("k must be less than or equal to n")
        if total_shares > self.share_limit:
            raise InvalidParametersError(f"n must be at most {self.share_limit}")

    def _validate_shares(
        self,
        shares: Iterable[Share | tuple | dict],
        threshold: int | None,
    ) -> list[Share]:
        points = [_coerce_share(s) for s in shares]
        for point in points:
            if point.x < 1:
                raise InvalidParametersError(f"Share x must be a positive integer, got {point.x}")
            if not self.field.contains(point.y):
                raise InvalidParametersError(
                    f"Share y must be between 0 and {self.field.max_element}"
                )

        if len(points) < MIN_SHARES:
            raise InsufficientSharesError(
                f"Not enough shares to reconstruct: need at least {MIN_SHARES}, got {len(points)}"
            )
        if threshold is not None:
            _require_int("k", threshold)
            if len(points) < threshold:
                raise InsufficientSharesError(
                    f"Not enough shares to reconstruct: need {threshold}, got {len(points)}"
                )
        return points


@lru_cache
def get_sharing_service() -> SecretSharingService:
    """Get the process-wide service built from settings."""
    settings = get_settings()
    field = PrimeField(settings.field_modulus)
    metrics.initialize(field.modulus, version=__version__)
    return SecretSharingService(field, max_shares=settings.max_shares)
