"""Share value type."""

from dataclasses import dataclass
from typing import Any


def parse_int(name: str, value: Any) -> int:
    """Return ``value`` as an int, accepting only ints and decimal digit strings.

    Floats and bools are refused rather than truncated.
    """
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise TypeError(f"{name} must be an integer or decimal string, got {type(value).__name__}")


@dataclass(frozen=True)
class Share:
    """A single share of a secret: the sharing polynomial evaluated at x."""

    x: int  # Share index (1..n)
    y: int  # Field element in [0, P)

    def to_dict(self) -> dict[str, Any]:
        """Serialize share, with y as a decimal string so large values survive JSON."""
        return {"x": self.x, "y": str(self.y)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Share":
        """Create share from a mapping with ``x`` and ``y`` (int or decimal string)."""
        try:
            return cls(x=parse_int("x", data["x"]), y=parse_int("y", data["y"]))
        except KeyError as e:
            raise ValueError(f"Share is missing field {e.args[0]!r}") from e

    @classmethod
    def from_pair(cls, pair: tuple[int, int]) -> "Share":
        x, y = pair
        return cls(x=parse_int("x", x), y=parse_int("y", y))
