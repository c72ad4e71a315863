"""Command-line argument validation for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

_MAX_VALUE = 2147483647
_MAX_DIGITS = 10


class ArgumentError(ValueError):
    """Raised when the simulation arguments are malformed or out of range."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    count: int
    die_time: int
    eat_time: int
    sleep_time: int
    must_eat: Optional[int] = None


def parse_number(text: str) -> int:
    """Return the value of the leading decimal digits of ``text`` (0 if none)."""
    digits = []
    for char in text:
        if not ("0" <= char <= "9"):
            break
        digits.append(char)
    return int("".join(digits)) if digits else 0


def _validated(text: str) -> int:
    if not all("0" <= char <= "9" for char in text):
        raise ArgumentError(f"not a positive number: {text!r}")
    if len(text) > _MAX_DIGITS:
        raise ArgumentError(f"number too long: {text!r}")
    value = parse_number(text)
    if value <= 0 or value > _MAX_VALUE:
        raise ArgumentError(f"number out of range: {text!r}")
    return value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build :class:`Settings` from the arguments that follow the program name.

    Expects four or five strictly positive integers: number of philosophers,
    time to die, time to eat, time to sleep and, optionally, the number of
    meals each philosopher must eat.
    """
    if len(argv) not in (4, 5):
        raise ArgumentError("expected 4 or 5 arguments")
    values = [_validated(text) for text in argv]
    must_eat = values[4] if len(values) == 5 else None
    return Settings(
        count=values[0],
        die_time=values[1],
        eat_time=values[2],
        sleep_time=values[3],
        must_eat=must_eat,
    )