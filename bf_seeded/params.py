"""Bloom filter parameter formulas."""
from __future__ import annotations

import math


def optimal_hash_count(bit_size: int, set_size: int) -> int:
    """Return ``ceil((m // n) * ln 2)``.

    The quotient ``m // n`` is truncated before the multiplication, so
    ``optimal_hash_count(20, 3)`` is ``ceil(6 * ln 2) == 5`` and any
    ``bit_size < set_size`` gives 0.

    Raises:
        ValueError: If ``set_size`` is not positive.
    """
    if set_size <= 0:
        raise ValueError("set_size must be positive")
    return math.ceil((bit_size // set_size) * math.log(2))


def false_positive_probability(bit_size: int, set_size: int, hash_count: int) -> float:
    """Return ``(1 - e^(-k*n/m))^k``."""
    if bit_size <= 0:
        raise ValueError("bit_size must be positive")
    return (1 - math.exp(-hash_count * set_size / bit_size)) ** hash_count


def _check_int(name: str, value: int) -> None:
    if not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def check_bit_size(value: int) -> int:
    _check_int("bit_size", value)
    if value <= 0:
        raise ValueError("bit_size must be positive")
    return value


def check_set_size(value: int) -> int:
    _check_int("set_size", value)
    if value <= 0:
        raise ValueError("set_size must be positive")
    return value


def check_hash_count(value: int) -> int:
    _check_int("hash_count", value)
    if value < 0:
        raise ValueError("hash_count must not be negative")
    return value
