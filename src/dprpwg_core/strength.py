"""Password strength estimation.

The score combines the Shannon entropy of the password's symbol
frequencies, its length, the size of the configured alphabet, and a
year-dependent divisor that discounts passwords meant for later years.
Unit is arbitrary: 1.0 is the "overkill" reference point.
"""
from __future__ import annotations

import math
from collections import Counter

from .alphabet import alphabet_size
from .parse import parse_year
from .protocol import OVERKILL_PWD_STRENGTH, STRENGTH_MIN_DIVISOR, STRENGTH_YEAR_OFFSET

# Divisor policies for years before 1940 (year // 5 < 388)
DIVISOR_CLAMP = "clamp"  # signed arithmetic, floor at 12
DIVISOR_WRAP = "wrap"    # 32-bit unsigned wraparound (legacy scores)

DIVISOR_POLICIES = (DIVISOR_CLAMP, DIVISOR_WRAP)

_U32 = 1 << 32


def shannon_entropy(password: bytes | bytearray) -> float:
    """Shannon entropy in bits per symbol of the byte frequency distribution."""
    n = len(password)
    if n == 0:
        return 0.0
    counts = Counter(password)
    entropy = 0.0
    for _, count in sorted(counts.items()):
        p = count / n
        entropy -= p * math.log2(p)
    counts.clear()
    return entropy


def year_divisor(year: int, policy: str = DIVISOR_CLAMP) -> int:
    if policy == DIVISOR_CLAMP:
        return max(year // 5 - STRENGTH_YEAR_OFFSET, STRENGTH_MIN_DIVISOR)
    if policy == DIVISOR_WRAP:
        # unsigned int: (year / 5 - 388) wraps below zero
        y = year % _U32
        return max((y // 5 - STRENGTH_YEAR_OFFSET) % _U32, STRENGTH_MIN_DIVISOR)
    raise ValueError(f"unknown divisor policy {policy!r}; expected one of {DIVISOR_POLICIES}")


def strength(
    password: bytes | bytearray | str,
    year: int | str | bytes,
    categories: int,
    policy: str = DIVISOR_CLAMP,
) -> float:
    """Score a password for the given target year and category flags.

    alphabet_size is the full configured alphabet, not the symbols that
    happen to appear in the password. An empty password, or an empty
    category mask, scores 0.0.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    divisor = year_divisor(parse_year(year), policy)
    size = alphabet_size(categories)
    n = len(password)
    if n == 0 or size == 0:
        return 0.0

    entropy = shannon_entropy(password)
    return entropy * (n / divisor) * math.log2(size) / OVERKILL_PWD_STRENGTH
