"""Output alphabet construction and category coverage checks."""
from __future__ import annotations

from typing import Iterable

from .protocol import (
    ALPHABET_ORDER,
    CATEGORY_NAMES,
    FLAG_DIG,
    FLAG_LOW,
    FLAG_SYM,
    FLAG_UPP,
    OUTPUT_DIG,
    OUTPUT_DOMAIN_MAXLENGTH,
    OUTPUT_LOW,
    OUTPUT_SYM,
    OUTPUT_UPP,
)

_CATEGORY_ALPHABETS = {
    FLAG_LOW: OUTPUT_LOW,
    FLAG_UPP: OUTPUT_UPP,
    FLAG_DIG: OUTPUT_DIG,
    FLAG_SYM: OUTPUT_SYM,
}

# Accepted spellings for flags_from_names()
_NAME_TO_FLAG = {
    "lower": FLAG_LOW, "low": FLAG_LOW,
    "upper": FLAG_UPP, "upp": FLAG_UPP,
    "digit": FLAG_DIG, "digits": FLAG_DIG, "dig": FLAG_DIG,
    "symbol": FLAG_SYM, "symbols": FLAG_SYM, "sym": FLAG_SYM,
}


def flags_from_names(names: Iterable[str]) -> int:
    """Turn category names ("lower", "digits", ...) into a flag mask."""
    mask = 0
    for name in names:
        key = name.strip().lower()
        if key not in _NAME_TO_FLAG:
            raise ValueError(f"unknown symbol category {name!r}")
        mask |= _NAME_TO_FLAG[key]
    return mask


def category_names(flags: int) -> list[str]:
    return [CATEGORY_NAMES[f] for f, _ in ALPHABET_ORDER if flags & f]


def alphabet_size(flags: int) -> int:
    """Sum of the configured category alphabet lengths."""
    return sum(len(symbols) for f, symbols in ALPHABET_ORDER if flags & f)


def build_alphabet(flags: int) -> tuple[bytearray, int]:
    """Assemble the output alphabet for the requested categories.

    Returns a fixed-capacity buffer and the number of symbols in use.
    Categories are concatenated Lower, Digit, Symbol, Upper; writes past
    the buffer capacity are dropped. The caller owns (and wipes) the buffer.
    """
    buf = bytearray(OUTPUT_DOMAIN_MAXLENGTH)
    used = 0
    for flag, symbols in ALPHABET_ORDER:
        if not flags & flag:
            continue
        n = min(len(symbols), OUTPUT_DOMAIN_MAXLENGTH - used)
        buf[used:used + n] = symbols[:n]
        used += n
    return buf, used


def missing_categories(password: bytes | bytearray, flags: int) -> int:
    """Return the mask of requested categories with no symbol in password."""
    missing = 0
    for flag in (FLAG_DIG, FLAG_SYM, FLAG_LOW, FLAG_UPP):
        if not flags & flag:
            continue
        symbols = _CATEGORY_ALPHABETS[flag]
        if not any(b in symbols for b in password):
            missing |= flag
    return missing


def satisfies(password: bytes | bytearray, flags: int) -> bool:
    """True iff password holds at least one symbol of each requested category."""
    return missing_categories(password, flags) == 0
