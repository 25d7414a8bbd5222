"""Output length policy."""
from __future__ import annotations

from .parse import parse_year
from .protocol import BASE_YEAR, OUTPUT_MAX_LENGTH, OUTPUT_MIN_LENGTH, YEARS_PER_CHAR


def output_length(fixed_length: int | None, year_label: str | bytes | int) -> int:
    """Return the password length.

    A fixed length > 0 is used as is (no bound enforced). Otherwise the
    length grows by one symbol every five years from 2000:
    2000-2004 give 12, 2005-2009 give 13, and so on up to 256.
    """
    if fixed_length is not None and fixed_length > 0:
        return int(fixed_length)

    year = parse_year(year_label)
    if year < BASE_YEAR:
        return OUTPUT_MIN_LENGTH
    return max(OUTPUT_MIN_LENGTH,
               min(OUTPUT_MAX_LENGTH, OUTPUT_MIN_LENGTH + (year - BASE_YEAR) // YEARS_PER_CHAR))
