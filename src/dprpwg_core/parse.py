"""Input coercion and C-style integer parsing."""
from __future__ import annotations

import re

# atoi(): optional leading whitespace, optional sign, digits. Stops at the
# first non-digit.
_LEADING_INT = re.compile(rb"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def as_bytes(value: str | bytes | bytearray | memoryview) -> bytes | bytearray:
    """Return a byte sequence for an input label. Text is UTF-8 encoded."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return value
    if isinstance(value, memoryview):
        return value.tobytes()
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")


def parse_year(label: str | bytes | bytearray | int) -> int:
    """Parse a year label with atoi() semantics: non-numeric gives 0.

    " 2031 AD" gives 2031, "next year" gives 0. Ints pass through.
    """
    if isinstance(label, int) and not isinstance(label, bool):
        return label
    m = _LEADING_INT.match(as_bytes(label))
    if m is None:
        return 0
    return int(m.group(1))
