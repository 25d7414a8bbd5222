"""Scoped wipe-before-release for sensitive working buffers."""
from __future__ import annotations

from array import array
from contextlib import contextmanager
from typing import Iterator, Union

Wipeable = Union[bytearray, array]


def wipe(buf: Wipeable) -> None:
    """Overwrite a mutable buffer with zeros, in place."""
    if isinstance(buf, bytearray):
        buf[:] = bytes(len(buf))
    elif isinstance(buf, array):
        for i in range(len(buf)):
            buf[i] = 0
    else:
        raise TypeError(f"cannot wipe {type(buf).__name__} in place")


@contextmanager
def wiped(buf: Wipeable) -> Iterator[Wipeable]:
    """Yield buf and zero it on every exit path, including exceptions."""
    try:
        yield buf
    finally:
        wipe(buf)
