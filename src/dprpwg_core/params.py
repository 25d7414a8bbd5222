"""Tuning constants: the nine multipliers that key the mixing function.

WARNING: if these change, every derived password changes. Treat a set of
constants like a cryptographic parameter set: pin it, verify its
fingerprint, never log or print the values.
"""
from __future__ import annotations

import json
import struct
from dataclasses import dataclass
from pathlib import Path

import nacl.encoding
import nacl.hash

from .errors import ParamsError

PARAMS_SCHEMA = "dprpwg-params-v1"
CHANNELS = ("secret", "domain", "year")
MULTIPLIERS = ("forward", "cross", "reverse")

_U32_MAX = 0xFFFFFFFF
# BLAKE2b personalization, at most 16 bytes
_FINGERPRINT_PERSON = b"dprpwg-params-v1"


@dataclass(frozen=True)
class ChannelMultipliers:
    """Multipliers for one input channel.

    forward: applied to the byte under the cursor
    cross:   applied to output position * cursor
    reverse: applied to the byte mirrored from the end of the input
    """

    forward: int
    cross: int
    reverse: int

    def __post_init__(self) -> None:
        for name in MULTIPLIERS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
                raise ParamsError("E_PARAMS_RANGE", name)

    def __repr__(self) -> str:
        return "ChannelMultipliers(<redacted>)"


@dataclass(frozen=True)
class TuningConstants:
    secret: ChannelMultipliers
    domain: ChannelMultipliers
    year: ChannelMultipliers

    def __repr__(self) -> str:
        return f"TuningConstants(fingerprint={self.fingerprint()!r})"

    def _packed(self) -> bytes:
        values = []
        for ch in CHANNELS:
            m = getattr(self, ch)
            values.extend([m.forward, m.cross, m.reverse])
        return struct.pack("<9I", *values)

    def fingerprint(self) -> str:
        """Return a 32-hex-char BLAKE2b fingerprint of the multipliers."""
        digest = nacl.hash.blake2b(
            self._packed(),
            digest_size=16,
            person=_FINGERPRINT_PERSON,
            encoder=nacl.encoding.HexEncoder,
        )
        return digest.decode("ascii")


# Pinned installation set. Do not edit: doing so changes every password.
DEFAULT_PARAMS = TuningConstants(
    secret=ChannelMultipliers(forward=48271, cross=7919, reverse=65521),
    domain=ChannelMultipliers(forward=69069, cross=2713, reverse=40009),
    year=ChannelMultipliers(forward=1103, cross=1301, reverse=16807),
)


def params_from_dict(obj: dict) -> TuningConstants:
    """Build TuningConstants from a decoded params document.

    If the document carries a "fingerprint" it must match the values.
    """
    if not isinstance(obj, dict) or obj.get("schema") != PARAMS_SCHEMA:
        found = obj.get("schema") if isinstance(obj, dict) else type(obj).__name__
        raise ParamsError("E_PARAMS_SCHEMA", f"expected {PARAMS_SCHEMA}, found {found!r}")

    channels = {}
    for ch in CHANNELS:
        block = obj.get(ch)
        if not isinstance(block, dict):
            raise ParamsError("E_PARAMS_SCHEMA", f"missing channel {ch!r}")
        try:
            channels[ch] = ChannelMultipliers(**{k: block[k] for k in MULTIPLIERS})
        except KeyError as e:
            raise ParamsError("E_PARAMS_SCHEMA", f"missing {ch}.{e.args[0]}") from None
        except ParamsError as e:
            raise ParamsError("E_PARAMS_RANGE", f"{ch}.{e.detail}") from None

    params = TuningConstants(**channels)

    pinned = obj.get("fingerprint")
    if pinned is not None and str(pinned).lower() != params.fingerprint():
        raise ParamsError("E_PARAMS_FINGERPRINT")
    return params


def load_params(path: Path) -> TuningConstants:
    """Load a pinned tuning constants set from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise ParamsError("E_PARAMS_MISSING", str(path))
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParamsError("E_PARAMS_JSON", str(e)) from None
    return params_from_dict(obj)
