"""Deterministic password derivation: the mixing engine.

Each output position owns a 16-bit accumulator. On every iteration the
secret, domain label and year label each fold one byte (plus its mirror
byte and a position-dependent cross term) into the accumulator of the
current position, and the accumulator selects the symbol emitted there.
The iteration budget scales with the inputs and is topped up, never
restarted, until every requested category shows up or the hard ceiling
is reached.
"""
from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from warnings import warn

from .alphabet import build_alphabet, category_names, missing_categories, satisfies
from .errors import CoverageWarning
from .length import output_length
from .params import DEFAULT_PARAMS, ChannelMultipliers, TuningConstants
from .parse import as_bytes
from .protocol import ACC_MODULUS, FLAG_ALL, ITERATION_MAX
from .wipe import wipe, wiped


def _alloc_state(n: int) -> array:
    """Allocate n zeroed 16-bit accumulators."""
    return array("H", bytes(2 * n))


@dataclass(frozen=True)
class DerivationRequest:
    secret: bytes = field(repr=False)
    domain_label: bytes
    year_label: bytes
    fixed_length: int | None = None
    categories: int = FLAG_ALL

    @classmethod
    def create(cls, secret, domain_label, year_label, fixed_length=None, categories=FLAG_ALL):
        """Build a request, UTF-8 encoding any text inputs."""
        if not 0 <= int(categories) <= FLAG_ALL:
            raise ValueError(f"category mask out of range: {categories!r}")
        return cls(
            as_bytes(secret),
            as_bytes(domain_label),
            as_bytes(year_label),
            fixed_length,
            int(categories),
        )


@dataclass
class Derivation:
    """Outcome of one derivation.

    complete is False when the hard iteration ceiling was reached before
    every requested category appeared; missing holds those categories.
    The caller owns password and should wipe it when done.
    """

    password: bytearray = field(repr=False)
    complete: bool
    iterations: int
    missing: int = 0


class MixingEngine:
    """Runs the accumulator mixing loop with one fixed set of tuning constants."""

    def __init__(self, params: TuningConstants = DEFAULT_PARAMS):
        self.params = params

    def run(self, request: DerivationRequest) -> Derivation:
        flags = request.categories
        if not flags:
            return Derivation(bytearray(), complete=True, iterations=0)

        out_len = output_length(request.fixed_length, request.year_label)

        alphabet, alphabet_len = build_alphabet(flags)
        with wiped(alphabet):
            state = _alloc_state(out_len)
            with wiped(state):
                password = bytearray(out_len)
                try:
                    iterations = self._mix(request, alphabet, alphabet_len, state, password)
                except BaseException:
                    wipe(password)
                    raise

        missing = missing_categories(password, flags)
        return Derivation(password, complete=not missing, iterations=iterations, missing=missing)

    def _mix(
        self,
        request: DerivationRequest,
        alphabet: bytearray,
        alphabet_len: int,
        state: array,
        password: bytearray,
    ) -> int:
        flags = request.categories
        out_len = len(password)
        channels = (
            (request.secret, self.params.secret),
            (request.domain_label, self.params.domain),
            (request.year_label, self.params.year),
        )

        limit = alphabet_len * (
            len(request.secret) + len(request.domain_label) + len(request.year_label) + out_len + flags
        )

        cursors = [0, 0, 0]
        out_pos = 0
        iteration = 0
        while iteration < limit:
            if out_pos >= out_len:
                out_pos = 0

            acc = state[out_pos]
            for i, (data, mult) in enumerate(channels):
                n = len(data)
                if cursors[i] >= n:
                    cursors[i] = 0
                if n:
                    acc = _fold(acc, data, n, cursors[i], out_pos, mult)
            state[out_pos] = acc

            # May be overwritten on a later pass through this position.
            password[out_pos] = alphabet[acc % alphabet_len]

            out_pos += 1
            cursors[0] += 1
            cursors[1] += 1
            cursors[2] += 1
            iteration += 1

            # Budget exhausted but a requested category is still missing:
            # keep going for one more pass over the output, up to the ceiling.
            if iteration == limit and limit < ITERATION_MAX and not satisfies(password, flags):
                limit = min(limit + out_len, ITERATION_MAX)

        return iteration


def _fold(acc: int, data: bytes, n: int, cursor: int, pos: int, mult: ChannelMultipliers) -> int:
    return (
        acc
        + data[cursor] * mult.forward
        + pos * cursor * mult.cross
        + data[n - cursor - 1] * mult.reverse
    ) % ACC_MODULUS


def derive(
    secret,
    domain_label,
    year_label,
    fixed_length: int | None = None,
    categories: int = FLAG_ALL,
    params: TuningConstants = DEFAULT_PARAMS,
) -> bytearray:
    """Derive the site password for (secret, domain_label, year_label).

    Returns a bytearray the caller must wipe once done with it. Emits a
    CoverageWarning if a requested category could not be placed before the
    iteration ceiling; the password is returned regardless.
    """
    request = DerivationRequest.create(secret, domain_label, year_label, fixed_length, categories)
    result = MixingEngine(params).run(request)
    if not result.complete:
        warn(
            "Derived password lacks requested categories: "
            + ", ".join(category_names(result.missing))
            + f" (iteration ceiling {ITERATION_MAX} reached)",
            CoverageWarning,
            stacklevel=2,
        )
    return result.password
