import warnings

import pytest

from dprpwg_core import mixing
from dprpwg_core.errors import CoverageWarning
from dprpwg_core.mixing import DerivationRequest, MixingEngine, derive
from dprpwg_core.params import DEFAULT_PARAMS, ChannelMultipliers, TuningConstants
from dprpwg_core.protocol import (
    FLAG_ALL,
    FLAG_DIG,
    FLAG_LOW,
    FLAG_SYM,
    FLAG_UPP,
    ITERATION_MAX,
    OUTPUT_DIG,
    OUTPUT_LOW,
    OUTPUT_SYM,
    OUTPUT_UPP,
)

# Pinned against DEFAULT_PARAMS. Any change here means every user's
# passwords changed.
GOLDEN = [
    ("correct horse", "example.com", "2024", None, FLAG_ALL, b"pU=v8LZB{-2q}-+/"),
    ("correct horse", "example.com", "2025", None, FLAG_ALL, b"?5iY=XI;4xgf-lMdf"),
    ("correct horse", "example.org", "2024", None, FLAG_ALL, b"k/1p?C2x2L]lmv5A"),
    ("correct horse", "example.com", "2024", 20, FLAG_LOW | FLAG_DIG, b"e6nlnk5znkfp806zj6xa"),
    ("correct horse", "example.com", "2024", 8, FLAG_DIG, b"22562257"),
    ("hunter2", "mail.example.net", "2031", None, FLAG_ALL, b"K5LF?=+LM6A:31Gh3t"),
    ("correct horse", "example.com", "abcd", None, FLAG_LOW | FLAG_UPP, b"qOQNBTnyIXVk"),
    ("correct horse", "example.com", "2024", None, FLAG_LOW, b"kfywkssdkamjojuo"),
    ("correct horse battery staple", "site7.example.com", "2024", None, FLAG_ALL, b"};yUY8vN!Tryo0JI"),
    ("pässwörd", "example.com", "2024", None, FLAG_ALL, b"zIrlS5kHdvXTHx:+"),
]


@pytest.mark.parametrize("secret,domain,year,fixed,flags,expected", GOLDEN)
def test_golden_outputs(secret, domain, year, fixed, flags, expected):
    assert derive(secret, domain, year, fixed, flags) == expected


def test_concrete_scenario():
    pw = derive("correct horse", "example.com", "2024")
    assert len(pw) == 16
    assert pw == b"pU=v8LZB{-2q}-+/"


def test_determinism():
    a = derive(b"s3cret", b"example.com", b"2026", None, FLAG_ALL)
    b = derive(b"s3cret", b"example.com", b"2026", None, FLAG_ALL)
    assert a == b
    assert a is not b


def test_text_and_bytes_inputs_agree():
    assert derive("pässwörd", "example.com", "2024") == derive(
        "pässwörd".encode("utf-8"), bytearray(b"example.com"), b"2024"
    )


@pytest.mark.parametrize("fixed", [None, 0, 5, 40])
def test_empty_categories_give_empty_password(fixed):
    assert derive("correct horse", "example.com", "2024", fixed, 0) == b""
    result = MixingEngine().run(DerivationRequest.create("x", "y", "2024", fixed, 0))
    assert result.password == b""
    assert result.complete
    assert result.iterations == 0


def test_length_contract():
    for fixed in (1, 7, 12, 64, 300):
        assert len(derive("correct horse", "example.com", "2024", fixed, FLAG_DIG)) == fixed
    assert len(derive("correct horse", "example.com", "1990")) == 12
    assert len(derive("correct horse", "example.com", "2100")) == 32
    assert len(derive("correct horse", "example.com", "not a year")) == 12


@pytest.mark.parametrize("flags", range(1, 16))
def test_alphabet_containment(flags):
    allowed = b""
    if flags & FLAG_LOW:
        allowed += OUTPUT_LOW
    if flags & FLAG_DIG:
        allowed += OUTPUT_DIG
    if flags & FLAG_SYM:
        allowed += OUTPUT_SYM
    if flags & FLAG_UPP:
        allowed += OUTPUT_UPP

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", CoverageWarning)
        pw = derive("correct horse", "example.com", "2024", 24, flags)
    assert len(pw) == 24
    assert all(b in allowed for b in pw)


def test_category_coverage_for_realistic_inputs():
    engine = MixingEngine()
    for i in range(50):
        req = DerivationRequest.create(
            "correct horse battery staple", f"site{i}.example.com", "2024", None, FLAG_ALL
        )
        result = engine.run(req)
        assert result.complete, req.domain_label
        assert result.missing == 0


def test_ceiling_reached_with_empty_inputs():
    result = MixingEngine().run(DerivationRequest.create(b"", b"", b"", None, FLAG_ALL))
    # No input contributes: every accumulator stays 0, every symbol is the first one.
    assert result.password == b"aaaaaaaaaaaa"
    assert not result.complete
    assert result.missing == FLAG_UPP | FLAG_DIG | FLAG_SYM
    assert result.iterations == ITERATION_MAX


def test_ceiling_reached_with_tiny_secret():
    result = MixingEngine().run(DerivationRequest.create("s", "", "", None, FLAG_ALL))
    assert result.password == b"1111pppppppp"
    assert not result.complete
    assert result.missing == FLAG_SYM | FLAG_UPP
    assert result.iterations == ITERATION_MAX


def test_derive_warns_when_categories_not_guaranteed():
    with pytest.warns(CoverageWarning, match="symbol, upper"):
        pw = derive("s", "", "", None, FLAG_ALL)
    assert pw == b"1111pppppppp"


def test_derive_does_not_warn_when_complete():
    with warnings.catch_warnings():
        warnings.simplefilter("error", CoverageWarning)
        derive("correct horse", "example.com", "2024")


def test_initial_budget_above_ceiling_is_kept():
    req = DerivationRequest.create("correct horse", "example.com", "2024", 1000, FLAG_ALL)
    result = MixingEngine().run(req)
    assert len(result.password) == 1000
    assert result.iterations == 79 * (13 + 11 + 4 + 1000 + FLAG_ALL)


def test_tuning_constants_change_output():
    other = TuningConstants(
        secret=ChannelMultipliers(3, 5, 7),
        domain=ChannelMultipliers(11, 13, 17),
        year=ChannelMultipliers(19, 23, 29),
    )
    a = derive("correct horse", "example.com", "2024", params=DEFAULT_PARAMS)
    b = derive("correct horse", "example.com", "2024", params=other)
    assert a != b
    assert len(a) == len(b) == 16


def test_category_mask_out_of_range():
    with pytest.raises(ValueError):
        DerivationRequest.create("a", "b", "2024", None, 16)
    with pytest.raises(ValueError):
        DerivationRequest.create("a", "b", "2024", None, -1)


def test_request_repr_hides_secret():
    req = DerivationRequest.create("hunter2", "example.com", "2024")
    assert "hunter2" not in repr(req)


def _instrument(monkeypatch):
    """Record every working buffer the engine allocates."""
    seen = []
    alloc_state = mixing._alloc_state
    build_alphabet = mixing.build_alphabet

    def recording_state(n):
        buf = alloc_state(n)
        seen.append(buf)
        return buf

    def recording_alphabet(flags):
        buf, n = build_alphabet(flags)
        seen.append(buf)
        return buf, n

    monkeypatch.setattr(mixing, "_alloc_state", recording_state)
    monkeypatch.setattr(mixing, "build_alphabet", recording_alphabet)
    return seen


def test_working_buffers_are_wiped(monkeypatch):
    seen = _instrument(monkeypatch)
    pw = derive("correct horse", "example.com", "2024")
    assert pw == b"pU=v8LZB{-2q}-+/"
    assert len(seen) == 2
    for buf in seen:
        assert len(buf) > 0
        assert not any(buf)


def test_working_buffers_are_wiped_on_failure(monkeypatch):
    seen = _instrument(monkeypatch)
    calls = {"n": 0}
    fold = mixing._fold

    def failing_fold(*args):
        calls["n"] += 1
        if calls["n"] == 50:
            raise RuntimeError("boom")
        return fold(*args)

    monkeypatch.setattr(mixing, "_fold", failing_fold)
    with pytest.raises(RuntimeError):
        derive("correct horse", "example.com", "2024")
    assert len(seen) == 2
    for buf in seen:
        assert not any(buf)


def test_allocation_failure_propagates(monkeypatch):
    seen = _instrument(monkeypatch)

    def no_memory(n):
        raise MemoryError

    monkeypatch.setattr(mixing, "_alloc_state", no_memory)
    with pytest.raises(MemoryError):
        derive("correct horse", "example.com", "2024")
    # The alphabet buffer was built before the failure and is still wiped.
    assert len(seen) == 1
    assert not any(seen[0])
