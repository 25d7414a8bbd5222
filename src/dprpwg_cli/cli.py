"""dprpwg - derive per-site passwords from one remembered master password."""
from __future__ import annotations

import hmac
import json
from datetime import date
from pathlib import Path

import click

from dprpwg_core import (
    DEFAULT_PARAMS,
    DIVISOR_CLAMP,
    DIVISOR_WRAP,
    DerivationRequest,
    MixingEngine,
    TuningConstants,
    load_params,
    strength,
)
from dprpwg_core.alphabet import category_names
from dprpwg_core.params import PARAMS_SCHEMA
from dprpwg_core.protocol import FLAG_DIG, FLAG_LOW, FLAG_SYM, FLAG_UPP
from dprpwg_core.wipe import wipe

from .const import ERRORS
from .display import describe

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


class SecretError(Exception):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"{code}: {ERRORS[code]}")


def _load_params(params_path: Path | None) -> TuningConstants:
    if params_path is None:
        return DEFAULT_PARAMS
    return load_params(params_path)


def _read_secret(confirm: bool = True, prompt: str = "Master password") -> bytearray:
    """Prompt for a hidden value (twice when confirm is set)."""
    first = bytearray(click.prompt(prompt, hide_input=True, default="",
                                   show_default=False).encode("utf-8"))
    if not confirm:
        return first
    second = bytearray(click.prompt("Re-enter password", hide_input=True, default="",
                                    show_default=False).encode("utf-8"))
    try:
        if not hmac.compare_digest(bytes(first), bytes(second)):
            wipe(first)
            raise SecretError("E_SECRET_MISMATCH")
    finally:
        wipe(second)
    return first


def _flags(lower: bool, upper: bool, digits: bool, symbols: bool) -> int:
    flags = 0
    if lower:
        flags |= FLAG_LOW
    if upper:
        flags |= FLAG_UPP
    if digits:
        flags |= FLAG_DIG
    if symbols:
        flags |= FLAG_SYM
    return flags


def category_options(f):
    for name, help_text in reversed((
        ("lower", "Lower case letters"),
        ("upper", "Upper case letters"),
        ("digits", "Digits"),
        ("symbols", "Symbols"),
    )):
        f = click.option(f"--{name}/--no-{name}", default=True, show_default=True, help=help_text)(f)
    return f


def params_option(f):
    return click.option(
        "--params",
        "params_path",
        type=click.Path(dir_okay=False, path_type=Path),
        envvar="DPRPWG_PARAMS",
        default=None,
        help="Pinned tuning constants JSON (default: built-in set)",
    )(f)


def _fatal(e: Exception) -> None:
    # Fail closed, with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)


@click.group()
def main():
    """Deterministic pseudo-random password generator."""


@main.command("derive")
@click.argument("domain")
@click.option("--year", default=None, help="Year label [default: current year]")
@click.option("--length", "fixed_length", type=int, default=0, show_default=True,
              help="Fixed password length; 0 derives the length from the year")
@category_options
@params_option
@click.option("--no-confirm", is_flag=True, help="Ask for the master password only once")
def derive_cmd(domain: str, year: str | None, fixed_length: int, lower: bool, upper: bool,
               digits: bool, symbols: bool, params_path: Path | None, no_confirm: bool) -> None:
    """Derive the password for DOMAIN."""
    if year is None:
        year = str(date.today().year)
    flags = _flags(lower, upper, digits, symbols)

    secret = None
    result = None
    try:
        engine = MixingEngine(_load_params(params_path))
        secret = _read_secret(confirm=not no_confirm)
        if not secret:
            raise SecretError("E_SECRET_EMPTY")

        request = DerivationRequest.create(secret, domain, year, fixed_length, flags)
        result = engine.run(request)

        click.echo(result.password.decode("ascii"))
        info = describe(strength(result.password, year, flags))
        click.echo(f"Strength: {info['label']}")
        if not result.complete:
            click.echo(
                "WARNING: categories not guaranteed, missing: "
                + ", ".join(category_names(result.missing)),
                err=True,
            )
    except (click.Abort, click.ClickException):
        raise
    except Exception as e:
        _fatal(e)
    finally:
        if secret is not None:
            wipe(secret)
        if result is not None:
            wipe(result.password)


@main.command("strength")
@click.option("--year", default=None, help="Year label [default: current year]")
@category_options
@click.option("--wrap-divisor", is_flag=True,
              help="Reproduce the 32-bit unsigned divisor wraparound for years before 1940")
def strength_cmd(year: str | None, lower: bool, upper: bool, digits: bool, symbols: bool,
                 wrap_divisor: bool) -> None:
    """Score a password read from the prompt."""
    if year is None:
        year = str(date.today().year)
    flags = _flags(lower, upper, digits, symbols)
    policy = DIVISOR_WRAP if wrap_divisor else DIVISOR_CLAMP

    password = None
    try:
        password = _read_secret(confirm=False, prompt="Password")
        record = describe(strength(password, year, flags, policy))
        click.echo(json.dumps(record, **CANONICAL_JSON_KW))
    except (click.Abort, click.ClickException):
        raise
    except Exception as e:
        _fatal(e)
    finally:
        if password is not None:
            wipe(password)


@main.command("params")
@params_option
def params_cmd(params_path: Path | None) -> None:
    """Print the fingerprint of the tuning constants in use."""
    try:
        params = _load_params(params_path)
    except Exception as e:
        _fatal(e)
    record = {
        "schema": PARAMS_SCHEMA,
        "fingerprint": params.fingerprint(),
        "source": str(params_path) if params_path is not None else "builtin",
    }
    click.echo(json.dumps(record, **CANONICAL_JSON_KW))


if __name__ == "__main__":
    main()
