"""Shared CLI helpers and output utilities."""

from __future__ import annotations

import contextlib
import json
from collections.abc import Generator
from typing import NoReturn

import click

from todostore.core.config import StoreConfig, StoreRootError, resolve_config
from todostore.core.errors import StoreError
from todostore.storage.records import RecordStore


# ---------------------------------------------------------------------------
# Root & config
# ---------------------------------------------------------------------------


def require_config(is_json: bool = False) -> StoreConfig:
    """Resolve the store configuration or exit with error.

    The root comes from TODOSTORE_ROOT or a walk-up from the cwd; the two
    path settings can then be overridden individually from the environment.
    """
    try:
        return resolve_config()
    except StoreRootError as e:
        output_error(str(e), "NOT_INITIALIZED", is_json)


def require_store(is_json: bool = False) -> RecordStore:
    return RecordStore.from_config(require_config(is_json))


@contextlib.contextmanager
def store_errors(is_json: bool) -> Generator[None, None, None]:
    """Turn any StoreError raised inside the block into an error exit."""
    try:
        yield
    except StoreError as e:
        output_error(str(e), e.code, is_json)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def json_envelope(ok: bool, *, data: object = None, error: object = None) -> str:
    """Build a structured JSON output envelope."""
    result: dict = {"ok": ok}
    if data is not None:
        result["data"] = data
    if error is not None:
        result["error"] = error
    return json.dumps(result, sort_keys=True, indent=2) + "\n"


def json_error_obj(code: str, message: str) -> dict:
    """Build an error object for the JSON envelope."""
    return {"code": code, "message": message}


def output_error(message: str, code: str, is_json: bool, exit_code: int = 1) -> NoReturn:
    """Print error and exit. JSON errors go to stdout; human errors to stderr."""
    if is_json:
        click.echo(json_envelope(False, error=json_error_obj(code, message)))
    else:
        click.echo(f"Error: {message}", err=True)
    raise SystemExit(exit_code)


def output_result(
    *,
    data: object,
    human_message: str,
    quiet_value: str,
    is_json: bool,
    is_quiet: bool,
) -> None:
    """Print success result in the appropriate format."""
    if is_json:
        click.echo(json_envelope(True, data=data))
    elif is_quiet:
        click.echo(quiet_value)
    else:
        click.echo(human_message)


def output_options(f):  # noqa: ANN001, ANN201
    """Decorator adding ``--json`` and ``--quiet`` to a command."""
    f = click.option("--quiet", is_flag=True, help="Print only the primary value.")(f)
    f = click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")(f)
    return f

