"""CLI entry point and commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from todostore.core.config import STORE_DIR, apply_env_overrides, default_config, initialize


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log store activity to stderr.")
def cli(verbose: bool) -> None:
    """todostore: one file per todo, one counter for ids."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(name)s: %(message)s")


@cli.command()
@click.option(
    "--path",
    "target_path",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Directory to initialize todostore in (defaults to current directory).",
)
def init(target_path: str) -> None:
    """Initialize a new todostore project."""
    root = Path(target_path)
    store_dir = root / STORE_DIR

    # Fail clearly if .todostore exists as a file (not a directory)
    if store_dir.exists() and not store_dir.is_dir():
        raise click.ClickException(
            f"Cannot initialize: '{STORE_DIR}' exists but is not a directory. "
            "Remove it and try again."
        )

    already = store_dir.is_dir()
    config = apply_env_overrides(default_config(root))
    try:
        initialize(config)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    except PermissionError:
        raise click.ClickException(f"Permission denied: cannot create {STORE_DIR}/ in {root}")
    except OSError as e:
        raise click.ClickException(f"Failed to initialize todostore: {e}")

    if already:
        click.echo(f"todostore already initialized in {STORE_DIR}/")
    else:
        click.echo(f"todostore initialized in {STORE_DIR}/")
    click.echo(f"Data directory: {config['data_dir']}")
    click.echo(f"Counter file: {config['counter_file']}")


# ---------------------------------------------------------------------------
# Register command modules (must be after cli group is defined)
# ---------------------------------------------------------------------------
from todostore.cli import record_cmds as _record_cmds  # noqa: E402, F401

if __name__ == "__main__":
    cli()
