"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from todostore.core.config import StoreConfig, default_config, initialize
from todostore.storage.counter import SequenceGenerator
from todostore.storage.records import RecordStore


@pytest.fixture()
def store_config(tmp_path: Path) -> StoreConfig:
    """Return an initialized default config rooted at tmp_path."""
    config = default_config(tmp_path)
    initialize(config)
    return config


@pytest.fixture()
def data_dir(store_config: StoreConfig) -> Path:
    return store_config["data_dir"]


@pytest.fixture()
def counter_file(store_config: StoreConfig) -> Path:
    return store_config["counter_file"]


@pytest.fixture()
def sequence(counter_file: Path) -> SequenceGenerator:
    return SequenceGenerator(counter_file, lock_timeout=5)


@pytest.fixture()
def store(data_dir: Path, sequence: SequenceGenerator) -> RecordStore:
    return RecordStore(data_dir, sequence)


@pytest.fixture()
def initialized_root(store_config: StoreConfig, tmp_path: Path) -> Path:
    """Return a project directory with .todostore/ already initialized."""
    return tmp_path


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return CliRunner()


@pytest.fixture()
def cli_env(initialized_root: Path) -> dict[str, str]:
    """Return env dict with TODOSTORE_ROOT pointing to initialized_root.

    The path overrides are blanked so a developer's own environment
    cannot leak into the tests.
    """
    return {
        "TODOSTORE_ROOT": str(initialized_root),
        "TODOSTORE_DATA_DIR": "",
        "TODOSTORE_COUNTER_FILE": "",
    }


@pytest.fixture()
def invoke(cli_runner: CliRunner, cli_env: dict[str, str]):
    """Return a helper that invokes CLI commands with the right environment.

    Usage::

        result = invoke("create", "buy milk")
    """
    from todostore.cli.main import cli

    def _invoke(*args: str, **kwargs):
        return cli_runner.invoke(cli, list(args), env=cli_env, **kwargs)

    return _invoke


@pytest.fixture()
def invoke_json(invoke):
    """Like invoke, but appends --json and parses the response.

    Returns (parsed_dict, exit_code) tuple.
    """

    def _invoke_json(*args: str) -> tuple[dict, int]:
        result = invoke(*args, "--json")
        parsed = json.loads(result.output)
        return parsed, result.exit_code

    return _invoke_json
