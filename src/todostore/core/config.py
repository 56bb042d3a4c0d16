"""Store configuration: the data directory and counter file paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TypedDict

STORE_DIR = ".todostore"
ROOT_ENV = "TODOSTORE_ROOT"
DATA_DIR_ENV = "TODOSTORE_DATA_DIR"
COUNTER_FILE_ENV = "TODOSTORE_COUNTER_FILE"

DEFAULT_DATA_DIRNAME = "data"
DEFAULT_COUNTER_FILENAME = "counter.txt"


class StoreConfig(TypedDict):
    data_dir: Path
    counter_file: Path


class StoreRootError(Exception):
    """No usable .todostore/ project could be located."""


def default_config(root: Path) -> StoreConfig:
    """Return the default layout under ``root/.todostore/``.

    ``root`` is the project directory (the directory that contains
    .todostore/), not the .todostore/ directory itself.
    """
    store_dir = root / STORE_DIR
    return {
        "data_dir": store_dir / DEFAULT_DATA_DIRNAME,
        "counter_file": store_dir / DEFAULT_COUNTER_FILENAME,
    }


def apply_env_overrides(config: StoreConfig, environ: dict[str, str] | None = None) -> StoreConfig:
    """Return a copy of *config* with TODOSTORE_DATA_DIR / TODOSTORE_COUNTER_FILE applied.

    Empty values are ignored.
    """
    env = os.environ if environ is None else environ
    result: StoreConfig = {
        "data_dir": config["data_dir"],
        "counter_file": config["counter_file"],
    }
    data_dir = env.get(DATA_DIR_ENV)
    if data_dir:
        result["data_dir"] = Path(data_dir)
    counter_file = env.get(COUNTER_FILE_ENV)
    if counter_file:
        result["counter_file"] = Path(counter_file)
    return result


def validate_config(config: StoreConfig) -> list[str]:
    """Return a list of problems with *config* (empty when usable).

    The counter file must not live inside the data directory, otherwise
    it would be listed as a record.
    """
    problems: list[str] = []
    data_dir = Path(config["data_dir"])
    counter_file = Path(config["counter_file"])
    if counter_file.exists() and counter_file.is_dir():
        problems.append(f"Counter file path is a directory: {counter_file}")
    if data_dir.exists() and not data_dir.is_dir():
        problems.append(f"Data directory path is not a directory: {data_dir}")
    if counter_file.parent.resolve() == data_dir.resolve():
        problems.append("Counter file must not live inside the data directory")
    return problems


def initialize(config: StoreConfig) -> None:
    """Create the directories *config* points at. Idempotent.

    Raises:
        ValueError: If *config* fails validation.
    """
    problems = validate_config(config)
    if problems:
        raise ValueError("; ".join(problems))
    Path(config["data_dir"]).mkdir(parents=True, exist_ok=True)
    # The counter file itself is not created: absent means nothing issued yet.
    Path(config["counter_file"]).parent.mkdir(parents=True, exist_ok=True)


def _find_project_root(start: Path, env_root: str | None) -> Path:
    """Return the directory holding .todostore/.

    An explicit TODOSTORE_ROOT wins and must be valid; otherwise the
    nearest ancestor of *start* (inclusive) with a .todostore/ is used.
    """
    if env_root is not None:
        candidate = Path(env_root)
        if not env_root or not (candidate / STORE_DIR).is_dir():
            raise StoreRootError(
                f"{ROOT_ENV}={env_root!r} does not point at a directory containing {STORE_DIR}/"
            )
        return candidate

    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / STORE_DIR).is_dir():
            return candidate
    raise StoreRootError(
        f"Not a todostore project (no {STORE_DIR}/ found). Run 'todostore init' first."
    )


def resolve_config(start: Path | None = None, environ: dict[str, str] | None = None) -> StoreConfig:
    """Locate the project and return its config with env overrides applied.

    Raises:
        StoreRootError: If TODOSTORE_ROOT is invalid or no project is found.
    """
    env = os.environ if environ is None else environ
    root = _find_project_root(start or Path.cwd(), env.get(ROOT_ENV))
    return apply_env_overrides(default_config(root), env)
