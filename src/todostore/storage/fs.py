"""Durable file primitives for the counter and record files.

Content is always staged in a hidden temp file beside its target, flushed
and fsynced, then published in one step: ``os.replace`` to overwrite,
``os.link`` to create without ever clobbering an existing file. Readers see
either the old content or the new, never a partial write.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

TEMP_PREFIX = ".tmp."


def _sync_dir(directory: Path) -> None:
    """Make renames, links and unlinks in *directory* durable.

    Platforms that cannot fsync a directory descriptor (notably macOS HFS+)
    raise ``OSError``; the entry change itself has already happened there.
    """
    try:
        fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


@contextlib.contextmanager
def _staged(target: Path, data: bytes) -> Iterator[str]:
    """Yield the path of a synced temp file holding *data* next to *target*.

    The temp file is removed on exit whether or not it was published.

    Raises:
        FileNotFoundError: If the target's directory does not exist.
    """
    directory = target.parent
    if not directory.is_dir():
        raise FileNotFoundError(f"Parent directory does not exist: {directory}")
    fd, tmp = tempfile.mkstemp(dir=directory, prefix=TEMP_PREFIX)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        yield tmp
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)


def replace_file(path: Path, data: bytes) -> None:
    """Publish *data* at *path*, replacing whatever was there."""
    with _staged(path, data) as tmp:
        os.replace(tmp, path)
    _sync_dir(path.parent)


def create_file(path: Path, data: bytes) -> None:
    """Publish *data* at *path* only if nothing exists there yet.

    Raises:
        FileExistsError: If *path* already exists; it is left untouched.
    """
    with _staged(path, data) as tmp:
        os.link(tmp, path)
    _sync_dir(path.parent)


def remove_file(path: Path) -> None:
    """Unlink *path* durably.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    os.unlink(path)
    _sync_dir(path.parent)
