"""One-file-per-record CRUD store.

Every operation goes to the data directory; nothing is cached between
calls. Operations on the same id race with plain filesystem semantics:
updates replace the file by rename (last writer wins) and deletes unlink
it (the losing delete raises NotFound).
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from todostore.core.config import StoreConfig
from todostore.core.errors import (
    InvalidText,
    NotFound,
    StorageReadFailed,
    StorageUnavailable,
    StorageWriteFailed,
)
from todostore.core.ids import RECORD_SUFFIX, is_safe_record_name, record_filename
from todostore.core.records import Record, make_record, sort_records
from todostore.storage.counter import SequenceGenerator
from todostore.storage.fs import create_file, remove_file, replace_file

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    """Read a record file verbatim (no newline translation)."""
    return path.read_bytes().decode("utf-8")


def _encode_text(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidText(f"Record text is not valid UTF-8: {exc}") from exc


class RecordStore:
    """CRUD over ``<data_dir>/<id>.txt`` files, ids issued by *sequence*."""

    def __init__(self, data_dir: Path, sequence: SequenceGenerator) -> None:
        self.data_dir = Path(data_dir)
        self.sequence = sequence

    @classmethod
    def from_config(cls, config: StoreConfig, *, lock_timeout: float = 10) -> RecordStore:
        sequence = SequenceGenerator(config["counter_file"], lock_timeout=lock_timeout)
        return cls(config["data_dir"], sequence)

    def _path(self, record_id: str) -> Path:
        """Map *record_id* to its file. Unusable ids cannot exist, so they are NotFound."""
        if not is_safe_record_name(record_id):
            raise NotFound(record_id)
        return self.data_dir / record_filename(record_id)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, text: str) -> Record:
        """Store *text* under a freshly issued id.

        Text that cannot be encoded is rejected before an id is issued. Once
        issued, the id is consumed even when the record write fails, so ids
        may have gaps. An existing file for the new id is never overwritten.
        """
        data = _encode_text(text)
        record_id = self.sequence.next_id()
        path = self.data_dir / record_filename(record_id)
        try:
            create_file(path, data)
        except FileExistsError:
            raise StorageWriteFailed(
                f"Refusing to overwrite existing record {record_id}; is the counter behind?"
            ) from None
        except OSError as exc:
            raise StorageWriteFailed(f"Could not write record {record_id}: {exc}") from exc
        logger.debug("Created record %s", record_id)
        return make_record(record_id, text)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_all(self) -> list[Record]:
        """Return every record currently in the data directory, ordered by id."""
        try:
            entries = list(os.scandir(self.data_dir))
        except OSError as exc:
            raise StorageUnavailable(
                f"Could not list data directory {self.data_dir}: {exc}"
            ) from exc

        records: list[Record] = []
        for entry in entries:
            name = entry.name
            if name.startswith(".") or not name.endswith(RECORD_SUFFIX):
                continue
            if not entry.is_file():
                continue
            record_id = name[: -len(RECORD_SUFFIX)]
            try:
                text = _read_text(Path(entry.path))
            except FileNotFoundError:
                # Deleted between listing and reading.
                logger.debug("Record %s vanished during listing", record_id)
                continue
            except (OSError, UnicodeDecodeError) as exc:
                raise StorageReadFailed(f"Could not read record {record_id}: {exc}") from exc
            records.append(make_record(record_id, text))
        return sort_records(records)

    def read_one(self, record_id: str) -> Record:
        path = self._path(record_id)
        try:
            text = _read_text(path)
        except FileNotFoundError:
            raise NotFound(record_id) from None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadFailed(f"Could not read record {record_id}: {exc}") from exc
        return make_record(record_id, text)

    # ------------------------------------------------------------------
    # Update / delete
    # ------------------------------------------------------------------

    def update(self, record_id: str, text: str) -> Record:
        """Overwrite the content of an existing record. The id never changes."""
        path = self._path(record_id)
        data = _encode_text(text)
        try:
            st = os.stat(path)
        except FileNotFoundError:
            raise NotFound(record_id) from None
        except OSError as exc:
            raise StorageReadFailed(f"Could not stat record {record_id}: {exc}") from exc
        if not stat.S_ISREG(st.st_mode):
            raise NotFound(record_id)
        try:
            replace_file(path, data)
        except OSError as exc:
            raise StorageWriteFailed(f"Could not write record {record_id}: {exc}") from exc
        logger.debug("Updated record %s", record_id)
        return make_record(record_id, text)

    def delete(self, record_id: str) -> None:
        path = self._path(record_id)
        try:
            remove_file(path)
        except FileNotFoundError:
            raise NotFound(record_id) from None
        except OSError as exc:
            raise StorageWriteFailed(f"Could not delete record {record_id}: {exc}") from exc
        logger.debug("Deleted record %s", record_id)
