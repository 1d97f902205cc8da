"""
botkeeper/db/store.py

Purpose: JSON file record store

- Single users file holding a pretty-printed array of user records
- Whole-collection load/save, atomic replace on write
- Serialized load-mutate-save transactions
- Proper store lifecycle management (open/close/health)
"""

import json
import os
import stat
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from botkeeper.core.config import settings
from botkeeper.core.exceptions import CorruptStoreError, StoreIOError
from botkeeper.core.logging import get_logger
from botkeeper.models.user import UserRecord

logger = get_logger(__name__)


class RecordStore:
    """
    Durable collection of user records backed by one JSON file.

    Every write replaces the whole file. Callers that read, change and write
    back must do so through ``transaction()`` so concurrent requests cannot
    lose each other's updates.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> List[UserRecord]:
        """
        Returns the full record collection.

        A missing file is treated as an empty collection and created.

        Raises:
            StoreIOError: If the file cannot be read
            CorruptStoreError: If the file is not a JSON array of user records
        """
        with self._lock:
            if not self.path.exists():
                logger.info(f"Users file not found, creating empty store at {self.path}")
                self.save([])
                return []

            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise StoreIOError(f"Could not read users file: {e}") from e

            try:
                data = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise CorruptStoreError(f"Users file is not valid JSON: {e}") from e

            if not isinstance(data, list):
                raise CorruptStoreError(
                    f"Users file must hold a JSON array, found {type(data).__name__}"
                )

            records = []
            for position, item in enumerate(data):
                try:
                    records.append(UserRecord.model_validate(item))
                except PydanticValidationError as e:
                    raise CorruptStoreError(
                        f"Invalid user record at position {position}",
                        details=e.errors(include_url=False, include_context=False)
                    ) from e
            return records

    def save(self, records: List[UserRecord]) -> None:
        """
        Overwrites the users file with ``records``, indented for humans.

        Raises:
            StoreIOError: If the file cannot be written
        """
        payload = json.dumps([record.to_document() for record in records], indent=2, ensure_ascii=False)

        with self._lock:
            tmp_name = None
            try:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self.path)
                tmp_name = None
            except OSError as e:
                raise StoreIOError(f"Could not write users file: {e}") from e
            finally:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)

    def _file_mode(self) -> int:
        """Permission bits for the rewritten file: the current file's, or 0o644."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return 0o644

    @contextmanager
    def transaction(self) -> Iterator[List[UserRecord]]:
        """
        Load the collection, hand it to the caller for mutation and save it
        when the block exits cleanly. Nothing is written if the block raises.

        Usage:
            with store.transaction() as records:
                records.append(new_record)
        """
        with self._lock:
            records = self.load()
            yield records
            self.save(records)

    def find(self, records: List[UserRecord], email: str) -> Optional[int]:
        """Index of the record with ``email`` in ``records``, or None."""
        for index, record in enumerate(records):
            if record.email == email:
                return index
        return None


# Global store handle
_store: Optional[RecordStore] = None


def open_store(path: Optional[Union[str, Path]] = None) -> RecordStore:
    """
    Opens the record store and makes sure the users file exists.
    Called during application startup.

    Args:
        path: Users file location (defaults to settings.USERS_FILE)
    """
    global _store

    if _store is not None:
        logger.warning("Record store already initialized")
        return _store

    store_path = Path(path if path is not None else settings.USERS_FILE).expanduser().resolve()
    store = RecordStore(store_path)
    store.load()

    _store = store
    logger.info(f"Record store opened at {store_path}")
    return _store


def close_store():
    """
    Releases the record store handle.
    Called during application shutdown.
    """
    global _store

    if _store is not None:
        logger.info("Closing record store")
        _store = None


def check_store_health() -> bool:
    """
    Checks that the users file can be loaded.

    Returns:
        True if the store is readable and well-formed, False otherwise
    """
    if _store is None:
        logger.error("Record store not initialized")
        return False

    try:
        _store.load()
        return True
    except (StoreIOError, CorruptStoreError) as e:
        logger.error(f"Record store health check failed: {e.message}")
        return False


def get_store() -> RecordStore:
    """
    Returns the open record store.

    Raises:
        RuntimeError: If the store is not initialized
    """
    if _store is None:
        raise RuntimeError(
            "Record store not initialized. Call open_store() during startup."
        )
    return _store
