import contextlib
import json
import logging
import os
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from string_analyzer.errors import PersistenceError
from string_analyzer.schemas import StringResponse

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[StringResponse])


class StringStore:
    """In-memory collection of analyzed strings backed by one JSON file.

    The whole collection is rewritten on every mutation. If a write fails
    after ``insert`` or ``remove_by_value`` the in-memory collection already
    holds the change while the file does not; the failure is raised so the
    caller can report it.
    """

    def __init__(self, file_path: str):
        self.file_path = os.path.abspath(file_path)
        self._strings: List[StringResponse] = []

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, value: str) -> bool:
        return self.find_by_value(value) is not None

    # --------------------------------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the data folder and load any existing records.

        Raises PersistenceError if the folder cannot be created or the file
        exists but does not hold a list of records.
        """
        folder = os.path.dirname(self.file_path)
        try:
            if not os.path.isdir(folder):
                os.makedirs(folder, exist_ok=True)
                logger.info(f"Created folder: {folder}")
        except OSError as e:
            raise PersistenceError(f"Could not create data folder {folder}: {e}") from e

        logger.info(f"Attempting to load from: {self.file_path}")
        if not os.path.exists(self.file_path):
            self._strings = []
            logger.warning(f"JSON file not found at {self.file_path}, starting with empty collection.")
            return

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            self._strings = _records_adapter.validate_python(raw)
        except (OSError, ValueError, ValidationError) as e:
            raise PersistenceError(f"Could not load strings from {self.file_path}: {e}") from e

        logger.info(f"Loaded {len(self._strings)} strings from JSON file.")

    def persist(self) -> None:
        """Rewrite the whole file, replacing it in one step."""
        payload = json.dumps(
            [record.model_dump() for record in self._strings],
            indent=2,
            ensure_ascii=False,
        )
        tmp_path = self.file_path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            logger.error(f"Failed to save strings to file: {e}")
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise PersistenceError(f"Failed to save data: {e}") from e

        logger.info(f"Successfully saved {len(self._strings)} strings to {self.file_path}")

    # --------------------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------------------

    def insert(self, record: StringResponse) -> StringResponse:
        """Append a record and save. Uniqueness is the caller's job."""
        self._strings.append(record)
        try:
            self.persist()
        except PersistenceError:
            logger.warning(f"In-memory collection now holds {record.id} but the file does not")
            raise
        return record

    def find_by_value(self, value: str) -> Optional[StringResponse]:
        for record in self._strings:
            if record.value == value:
                return record
        return None

    def remove_by_value(self, value: str) -> bool:
        for index, record in enumerate(self._strings):
            if record.value == value:
                del self._strings[index]
                break
        else:
            return False

        try:
            self.persist()
        except PersistenceError:
            logger.warning(f"In-memory collection no longer holds {record.id} but the file does")
            raise
        return True

    def all(self) -> List[StringResponse]:
        """The live collection in insertion order. Treat as read-only."""
        return self._strings
