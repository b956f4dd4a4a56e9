import functools
import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from string_analyzer.errors import ErrorKind, PersistenceError, Result
from string_analyzer.filters import apply_full_filter
from string_analyzer.phrases import filter_by_phrase
from string_analyzer.schemas import FilterSpec, PartialFilterSpec, StringListResponse
from string_analyzer.store import StringStore
from string_analyzer.utils import build_record

logger = logging.getLogger(__name__)


def _guarded(operation):
    """Turn stray exceptions into PERSISTENCE_FAILURE or INTERNAL results."""

    @functools.wraps(operation)
    def wrapper(self, *args, **kwargs) -> Result:
        try:
            return operation(self, *args, **kwargs)
        except PersistenceError as e:
            logger.error(f"{operation.__name__} failed to persist: {e}")
            return Result.failure(ErrorKind.PERSISTENCE_FAILURE, "Failed to save data")
        except Exception:
            logger.exception(f"Unexpected error in {operation.__name__}")
            return Result.failure(ErrorKind.INTERNAL, "Internal server error")

    return wrapper


class StringAnalyzerService:
    """Entry point for every string operation.

    Each method returns a :class:`Result`; errors carry an :class:`ErrorKind`
    that the HTTP layer maps to a status code.
    """

    def __init__(self, store: StringStore, phrase_table: Optional[Mapping[str, PartialFilterSpec]] = None):
        self.store = store
        self.phrase_table = phrase_table

    @_guarded
    def upload(self, value: Any) -> Result:
        if value is None or value == "":
            return Result.failure(ErrorKind.BAD_INPUT, "Invalid request body or missing 'value' field")
        if not isinstance(value, str):
            return Result.failure(ErrorKind.BAD_INPUT, "Invalid data type for 'value' (must be string)")

        if self.store.find_by_value(value) is not None:
            logger.info(f"Rejected duplicate string: {value!r}")
            return Result.failure(ErrorKind.CONFLICT, "String already exists in the system")

        record = self.store.insert(build_record(value))
        logger.info(f"Stored string {record.id}")
        return Result.success(record)

    @_guarded
    def get_by_value(self, value: Any) -> Result:
        if not value or not isinstance(value, str):
            return Result.failure(ErrorKind.BAD_INPUT, "Missing string value")

        record = self.store.find_by_value(value)
        if record is None:
            return Result.failure(ErrorKind.NOT_FOUND, "String does not exist in the system")
        return Result.success(record)

    @_guarded
    def get_all(self) -> Result:
        strings = list(self.store.all())
        return Result.success(StringListResponse(data=strings, count=len(strings)))

    @_guarded
    def get_by_filter(self, spec: Union[FilterSpec, Mapping[str, Any], None]) -> Result:
        if spec is None:
            return Result.failure(ErrorKind.BAD_INPUT, "Invalid query parameter values or types")
        if not isinstance(spec, FilterSpec):
            try:
                spec = FilterSpec.model_validate(spec)
            except ValidationError as e:
                logger.info(f"Rejected malformed filter: {e.errors()}")
                return Result.failure(ErrorKind.BAD_INPUT, "Invalid query parameter values or types")

        strings = apply_full_filter(self.store.all(), spec)
        return Result.success(
            StringListResponse(data=strings, count=len(strings), filters_applied=spec.applied())
        )

    @_guarded
    def get_by_phrase(self, query: Any) -> Result:
        if not query or not isinstance(query, str):
            return Result.failure(ErrorKind.BAD_INPUT, "Unable to parse natural language query")
        return filter_by_phrase(self.store.all(), query, self.phrase_table)

    @_guarded
    def delete_by_value(self, value: Any) -> Result:
        if not value or not isinstance(value, str):
            return Result.failure(ErrorKind.BAD_INPUT, "Missing string value")

        if not self.store.remove_by_value(value):
            return Result.failure(ErrorKind.NOT_FOUND, "String does not exist in the system")
        logger.info(f"Deleted string {value!r}")
        return Result.success(None)
