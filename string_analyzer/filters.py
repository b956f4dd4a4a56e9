import logging
from typing import Iterable, List

from string_analyzer.schemas import FilterSpec, PartialFilterSpec, StringResponse

logger = logging.getLogger(__name__)

VOWELS = ("a", "e", "i", "o", "u")
VOWEL_TERM = "vowel"


def _matches_full(record: StringResponse, spec: FilterSpec) -> bool:
    props = record.properties

    if spec.is_palindrome is not None and props.is_palindrome != spec.is_palindrome:
        return False
    if spec.min_length is not None and props.length < spec.min_length:
        return False
    if spec.max_length is not None and props.length > spec.max_length:
        return False
    if spec.word_count is not None and props.word_count != spec.word_count:
        return False
    if spec.contains_character is not None and spec.contains_character not in record.value:
        return False
    return True


def _matches_contains(record: StringResponse, spec: PartialFilterSpec) -> bool:
    if not spec.contains:
        return True

    term = spec.contains[0]
    if term == VOWEL_TERM:
        # first letter must be a vowel; an empty string has none
        return bool(record.value) and record.value[0].lower() in VOWELS
    return str(term) in record.value


def apply_full_filter(records: Iterable[StringResponse], spec: FilterSpec) -> List[StringResponse]:
    """Records satisfying every set field of ``spec``, in their original order.

    ``min_length > max_length`` simply matches nothing.
    """
    result = [record for record in records if _matches_full(record, spec)]
    logger.debug(f"Full filter {spec.applied()} matched {len(result)} strings")
    return result


def apply_partial_filter(records: Iterable[StringResponse], spec: PartialFilterSpec) -> List[StringResponse]:
    """Like :func:`apply_full_filter`, plus the ``contains`` term check."""
    result = [
        record
        for record in records
        if _matches_full(record, spec) and _matches_contains(record, spec)
    ]
    logger.debug(f"Partial filter {spec.applied()} matched {len(result)} strings")
    return result
