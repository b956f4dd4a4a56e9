"""Closed-vocabulary "natural language" filtering.

Only the literal sentences in ``PHRASE_TABLE`` are understood. A query is
matched by exact string equality; there is no tokenizing or fuzzy matching.
"""
import logging
from typing import Dict, Iterable, Optional

from string_analyzer.errors import ErrorKind, Result
from string_analyzer.filters import apply_partial_filter
from string_analyzer.schemas import (
    InterpretedQuery,
    NaturalLanguageResponse,
    PartialFilterSpec,
    PhraseEntry,
    StringResponse,
)

logger = logging.getLogger(__name__)

PHRASE_ENTRIES = [
    PhraseEntry(
        query="all single word palindromic strings",
        filter=PartialFilterSpec(word_count=1, is_palindrome=True),
    ),
    PhraseEntry(
        query="strings longer than 10 characters",
        filter=PartialFilterSpec(min_length=10),
    ),
    PhraseEntry(
        query="palindromic strings that contain the first vowel",
        filter=PartialFilterSpec(contains=["vowel", 1], is_palindrome=True),
    ),
    PhraseEntry(
        query="strings containing the letter z",
        filter=PartialFilterSpec(contains_character="z"),
    ),
]

PHRASE_TABLE: Dict[str, PartialFilterSpec] = {entry.query: entry.filter for entry in PHRASE_ENTRIES}


def resolve_phrase(query: str, table: Optional[Dict[str, PartialFilterSpec]] = None) -> Result:
    """Look up the filter for a literal phrase.

    Fails with BAD_INPUT for an unknown phrase and CONTRADICTION when the
    resolved filter asks for ``min_length > max_length``.
    """
    table = PHRASE_TABLE if table is None else table

    spec = table.get(query)
    if spec is None:
        logger.info(f"Unrecognized natural language query: {query!r}")
        return Result.failure(ErrorKind.BAD_INPUT, "Unable to parse natural language query")

    if spec.min_length is not None and spec.max_length is not None and spec.min_length > spec.max_length:
        logger.warning(f"Query {query!r} resolved to conflicting filters: {spec.applied()}")
        return Result.failure(ErrorKind.CONTRADICTION, "Query parsed but resulted in conflicting filters")

    return Result.success(spec)


def filter_by_phrase(
    records: Iterable[StringResponse],
    query: str,
    table: Optional[Dict[str, PartialFilterSpec]] = None,
) -> Result:
    resolved = resolve_phrase(query, table)
    if not resolved.ok:
        return resolved

    spec = resolved.value
    matches = apply_partial_filter(records, spec)

    return Result.success(
        NaturalLanguageResponse(
            data=matches,
            count=len(matches),
            interpreted_query=InterpretedQuery(original=query, parsed_filters=spec.applied()),
        )
    )
