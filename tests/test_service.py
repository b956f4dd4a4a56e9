"""Tests for the service facade and its error kinds."""
from __future__ import annotations

import pytest

from string_analyzer.errors import ErrorKind, PersistenceError
from string_analyzer.schemas import FilterSpec, PartialFilterSpec
from string_analyzer.service import StringAnalyzerService
from string_analyzer.store import StringStore


def test_upload_returns_new_record(service):
    result = service.upload("racecar")

    assert result.ok
    assert result.value.value == "racecar"
    assert result.value.properties.is_palindrome is True


def test_duplicate_upload_conflicts(service, store):
    service.upload("hello")
    result = service.upload("hello")

    assert result.error.kind == ErrorKind.CONFLICT
    assert len(store) == 1


@pytest.mark.parametrize("bad", [None, "", 42, ["a"]])
def test_upload_rejects_bad_input(service, bad):
    assert service.upload(bad).error.kind == ErrorKind.BAD_INPUT


def test_round_trip_through_restart(service, data_file):
    created = service.upload("persist me").value

    restarted_store = StringStore(data_file)
    restarted_store.initialize()
    fetched = StringAnalyzerService(restarted_store).get_by_value("persist me")

    assert fetched.ok
    assert fetched.value.model_dump() == created.model_dump()


def test_delete_then_get_is_not_found(service):
    service.upload("gone")

    assert service.delete_by_value("gone").ok
    assert service.get_by_value("gone").error.kind == ErrorKind.NOT_FOUND
    assert service.delete_by_value("gone").error.kind == ErrorKind.NOT_FOUND


def test_get_all_on_empty_store(service):
    result = service.get_all()

    assert result.ok
    assert result.value.data == []
    assert result.value.count == 0


def test_filter_exact_length(service):
    for value in ["abcde", "abcd", "vwxyz", "abcdef"]:
        service.upload(value)

    result = service.get_by_filter({"min_length": 5, "max_length": 5})

    assert [r.value for r in result.value.data] == ["abcde", "vwxyz"]
    assert result.value.filters_applied == {"min_length": 5, "max_length": 5}


def test_inverted_range_differs_between_filter_and_phrase(service):
    service.upload("abcde")
    service.phrase_table = {"weird": PartialFilterSpec(min_length=9, max_length=1)}

    full = service.get_by_filter(FilterSpec(min_length=9, max_length=1))
    phrase = service.get_by_phrase("weird")

    assert full.ok
    assert full.value.data == []
    assert phrase.error.kind == ErrorKind.CONTRADICTION


@pytest.mark.parametrize(
    "spec",
    [None, {"min_length": "five"}, {"unknown": 1}, {"word_count": -1}, {"contains_character": ""}],
)
def test_malformed_filter_is_bad_input(service, spec):
    assert service.get_by_filter(spec).error.kind == ErrorKind.BAD_INPUT


def test_phrase_through_service(service):
    for value in ["zoo", "abc"]:
        service.upload(value)

    result = service.get_by_phrase("strings containing the letter z")

    assert [r.value for r in result.value.data] == ["zoo"]
    assert result.value.count == 1


@pytest.mark.parametrize("query", ["", None, "show me everything"])
def test_unusable_phrase_is_bad_input(service, query):
    assert service.get_by_phrase(query).error.kind == ErrorKind.BAD_INPUT


def test_persistence_failure_is_reported(service, store, monkeypatch):
    def broken_persist():
        raise PersistenceError("read-only filesystem")

    monkeypatch.setattr(store, "persist", broken_persist)

    result = service.upload("abc")

    assert result.error.kind == ErrorKind.PERSISTENCE_FAILURE
    assert "read-only" not in result.error.message


def test_unexpected_errors_become_internal(service, store, monkeypatch):
    def explode(value):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(store, "find_by_value", explode)

    result = service.get_by_value("abc")

    assert result.error.kind == ErrorKind.INTERNAL
    assert "secret" not in result.error.message


def test_delete_persistence_failure_is_reported(service, store, monkeypatch):
    service.upload("abc")

    def broken_persist():
        raise PersistenceError("read-only filesystem")

    monkeypatch.setattr(store, "persist", broken_persist)

    result = service.delete_by_value("abc")

    assert result.error.kind == ErrorKind.PERSISTENCE_FAILURE
    assert store.find_by_value("abc") is None
