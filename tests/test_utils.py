"""Unit tests for the string analysis helpers."""
from __future__ import annotations

import hashlib

import pytest

from string_analyzer.utils import (
    analyze_string,
    build_record,
    count_unique_characters,
    count_words,
    get_character_frequency,
    is_palindrome,
)


@pytest.mark.parametrize("text", ["", "a", "aba", "abba", "Aba", "a b a", "ab a", "race car", "!?!"])
def test_palindrome_is_exact_reversal(text):
    assert is_palindrome(text) == (text[::-1] == text)


def test_palindrome_is_case_and_space_sensitive():
    assert is_palindrome("aba") is True
    assert is_palindrome("Aba") is False
    assert is_palindrome("nurses run") is False


def test_hash_matches_id_and_is_stable():
    first = analyze_string("hello world")
    second = analyze_string("hello world")

    assert first["id"] == first["sha256_hash"]
    assert first["sha256_hash"] == hashlib.sha256(b"hello world").hexdigest()
    assert first == second


def test_unique_characters_counts_symbols_only():
    assert count_unique_characters("a,b.c") == 2
    assert count_unique_characters("hello") == 0
    assert count_unique_characters("!!??") == 2
    assert count_unique_characters("a b_c") == 0


def test_unique_characters_treats_non_ascii_letters_as_symbols():
    assert count_unique_characters("café!") == 2
    assert count_unique_characters("naïve naïve") == 1
    # unicode whitespace is still whitespace
    assert count_unique_characters("a\u00a0b") == 0


def test_word_count_splits_on_single_spaces():
    assert count_words("hello world") == 2
    assert count_words("hello  world") == 3
    assert count_words("single") == 1
    assert count_words("") == 1


def test_character_frequency_skips_spaces():
    assert get_character_frequency("a ba") == {"a": 2, "b": 1}
    assert get_character_frequency("   ") == {}


def test_analyze_string_full_shape():
    result = analyze_string("A man")

    assert result["value"] == "A man"
    assert result["length"] == 5
    assert result["is_palindrome"] is False
    assert result["word_count"] == 2
    assert result["unique_characters"] == 0
    assert result["character_frequency_map"] == {"A": 1, "m": 1, "a": 1, "n": 1}


def test_build_record_keeps_given_timestamp():
    record = build_record("level", created_at="2024-01-01T00:00:00+00:00")

    assert record.id == record.properties.sha256_hash
    assert record.properties.is_palindrome is True
    assert record.created_at == "2024-01-01T00:00:00+00:00"


def test_build_record_stamps_creation_time():
    record = build_record("level")
    assert record.created_at.endswith("+00:00")
