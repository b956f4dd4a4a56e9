import hashlib
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Optional

from string_analyzer.schemas import StringProperties, StringResponse

# "not word, not whitespace" with an ASCII-only word class: punctuation,
# symbols and non-ASCII letters
SYMBOL_PATTERN = re.compile(r"[^A-Za-z0-9_\s]")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string reads the same reversed (exact, no normalization)"""
    return text == text[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct punctuation/symbol characters.

    ASCII letters, digits, underscores and whitespace are not counted, so
    ``"a,b.c"`` gives 2 and ``"café!"`` gives 2.
    """
    return len(set(SYMBOL_PATTERN.findall(text)))


def count_words(text: str) -> int:
    """Count segments separated by a single space (empty segments included)"""
    return len(text.split(" "))


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character, ignoring spaces"""
    return dict(Counter(ch for ch in text if ch != " "))


def analyze_string(value: str) -> Dict:
    """Analyze a string and return all computed properties"""
    sha256_hash = compute_sha256(value)

    return {
        "id": sha256_hash,
        "value": value,
        "length": len(value),
        "is_palindrome": is_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": sha256_hash,
        "character_frequency_map": get_character_frequency(value),
    }


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_record(value: str, created_at: Optional[str] = None) -> StringResponse:
    """Analyze ``value`` and wrap the result as a storable record."""
    analysis = analyze_string(value)

    return StringResponse(
        id=analysis["id"],
        value=analysis["value"],
        properties=StringProperties(
            length=analysis["length"],
            is_palindrome=analysis["is_palindrome"],
            unique_characters=analysis["unique_characters"],
            word_count=analysis["word_count"],
            sha256_hash=analysis["sha256_hash"],
            character_frequency_map=analysis["character_frequency_map"],
        ),
        created_at=created_at or utc_timestamp(),
    )
