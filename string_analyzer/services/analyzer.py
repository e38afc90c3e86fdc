import hashlib
from collections import Counter
from datetime import datetime, timezone
from typing import Dict

from string_analyzer.schemas.string_record import StringProperties, StringRecord


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    # surrogatepass keeps lone surrogates hashable instead of raising
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, ignoring whitespace)"""
    cleaned = "".join(ch for ch in text.lower() if not ch.isspace())
    i, j = 0, len(cleaned) - 1
    while i < j:
        if cleaned[i] != cleaned[j]:
            return False
        i += 1
        j -= 1
    return True


def count_unique_characters(text: str) -> int:
    """Count distinct characters, ignoring case"""
    return len(set(text.lower()))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character (case-sensitive, whitespace included)"""
    return dict(Counter(text))


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=get_character_frequency(value),
    )


def build_record(value: str) -> StringRecord:
    """Analyze a string and wrap the result into a new record stamped with the current UTC time"""
    properties = analyze_string(value)
    return StringRecord(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=datetime.now(timezone.utc),
    )
