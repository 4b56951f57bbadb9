"""
String Analyzer Service - Analyzer
==================================

What:  Pure functions computing the derived properties of a string.
Who:   Called by StringService when a new string is created.
When:  Exactly once per record; properties are never recomputed.

Normalization rules:
    is_palindrome      lower-cased, all whitespace removed, punctuation kept
    unique_characters  lower-cased ("Aa" has 1 unique character)
    word_count         str.split() on runs of whitespace (0 for "   ")
    frequency map      raw value, every character counted, case preserved
"""

import hashlib
from collections import Counter
from typing import Dict

from string_analyzer.schemas.string import StringProperties


def compute_sha256(value: str) -> str:
    """SHA-256 hex digest of the UTF-8 bytes of `value`."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    normalized = "".join(value.lower().split())
    return normalized == normalized[::-1]


def count_unique_characters(value: str) -> int:
    return len(set(value.lower()))


def count_words(value: str) -> int:
    return len(value.split())


def character_frequency(value: str) -> Dict[str, int]:
    return dict(Counter(value))


def analyze(value: str) -> StringProperties:
    """
    Map a raw string to its derived properties.

    Total and deterministic: the caller is responsible for rejecting
    non-string input before getting here.
    """
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=character_frequency(value),
    )
