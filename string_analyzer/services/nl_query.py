"""
String Analyzer Service - Natural-Language Query Parser
=======================================================

What:  Turns phrases like "all single word palindromic strings" into
       FilterCriteria for the query engine.
How:   Keyword and regex heuristics over the lower-cased query.
Who:   Called by StringService for GET /strings/filter-by-natural-language.

Recognized phrases:
    "palindrome" / "palindromic"          → is_palindrome=True
    "single word" / "one word"            → word_count=1
    "<n> words" / "two words"             → word_count=n
    "longer than <n>"                     → min_length=n+1
    "shorter than <n>"                    → max_length=n-1 (floored at 0)
    "at least <n> characters"             → min_length=n
    "at most <n> characters"              → max_length=n
    "contain(s/ing) the letter <x>"       → contains_character=x
    "with the letter <x>"                 → contains_character=x
    "first vowel"                         → contains_character="a"

Examples:
    "strings longer than 10 characters"          → {"min_length": 11}
    "palindromic strings that contain the first vowel"
                                                 → {"is_palindrome": True,
                                                    "contains_character": "a"}
"""

import logging
import re
from typing import Any, Dict

from string_analyzer.exceptions import ConflictingFiltersError, QueryParseError
from string_analyzer.schemas.string import FilterCriteria

logger = logging.getLogger(__name__)

NUMBER_WORDS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

_NUMBER = r"(\d+|" + "|".join(NUMBER_WORDS) + r")"

WORD_COUNT_RE = re.compile(rf"\b{_NUMBER}[ -]words?\b")
LONGER_THAN_RE = re.compile(rf"longer than {_NUMBER}")
SHORTER_THAN_RE = re.compile(rf"shorter than {_NUMBER}")
AT_LEAST_RE = re.compile(rf"at least {_NUMBER} char")
AT_MOST_RE = re.compile(rf"at most {_NUMBER} char")
LETTER_RE = re.compile(r"(?:contain(?:s|ing)?|with) (?:the )?(?:letter|character) (\w)")


def _to_int(token: str) -> int:
    if token.isdigit():
        return int(token)
    return NUMBER_WORDS[token]


def parse_filters(query: str) -> Dict[str, Any]:
    """Raw filter dict for `query`; may be empty."""
    text = query.lower()
    filters: Dict[str, Any] = {}

    if "palindrom" in text:
        filters["is_palindrome"] = True

    if "single word" in text:
        filters["word_count"] = 1
    else:
        match = WORD_COUNT_RE.search(text)
        if match:
            filters["word_count"] = _to_int(match.group(1))

    match = LONGER_THAN_RE.search(text)
    if match:
        filters["min_length"] = _to_int(match.group(1)) + 1
    match = AT_LEAST_RE.search(text)
    if match:
        filters["min_length"] = _to_int(match.group(1))

    match = SHORTER_THAN_RE.search(text)
    if match:
        filters["max_length"] = max(_to_int(match.group(1)) - 1, 0)
    match = AT_MOST_RE.search(text)
    if match:
        filters["max_length"] = _to_int(match.group(1))

    match = LETTER_RE.search(text)
    if match:
        filters["contains_character"] = match.group(1)

    if "first vowel" in text:
        filters["contains_character"] = "a"

    return filters


def parse_natural_language_query(query: str) -> FilterCriteria:
    """
    Parse `query` into FilterCriteria.

    Raises:
        QueryParseError: nothing in the query was recognized (→ 400)
        ConflictingFiltersError: min_length ends up above max_length (→ 422)
    """
    filters = parse_filters(query)
    if not filters:
        raise QueryParseError(query)

    if (
        "min_length" in filters
        and "max_length" in filters
        and filters["min_length"] > filters["max_length"]
    ):
        raise ConflictingFiltersError(query, filters)

    logger.debug("Parsed natural language query %r into %s", query, filters)
    return FilterCriteria(**filters)
