"""
String Analyzer Service - Query Engine
======================================

What:  Filters a sequence of records by optional FilterCriteria.
How:   Linear scan; each supplied criterion becomes one predicate and a
       record is kept only if every predicate holds.
Who:   Called by StringService for GET /strings and the natural-language
       endpoint.

The result is a stable subsequence of the input: order is never changed.
"""

from typing import Callable, List, Sequence

from string_analyzer.schemas.string import FilterCriteria, StringRecord

Predicate = Callable[[StringRecord], bool]


def build_predicates(criteria: FilterCriteria) -> List[Predicate]:
    predicates: List[Predicate] = []

    if criteria.is_palindrome is not None:
        wanted = criteria.is_palindrome
        predicates.append(lambda r: r.properties.is_palindrome == wanted)

    if criteria.min_length is not None:
        min_length = criteria.min_length
        predicates.append(lambda r: r.properties.length >= min_length)

    if criteria.max_length is not None:
        max_length = criteria.max_length
        predicates.append(lambda r: r.properties.length <= max_length)

    if criteria.word_count is not None:
        word_count = criteria.word_count
        predicates.append(lambda r: r.properties.word_count == word_count)

    if criteria.contains_character is not None:
        needle = criteria.contains_character
        predicates.append(lambda r: needle in r.value)

    return predicates


def filter_records(
    records: Sequence[StringRecord],
    criteria: FilterCriteria,
) -> List[StringRecord]:
    """
    Return the records matching every supplied criterion, in input order.

    With no criteria the input is returned unchanged (as a new list).
    """
    predicates = build_predicates(criteria)
    if not predicates:
        return list(records)
    return [r for r in records if all(p(r) for p in predicates)]
