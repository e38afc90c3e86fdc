from typing import Iterable, List

from string_analyzer.schemas.string_record import FilterCriteria, StringRecord


def validate_criteria(criteria: FilterCriteria) -> List[str]:
    """
    Check structured filters before they are evaluated.
    Returns a list of problems; an empty list means the criteria are usable.
    """
    problems = []

    for name in ("min_length", "max_length", "word_count"):
        bound = getattr(criteria, name)
        if bound is not None and bound < 0:
            problems.append(f"{name} must be >= 0")

    if (
        criteria.min_length is not None
        and criteria.max_length is not None
        and criteria.min_length > criteria.max_length
    ):
        problems.append("min_length cannot be greater than max_length")

    if criteria.contains_character is not None and len(criteria.contains_character) != 1:
        problems.append("contains_character must be exactly one character")

    return problems


def matches(record: StringRecord, criteria: FilterCriteria) -> bool:
    """True when every criterion that is set holds for the record"""
    props = record.properties

    if criteria.is_palindrome is not None and props.is_palindrome != criteria.is_palindrome:
        return False
    if criteria.min_length is not None and props.length < criteria.min_length:
        return False
    if criteria.max_length is not None and props.length > criteria.max_length:
        return False
    if criteria.word_count is not None and props.word_count != criteria.word_count:
        return False
    if criteria.contains_character is not None:
        # Anything but a single character can never match
        if len(criteria.contains_character) != 1:
            return False
        if criteria.contains_character not in props.character_frequency_map:
            return False

    return True


def evaluate(records: Iterable[StringRecord], criteria: FilterCriteria) -> List[StringRecord]:
    """Keep the records matching the criteria, in their original order"""
    return [record for record in records if matches(record, criteria)]
