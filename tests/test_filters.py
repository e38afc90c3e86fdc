from datetime import datetime, timezone

from string_analyzer.schemas.string_record import FilterCriteria, StringProperties, StringRecord
from string_analyzer.services.analyzer import build_record
from string_analyzer.services.filters import evaluate, matches, validate_criteria


def make_record(record_id, length, palindrome, word_count=1, freq=None):
    return StringRecord(
        id=record_id,
        value=record_id,
        properties=StringProperties(
            length=length,
            is_palindrome=palindrome,
            unique_characters=1,
            word_count=word_count,
            sha256_hash=record_id,
            character_frequency_map=freq or {"a": length},
        ),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_conjunction_of_criteria():
    records = [make_record("r1", 2, True), make_record("r2", 4, True), make_record("r3", 4, False)]
    result = evaluate(records, FilterCriteria(min_length=3, is_palindrome=True))
    assert [r.id for r in result] == ["r2"]


def test_empty_criteria_match_everything_in_order():
    records = [make_record("b", 1, True), make_record("a", 2, False), make_record("c", 3, True)]
    assert evaluate(records, FilterCriteria()) == records


def test_is_palindrome_false_is_a_real_constraint():
    records = [make_record("r1", 3, True), make_record("r2", 3, False)]
    result = evaluate(records, FilterCriteria(is_palindrome=False))
    assert [r.id for r in result] == ["r2"]


def test_length_bounds_are_inclusive():
    records = [make_record(f"r{n}", n, False) for n in range(1, 6)]
    result = evaluate(records, FilterCriteria(min_length=2, max_length=4))
    assert [r.properties.length for r in result] == [2, 3, 4]


def test_word_count_is_exact():
    records = [make_record("one", 3, False, word_count=1), make_record("two", 7, False, word_count=2)]
    result = evaluate(records, FilterCriteria(word_count=2))
    assert [r.id for r in result] == ["two"]


def test_contains_character_is_case_sensitive():
    record = build_record("Zebra")
    assert matches(record, FilterCriteria(contains_character="Z"))
    assert not matches(record, FilterCriteria(contains_character="z"))


def test_multi_character_contains_never_matches():
    record = build_record("abc")
    assert not matches(record, FilterCriteria(contains_character="ab"))
    assert not matches(record, FilterCriteria(contains_character=""))


def test_evaluate_does_not_mutate_input():
    records = [make_record("r1", 2, True), make_record("r2", 4, True)]
    snapshot = list(records)
    evaluate(records, FilterCriteria(min_length=3))
    assert records == snapshot


def test_validate_accepts_good_criteria():
    assert validate_criteria(FilterCriteria()) == []
    assert validate_criteria(FilterCriteria(min_length=3, max_length=3, contains_character="a")) == []


def test_validate_rejects_inverted_range():
    problems = validate_criteria(FilterCriteria(min_length=5, max_length=2))
    assert problems == ["min_length cannot be greater than max_length"]


def test_validate_rejects_negative_bounds():
    problems = validate_criteria(FilterCriteria(min_length=-1, word_count=-2))
    assert "min_length must be >= 0" in problems
    assert "word_count must be >= 0" in problems


def test_validate_rejects_multi_character_contains():
    problems = validate_criteria(FilterCriteria(contains_character="xy"))
    assert problems == ["contains_character must be exactly one character"]
