"""
Translate natural language queries into structured filter criteria.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters" -> {min_length: 11}
- "strings containing the letter z" -> {contains_character: "z"}

Rules run in the order listed in RULES and every rule that matches is applied.
When several rules assign the same field the last one wins, so a query such as
"letter b ... first vowel" ends up with contains_character = "a".
"""
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from string_analyzer.schemas.string_record import FilterCriteria, TranslationResult

logger = logging.getLogger(__name__)

Effect = Callable[["re.Match[str]"], Optional[Dict[str, Any]]]


def _word_count_one(match):
    return {"word_count": 1}


def _palindrome(match):
    return {"is_palindrome": True}


def _longer_than(match):
    return {"min_length": int(match.group(1)) + 1}


def _shorter_than(match):
    limit = int(match.group(1))
    # Nothing is shorter than 0 characters; ignore rather than fail
    if limit <= 0:
        return None
    return {"max_length": limit - 1}


def _contains_letter(match):
    return {"contains_character": match.group(1)}


def _first_vowel(match):
    return {"contains_character": "a"}


RULES: List[Tuple[str, "re.Pattern[str]", Effect]] = [
    ("word_count", re.compile(r"single word|one word"), _word_count_one),
    ("palindrome", re.compile(r"palindrom"), _palindrome),
    ("longer_than", re.compile(r"longer than (\d+)"), _longer_than),
    ("shorter_than", re.compile(r"shorter than (\d+)"), _shorter_than),
    ("letter", re.compile(r"letter ([a-z])"), _contains_letter),
    ("contains", re.compile(r"contain(?:s|ing)?(?: the)? ([a-z])\b"), _contains_letter),
    ("first_vowel", re.compile(r"first vowel"), _first_vowel),
]


def parse_natural_language_query(query: str) -> Dict[str, Any]:
    """Apply every rule in order and collect the resulting filter fields"""
    text = query.strip().lower()
    parsed: Dict[str, Any] = {}

    for name, pattern, effect in RULES:
        match = pattern.search(text)
        if not match:
            continue
        update = effect(match)
        if update:
            logger.debug(f"Rule '{name}' matched: {update}")
            parsed.update(update)

    return parsed


def translate(query: str) -> TranslationResult:
    """Turn a free-text query into filter criteria plus a success verdict"""
    parsed = parse_natural_language_query(query)
    if not parsed:
        return TranslationResult(success=False, conflicting=False, criteria=FilterCriteria())
    return TranslationResult(success=True, conflicting=False, criteria=FilterCriteria(**parsed))
