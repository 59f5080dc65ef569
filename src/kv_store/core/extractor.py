"""Locate a fixed-length verification code inside free-form text.

A candidate is a run of exactly `digit_count` characters from the selected
class that is not part of a longer alphanumeric run, so a 4-digit request
never matches inside a 6-digit number. For alphanumeric extraction a
letters-then-digits candidate (e.g. ``ABC123``) beats plain words and numbers
that happen to have the same length.
"""

from __future__ import annotations

import re
import typing as t
from functools import lru_cache

from .models import CharacterClass

DEFAULT_DIGIT_COUNT = 4

_CLASS_RANGES = {
    CharacterClass.NUMERIC: "0-9",
    CharacterClass.ALPHANUMERIC: "A-Za-z0-9",
}
_LETTERS_THEN_DIGITS = re.compile(r"[a-z]+[0-9]+", re.IGNORECASE)


@lru_cache(maxsize=64)
def build_pattern(digit_count: int, character_class: CharacterClass) -> t.Pattern[str]:
    chars = _CLASS_RANGES[character_class]
    return re.compile(rf"(?<![A-Za-z0-9])[{chars}]{{{digit_count}}}(?![A-Za-z0-9])")


def extract_code(
    text: t.Optional[str],
    digit_count: t.Optional[int] = DEFAULT_DIGIT_COUNT,
    character_class: t.Union[CharacterClass, str] = CharacterClass.NUMERIC,
) -> t.Optional[str]:
    if not text:
        return None
    if digit_count is None or digit_count <= 0:
        digit_count = DEFAULT_DIGIT_COUNT
    if digit_count > len(text):
        return None
    if isinstance(character_class, CharacterClass):
        char_class = character_class
    else:
        char_class = CharacterClass.parse(character_class)

    matches = build_pattern(digit_count, char_class).findall(text)
    if not matches:
        return None

    if char_class is CharacterClass.ALPHANUMERIC:
        for candidate in matches:
            if _LETTERS_THEN_DIGITS.fullmatch(candidate):
                return candidate
    return matches[0]
