"""
Passguard Reference Data
=========================

Static lookup tables used by every Passguard analyzer: categorised
dictionary words, a common-password list, keyboard-adjacency runs,
sequential character runs, and the prefix/suffix fragments people bolt
together into "memorable" passwords.

The tables are built once at import time into a frozen
:class:`ReferenceData` instance and shared read-only, so concurrent
per-password analysis needs no locking. The lists are deliberately small
in-memory subsets, not a breach corpus.

References:
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
    - SplashData / NordPass annual "most common passwords" lists.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


# ===================================================================== #
#  Raw Tables
# ===================================================================== #

_WORD_CATEGORIES: dict[str, tuple[str, ...]] = {
    "animals": (
        "dog", "cat", "lion", "tiger", "bear", "wolf", "eagle", "falcon",
        "monkey", "dragon", "horse", "shark", "snake", "panda", "rabbit",
        "turtle", "dolphin", "spider", "fox", "owl", "kitten", "puppy",
    ),
    "colors": (
        "red", "blue", "green", "yellow", "black", "white", "purple",
        "orange", "silver", "golden", "pink", "brown",
    ),
    "sports": (
        "football", "baseball", "soccer", "hockey", "tennis", "golf",
        "basketball", "cricket", "rugby", "boxing", "racing", "skater",
    ),
    "names": (
        "michael", "jordan", "ashley", "jessica", "charlie", "daniel",
        "thomas", "robert", "jennifer", "david", "andrew", "joshua",
        "matthew", "maggie", "buster", "harley", "bailey", "ginger",
    ),
    "nature": (
        "summer", "winter", "spring", "autumn", "sunshine", "flower",
        "ocean", "river", "forest", "mountain", "star", "moon", "sun",
        "sky", "rain", "snow", "storm", "thunder",
    ),
    "technology": (
        "computer", "internet", "server", "system", "network", "admin",
        "login", "user", "google", "apple", "windows", "linux", "hacker",
        "cyber", "github", "database", "access", "secret", "master",
    ),
    "music": (
        "music", "guitar", "piano", "drum", "melody", "rhythm", "jazz",
        "rock", "blues", "violin", "song", "troubador", "troubadour",
    ),
    "food": (
        "pizza", "cookie", "chocolate", "coffee", "banana", "cheese",
        "burger", "pepper", "sugar", "candy", "honey", "cherry",
    ),
    "fantasy": (
        "magic", "wizard", "angel", "devil", "demon", "phoenix", "superman",
        "batman", "hero", "knight", "princess", "shadow", "killer",
        "hunter", "ranger", "ninja",
    ),
}

_OTHER_COMMON_WORDS: tuple[str, ...] = (
    "love", "life", "home", "world", "house", "money", "friend", "family",
    "heart", "happy", "lucky", "freedom", "welcome", "hello", "letmein",
    "trustno", "iloveyou", "baby", "qwerty", "pass", "word", "test",
    "guest", "default", "changeme", "secure", "manager", "account",
    "office", "school", "company", "power", "light", "dream", "crazy",
    "password",
)

_COMMON_PASSWORDS: tuple[str, ...] = (
    "123456", "password", "123456789", "12345678", "12345", "1234567",
    "password123", "admin", "welcome", "qwerty", "abc123", "password1",
    "letmein", "monkey", "dragon", "sunshine", "princess", "football",
    "charlie", "shadow", "master", "jordan", "superman", "harley",
    "qwerty123", "admin123", "test123", "common123", "iloveyou",
    "trustno1", "baseball", "111111", "000000", "123123", "654321",
    "passw0rd", "1q2w3e4r", "1qaz2wsx", "zaq1zaq1", "qazwsx", "changeme",
    "hunter2", "starwars", "login", "access", "default",
)

_KEYBOARD_PATTERNS: tuple[str, ...] = (
    "qwerty", "asdf", "zxcv", "1234", "abcd", "qwer", "asdfgh",
    "123456", "qwertyuiop", "asdfghjkl", "zxcvbnm", "098765",
)

_COMMON_PREFIXES: tuple[str, ...] = (
    "admin", "user", "test", "password", "pass", "welcome", "abc",
    "qwerty", "letme", "hello", "temp", "demo",
)

_COMMON_SUFFIXES: tuple[str, ...] = (
    "123", "1234", "12345", "123456", "2023", "2024", "2022", "2021",
    "!", "!!", "@", "#", "1", "01", "0",
)

# Letter parts that make "word + digits" an account-default password.
HIGH_RISK_WORDS: frozenset[str] = frozenset({
    "password", "admin", "user", "login", "welcome", "manager", "secure",
    "security", "test", "server", "database", "account",
})

# Word list used by the "letters + 1-4 digits" common-password rule.
COMMON_ACCOUNT_WORDS: frozenset[str] = HIGH_RISK_WORDS | frozenset({
    "system", "network", "default", "guest",
})

_SEQUENCE_SOURCES: tuple[str, ...] = (
    string.digits,
    string.ascii_lowercase,
)

MIN_SEQUENTIAL_LENGTH = 4


# ===================================================================== #
#  Table Builders
# ===================================================================== #


def _build_sequential_patterns(
    sources: tuple[str, ...], min_length: int
) -> tuple[str, ...]:
    """Every ascending and descending window of each source run.

    Windows are ordered longest first so a linear scan returns the
    longest match.
    """
    windows: set[str] = set()
    for source in sources:
        for run in (source, source[::-1]):
            for size in range(min_length, len(run) + 1):
                for start in range(len(run) - size + 1):
                    windows.add(run[start:start + size])
    return tuple(sorted(windows, key=lambda w: (-len(w), w)))


def _longest_first(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(sorted(set(values), key=lambda v: (-len(v), v)))


@dataclass(frozen=True, slots=True)
class ReferenceData:
    """Immutable container for all Passguard lookup tables.

    Attributes:
        word_categories: Category name -> dictionary words.
        common_passwords: Lowercase common passwords.
        keyboard_patterns: Keyboard runs, longest first.
        sequential_patterns: Ascending/descending runs, longest first.
        common_prefixes: Prefix fragments of common passwords.
        common_suffixes: Suffix fragments of common passwords.
        other_common_words: Common words outside the categories.
        dictionary_words: Union of every category word.
    """

    word_categories: Mapping[str, frozenset[str]]
    common_passwords: frozenset[str]
    keyboard_patterns: tuple[str, ...]
    sequential_patterns: tuple[str, ...]
    common_prefixes: tuple[str, ...]
    common_suffixes: tuple[str, ...]
    other_common_words: frozenset[str]
    dictionary_words: frozenset[str]

    def category_of(self, word: str) -> Optional[str]:
        """Return the first category containing *word* (lowercased)."""
        lowered = word.lower()
        for category, words in self.word_categories.items():
            if lowered in words:
                return category
        return None

    def longest_keyboard_match(self, text: str) -> Optional[str]:
        """Longest keyboard pattern occurring in *text* (case-insensitive)."""
        return _first_contained(text.lower(), self.keyboard_patterns)

    def longest_sequential_match(self, text: str) -> Optional[str]:
        """Longest sequential run occurring in *text* (case-insensitive)."""
        return _first_contained(text.lower(), self.sequential_patterns)


def _first_contained(text: str, table: tuple[str, ...]) -> Optional[str]:
    for entry in table:
        if entry in text:
            return entry
    return None


def _build_reference_data() -> ReferenceData:
    categories = MappingProxyType({
        name: frozenset(words) for name, words in _WORD_CATEGORIES.items()
    })
    return ReferenceData(
        word_categories=categories,
        common_passwords=frozenset(p.lower() for p in _COMMON_PASSWORDS),
        keyboard_patterns=_longest_first(_KEYBOARD_PATTERNS),
        sequential_patterns=_build_sequential_patterns(
            _SEQUENCE_SOURCES, MIN_SEQUENTIAL_LENGTH
        ),
        common_prefixes=_COMMON_PREFIXES,
        common_suffixes=_COMMON_SUFFIXES,
        other_common_words=frozenset(_OTHER_COMMON_WORDS),
        dictionary_words=frozenset().union(*categories.values()),
    )


REFERENCE_DATA: ReferenceData = _build_reference_data()


def get_reference_data() -> ReferenceData:
    """Return the process-wide reference tables."""
    return REFERENCE_DATA
