"""
Password Pattern Detector
==========================

Finds the guessable structure in a password and prices each finding in
score points. Detection runs in a fixed order and every hit is reported
with the fraction of the password it covers (its span ratio):

======================== =========================================== =========
Kind                     Trigger                                     Impact
======================== =========================================== =========
keyboard                 longest keyboard-row substring              -25 * span
repeating                run of three or more identical characters   -15
sequential               longest ascending/descending run            -20 * span
alternating              letter/digit alternation over the string    -15
leet                     l33t account words, or de-leeted dict word  -10
word_plus_symbol_number  letters + symbols + digits                  -15
word_plus_number         letters{3,} + digits                        graded
date                     bare year or d/m/(yy)yy                     -20
single_charset_type      letters only / digits only                  -20 / -30
======================== =========================================== =========

The word + number grading scales by how guessable the word is: account
words and dictionary words cost 25 points, other known words 20, short
unknown strings are scaled by their :class:`CommonWordConfidence` weight,
and genuinely uncommon words earn a small reward that is then tuned by the
shape of the digit suffix.

References:
    - Weir, M., Aggarwal, S., de Medeiros, B., & Glodek, B. (2009).
      Password Cracking Using Probabilistic Context-Free Grammars.
      IEEE S&P.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import re
from typing import Optional

from passguard.analyzers.classifier import CommonPasswordClassifier
from passguard.core.models import CommonWordConfidence, PatternKind, PatternMatch
from passguard.core.reference_data import (
    HIGH_RISK_WORDS,
    ReferenceData,
    get_reference_data,
)
from shared.math_utils import round_int


# ===================================================================== #
#  Pattern Tables
# ===================================================================== #

# L33t speak substitution map (each entry maps one char to one char, so
# spans line up between the raw and the de-leeted text).
_LEET_MAP: dict[str, str] = {
    "4": "a", "@": "a", "8": "b", "(": "c", "3": "e",
    "6": "g", "9": "g", "#": "h", "1": "i", "!": "i",
    "|": "l", "0": "o", "5": "s", "$": "s", "7": "t",
    "+": "t", "2": "z",
}
_LEET_TABLE = str.maketrans(_LEET_MAP)
_MIN_LEET_WORD_LENGTH = 4

_LEET_FAMILY_RE = re.compile(
    r"[a@][s$]df[1!]|p[a@][s$][s$]w[0o]rd|[a@]dm[1!]n|t[3e][s$]t|u[s$][e3]r"
)
_REPEAT_RE = re.compile(r"(.)\1{2,}", re.DOTALL)
_ALTERNATING_RE = re.compile(r"^(?:[a-zA-Z][0-9])+$|^(?:[0-9][a-zA-Z])+$")
_WORD_SYMBOL_NUMBER_RE = re.compile(r"^[a-zA-Z]+[^a-zA-Z0-9]+[0-9]+$")
_WORD_NUMBER_RE = re.compile(r"^([a-zA-Z]{3,})([0-9]+)$")
_DATE_RES = (
    re.compile(r"^(?:19|20)[0-9]{2}$"),
    re.compile(r"^[0-9]{1,2}[/\-.][0-9]{1,2}[/\-.](?:19|20)?[0-9]{2}$"),
)
_LETTERS_ONLY_RE = re.compile(r"^[a-zA-Z]+$")
_DIGITS_ONLY_RE = re.compile(r"^[0-9]+$")
_REPEATED_DIGITS_RE = re.compile(r"([0-9])\1{2,}")

# Score impacts
_KEYBOARD_MAX_PENALTY = 25
_SEQUENTIAL_MAX_PENALTY = 20
_REPEATING_PENALTY = 15
_ALTERNATING_PENALTY = 15
_LEET_PENALTY = 10
_WORD_SYMBOL_NUMBER_PENALTY = 15
_RISKY_WORD_NUMBER_PENALTY = 25
_KNOWN_WORD_NUMBER_PENALTY = 20
_UNCOMMON_WORD_NUMBER_REWARD = 5
_DATE_PENALTY = 20
_LETTERS_ONLY_PENALTY = 20
_DIGITS_ONLY_PENALTY = 30

_MIN_DIGIT_RUN = 3


class PatternDetector:
    """Detects guessable patterns and assigns their score impact.

    Usage::

        detector = PatternDetector()
        for match in detector.detect("qwerty2024"):
            print(match.kind.value, match.score_impact)
    """

    def __init__(
        self,
        reference: ReferenceData | None = None,
        classifier: CommonPasswordClassifier | None = None,
    ) -> None:
        self._reference = reference or get_reference_data()
        self._classifier = classifier or CommonPasswordClassifier(self._reference)
        self._leet_words: tuple[str, ...] = tuple(sorted(
            (
                word
                for word in self._reference.dictionary_words
                | self._reference.other_common_words
                if len(word) >= _MIN_LEET_WORD_LENGTH
            ),
            key=lambda w: (-len(w), w),
        ))

    def detect(self, password: str) -> list[PatternMatch]:
        """Run every detector over *password* in the fixed order.

        Args:
            password: The password string.

        Returns:
            Detected patterns in detection order (empty for empty input).
        """
        if not password:
            return []

        checks = (
            self._keyboard,
            self._repeating,
            self._sequential,
            self._alternating,
            self._leet,
            self._word_symbol_number,
            self._word_number,
            self._date,
            self._single_charset,
        )
        matches: list[PatternMatch] = []
        for check in checks:
            match = check(password)
            if match is not None:
                matches.append(match)
        return matches

    # ------------------------------------------------------------------ #
    #  Structural runs
    # ------------------------------------------------------------------ #

    def _keyboard(self, password: str) -> Optional[PatternMatch]:
        run = self._reference.longest_keyboard_match(password)
        if not run:
            return None
        span = len(run) / len(password)
        return PatternMatch(
            kind=PatternKind.KEYBOARD,
            description=f"Keyboard pattern: {run}",
            span_ratio=span,
            score_impact=-min(_KEYBOARD_MAX_PENALTY, round_int(_KEYBOARD_MAX_PENALTY * span)),
        )

    @staticmethod
    def _repeating(password: str) -> Optional[PatternMatch]:
        runs = [m.group(0) for m in _REPEAT_RE.finditer(password)]
        if not runs:
            return None
        return PatternMatch(
            kind=PatternKind.REPEATING,
            description=f"Repeating characters: {', '.join(runs)}",
            span_ratio=sum(len(r) for r in runs) / len(password),
            score_impact=-_REPEATING_PENALTY,
        )

    def _sequential(self, password: str) -> Optional[PatternMatch]:
        run = self._reference.longest_sequential_match(password)
        if not run:
            return None
        span = len(run) / len(password)
        return PatternMatch(
            kind=PatternKind.SEQUENTIAL,
            description=f"Sequential characters: {run}",
            span_ratio=span,
            score_impact=-min(_SEQUENTIAL_MAX_PENALTY, round_int(_SEQUENTIAL_MAX_PENALTY * span)),
        )

    @staticmethod
    def _alternating(password: str) -> Optional[PatternMatch]:
        if not _ALTERNATING_RE.match(password):
            return None
        return PatternMatch(
            kind=PatternKind.ALTERNATING,
            description="Alternating letters and numbers",
            score_impact=-_ALTERNATING_PENALTY,
        )

    # ------------------------------------------------------------------ #
    #  Substitutions
    # ------------------------------------------------------------------ #

    def _leet(self, password: str) -> Optional[PatternMatch]:
        lowered = password.lower()
        family = _LEET_FAMILY_RE.search(lowered)
        if family:
            return PatternMatch(
                kind=PatternKind.LEET,
                description="Simple character substitution (l33t speak)",
                span_ratio=len(family.group(0)) / len(password),
                score_impact=-_LEET_PENALTY,
            )

        word = self.substituted_word(lowered)
        if word is None:
            return None
        return PatternMatch(
            kind=PatternKind.LEET,
            description=f"Simple character substitution (l33t speak): {word}",
            span_ratio=min(1.0, len(word) / len(password)),
            score_impact=-_LEET_PENALTY,
        )

    def substituted_word(self, text: str) -> Optional[str]:
        """Longest known word revealed by undoing l33t substitutions.

        Only occurrences whose raw span actually contained a
        substituted character count, so plain dictionary words are not
        reported here.
        """
        lowered = text.lower()
        decoded = lowered.translate(_LEET_TABLE)
        if decoded == lowered:
            return None
        for word in self._leet_words:
            start = decoded.find(word)
            while start != -1:
                if lowered[start:start + len(word)] != word:
                    return word
                start = decoded.find(word, start + 1)
        return None

    # ------------------------------------------------------------------ #
    #  Composition formulas
    # ------------------------------------------------------------------ #

    @staticmethod
    def _word_symbol_number(password: str) -> Optional[PatternMatch]:
        if not _WORD_SYMBOL_NUMBER_RE.match(password):
            return None
        return PatternMatch(
            kind=PatternKind.WORD_PLUS_SYMBOL_NUMBER,
            description="Word + symbol + number pattern",
            score_impact=-_WORD_SYMBOL_NUMBER_PENALTY,
        )

    def _word_number(self, password: str) -> Optional[PatternMatch]:
        match = _WORD_NUMBER_RE.match(password)
        if not match:
            return None

        word = match.group(1).lower()
        digits = match.group(2)

        if word in HIGH_RISK_WORDS:
            return self._word_number_match(
                "Common word + number pattern", -_RISKY_WORD_NUMBER_PENALTY
            )

        category = self._reference.category_of(word)
        if category is not None:
            return self._word_number_match(
                f"Dictionary word ({category}) + number pattern",
                -_RISKY_WORD_NUMBER_PENALTY,
            )

        confidence = self._classifier.is_common_word(word)
        if confidence is CommonWordConfidence.DEFINITE:
            return self._word_number_match(
                "Known word + number pattern", -_KNOWN_WORD_NUMBER_PENALTY
            )
        if confidence is not CommonWordConfidence.NOT_COMMON:
            return self._word_number_match(
                "Word + number pattern", -round_int(10 * confidence.weight)
            )

        impact = _UNCOMMON_WORD_NUMBER_REWARD
        run = self.longest_digit_run(digits)
        if run >= _MIN_DIGIT_RUN:
            impact += -min(10, round_int(run / len(password) * 20)) + min(len(digits), 3)
        elif _REPEATED_DIGITS_RE.search(digits):
            impact -= 5
        elif len(digits) >= 3:
            impact += min(5, len(digits) - 2)
        return self._word_number_match("Uncommon word + number pattern", impact)

    @staticmethod
    def _word_number_match(description: str, impact: int) -> PatternMatch:
        return PatternMatch(
            kind=PatternKind.WORD_PLUS_NUMBER,
            description=description,
            score_impact=impact,
        )

    @staticmethod
    def longest_digit_run(digits: str) -> int:
        """Longest ascending or descending run of consecutive digits.

        ``"4789"`` -> 3 (``789``), ``"9876"`` -> 4, ``"4826"`` -> 1.
        """
        if not digits:
            return 0
        best = 1
        for step in (1, -1):
            current = 1
            for prev, cur in zip(digits, digits[1:]):
                if ord(cur) - ord(prev) == step:
                    current += 1
                    best = max(best, current)
                else:
                    current = 1
        return best

    @staticmethod
    def _date(password: str) -> Optional[PatternMatch]:
        if not any(regex.match(password) for regex in _DATE_RES):
            return None
        return PatternMatch(
            kind=PatternKind.DATE,
            description="Date pattern",
            score_impact=-_DATE_PENALTY,
        )

    @staticmethod
    def _single_charset(password: str) -> Optional[PatternMatch]:
        if len(password) <= 1:
            return None
        if _LETTERS_ONLY_RE.match(password):
            return PatternMatch(
                kind=PatternKind.SINGLE_CHARSET_TYPE,
                description="Only letters",
                score_impact=-_LETTERS_ONLY_PENALTY,
            )
        if _DIGITS_ONLY_RE.match(password):
            return PatternMatch(
                kind=PatternKind.SINGLE_CHARSET_TYPE,
                description="Only numbers",
                score_impact=-_DIGITS_ONLY_PENALTY,
            )
        return None
