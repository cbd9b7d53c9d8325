"""
Common Password Classifier
===========================

Heuristics deciding whether a word or a whole password is "common", i.e.
likely to appear early in a dictionary or mangling-rule attack.

Two questions are answered:

- :meth:`CommonPasswordClassifier.is_common_word` grades a single word on a
  four-step confidence scale. The grade is a weight, not a boolean; the
  pattern detector scales its word + number penalty by it.
- :meth:`CommonPasswordClassifier.is_likely_common_password` applies eleven
  exact-match-biased rules (common list, prefix/suffix and word/suffix
  composition, keyboard and sequential coverage, repeats, years, leet
  variants of account words, and short single-class strings).

Matching is case-insensitive and total over arbitrary Unicode input.

References:
    - Weir, M., Aggarwal, S., de Medeiros, B., & Glodek, B. (2009).
      Password Cracking Using Probabilistic Context-Free Grammars.
      IEEE S&P.
    - Ur, B. et al. (2015). Measuring Real-World Accuracies and Biases in
      Modeling Password Guessability. USENIX Security.
"""

from __future__ import annotations

import re

from passguard.core.models import CommonWordConfidence
from passguard.core.reference_data import (
    COMMON_ACCOUNT_WORDS,
    ReferenceData,
    get_reference_data,
)


_MIN_WORD_LENGTH = 3
_LIKELY_MAX_LENGTH = 5
_UNCOMMON_MIN_LENGTH = 8

_IDENTICAL_RUN_RE = re.compile(r"(.)\1{2,}", re.DOTALL)
_YEAR_RE = re.compile(r"^(?:19|20)\d{2}$")
_LEET_ACCOUNT_RE = re.compile(r"^[a@]dm[i1]n|^p[a@][s$][s$]w[0o]rd|^t[e3][s$]t")
_LETTERS_ONLY_RE = re.compile(r"^[a-z]+$")
_DIGITS_ONLY_RE = re.compile(r"^[0-9]+$")
_ACCOUNT_WORD_NUMBER_RE = re.compile(r"^([a-z]+)[0-9]{1,4}$")


class CommonPasswordClassifier:
    """Exact and fuzzy "is this common?" checks against the reference tables."""

    def __init__(self, reference: ReferenceData | None = None) -> None:
        self._reference = reference or get_reference_data()

    # ------------------------------------------------------------------ #
    #  Single words
    # ------------------------------------------------------------------ #

    def is_common_word(self, word: str) -> CommonWordConfidence:
        """Grade how likely *word* is to be a dictionary word.

        Known words and words starting with a common prefix are
        ``DEFINITE``. Unknown words are graded by length: short strings are
        likely guessable, long ones are not.

        Args:
            word: Candidate word (any case).

        Returns:
            The confidence grade.
        """
        if len(word) < _MIN_WORD_LENGTH:
            return CommonWordConfidence.NOT_COMMON

        lowered = word.lower()
        ref = self._reference
        if (
            lowered in ref.dictionary_words
            or lowered in ref.other_common_words
            or lowered.startswith(ref.common_prefixes)
        ):
            return CommonWordConfidence.DEFINITE

        if len(lowered) <= _LIKELY_MAX_LENGTH:
            return CommonWordConfidence.LIKELY
        if len(lowered) >= _UNCOMMON_MIN_LENGTH:
            return CommonWordConfidence.NOT_COMMON
        return CommonWordConfidence.POSSIBLE

    # ------------------------------------------------------------------ #
    #  Whole passwords
    # ------------------------------------------------------------------ #

    def is_likely_common_password(self, password: str) -> bool:
        """Whether *password* would fall to a small dictionary attack.

        Args:
            password: The password string.

        Returns:
            True if any of the common-password rules matches. Empty input
            is never common.
        """
        if not password:
            return False

        lowered = password.lower()
        length = len(lowered)
        ref = self._reference

        if lowered in ref.common_passwords:
            return True
        if self._is_prefix_plus_suffix(lowered) or self._is_word_plus_suffix(lowered):
            return True
        if any(
            lowered == common + "!" or password == common.capitalize()
            for common in ref.common_passwords
        ):
            return True

        keyboard = ref.longest_keyboard_match(lowered)
        if keyboard and len(keyboard) * 2 >= length:
            return True
        sequential = ref.longest_sequential_match(lowered)
        if sequential and len(sequential) * 2 >= length:
            return True
        if self.longest_identical_run(lowered) * 2 >= length:
            return True

        if _YEAR_RE.match(lowered) or _LEET_ACCOUNT_RE.search(lowered):
            return True
        if length < _UNCOMMON_MIN_LENGTH and (
            _LETTERS_ONLY_RE.match(lowered) or _DIGITS_ONLY_RE.match(lowered)
        ):
            return True

        account = _ACCOUNT_WORD_NUMBER_RE.match(lowered)
        return bool(account and account.group(1) in COMMON_ACCOUNT_WORDS)

    def _is_prefix_plus_suffix(self, lowered: str) -> bool:
        suffixes = self._reference.common_suffixes
        return any(
            lowered.startswith(prefix) and lowered[len(prefix):] in suffixes
            for prefix in self._reference.common_prefixes
        )

    def _is_word_plus_suffix(self, lowered: str) -> bool:
        words = self._reference.dictionary_words
        return any(
            lowered.endswith(suffix) and lowered[:-len(suffix)] in words
            for suffix in self._reference.common_suffixes
        )

    @staticmethod
    def longest_identical_run(text: str) -> int:
        """Length of the longest run of three or more identical characters."""
        return max(
            (len(m.group(0)) for m in _IDENTICAL_RUN_RE.finditer(text)),
            default=0,
        )
