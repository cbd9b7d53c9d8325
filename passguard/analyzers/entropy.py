"""
Password Entropy Calculator
============================

Computes the combinatorial entropy of a password and a pattern-adjusted
estimate that discounts the obvious structure attackers try first.

Theoretical entropy follows the classic pool-size model::

    H = length * log2(pool_size)

where the pool is the sum of the character classes present (26 lowercase,
26 uppercase, 10 digits, 33 for everything else). The adjusted estimate
then applies three multiplicative discounts, in this order:

1. Repetition: ``1 - (repeated_chars / length) * 0.25`` over every maximal
   run of two or more identical characters.
2. Keyboard/sequential runs: ``1 - (0.2 + 0.1 * span_ratio)`` using the
   longest such run.
3. Letters-then-digits shape (``monkey2024``): ``0.9``.

References:
    - NIST SP 800-63 Appendix A (2004). Estimating Password Entropy
      and Strength.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import math
import re

from passguard.core.reference_data import ReferenceData, get_reference_data


_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_OTHER_RE = re.compile(r"[^a-zA-Z0-9]")
_REPEAT_RUN_RE = re.compile(r"(.)\1+", re.DOTALL)
_LETTERS_THEN_DIGITS_RE = re.compile(r"^[a-zA-Z]+[0-9]+$")

# Fallback pool so an empty class set never reaches log2(0).
_MIN_POOL_SIZE = 10


class EntropyCalculator:
    """Theoretical and pattern-adjusted entropy for passwords.

    Usage::

        calc = EntropyCalculator()
        calc.theoretical("abc123")   # 31.02
        calc.calculate("abcd1234")   # discounted for the "abcd" run
    """

    def __init__(self, reference: ReferenceData | None = None) -> None:
        self._reference = reference or get_reference_data()

    # ------------------------------------------------------------------ #
    #  Pool size and raw entropy
    # ------------------------------------------------------------------ #

    @staticmethod
    def charset_size(password: str) -> int:
        """Size of the character pool implied by the classes present.

        Args:
            password: The password string.

        Returns:
            Pool size, at least 10.
        """
        pool = 0
        if _LOWER_RE.search(password):
            pool += 26
        if _UPPER_RE.search(password):
            pool += 26
        if _DIGIT_RE.search(password):
            pool += 10
        if _OTHER_RE.search(password):
            pool += 33
        return max(pool, _MIN_POOL_SIZE)

    def theoretical(self, password: str) -> float:
        """Combinatorial entropy ``log2(pool_size ** length)`` in bits."""
        if not password:
            return 0.0
        return len(password) * math.log2(self.charset_size(password))

    # ------------------------------------------------------------------ #
    #  Adjusted entropy
    # ------------------------------------------------------------------ #

    def calculate(self, password: str) -> float:
        """Pattern-adjusted entropy in bits.

        Args:
            password: The password string.

        Returns:
            Entropy estimate, never negative.
        """
        if not password:
            return 0.0

        length = len(password)
        entropy = self.theoretical(password)

        repeated = self.repeated_character_count(password)
        if repeated:
            entropy *= 1 - (repeated / length) * 0.25

        pattern_ratio = self.longest_run_ratio(password)
        if pattern_ratio > 0:
            entropy *= 1 - (0.2 + 0.1 * pattern_ratio)

        if _LETTERS_THEN_DIGITS_RE.match(password):
            entropy *= 0.9

        return max(0.0, entropy)

    @staticmethod
    def repeated_character_count(password: str) -> int:
        """Total characters belonging to runs of two or more identical chars."""
        return sum(len(m.group(0)) for m in _REPEAT_RUN_RE.finditer(password))

    def longest_run_ratio(self, password: str) -> float:
        """Span ratio of the longest keyboard or sequential run (0 if none)."""
        matches = [
            m for m in (
                self._reference.longest_keyboard_match(password),
                self._reference.longest_sequential_match(password),
            )
            if m
        ]
        if not matches:
            return 0.0
        return max(len(m) for m in matches) / len(password)
