"""
Crack-Time Estimator
=====================

Projects how long an attacker needs to guess a password under three attack
speeds, starting from the scorer's adjusted entropy and discounting for the
patterns that make real guessing faster than brute force.

Attack scenarios (guesses per second, configurable):

- Online throttled: 10^3
- Offline fast hash: 10^9 (MD5/SHA-1 on a single GPU)
- Optimized rig: 5 * 10^10 (multi-GPU cracking box)

The effective entropy is blended with the composite score::

    effective = min(adjusted * (0.7 + 0.3 * score / 100) * length_factor, 100)
    seconds   = 2 ** effective / rate * adjustment

where ``adjustment`` multiplies the discounts for keyboard runs, sequential
runs, word + digits shapes, the "Capital + lower + digits + symbol" formula,
and length, floored at 0.05. Common passwords are assumed to be in every
attacker's first wordlist and short-circuit to near-zero times.

References:
    - Hashcat benchmark tables (RTX 4090, MD5 / SHA-1 modes).
    - NIST SP 800-63B (2017), Section 5.2.2: Rate Limiting (Throttling).
    - Florencio, D., Herley, C., & van Oorschot, P. C. (2014). An
      Administrator's Guide to Internet Password Research. USENIX LISA.
"""

from __future__ import annotations

import math
import re

from passguard.analyzers.classifier import CommonPasswordClassifier
from passguard.core.models import CrackTimeEstimate, PasswordAssessment, PatternKind
from shared.math_utils import round_int


# ===================================================================== #
#  Attack Model Constants
# ===================================================================== #

ONLINE_GUESSES_PER_SECOND = 1e3
OFFLINE_GUESSES_PER_SECOND = 1e9
OPTIMIZED_GUESSES_PER_SECOND = 5e10

# Seconds reported for common passwords (online, offline, optimized)
_COMMON_PASSWORD_SECONDS = (0.001, 0.0001, 0.00001)

_MAX_EFFECTIVE_ENTROPY = 100.0
_MIN_ADJUSTMENT = 0.05

_LETTERS_DIGITS_RE = re.compile(r"^([a-zA-Z]+)[0-9]+$")
_CAPITAL_FORMULA_RE = re.compile(r"^[A-Z][a-z]+[0-9]+[^a-zA-Z0-9]+$")

# Calendar units in seconds (Gregorian averages for month and year)
_MINUTE = 60
_HOUR = 3_600
_DAY = 86_400
_WEEK = 604_800
_MONTH = 2_629_746
_YEAR = 31_556_952

_SUB_YEAR_UNITS: tuple[tuple[int, int, str], ...] = (
    # (upper bound, divisor, unit)
    (_MINUTE, 1, "second"),
    (_HOUR, _MINUTE, "minute"),
    (_DAY, _HOUR, "hour"),
    (_WEEK, _DAY, "day"),
    (_MONTH, _WEEK, "week"),
    (_YEAR, _MONTH, "month"),
)


class CrackTimeEstimator:
    """Converts an assessment into three attack-speed projections.

    Args:
        online_rate: Online guesses per second.
        offline_rate: Offline fast-hash guesses per second.
        optimized_rate: Dedicated rig guesses per second.
        classifier: Classifier used to judge the word part of
            ``word + digits`` passwords.
    """

    def __init__(
        self,
        online_rate: float = ONLINE_GUESSES_PER_SECOND,
        offline_rate: float = OFFLINE_GUESSES_PER_SECOND,
        optimized_rate: float = OPTIMIZED_GUESSES_PER_SECOND,
        classifier: CommonPasswordClassifier | None = None,
    ) -> None:
        for name, rate in (
            ("online_rate", online_rate),
            ("offline_rate", offline_rate),
            ("optimized_rate", optimized_rate),
        ):
            if rate <= 0:
                raise ValueError(f"{name} must be positive, got {rate}")
        self.online_rate = online_rate
        self.offline_rate = offline_rate
        self.optimized_rate = optimized_rate
        self._classifier = classifier or CommonPasswordClassifier()

    def estimate(self, assessment: PasswordAssessment) -> CrackTimeEstimate:
        """Estimate crack times for an assessed password.

        Args:
            assessment: Output of :meth:`StrengthScorer.assess`.

        Returns:
            Online, offline and optimized times in seconds.
        """
        if assessment.is_common:
            online, offline, optimized = _COMMON_PASSWORD_SECONDS
            return CrackTimeEstimate(
                online_seconds=online,
                offline_seconds=offline,
                optimized_seconds=optimized,
            )
        if assessment.length == 0:
            return CrackTimeEstimate()

        score_ratio = assessment.score / 100
        length_factor = 1.0 if assessment.length <= 20 else 0.8
        effective = min(
            assessment.adjusted_entropy_bits * (0.7 + 0.3 * score_ratio) * length_factor,
            _MAX_EFFECTIVE_ENTROPY,
        )
        combinations = 2.0 ** effective
        adjustment = self.adjustment_factor(assessment)

        return CrackTimeEstimate(
            online_seconds=combinations / self.online_rate * adjustment,
            offline_seconds=combinations / self.offline_rate * adjustment,
            optimized_seconds=combinations / self.optimized_rate * adjustment,
        )

    def adjustment_factor(self, assessment: PasswordAssessment) -> float:
        """Multiplicative discount for the shapes attackers try first."""
        adjustment = 1.0
        password = assessment.password
        length = assessment.length

        if assessment.pattern_of(PatternKind.KEYBOARD):
            adjustment *= 0.3
        sequential = assessment.pattern_of(PatternKind.SEQUENTIAL)
        if sequential:
            adjustment *= 0.4 + 0.3 * (1 - sequential.span_ratio)

        word_digits = _LETTERS_DIGITS_RE.match(password)
        if word_digits:
            word = word_digits.group(1)
            if self._classifier.is_likely_common_password(word):
                adjustment *= 0.15
            else:
                adjustment *= 0.5

        if assessment.character_types == 4:
            adjustment *= 0.6 if _CAPITAL_FORMULA_RE.match(password) else 1.2

        if length >= 16:
            adjustment *= 1.3
        if length <= 8:
            adjustment *= 0.5

        return max(_MIN_ADJUSTMENT, adjustment)


# ===================================================================== #
#  Formatting
# ===================================================================== #


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_time(seconds: float) -> str:
    """Render a duration in seconds as a short human string.

    Examples::

        format_time(0.0005)   # "instantly"
        format_time(90)       # "2 minutes"
        format_time(3.2e9)    # "100 years"
        format_time(1e20)     # "1M+ years"

    Args:
        seconds: Duration in seconds.

    Returns:
        The formatted duration. Non-finite input reads "virtually forever".
    """
    if not math.isfinite(seconds):
        return "virtually forever"
    if seconds < 0.001:
        return "instantly"
    if seconds < 1:
        return "less than a second"

    for upper, divisor, unit in _SUB_YEAR_UNITS:
        if seconds < upper:
            return _plural(round_int(seconds / divisor), unit)

    years = seconds / _YEAR
    if years < 10:
        return _plural(round_int(years), "year")
    if years < 100:
        return f"{round_int(years / 10) * 10} years"
    if years < 1_000:
        return f"{round_int(years / 100) * 100} years"
    if years < 10_000:
        return f"{round_int(years / 1_000) * 1_000} years"
    if years < 1_000_000:
        return f"{round_int(years / 10_000) * 10}K years"
    return "1M+ years"
