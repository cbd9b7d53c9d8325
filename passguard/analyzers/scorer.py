"""
Composite Strength Scorer
==========================

Combines character diversity, length, pattern-adjusted entropy, the
common-password verdict and every detected pattern into a single score on
[1, 100], a qualitative tier, and a list of feedback issues.

Scoring pipeline (integer points, applied in order):

1. Diversity base: 10 points per character class present.
2. Symbol placement: a lone symbol stuck on either end of a short password
   costs ``max(3, round(10 - length / 4))``; very long passwords with a
   sparse symbol sprinkle lose 2.
3. Length bands: 16+ = 30, 12+ = 25, 8+ = 15, 6+ = 10, otherwise 5.
4. Entropy bands: >90 = 20, >70 = 15, >50 = 10, >30 = 5.
5. Common password: -40.
6. Pattern impacts from :class:`PatternDetector`.
7. Consistency bonus: ``min(10, length)``.
8. Clamp to [1, 100], then a floor of 65 for long, four-class,
   pattern-free, uncommon passwords.

Tier thresholds rise by 10 when structural patterns were found and by
another 10 for common passwords, so a pattern-laden password needs a
higher raw score to earn the same label.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management, Section 5.1.1.
    - Komanduri, S. et al. (2011). Of Passwords and People: Measuring
      the Effect of Password-Composition Policies. CHI.
"""

from __future__ import annotations

import re

from passguard.analyzers.classifier import CommonPasswordClassifier
from passguard.analyzers.entropy import EntropyCalculator
from passguard.analyzers.patterns import PatternDetector
from passguard.core.models import PasswordAssessment, PatternKind, StrengthTier
from passguard.core.reference_data import ReferenceData, get_reference_data
from shared.math_utils import clamp, round_int


_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(r"[^a-zA-Z0-9]")

# (minimum length, points)
_LENGTH_BANDS: tuple[tuple[int, int], ...] = (
    (16, 30),
    (12, 25),
    (8, 15),
    (6, 10),
)
_SHORT_LENGTH_POINTS = 5

# (entropy strictly above, points)
_ENTROPY_BANDS: tuple[tuple[float, int], ...] = (
    (90.0, 20),
    (70.0, 15),
    (50.0, 10),
    (30.0, 5),
)

# (score at or above base + offset, tier), strongest first
_TIER_THRESHOLDS: tuple[tuple[int, StrengthTier], ...] = (
    (90, StrengthTier.EXCELLENT),
    (80, StrengthTier.VERY_STRONG),
    (70, StrengthTier.STRONG),
    (50, StrengthTier.MODERATE),
    (30, StrengthTier.WEAK),
)

_COMMON_PENALTY = 40
_TIER_OFFSET = 10
_FLOOR_SCORE = 65
_FLOOR_MIN_LENGTH = 12
_WEAK_SCORE = 25
_WEAK_ENTROPY_CAP = 40.0

ISSUE_COMMON = "Common password or pattern detected"
ISSUE_SYMBOL_PLACEMENT = (
    "Symbol only at the start or end; distribute symbols throughout the password"
)
ISSUE_TOO_SHORT = "Too short"
ISSUE_NO_UPPER = "No uppercase"
ISSUE_NO_LOWER = "No lowercase"
ISSUE_NO_DIGIT = "No numbers"
ISSUE_NO_SYMBOL = "No symbols"


class StrengthScorer:
    """Produces a :class:`PasswordAssessment` for a single password.

    The scorer is stateless after construction; the same password always
    yields an identical assessment.

    Args:
        reference: Lookup tables shared by the sub-analyzers.
        entropy: Entropy calculator (built from *reference* if omitted).
        classifier: Common-password classifier.
        detector: Pattern detector.
    """

    def __init__(
        self,
        reference: ReferenceData | None = None,
        entropy: EntropyCalculator | None = None,
        classifier: CommonPasswordClassifier | None = None,
        detector: PatternDetector | None = None,
    ) -> None:
        ref = reference or get_reference_data()
        self.entropy = entropy or EntropyCalculator(ref)
        self.classifier = classifier or CommonPasswordClassifier(ref)
        self.detector = detector or PatternDetector(ref, self.classifier)

    def assess(self, password: str) -> PasswordAssessment:
        """Assess *password*. Never raises for any string input.

        Args:
            password: The password string.

        Returns:
            The assessment. Empty input yields the degenerate assessment
            (score 1, Very Weak, zero entropy).
        """
        if not password:
            return PasswordAssessment(score=1, strength_tier=StrengthTier.VERY_WEAK)

        length = len(password)
        has_upper = bool(_UPPER_RE.search(password))
        has_lower = bool(_LOWER_RE.search(password))
        has_digit = bool(_DIGIT_RE.search(password))
        has_symbol = bool(_SYMBOL_RE.search(password))
        types = sum((has_upper, has_lower, has_digit, has_symbol))
        issues: list[str] = []

        # 1. Diversity base
        score = 10 * types

        # 2. Symbol placement
        symbol_count = len(_SYMBOL_RE.findall(password))
        if (
            symbol_count == 1
            and (_SYMBOL_RE.match(password[0]) or _SYMBOL_RE.match(password[-1]))
            and length < 16
            and score < 80
        ):
            score -= max(3, round_int(10 - length / 4))
            issues.append(ISSUE_SYMBOL_PLACEMENT)
        if has_symbol and symbol_count / length < 0.05 and length > 20:
            score -= 2

        # 3. Length
        score += self._length_points(length)
        if length < _LENGTH_BANDS[-1][0]:
            issues.append(ISSUE_TOO_SHORT)

        # 4. Entropy
        entropy_bits = self.entropy.calculate(password)
        score += self._entropy_points(entropy_bits)

        # 5. Common password
        is_common = self.classifier.is_likely_common_password(password)
        if is_common:
            score -= _COMMON_PENALTY
            issues.append(ISSUE_COMMON)

        # 6. Patterns
        patterns = self.detector.detect(password)
        score += sum(p.score_impact for p in patterns)
        issues.extend(
            p.description for p in patterns
            if p.kind is PatternKind.SINGLE_CHARSET_TYPE
        )

        # 7. Consistency bonus
        score += min(10, length)

        # 8. Missing character classes
        for present, issue in (
            (has_upper, ISSUE_NO_UPPER),
            (has_lower, ISSUE_NO_LOWER),
            (has_digit, ISSUE_NO_DIGIT),
            (has_symbol, ISSUE_NO_SYMBOL),
        ):
            if not present:
                issues.append(issue)

        assessment = PasswordAssessment(
            entropy_bits=entropy_bits,
            adjusted_entropy_bits=entropy_bits,
            charset_size=self.entropy.charset_size(password),
            patterns=patterns,
            issues=issues,
            has_upper=has_upper,
            has_lower=has_lower,
            has_digit=has_digit,
            has_symbol=has_symbol,
            length=length,
            is_common=is_common,
            password=password,
        )
        has_patterns = assessment.has_patterns

        # 9-10. Clamp, then floor for long clean passwords
        score = int(clamp(score, 1, 100))
        if (
            types == 4
            and length >= _FLOOR_MIN_LENGTH
            and not has_patterns
            and not is_common
        ):
            score = max(score, _FLOOR_SCORE)

        assessment.score = score
        assessment.strength_tier = self.tier_for(score, has_patterns, is_common)

        # 12. Weak pattern-laden passwords report capped entropy
        if has_patterns and score < _WEAK_SCORE:
            assessment.adjusted_entropy_bits = min(entropy_bits, _WEAK_ENTROPY_CAP)

        return assessment

    # ------------------------------------------------------------------ #
    #  Bands
    # ------------------------------------------------------------------ #

    @staticmethod
    def _length_points(length: int) -> int:
        for minimum, points in _LENGTH_BANDS:
            if length >= minimum:
                return points
        return _SHORT_LENGTH_POINTS

    @staticmethod
    def _entropy_points(entropy_bits: float) -> int:
        for threshold, points in _ENTROPY_BANDS:
            if entropy_bits > threshold:
                return points
        return 0

    @staticmethod
    def tier_for(score: int, has_patterns: bool, is_common: bool) -> StrengthTier:
        """Map a clamped score to a tier, raising the bar for weak shapes.

        Args:
            score: Clamped score.
            has_patterns: Whether structural patterns were detected.
            is_common: Whether the password is a likely common password.

        Returns:
            The strength tier.
        """
        offset = _TIER_OFFSET * (int(has_patterns) + int(is_common))
        for threshold, tier in _TIER_THRESHOLDS:
            if score >= threshold + offset:
                return tier
        return StrengthTier.VERY_WEAK
