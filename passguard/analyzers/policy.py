"""
Password Policy Checker
========================

Checks an assessed password against three graded composition policies:

- **Basic Security** (personal accounts): 8+ characters with upper case,
  lower case and digits.
- **Enhanced Security** (business and financial accounts): 12+ characters,
  mixed case, digits and symbols, and no dictionary words.
- **Maximum Security** (administrative and critical systems): 16+
  characters, all four classes, more than 60 bits of entropy, and no
  common password or guessable pattern.

References:
    - NIST SP 800-63B (2017), Section 5.1.1.2: Memorized Secret Verifiers.
    - CIS Password Policy Guide (2021).
"""

from __future__ import annotations

from passguard.core.models import (
    PasswordAssessment,
    PatternKind,
    PolicyRequirement,
    PolicyResult,
)


_WORD_BASED_KINDS = frozenset({
    PatternKind.LEET,
    PatternKind.WORD_PLUS_NUMBER,
    PatternKind.WORD_PLUS_SYMBOL_NUMBER,
})

MAXIMUM_MIN_ENTROPY = 60.0


class PolicyChecker:
    """Evaluates assessments against the built-in policies."""

    def evaluate(self, assessment: PasswordAssessment) -> list[PolicyResult]:
        """Check *assessment* against every policy, weakest first."""
        return [
            self.basic(assessment),
            self.enhanced(assessment),
            self.maximum(assessment),
        ]

    @staticmethod
    def basic(a: PasswordAssessment) -> PolicyResult:
        return PolicyResult(
            name="Basic Security",
            use_case="Personal accounts, low-risk services",
            requirements=[
                PolicyRequirement(description="At least 8 characters", passed=a.length >= 8),
                PolicyRequirement(description="Contains uppercase letters", passed=a.has_upper),
                PolicyRequirement(description="Contains lowercase letters", passed=a.has_lower),
                PolicyRequirement(description="Contains numbers", passed=a.has_digit),
            ],
        )

    @staticmethod
    def enhanced(a: PasswordAssessment) -> PolicyResult:
        return PolicyResult(
            name="Enhanced Security",
            use_case="Business accounts, financial services",
            requirements=[
                PolicyRequirement(description="At least 12 characters", passed=a.length >= 12),
                PolicyRequirement(
                    description="Mixed case letters",
                    passed=a.has_upper and a.has_lower,
                ),
                PolicyRequirement(
                    description="Numbers and symbols",
                    passed=a.has_digit and a.has_symbol,
                ),
                PolicyRequirement(
                    description="No dictionary words",
                    passed=not a.is_common and not PolicyChecker._has_word_pattern(a),
                ),
            ],
        )

    @staticmethod
    def maximum(a: PasswordAssessment) -> PolicyResult:
        return PolicyResult(
            name="Maximum Security",
            use_case="Administrative accounts, critical systems",
            requirements=[
                PolicyRequirement(description="At least 16 characters", passed=a.length >= 16),
                PolicyRequirement(
                    description="All four character classes",
                    passed=a.character_types == 4,
                ),
                PolicyRequirement(
                    description=f"Entropy above {MAXIMUM_MIN_ENTROPY:.0f} bits",
                    passed=a.adjusted_entropy_bits > MAXIMUM_MIN_ENTROPY,
                ),
                PolicyRequirement(
                    description="No common passwords or patterns",
                    passed=not a.is_common and not a.has_patterns,
                ),
            ],
        )

    @staticmethod
    def _has_word_pattern(a: PasswordAssessment) -> bool:
        return any(
            p.kind in _WORD_BASED_KINDS and p.score_impact < 0
            for p in a.patterns
        )
