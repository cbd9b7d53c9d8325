"""
Passguard Core Data Models
===========================

Pydantic models for the Passguard password analysis engine. These models
represent structured results from strength assessment, pattern detection,
crack-time estimation, password generation, bulk analysis, and policy
compliance checks.

All result models are serialisable to JSON and designed for consumption by
both the CLI output layer and the JSON export builder. The analysed password
itself is carried on :class:`PasswordAssessment` for downstream estimators
but is excluded from serialisation and ``repr``.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Weir, M., Aggarwal, S., Collins, M., & Stern, H. (2010). Testing
      Metrics for Password Creation Policies by Attacking Large Sets of
      Revealed Passwords. CCS.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class StrengthTier(str, enum.Enum):
    """Qualitative password strength tier, ordered weakest to strongest."""

    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        """Ordinal position of the tier (0 = Very Weak, 5 = Excellent)."""
        return list(StrengthTier).index(self)


class PatternKind(str, enum.Enum):
    """Category of a detected pattern."""

    KEYBOARD = "keyboard"
    SEQUENTIAL = "sequential"
    REPEATING = "repeating"
    LEET = "leet"
    WORD_PLUS_NUMBER = "word_plus_number"
    WORD_PLUS_SYMBOL_NUMBER = "word_plus_symbol_number"
    DATE = "date"
    ALTERNATING = "alternating"
    SINGLE_CHARSET_TYPE = "single_charset_type"


class CommonWordConfidence(enum.Enum):
    """Graded answer to "is this word common?".

    The numeric weight is consumed by the scorer as a penalty multiplier,
    so the members must not be collapsed into a boolean.
    """

    NOT_COMMON = "not_common"
    POSSIBLE = "possible"
    LIKELY = "likely"
    DEFINITE = "definite"

    @property
    def weight(self) -> float:
        """Penalty weight in [0.0, 1.0]."""
        return _CONFIDENCE_WEIGHTS[self]


_CONFIDENCE_WEIGHTS: dict[CommonWordConfidence, float] = {
    CommonWordConfidence.NOT_COMMON: 0.0,
    CommonWordConfidence.POSSIBLE: 0.4,
    CommonWordConfidence.LIKELY: 0.7,
    CommonWordConfidence.DEFINITE: 1.0,
}


# ===================================================================== #
#  Assessment Models
# ===================================================================== #


class PatternMatch(BaseModel):
    """A detected pattern within a password.

    Attributes:
        kind: Pattern category.
        description: Human-readable label, e.g. ``"Keyboard pattern: qwerty"``.
        span_ratio: Fraction of the password length covered by the match.
        score_impact: Signed points this match adds to the composite score.
            Negative values are penalties, positive values rewards.
    """

    kind: PatternKind
    description: str
    span_ratio: float = Field(default=1.0, ge=0.0, le=1.0)
    score_impact: int = 0


class PasswordAssessment(BaseModel):
    """Complete strength assessment of a single password.

    Attributes:
        score: Composite score, clamped to [1, 100] for non-empty input.
        strength_tier: Qualitative tier derived from the score.
        entropy_bits: Pattern-penalised entropy estimate in bits.
        adjusted_entropy_bits: Entropy reported to callers; capped for weak
            passwords that contain patterns.
        charset_size: Size of the character pool the password draws from.
        patterns: Detected patterns, in detection order.
        issues: Feedback items, in the order they were raised.
        has_upper: Whether an uppercase ASCII letter is present.
        has_lower: Whether a lowercase ASCII letter is present.
        has_digit: Whether a digit is present.
        has_symbol: Whether any other character is present.
        length: Password length in characters.
        is_common: Whether the password is a likely common password.
    """

    score: int = Field(default=1, ge=0, le=100)
    strength_tier: StrengthTier = StrengthTier.VERY_WEAK
    entropy_bits: float = Field(default=0.0, ge=0.0)
    adjusted_entropy_bits: float = Field(default=0.0, ge=0.0)
    charset_size: int = 0
    patterns: list[PatternMatch] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    has_upper: bool = False
    has_lower: bool = False
    has_digit: bool = False
    has_symbol: bool = False
    length: int = 0
    is_common: bool = False
    password: str = Field(default="", exclude=True, repr=False)

    @property
    def character_types(self) -> int:
        """Number of character classes present (0-4)."""
        return sum((self.has_upper, self.has_lower, self.has_digit, self.has_symbol))

    @property
    def structural_patterns(self) -> list[PatternMatch]:
        """Patterns describing guessable structure.

        Single-character-class composition is penalised by the scorer but
        is not a structural pattern, so it is left out here. Every other
        match counts, including a rewarded uncommon word + number.
        """
        return [p for p in self.patterns if p.kind is not PatternKind.SINGLE_CHARSET_TYPE]

    @property
    def has_patterns(self) -> bool:
        return bool(self.structural_patterns)

    @property
    def feedback(self) -> list[str]:
        """Issues followed by a single pattern-avoidance hint."""
        items = list(self.issues)
        if self.patterns:
            descriptions = ", ".join(p.description for p in self.patterns)
            items.append(f"Avoid patterns: {descriptions}")
        return items

    def pattern_of(self, kind: PatternKind) -> Optional[PatternMatch]:
        """Return the first detected pattern of *kind*, if any."""
        for pattern in self.patterns:
            if pattern.kind is kind:
                return pattern
        return None


class CrackTimeEstimate(BaseModel):
    """Estimated time to crack a password under three attack speeds.

    Attributes:
        online_seconds: Throttled online guessing.
        offline_seconds: Offline attack against a fast hash.
        optimized_seconds: Dedicated multi-GPU cracking rig.
    """

    online_seconds: float = Field(default=0.0, ge=0.0)
    offline_seconds: float = Field(default=0.0, ge=0.0)
    optimized_seconds: float = Field(default=0.0, ge=0.0)

    def as_seconds(self) -> dict[str, float]:
        """Raw estimates keyed by the export names."""
        return {
            "online": self.online_seconds,
            "offline": self.offline_seconds,
            "optimized": self.optimized_seconds,
        }


# ===================================================================== #
#  Generator Models
# ===================================================================== #


class GeneratorConfig(BaseModel):
    """Configuration for the password generator.

    Field aliases are camelCase so that exported settings keep the names
    used by existing report files (``includeUppercase`` etc.).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    length: int = Field(default=16, ge=4, le=128)
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False
    pronounceable: bool = False


class GeneratedPassword(BaseModel):
    """A generated password together with its self-assessment."""

    password: str
    config: GeneratorConfig
    assessment: Optional[PasswordAssessment] = None
    crack_time: Optional[CrackTimeEstimate] = None


# ===================================================================== #
#  Bulk Analysis Models
# ===================================================================== #


class BulkRow(BaseModel):
    """One line of a bulk analysis.

    Attributes:
        password: The analysed password as submitted.
        score: Composite score.
        strength: Strength tier.
        entropy: Adjusted entropy rounded to one decimal place.
        is_common: Common-password flag.
        pattern_count: Number of detected patterns.
        has_issues: Whether any pattern or issue was raised.
    """

    password: str
    score: int
    strength: StrengthTier
    entropy: float
    is_common: bool = False
    pattern_count: int = 0
    has_issues: bool = False


class BulkSummary(BaseModel):
    """Aggregate statistics over a bulk analysis."""

    total: int = 0
    strong_count: int = 0
    common_count: int = 0
    with_patterns_count: int = 0
    average_score: float = 0.0
    tier_distribution: dict[str, int] = Field(default_factory=dict)

    @staticmethod
    def percentage(count: int, total: int) -> int:
        """Rounded percentage of *count* over *total* (0 when empty)."""
        if total <= 0:
            return 0
        return int(count * 100 / total + 0.5)


class BulkReport(BaseModel):
    """Ordered results of a bulk analysis plus its summary."""

    rows: list[BulkRow] = Field(default_factory=list)
    summary: BulkSummary = Field(default_factory=BulkSummary)
    truncated: bool = False

    def sorted_by(self, key: str = "score", descending: bool = True) -> list[BulkRow]:
        """Return the rows sorted by *key*.

        Args:
            key: One of ``password``, ``score``, ``strength``, ``entropy``.
            descending: Sort from highest to lowest.

        Returns:
            A new sorted list; the report itself is not modified.

        Raises:
            ValueError: If *key* is not a sortable column.
        """
        sort_keys: dict[str, Any] = {
            "password": lambda row: row.password,
            "score": lambda row: row.score,
            "strength": lambda row: row.strength.rank,
            "entropy": lambda row: row.entropy,
        }
        if key not in sort_keys:
            raise ValueError(
                f"Cannot sort by {key!r}; expected one of {', '.join(sort_keys)}"
            )
        return sorted(self.rows, key=sort_keys[key], reverse=descending)


# ===================================================================== #
#  Policy Models
# ===================================================================== #


class PolicyRequirement(BaseModel):
    """A single requirement within a password policy."""

    description: str
    passed: bool = False


class PolicyResult(BaseModel):
    """Outcome of checking a password against one policy.

    Attributes:
        name: Policy name (e.g. "Basic Security").
        use_case: Where the policy is appropriate.
        requirements: Individual requirement outcomes.
    """

    name: str
    use_case: str = ""
    requirements: list[PolicyRequirement] = Field(default_factory=list)

    @property
    def compliant(self) -> bool:
        return all(req.passed for req in self.requirements)
