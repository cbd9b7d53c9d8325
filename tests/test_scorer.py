"""Tests for the composite strength scorer."""

import string

import pytest

from passguard.analyzers.scorer import (
    ISSUE_COMMON,
    ISSUE_NO_DIGIT,
    ISSUE_NO_SYMBOL,
    ISSUE_NO_UPPER,
    ISSUE_SYMBOL_PLACEMENT,
    ISSUE_TOO_SHORT,
    StrengthScorer,
)
from passguard.core.models import PatternKind, StrengthTier


SAMPLE_PASSWORDS = [
    "a", "123456", "password", "password123", "P@ssw0rd!", "Tr0ub4dor&3",
    "correcthorsebatterystaple", "Xk9#mQ2!vL7$", "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
    "Summer2024!", "zork42", "日本語パスワード", "   ",
]


class TestScenarios:

    def test_empty_password(self, scorer):
        result = scorer.assess("")
        assert result.score == 1
        assert result.strength_tier is StrengthTier.VERY_WEAK
        assert result.entropy_bits == 0.0
        assert result.patterns == []
        assert result.issues == []

    def test_common_numeric(self, scorer):
        result = scorer.assess("123456")
        assert result.is_common
        assert result.score == 1
        assert result.strength_tier is StrengthTier.VERY_WEAK
        assert ISSUE_COMMON in result.issues

    def test_leet_dictionary_word(self, scorer):
        result = scorer.assess("Tr0ub4dor&3")
        assert not result.is_common
        assert result.has_patterns
        assert result.score == 70
        # pattern offset lifts the Strong threshold to 80
        assert result.strength_tier is StrengthTier.MODERATE

    def test_passphrase(self, scorer):
        result = scorer.assess("correcthorsebatterystaple")
        assert not result.is_common
        assert not result.has_patterns
        assert result.score == 50
        assert result.strength_tier is StrengthTier.MODERATE
        assert "Only letters" in result.issues

    def test_common_word_with_digits(self, scorer):
        result = scorer.assess("password123")
        assert result.is_common
        assert result.score == 1
        assert result.strength_tier is StrengthTier.VERY_WEAK
        assert result.adjusted_entropy_bits <= 40.0
        assert result.adjusted_entropy_bits <= result.entropy_bits

    def test_rewarded_word_number_still_raises_tier_bar(self, scorer):
        result = scorer.assess("Xylophonist4829")
        assert [p.kind for p in result.patterns] == [PatternKind.WORD_PLUS_NUMBER]
        assert result.patterns[0].score_impact > 0
        assert result.has_patterns
        assert result.score == 87
        # 87 is Very Strong only without the pattern offset
        assert result.strength_tier is StrengthTier.STRONG

    def test_random_four_class_password(self, scorer):
        result = scorer.assess("Xk9#mQ2!vL7$")
        assert result.patterns == []
        assert result.score == 90
        assert result.strength_tier is StrengthTier.EXCELLENT
        assert result.issues == []


class TestIssues:

    def test_short_letters_only(self, scorer):
        issues = scorer.assess("abc").issues
        assert issues[0] == ISSUE_TOO_SHORT
        for expected in (ISSUE_COMMON, "Only letters", ISSUE_NO_UPPER, ISSUE_NO_DIGIT, ISSUE_NO_SYMBOL):
            assert expected in issues

    def test_trailing_symbol_placement(self, scorer):
        assert ISSUE_SYMBOL_PLACEMENT in scorer.assess("Summer2024!").issues

    def test_feedback_appends_pattern_hint(self, scorer):
        feedback = scorer.assess("qwerty").feedback
        assert feedback[-1].startswith("Avoid patterns: Keyboard pattern: qwerty")


class TestTiers:

    @pytest.mark.parametrize(
        "score, has_patterns, is_common, expected",
        [
            (100, False, False, StrengthTier.EXCELLENT),
            (85, False, False, StrengthTier.VERY_STRONG),
            (85, True, False, StrengthTier.STRONG),
            (85, True, True, StrengthTier.MODERATE),
            (30, False, False, StrengthTier.WEAK),
            (29, False, False, StrengthTier.VERY_WEAK),
            (35, True, False, StrengthTier.VERY_WEAK),
        ],
    )
    def test_tier_for(self, score, has_patterns, is_common, expected):
        assert StrengthScorer.tier_for(score, has_patterns, is_common) is expected


class TestInvariants:

    @pytest.mark.parametrize("password", SAMPLE_PASSWORDS)
    def test_score_bounds(self, scorer, password):
        result = scorer.assess(password)
        assert 1 <= result.score <= 100
        assert result.length == len(password)
        assert result.adjusted_entropy_bits <= result.entropy_bits

    @pytest.mark.parametrize("password", SAMPLE_PASSWORDS)
    def test_deterministic(self, scorer, password):
        assert scorer.assess(password).model_dump() == scorer.assess(password).model_dump()

    def test_password_not_serialised(self, scorer):
        result = scorer.assess("Xk9#mQ2!vL7$")
        assert "password" not in result.model_dump()
        assert "Xk9#mQ2!vL7$" not in repr(result)

    def test_long_clean_password_gets_floor(self, scorer):
        # four classes, 12+ chars, no patterns, not common
        result = scorer.assess("Xk9#mQ2!vL7$Rp4&Zw")
        assert result.score >= 65


def _shape_free(scorer, password, repeated=0):
    """True when only the pool size drives entropy and nothing is common."""
    return (
        not scorer.classifier.is_likely_common_password(password)
        and scorer.entropy.repeated_character_count(password) == repeated
        and scorer.entropy.longest_run_ratio(password) == 0
    )


class TestMonotonicity:

    def test_extra_class_never_lowers_score(self, scorer, rng):
        pool = string.ascii_lowercase + string.digits
        checked = 0
        for _ in range(300):
            length = rng.randint(8, 20)
            base = "".join(rng.choice(pool) for _ in range(length))
            position = rng.randint(1, length - 2)
            extra = rng.choice(string.ascii_uppercase + "#%&*")
            richer = base[:position] + extra + base[position + 1:]

            before, after = scorer.assess(base), scorer.assess(richer)
            if after.character_types != before.character_types + 1:
                continue
            if before.patterns or after.patterns:
                continue
            if not (_shape_free(scorer, base) and _shape_free(scorer, richer)):
                continue
            assert after.score >= before.score, (base, richer)
            checked += 1
        assert checked >= 20

    @pytest.mark.parametrize(
        "prefix, repeated, kinds",
        [
            ("K7p#", 0, []),
            ("K7p#zzz", 3, [PatternKind.REPEATING]),
        ],
    )
    def test_longer_extension_never_scores_lower(self, scorer, rng, prefix, repeated, kinds):
        pool = string.ascii_letters + string.digits
        checked = 0
        for _ in range(300):
            tail = "".join(rng.choice(pool) for _ in range(20 - len(prefix)))
            chain = [prefix + tail[:n] for n in range(8 - len(prefix), len(tail) + 1)]
            results = [scorer.assess(pw) for pw in chain]
            if any(
                [p.kind for p in r.patterns] != kinds
                or not _shape_free(scorer, pw, repeated)
                for pw, r in zip(chain, results)
            ):
                continue
            scores = [r.score for r in results]
            assert scores == sorted(scores), chain[-1]
            checked += 1
        assert checked >= 10
