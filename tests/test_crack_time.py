"""Tests for crack-time estimation and duration formatting."""

import pytest

from passguard.analyzers.crack_time import CrackTimeEstimator, format_time
from passguard.core.models import PasswordAssessment


YEAR = 31_556_952


class TestEstimate:

    def test_common_password_short_circuits(self, scorer, estimator):
        estimate = estimator.estimate(scorer.assess("password123"))
        assert estimate.online_seconds == pytest.approx(0.001)
        assert estimate.offline_seconds == pytest.approx(0.0001)
        assert estimate.optimized_seconds == pytest.approx(0.00001)

    def test_empty_assessment_is_zero(self, estimator):
        estimate = estimator.estimate(PasswordAssessment())
        assert estimate.as_seconds() == {"online": 0.0, "offline": 0.0, "optimized": 0.0}

    def test_faster_attacks_take_less_time(self, scorer, estimator):
        estimate = estimator.estimate(scorer.assess("Xk9#mQ2!vL7$"))
        assert estimate.online_seconds > estimate.offline_seconds > estimate.optimized_seconds > 0
        assert estimate.online_seconds / estimate.offline_seconds == pytest.approx(1e6)

    def test_custom_rates(self, scorer, classifier):
        assessment = scorer.assess("Xk9#mQ2!vL7$")
        slow = CrackTimeEstimator(classifier=classifier).estimate(assessment)
        fast = CrackTimeEstimator(offline_rate=2e9, classifier=classifier).estimate(assessment)
        assert fast.offline_seconds == pytest.approx(slow.offline_seconds / 2)

    @pytest.mark.parametrize("rate", [0, -1.0])
    def test_rejects_non_positive_rates(self, rate):
        with pytest.raises(ValueError):
            CrackTimeEstimator(online_rate=rate)


class TestAdjustmentFactor:

    @pytest.mark.parametrize(
        "password, expected",
        [
            ("Xk9#mQ2!vL7$", 1.2),      # four classes, not the capital formula
            ("Summer2024!", 0.6),       # Capital + lower + digits + symbol
            ("quimbleton4826", 0.5),    # uncommon word + digits
            ("monkey4826", 0.15),       # common word + digits
            ("qwerty12", 0.05),         # floored
        ],
    )
    def test_factor(self, scorer, estimator, password, expected):
        assert estimator.adjustment_factor(scorer.assess(password)) == pytest.approx(expected)


class TestFormatTime:

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0.0005, "instantly"),
            (0.5, "less than a second"),
            (1, "1 second"),
            (30, "30 seconds"),
            (60, "1 minute"),
            (90, "2 minutes"),
            (3600, "1 hour"),
            (86400 * 3, "3 days"),
            (604800 * 2, "2 weeks"),
            (2629746 * 3, "3 months"),
            (YEAR, "1 year"),
            (YEAR * 5, "5 years"),
            (YEAR * 45, "50 years"),
            (YEAR * 250, "300 years"),
            (YEAR * 4400, "4000 years"),
            (YEAR * 123456, "120K years"),
            (YEAR * 5e6, "1M+ years"),
            (1e20, "1M+ years"),
            (float("inf"), "virtually forever"),
            (float("nan"), "virtually forever"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected
