"""Tests for bulk analysis and its summary statistics."""

import pytest

from passguard.analyzers.bulk import BulkAnalyzer
from passguard.core.models import StrengthTier


@pytest.fixture
def analyzer(scorer):
    return BulkAnalyzer(scorer)


@pytest.fixture
def report(analyzer):
    return analyzer.analyze(["password\r\n", "", "Xk9#mQ2!vL7$\n", "  \n", "123456"])


class TestAnalyze:

    def test_blank_lines_skipped_and_order_kept(self, report):
        assert [row.password for row in report.rows] == ["password", "Xk9#mQ2!vL7$", "123456"]
        assert not report.truncated

    def test_surrounding_spaces_are_part_of_the_password(self, analyzer, scorer):
        row = analyzer.analyze([" hunter22 \n"]).rows[0]
        assert row.password == " hunter22 "
        assert row.score == scorer.assess(" hunter22 ").score
        assert row.score != scorer.assess("hunter22").score

    def test_row_fields(self, report, scorer):
        row = report.rows[1]
        assessment = scorer.assess("Xk9#mQ2!vL7$")
        assert row.score == assessment.score
        assert row.strength is assessment.strength_tier
        assert row.entropy == pytest.approx(round(assessment.adjusted_entropy_bits, 1))
        assert row.pattern_count == 0
        assert not row.has_issues

    def test_summary(self, report):
        summary = report.summary
        assert summary.total == 3
        assert summary.common_count == 2
        assert summary.strong_count == 1
        assert summary.with_patterns_count == 2
        assert set(summary.tier_distribution) == {tier.value for tier in StrengthTier}
        assert sum(summary.tier_distribution.values()) == 3
        expected_avg = round(sum(r.score for r in report.rows) / 3, 1)
        assert summary.average_score == pytest.approx(expected_avg, abs=0.05)

    def test_empty_input(self, analyzer):
        report = analyzer.analyze(["", "   ", "\n"])
        assert report.rows == []
        assert report.summary.total == 0
        assert report.summary.average_score == 0.0

    def test_truncation(self, scorer):
        report = BulkAnalyzer(scorer, max_passwords=2).analyze(["a1", "b2", "c3"])
        assert len(report.rows) == 2
        assert report.truncated

    def test_invalid_limit(self, scorer):
        with pytest.raises(ValueError):
            BulkAnalyzer(scorer, max_passwords=0)


class TestSorting:

    def test_score_descending(self, report):
        scores = [row.score for row in report.sorted_by("score")]
        assert scores == sorted(scores, reverse=True)
        assert report.sorted_by("score")[0].password == "Xk9#mQ2!vL7$"

    def test_ascending(self, report):
        rows = report.sorted_by("entropy", descending=False)
        assert [r.entropy for r in rows] == sorted(r.entropy for r in report.rows)

    def test_strength_uses_tier_rank(self, report):
        ranks = [row.strength.rank for row in report.sorted_by("strength")]
        assert ranks == sorted(ranks, reverse=True)

    def test_password_sort(self, report):
        names = [row.password for row in report.sorted_by("password", descending=False)]
        assert names == sorted(names)

    def test_sorting_does_not_mutate(self, report):
        before = [row.password for row in report.rows]
        report.sorted_by("score", descending=False)
        assert [row.password for row in report.rows] == before

    def test_unknown_key(self, report):
        with pytest.raises(ValueError):
            report.sorted_by("length")
