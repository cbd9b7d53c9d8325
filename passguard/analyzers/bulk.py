"""
Bulk Password Analyzer
=======================

Assesses a list of passwords (typically one per line from a file or a
paste buffer) and summarises the batch: how many are strong, how many are
common, how many carry guessable patterns, and how the strength tiers are
distributed. Input order is preserved; sorting is a view over the report.
"""

from __future__ import annotations

from typing import Iterable

from passguard.analyzers.scorer import StrengthScorer
from passguard.core.models import BulkReport, BulkRow, BulkSummary, StrengthTier
from shared.math_utils import round_half_up


DEFAULT_MAX_PASSWORDS = 1000
STRONG_SCORE = 70


class BulkAnalyzer:
    """Ordered map of the scorer over many passwords.

    Args:
        scorer: Scorer used for every line.
        max_passwords: Upper bound on analysed passwords; extra lines are
            dropped and the report is flagged as truncated.
    """

    def __init__(
        self,
        scorer: StrengthScorer | None = None,
        max_passwords: int = DEFAULT_MAX_PASSWORDS,
    ) -> None:
        if max_passwords < 1:
            raise ValueError(f"max_passwords must be at least 1, got {max_passwords}")
        self._scorer = scorer or StrengthScorer()
        self.max_passwords = max_passwords

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> list[str]:
        """Drop line endings and whitespace-only lines.

        Other spaces are kept; they are part of the password.
        """
        return [line.rstrip("\r\n") for line in lines if line.strip()]

    def analyze(self, lines: Iterable[str]) -> BulkReport:
        """Assess every non-blank line in order.

        Args:
            lines: Raw lines, newline characters allowed.

        Returns:
            Rows in input order plus the batch summary.
        """
        passwords = self.parse_lines(lines)
        truncated = len(passwords) > self.max_passwords
        passwords = passwords[: self.max_passwords]

        rows = [self._row(password) for password in passwords]
        return BulkReport(rows=rows, summary=self.summarize(rows), truncated=truncated)

    def _row(self, password: str) -> BulkRow:
        assessment = self._scorer.assess(password)
        return BulkRow(
            password=password,
            score=assessment.score,
            strength=assessment.strength_tier,
            entropy=round_half_up(assessment.adjusted_entropy_bits, 1),
            is_common=assessment.is_common,
            pattern_count=len(assessment.patterns),
            has_issues=bool(assessment.patterns or assessment.issues),
        )

    @staticmethod
    def summarize(rows: list[BulkRow]) -> BulkSummary:
        """Aggregate statistics over analysed rows."""
        total = len(rows)
        distribution = {tier.value: 0 for tier in StrengthTier}
        for row in rows:
            distribution[row.strength.value] += 1

        return BulkSummary(
            total=total,
            strong_count=sum(1 for r in rows if r.score >= STRONG_SCORE),
            common_count=sum(1 for r in rows if r.is_common),
            with_patterns_count=sum(1 for r in rows if r.pattern_count > 0),
            average_score=round_half_up(sum(r.score for r in rows) / total, 1) if total else 0.0,
            tier_distribution=distribution,
        )
