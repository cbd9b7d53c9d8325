"""
Passguard Report Generator
===========================

Builds and writes the Passguard JSON export document. Its top-level keys
are a stable contract shared with existing report files::

    {
      "timestamp": "2024-05-01T12:00:00+00:00",
      "singlePasswordAnalysis": {
        "score": 70, "strength": "Moderate", "entropy": 72.3,
        "patterns": [...], "issues": [...], "length": 11,
        "isCommon": false,
        "timeToCrack": {"online": ..., "offline": ..., "optimized": ...},
        "hasUpper": true, "hasLower": true, "hasNumber": true,
        "hasSymbol": true, "hasPatterns": true, "feedback": [...]
      },
      "bulkAnalysis": [{"password": "p******3", "score": 12, ...}],
      "generatorSettings": {"length": 16, "includeUppercase": true, ...},
      "generatedPassword": "..."
    }

The assessed single password is never written. Bulk rows are masked by
default.

References:
    - RFC 8259 (2017). The JavaScript Object Notation (JSON) Data
      Interchange Format.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from passguard.core.models import (
    BulkReport,
    BulkRow,
    CrackTimeEstimate,
    GeneratorConfig,
    PasswordAssessment,
)


def mask_password(password: str) -> str:
    """Mask a password for display, keeping only the first and last chars."""
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]


# ===================================================================== #
#  Document builders
# ===================================================================== #


def assessment_to_dict(
    assessment: PasswordAssessment,
    crack_time: Optional[CrackTimeEstimate] = None,
) -> dict[str, Any]:
    """Serialise an assessment under the export field names."""
    estimate = crack_time or CrackTimeEstimate()
    return {
        "score": assessment.score,
        "strength": assessment.strength_tier.value,
        "entropy": round(assessment.adjusted_entropy_bits, 2),
        "patterns": [p.description for p in assessment.patterns],
        "issues": list(assessment.issues),
        "length": assessment.length,
        "isCommon": assessment.is_common,
        "timeToCrack": estimate.as_seconds(),
        "hasUpper": assessment.has_upper,
        "hasLower": assessment.has_lower,
        "hasNumber": assessment.has_digit,
        "hasSymbol": assessment.has_symbol,
        "hasPatterns": assessment.has_patterns,
        "feedback": assessment.feedback,
    }


def bulk_row_to_dict(row: BulkRow, *, mask: bool = True) -> dict[str, Any]:
    """Serialise one bulk row under the export field names."""
    return {
        "password": mask_password(row.password) if mask else row.password,
        "score": row.score,
        "strength": row.strength.value,
        "entropy": row.entropy,
        "isCommon": row.is_common,
        "patterns": row.pattern_count,
        "hasIssues": row.has_issues,
    }


def build_export(
    *,
    assessment: Optional[PasswordAssessment] = None,
    crack_time: Optional[CrackTimeEstimate] = None,
    bulk: Optional[BulkReport] = None,
    generator_config: Optional[GeneratorConfig] = None,
    generated_password: str = "",
    mask_passwords: bool = True,
) -> dict[str, Any]:
    """Assemble the export document.

    Args:
        assessment: Single-password assessment, or ``None``.
        crack_time: Crack-time estimate for *assessment*.
        bulk: Bulk report, or ``None``.
        generator_config: Generator settings (camelCase in the output).
        generated_password: Most recently generated password.
        mask_passwords: Mask passwords in bulk rows.

    Returns:
        The document as a JSON-serialisable dictionary.
    """
    config = generator_config or GeneratorConfig()
    document: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "singlePasswordAnalysis": (
            assessment_to_dict(assessment, crack_time) if assessment is not None else None
        ),
        "bulkAnalysis": (
            [bulk_row_to_dict(row, mask=mask_passwords) for row in bulk.rows]
            if bulk is not None else []
        ),
        "generatorSettings": config.model_dump(by_alias=True),
        "generatedPassword": generated_password,
    }
    if bulk is not None:
        document["bulkSummary"] = bulk_summary_to_dict(bulk)
    return document


def bulk_summary_to_dict(report: BulkReport) -> dict[str, Any]:
    """Serialise bulk summary statistics under camelCase names."""
    summary = report.summary
    return {
        "total": summary.total,
        "strongCount": summary.strong_count,
        "commonCount": summary.common_count,
        "withPatternsCount": summary.with_patterns_count,
        "averageScore": summary.average_score,
        "tierDistribution": dict(summary.tier_distribution),
        "truncated": report.truncated,
    }


# ===================================================================== #
#  Report writer
# ===================================================================== #


class PassguardReportGenerator:
    """Writes Passguard export documents to disk.

    Usage::

        generator = PassguardReportGenerator()
        generator.generate_json(document, Path("password-security-report.json"))
    """

    def generate_json(self, document: dict[str, Any], output_path: Path) -> Path:
        """Write *document* as indented UTF-8 JSON.

        Args:
            document: Output of :func:`build_export`.
            output_path: Path to write the JSON file; parent directories
                are created.

        Returns:
            Path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_json(document), encoding="utf-8")
        return output_path

    @staticmethod
    def to_json(document: dict[str, Any]) -> str:
        """Render *document* the way :meth:`generate_json` writes it."""
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)
