"""
Passguard Core Module
======================

Data models and the read-only reference tables shared by every Passguard
analyzer. The :class:`~passguard.core.engine.PassguardEngine` facade lives
in :mod:`passguard.core.engine`.
"""

from passguard.core.models import (
    BulkReport,
    BulkRow,
    BulkSummary,
    CommonWordConfidence,
    CrackTimeEstimate,
    GeneratedPassword,
    GeneratorConfig,
    PasswordAssessment,
    PatternKind,
    PatternMatch,
    PolicyRequirement,
    PolicyResult,
    StrengthTier,
)
from passguard.core.reference_data import ReferenceData, get_reference_data

__all__ = [
    "BulkReport",
    "BulkRow",
    "BulkSummary",
    "CommonWordConfidence",
    "CrackTimeEstimate",
    "GeneratedPassword",
    "GeneratorConfig",
    "PasswordAssessment",
    "PatternKind",
    "PatternMatch",
    "PolicyRequirement",
    "PolicyResult",
    "ReferenceData",
    "StrengthTier",
    "get_reference_data",
]
