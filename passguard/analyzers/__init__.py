"""
Passguard Analyzers
====================

Individual analysis modules for the Passguard password strength toolkit.
Each analyzer covers one stage of the assessment pipeline: entropy,
common-password classification, pattern detection, composite scoring,
crack-time projection, generation, bulk analysis and policy checks.
"""

from passguard.analyzers.bulk import BulkAnalyzer
from passguard.analyzers.classifier import CommonPasswordClassifier
from passguard.analyzers.crack_time import CrackTimeEstimator, format_time
from passguard.analyzers.entropy import EntropyCalculator
from passguard.analyzers.generator import PasswordGenerator
from passguard.analyzers.patterns import PatternDetector
from passguard.analyzers.policy import PolicyChecker
from passguard.analyzers.scorer import StrengthScorer

__all__ = [
    "BulkAnalyzer",
    "CommonPasswordClassifier",
    "CrackTimeEstimator",
    "EntropyCalculator",
    "PasswordGenerator",
    "PatternDetector",
    "PolicyChecker",
    "StrengthScorer",
    "format_time",
]
