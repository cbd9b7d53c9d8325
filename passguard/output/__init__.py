"""
Passguard Output Module
========================

Console display and JSON report generation for Passguard results.
"""

from passguard.output.console import PassguardConsoleOutput
from passguard.output.report import PassguardReportGenerator, build_export

__all__ = [
    "PassguardConsoleOutput",
    "PassguardReportGenerator",
    "build_export",
]
