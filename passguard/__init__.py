"""
Passguard -- Password Strength Analysis & Generation
=====================================================

Heuristic password strength assessment, crack-time estimation and
constrained random password generation, with bulk analysis, policy
compliance checks and JSON export.

Modules:
    - passguard.core.engine: Central analysis orchestrator
    - passguard.core.models: Pydantic data models
    - passguard.core.reference_data: Static word and pattern tables
    - passguard.analyzers: Individual analysis modules
    - passguard.output: Console and report output
    - passguard.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

__version__ = "1.0.0"
__tool_name__ = "passguard"
