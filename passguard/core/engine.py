"""
Passguard Analysis Engine
==========================

Central orchestrator for the Passguard password toolkit. The
:class:`PassguardEngine` wires the analyzers together with the configured
attack-speed model and random source, and exposes one method per
user-facing operation: single-password assessment, crack-time estimation,
generation (with optional self-assessment), bulk analysis, policy checks
and JSON export.

Architecture follows the Facade pattern (Gamma et al., 1994), providing
a simplified interface over the individual analyzer subsystems. The
module-level :func:`assess`, :func:`estimate_crack_time` and
:func:`generate` delegate to a lazily built default engine.

Passwords never reach the logs; only lengths, scores, tiers and counts
are recorded.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import random
from typing import Any, Iterable, Optional

from shared.config import PassguardConfig
from shared.logger import PassguardLogger

from passguard.analyzers.bulk import BulkAnalyzer
from passguard.analyzers.classifier import CommonPasswordClassifier
from passguard.analyzers.crack_time import CrackTimeEstimator
from passguard.analyzers.generator import PasswordGenerator
from passguard.analyzers.policy import PolicyChecker
from passguard.analyzers.scorer import StrengthScorer
from passguard.core.models import (
    BulkReport,
    CrackTimeEstimate,
    GeneratedPassword,
    GeneratorConfig,
    PasswordAssessment,
    PolicyResult,
)
from passguard.core.reference_data import get_reference_data
from passguard.output.report import build_export


class PassguardEngine:
    """Orchestrates all Passguard analysis operations.

    Usage::

        engine = PassguardEngine()
        assessment = engine.assess("Tr0ub4dor&3")
        estimate = engine.estimate_crack_time(assessment)
        password = engine.generate(GeneratorConfig(length=20))
        report = engine.analyze_bulk(open("passwords.txt"))

    Args:
        config: Passguard configuration; defaults are used when omitted.
        rng: Random source for the generator. Overrides
            ``generator.secure_random`` when given.
        log_to_console: Attach the Rich stderr log handler.

    Attributes:
        config: Active configuration.
        logger: Logger for the engine.
    """

    def __init__(
        self,
        config: Optional[PassguardConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        log_to_console: bool = True,
    ) -> None:
        self.config = config or PassguardConfig()
        self.logger = PassguardLogger.from_config(
            "engine",
            self.config.global_settings,
            console_output=log_to_console,
        )

        reference = get_reference_data()
        analyzer_cfg = self.config.analyzer
        classifier = CommonPasswordClassifier(reference)

        self._scorer = StrengthScorer(reference, classifier=classifier)
        self._estimator = CrackTimeEstimator(
            online_rate=analyzer_cfg.online_guesses_per_second,
            offline_rate=analyzer_cfg.offline_guesses_per_second,
            optimized_rate=analyzer_cfg.optimized_guesses_per_second,
            classifier=classifier,
        )
        if rng is None and not self.config.generator.secure_random:
            rng = random.Random()
        self._generator = PasswordGenerator(rng)
        self._bulk = BulkAnalyzer(self._scorer, max_passwords=analyzer_cfg.bulk_max_passwords)
        self._policy = PolicyChecker()

    # ------------------------------------------------------------------ #
    #  Single password
    # ------------------------------------------------------------------ #

    def assess(self, password: str) -> PasswordAssessment:
        """Score a single password. Never raises for string input."""
        assessment = self._scorer.assess(password)
        self.logger.debug(
            "Assessed password",
            length=assessment.length,
            score=assessment.score,
            tier=assessment.strength_tier.value,
            patterns=len(assessment.patterns),
            common=assessment.is_common,
        )
        return assessment

    def estimate_crack_time(self, assessment: PasswordAssessment) -> CrackTimeEstimate:
        """Project crack times for an assessment under the configured rates."""
        return self._estimator.estimate(assessment)

    def check_policies(self, assessment: PasswordAssessment) -> list[PolicyResult]:
        """Evaluate Basic, Enhanced and Maximum policies."""
        results = self._policy.evaluate(assessment)
        self.logger.debug(
            "Policy check complete",
            compliant=[r.name for r in results if r.compliant],
        )
        return results

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def default_generator_config(self) -> GeneratorConfig:
        """Generator configuration built from the ``[generator]`` section."""
        gen = self.config.generator
        return GeneratorConfig(
            length=gen.length,
            include_uppercase=gen.include_uppercase,
            include_lowercase=gen.include_lowercase,
            include_numbers=gen.include_numbers,
            include_symbols=gen.include_symbols,
            exclude_similar=gen.exclude_similar,
            pronounceable=gen.pronounceable,
        )

    def generate(self, config: Optional[GeneratorConfig] = None) -> str:
        """Generate one password; ``""`` when the charset is empty."""
        config = config or self.default_generator_config()
        password = self._generator.generate(config)
        if not password:
            self.logger.warning("Generator produced an empty password: no character classes enabled")
        else:
            self.logger.debug(
                "Generated password",
                length=len(password),
                pronounceable=config.pronounceable,
            )
        return password

    def generate_and_assess(
        self, config: Optional[GeneratorConfig] = None
    ) -> GeneratedPassword:
        """Generate a password and attach its own assessment and crack times."""
        config = config or self.default_generator_config()
        password = self.generate(config)
        assessment = self.assess(password)
        return GeneratedPassword(
            password=password,
            config=config,
            assessment=assessment,
            crack_time=self.estimate_crack_time(assessment),
        )

    # ------------------------------------------------------------------ #
    #  Bulk analysis
    # ------------------------------------------------------------------ #

    def analyze_bulk(self, lines: Iterable[str]) -> BulkReport:
        """Assess one password per line, preserving order."""
        with self.logger.operation("bulk"), self.logger.timed("bulk analysis"):
            report = self._bulk.analyze(lines)

        summary = report.summary
        self.logger.info(
            "Bulk analysis complete",
            total=summary.total,
            strong=summary.strong_count,
            common=summary.common_count,
            with_patterns=summary.with_patterns_count,
        )
        if report.truncated:
            self.logger.warning(
                "Bulk input truncated",
                limit=self._bulk.max_passwords,
            )
        return report

    # ------------------------------------------------------------------ #
    #  Export
    # ------------------------------------------------------------------ #

    def export(
        self,
        password: Optional[str] = None,
        *,
        bulk: Optional[BulkReport] = None,
        generated: Optional[GeneratedPassword] = None,
        generator_config: Optional[GeneratorConfig] = None,
        mask_passwords: bool = True,
    ) -> dict[str, Any]:
        """Build the JSON export document for the given results.

        Args:
            password: Password to assess for ``singlePasswordAnalysis``.
            bulk: Bulk report for ``bulkAnalysis``.
            generated: Generated password for ``generatedPassword``.
            generator_config: Settings for ``generatorSettings``; taken from
                *generated* or the configured defaults when omitted.
            mask_passwords: Mask bulk-row passwords in the document.

        Returns:
            The export document as a plain dictionary.
        """
        assessment: Optional[PasswordAssessment] = None
        estimate: Optional[CrackTimeEstimate] = None
        if password is not None:
            assessment = self.assess(password)
            estimate = self.estimate_crack_time(assessment)

        if generator_config is None:
            generator_config = (
                generated.config if generated is not None
                else self.default_generator_config()
            )

        return build_export(
            assessment=assessment,
            crack_time=estimate,
            bulk=bulk,
            generator_config=generator_config,
            generated_password=generated.password if generated is not None else "",
            mask_passwords=mask_passwords,
        )


# ========================= Module-level convenience ========================

_default_engine: Optional[PassguardEngine] = None


def get_engine() -> PassguardEngine:
    """Return the shared default engine, building it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PassguardEngine()
    return _default_engine


def assess(password: str) -> PasswordAssessment:
    """Assess *password* with the default engine."""
    return get_engine().assess(password)


def estimate_crack_time(assessment: PasswordAssessment) -> CrackTimeEstimate:
    """Estimate crack times with the default engine."""
    return get_engine().estimate_crack_time(assessment)


def generate(config: Optional[GeneratorConfig] = None) -> str:
    """Generate a password with the default engine."""
    return get_engine().generate(config)
