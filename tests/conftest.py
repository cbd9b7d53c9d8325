"""Shared fixtures for the Passguard test-suite."""

from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

# Make the flat-layout packages importable without an install.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from passguard.analyzers.classifier import CommonPasswordClassifier  # noqa: E402
from passguard.analyzers.crack_time import CrackTimeEstimator  # noqa: E402
from passguard.analyzers.entropy import EntropyCalculator  # noqa: E402
from passguard.analyzers.patterns import PatternDetector  # noqa: E402
from passguard.analyzers.scorer import StrengthScorer  # noqa: E402
from passguard.core.engine import PassguardEngine  # noqa: E402
from passguard.core.reference_data import get_reference_data  # noqa: E402


STRONG_PASSWORD = "Xk9#mQ2!vL7$"


@pytest.fixture(scope="session")
def reference():
    return get_reference_data()


@pytest.fixture(scope="session")
def classifier(reference):
    return CommonPasswordClassifier(reference)


@pytest.fixture(scope="session")
def entropy(reference):
    return EntropyCalculator(reference)


@pytest.fixture(scope="session")
def detector(reference, classifier):
    return PatternDetector(reference, classifier)


@pytest.fixture(scope="session")
def scorer(reference):
    return StrengthScorer(reference)


@pytest.fixture(scope="session")
def estimator(classifier):
    return CrackTimeEstimator(classifier=classifier)


@pytest.fixture
def rng():
    return random.Random(1337)


@pytest.fixture
def engine(rng):
    return PassguardEngine(rng=rng, log_to_console=False)
