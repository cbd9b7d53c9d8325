"""Tests for Basic / Enhanced / Maximum policy compliance."""

import pytest

from passguard.analyzers.policy import PolicyChecker


@pytest.fixture
def checker():
    return PolicyChecker()


def _compliance(checker, scorer, password):
    return [p.compliant for p in checker.evaluate(scorer.assess(password))]


class TestPolicies:

    def test_names_and_shape(self, checker, scorer):
        results = checker.evaluate(scorer.assess("abc"))
        assert [r.name for r in results] == [
            "Basic Security", "Enhanced Security", "Maximum Security",
        ]
        assert all(len(r.requirements) == 4 for r in results)

    def test_basic_only(self, checker, scorer):
        assert _compliance(checker, scorer, "Password1") == [True, False, False]

    def test_enhanced_but_too_short_for_maximum(self, checker, scorer):
        assert _compliance(checker, scorer, "Xk9#mQ2!vL7$") == [True, True, False]

    def test_all_policies(self, checker, scorer):
        assert _compliance(checker, scorer, "Xk9#mQ2!vL7$Rp4&Zw") == [True, True, True]

    def test_nothing(self, checker, scorer):
        assert _compliance(checker, scorer, "abc") == [False, False, False]

    def test_leet_word_fails_dictionary_requirement(self, checker, scorer):
        enhanced = checker.enhanced(scorer.assess("Tr0ub4dor&3xyZ"))
        failed = [r.description for r in enhanced.requirements if not r.passed]
        assert failed == ["No dictionary words"]

    def test_maximum_entropy_requirement_label(self, checker, scorer):
        maximum = checker.maximum(scorer.assess("abc"))
        assert "Entropy above 60 bits" in [r.description for r in maximum.requirements]
