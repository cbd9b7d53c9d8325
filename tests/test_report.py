"""Tests for the JSON export document and the report writer."""

import json

import pytest

from passguard.analyzers.bulk import BulkAnalyzer
from passguard.core.models import GeneratorConfig
from passguard.output.report import (
    PassguardReportGenerator,
    assessment_to_dict,
    build_export,
    mask_password,
)


@pytest.mark.parametrize(
    "password, masked",
    [("", ""), ("a", "*"), ("ab", "**"), ("abc", "a*c"), ("hunter2", "h*****2")],
)
def test_mask_password(password, masked):
    assert mask_password(password) == masked


class TestBuildExport:

    def test_top_level_keys(self):
        document = build_export()
        assert set(document) == {
            "timestamp", "singlePasswordAnalysis", "bulkAnalysis",
            "generatorSettings", "generatedPassword",
        }
        assert document["singlePasswordAnalysis"] is None
        assert document["bulkAnalysis"] == []
        assert document["generatedPassword"] == ""

    def test_assessment_fields(self, scorer, estimator):
        assessment = scorer.assess("Tr0ub4dor&3")
        entry = assessment_to_dict(assessment, estimator.estimate(assessment))
        assert entry["score"] == 70
        assert entry["strength"] == "Moderate"
        assert entry["hasPatterns"] is True
        assert entry["isCommon"] is False
        assert entry["length"] == 11
        assert set(entry["timeToCrack"]) == {"online", "offline", "optimized"}
        assert entry["patterns"] == [p.description for p in assessment.patterns]
        assert entry["feedback"][-1].startswith("Avoid patterns:")

    def test_generator_settings_use_camel_case(self):
        document = build_export(generator_config=GeneratorConfig(length=24, pronounceable=True))
        settings = document["generatorSettings"]
        assert settings["length"] == 24
        assert settings["pronounceable"] is True
        assert "includeUppercase" in settings
        assert "include_uppercase" not in settings

    def test_bulk_rows_masked_by_default(self, scorer):
        report = BulkAnalyzer(scorer).analyze(["hunter2", "Xk9#mQ2!vL7$"])
        document = build_export(bulk=report)
        assert [row["password"] for row in document["bulkAnalysis"]] == ["h*****2", "X**********$"]
        assert document["bulkSummary"]["total"] == 2
        assert "hunter2" not in json.dumps(document)

    def test_bulk_rows_unmasked_on_request(self, scorer):
        report = BulkAnalyzer(scorer).analyze(["hunter2"])
        document = build_export(bulk=report, mask_passwords=False)
        assert document["bulkAnalysis"][0]["password"] == "hunter2"


class TestReportGenerator:

    def test_generate_json_creates_parents(self, tmp_path):
        target = tmp_path / "nested" / "report.json"
        path = PassguardReportGenerator().generate_json(build_export(), target)
        assert path == target
        loaded = json.loads(target.read_text(encoding="utf-8"))
        assert loaded["generatorSettings"]["length"] == 16

    def test_to_json_keeps_unicode(self):
        text = PassguardReportGenerator.to_json({"generatedPassword": "pässwörd"})
        assert "pässwörd" in text
