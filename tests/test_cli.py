"""Tests for the Click command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from passguard import __version__
from passguard.analyzers.generator import SYMBOLS
from passguard.cli import cli


PASSWORD_LIST = "hunter2\nXk9#mQ2!vL7$\n\n123456\n"


@pytest.fixture
def runner():
    return CliRunner()


def _json(output):
    return json.loads(output[output.index("{"):])


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestAnalyze:

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["-o", "json", "analyze", "Xk9#mQ2!vL7$"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["singlePasswordAnalysis"]["score"] == 90
        assert document["singlePasswordAnalysis"]["strength"] == "Excellent"
        assert "Xk9#mQ2!vL7$" not in result.output

    def test_prompts_when_password_omitted(self, runner):
        result = runner.invoke(cli, ["-o", "json", "analyze"], input="hunter2\n")
        assert result.exit_code == 0, result.output
        assert _json(result.output)["singlePasswordAnalysis"]["isCommon"] is True
        assert "hunter2" not in result.output

    def test_console_output_masks_password(self, runner):
        result = runner.invoke(cli, ["analyze", "Tr0ub4dor&3"])
        assert result.exit_code == 0, result.output
        assert "Password Analysis" in result.output
        assert "T*********3" in result.output
        assert "Tr0ub4dor&3" not in result.output
        assert "Policy Compliance" in result.output

    def test_no_policies(self, runner):
        result = runner.invoke(cli, ["analyze", "--no-policies", "abc"])
        assert result.exit_code == 0, result.output
        assert "Policy Compliance" not in result.output

    def test_output_file(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ["-o", "json", "-f", "out/report.json", "analyze", "abc"])
            assert result.exit_code == 0, result.output
            assert "saved" in result.output
            document = json.loads(Path("out/report.json").read_text(encoding="utf-8"))
            assert document["singlePasswordAnalysis"]["length"] == 3


class TestGenerate:

    def test_json_settings(self, runner):
        result = runner.invoke(cli, ["-o", "json", "generate", "--length", "20", "--no-symbols"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        password = document["generatedPassword"]
        assert len(password) == 20
        assert not set(password) & set(SYMBOLS)
        assert document["generatorSettings"]["length"] == 20
        assert document["generatorSettings"]["includeSymbols"] is False

    def test_count(self, runner):
        result = runner.invoke(cli, ["-o", "json", "generate", "-n", "3", "--length", "8"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert len(document["generatedPasswords"]) == 3
        assert all(len(p) == 8 for p in document["generatedPasswords"])
        assert document["generatedPasswords"][-1] == document["generatedPassword"]

    def test_length_out_of_range(self, runner):
        result = runner.invoke(cli, ["generate", "--length", "3"])
        assert result.exit_code == 2

    def test_empty_charset_warns(self, runner):
        result = runner.invoke(
            cli,
            ["generate", "--no-uppercase", "--no-lowercase", "--no-numbers", "--no-symbols"],
        )
        assert result.exit_code == 0, result.output
        assert "No character classes enabled" in result.output

    def test_console_table(self, runner):
        result = runner.invoke(cli, ["generate", "--pronounceable", "-n", "2"])
        assert result.exit_code == 0, result.output
        assert "Generated Passwords" in result.output

    def test_config_defaults(self, runner, tmp_path):
        config = tmp_path / "passguard.toml"
        config.write_text("[generator]\nlength = 30\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config), "-o", "json", "generate"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["generatedPassword"]) == 30


class TestBulk:

    def test_json_sorted(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            Path("pw.txt").write_text(PASSWORD_LIST, encoding="utf-8")
            result = runner.invoke(cli, ["-o", "json", "bulk", "pw.txt", "--sort-by", "score"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        rows = document["bulkAnalysis"]
        assert [r["score"] for r in rows] == sorted((r["score"] for r in rows), reverse=True)
        assert rows[0]["password"] == "X**********$"
        assert document["bulkSummary"]["total"] == 3
        assert "hunter2" not in result.output

    def test_stdin_ascending(self, runner):
        result = runner.invoke(
            cli, ["-o", "json", "bulk", "-", "--sort-by", "score", "--ascending"],
            input=PASSWORD_LIST,
        )
        assert result.exit_code == 0, result.output
        scores = [r["score"] for r in json.loads(result.output)["bulkAnalysis"]]
        assert scores == sorted(scores)

    def test_console_summary(self, runner):
        result = runner.invoke(cli, ["bulk", "-"], input=PASSWORD_LIST)
        assert result.exit_code == 0, result.output
        assert "Bulk Analysis" in result.output
        assert "Total Analysed" in result.output
        assert "hunter2" not in result.output

    def test_empty_input(self, runner):
        result = runner.invoke(cli, ["bulk", "-"], input="\n\n")
        assert result.exit_code == 0, result.output
        assert "No passwords found" in result.output


class TestConfiguration:

    def test_missing_config_file(self, runner):
        result = runner.invoke(cli, ["-c", "does-not-exist.toml", "analyze", "abc"])
        assert result.exit_code == 2

    def test_invalid_config_file(self, runner, tmp_path):
        config = tmp_path / "broken.toml"
        config.write_text("[generator\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config), "analyze", "abc"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
