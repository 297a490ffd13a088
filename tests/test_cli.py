"""Tests for the Keysmith command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from keysmith.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, quiet_config_file):
    def _invoke(*args):
        return runner.invoke(cli, ["-c", str(quiet_config_file), *args])

    return _invoke


class TestGenerate:
    def test_quiet_uses_config_defaults(self, invoke):
        result = invoke("-q", "generate")
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert all(len(line) == 10 for line in lines)

    def test_flags_override_config(self, invoke):
        result = invoke("-q", "generate", "-n", "4", "-l", "20", "--no-symbols")
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert len(lines) == 4
        assert all(len(line) == 20 and line.isalnum() for line in lines)

    def test_no_class_selected_exits_2(self, invoke):
        result = invoke(
            "generate", "--no-uppercase", "--no-lowercase", "--no-numbers", "--no-symbols"
        )
        assert result.exit_code == 2
        assert "Please select at least one character type" in result.output

    def test_invalid_length_rejected(self, invoke):
        result = invoke("generate", "-l", "0")
        assert result.exit_code != 0

    def test_export(self, invoke, tmp_path):
        target = tmp_path / "export.json"
        result = invoke("-q", "generate", "-n", "2", "-e", str(target))
        assert result.exit_code == 0, result.output
        data = json.loads(target.read_text(encoding="utf-8"))
        printed = result.output.strip().splitlines()
        assert data["passwords"] == list(reversed(printed))
        assert "exportDate" in data

    def test_export_keeps_json_stdout_clean(self, invoke, tmp_path):
        target = tmp_path / "export.json"
        result = invoke("-o", "json", "generate", "-n", "2", "-e", str(target))
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        exported = json.loads(target.read_text(encoding="utf-8"))
        assert sorted(report["metadata"]["passwords"]) == sorted(exported["passwords"])

    def test_console_output(self, invoke):
        result = invoke("generate", "-n", "2", "--check")
        assert result.exit_code == 0, result.output
        assert "Generated Passwords" in result.output

    def test_json_report_file(self, invoke, tmp_path):
        target = tmp_path / "gen.json"
        result = invoke("-o", "json", "-f", str(target), "generate", "-n", "2")
        assert result.exit_code == 0, result.output
        data = json.loads(target.read_text(encoding="utf-8"))
        assert len(data["metadata"]["passwords"]) == 2


class TestCheck:
    def test_quiet_score(self, invoke):
        result = invoke("-q", "check", "Tr0ub4dor&3")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "75\tStrong"

    def test_json_stdout(self, invoke):
        result = invoke("-o", "json", "check", "password")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["report_metadata"]["target"] == "[password]"
        assert data["findings"][0]["title"] == "Password Strength: Weak"

    def test_extended_console(self, invoke):
        result = invoke("check", "-x", "password")
        assert result.exit_code == 0, result.output
        assert "Avoid common passwords" in result.output
        assert "critical issue(s) found" in result.output

    def test_password_is_masked(self, invoke):
        result = invoke("check", "Secret123!")
        assert result.exit_code == 0, result.output
        assert "S********!" in result.output
        assert "Secret123!" not in result.output

    def test_empty_password(self, invoke):
        result = invoke("-q", "check", "")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "-\t-"

    def test_html_report(self, invoke, tmp_path):
        target = tmp_path / "check.html"
        result = invoke("-o", "html", "-f", str(target), "check", "abc")
        assert result.exit_code == 0, result.output
        assert "Very Weak" in target.read_text(encoding="utf-8")


class TestAudit:
    def test_quiet_summary(self, invoke):
        result = invoke("-q", "audit", "-s", "50", "-l", "8")
        assert result.exit_code == 0, result.output
        assert result.output.startswith("Audited 50 samples")

    def test_json_metadata(self, invoke, tmp_path):
        target = tmp_path / "audit.json"
        result = invoke("-o", "json", "-f", str(target), "audit")
        assert result.exit_code == 0, result.output
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["metadata"]["samples"] == 200


class TestGroup:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["-c", str(tmp_path / "missing.toml"), "check", "x"])
        assert result.exit_code == 2
