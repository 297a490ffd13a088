"""Tests for KeysmithReportGenerator."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from shared.models import Finding, ScanResult, Severity

from keysmith.output.report import EXPORT_GENERATOR_NAME, KeysmithReportGenerator


@pytest.fixture
def result():
    res = ScanResult(tool_name="keysmith", target="[password]")
    res.add_finding(Finding(
        severity=Severity.HIGH,
        title="Password Strength: Weak",
        description="Score 25/100 <weak>",
        recommendation="Use 12+ characters for better security",
    ))
    res.metadata = {"score": 25}
    return res.finalize("Password strength: Weak (25/100)")


class TestReports:
    def test_json_report(self, result, tmp_path):
        path = KeysmithReportGenerator().generate_json(result, tmp_path / "out" / "r.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["report_metadata"]["tool"] == "keysmith"
        assert data["summary"]["total_findings"] == 1
        assert data["summary"]["highest_severity"] == "HIGH"
        assert data["findings"][0]["severity"] == "HIGH"
        assert data["metadata"] == {"score": 25}

    def test_html_report_escapes(self, result, tmp_path):
        path = KeysmithReportGenerator().generate_html(result, tmp_path / "r.html")
        text = path.read_text(encoding="utf-8")
        assert "&lt;weak&gt;" in text
        assert "<weak>" not in text
        assert "severity-high" in text
        assert "[password]" in text

    def test_html_without_findings(self, tmp_path):
        empty = ScanResult(tool_name="keysmith", target="x")
        path = KeysmithReportGenerator().generate_html(empty, tmp_path / "e.html")
        text = path.read_text(encoding="utf-8")
        assert "No findings." in text
        assert "n/a" in text


class TestExport:
    def test_export_format(self, tmp_path):
        moment = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        path = KeysmithReportGenerator().export_passwords(
            ["pw2", "pw1"], tmp_path / "export.json", export_date=moment
        )
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {
            "passwords": ["pw2", "pw1"],
            "exportDate": "2024-05-01T12:00:00+00:00",
            "generator": EXPORT_GENERATOR_NAME,
        }

    def test_export_empty_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="No passwords"):
            KeysmithReportGenerator().export_passwords([], tmp_path / "x.json")
