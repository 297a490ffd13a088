"""Tests for ExtendedAnalyzer."""

from __future__ import annotations

from keysmith.analyzers.extended import ExtendedAnalyzer, analyze_extended
from keysmith.core.models import RecommendationType


def _texts(report):
    return [r.text for r in report.recommendations]


class TestRecommendations:
    def test_password_example(self):
        report = analyze_extended("password")
        assert report.is_common and report.is_leaked
        assert report.patterns.dictionary
        assert _texts(report) == [
            "Avoid common passwords",
            "This pattern appears in data breaches",
            "Avoid dictionary words",
            "Increase password complexity",
        ]
        assert report.critical_count == 2

    def test_full_order(self):
        report = analyze_extended("qwerty1990qwerty")
        assert _texts(report) == [
            "Avoid common passwords",
            "Avoid keyboard patterns",
            "Avoid personal information like dates",
            "Avoid repeated character patterns",
        ]
        assert [r.type for r in report.recommendations] == [
            RecommendationType.CRITICAL,
            RecommendationType.WARNING,
            RecommendationType.WARNING,
            RecommendationType.INFO,
        ]

    def test_strong_password_has_no_recommendations(self):
        report = analyze_extended("Xk9#mQ2$vL7@pR4!")
        assert report.recommendations == []
        assert report.critical_count == 0
        assert report.report.score == 100

    def test_low_entropy_threshold_is_configurable(self):
        pw = "Xk9#mQ2$"  # 8 * log2(94) ~= 52.4 bits
        assert "Increase password complexity" not in _texts(analyze_extended(pw))
        strict = ExtendedAnalyzer(low_entropy_threshold=60.0)
        assert _texts(strict.analyze(pw)) == ["Increase password complexity"]

    def test_embeds_strength_report(self):
        report = analyze_extended("Tr0ub4dor&3")
        assert report.report.score == 75


class TestEmptyInput:
    def test_empty_report(self):
        report = analyze_extended("")
        assert report.recommendations == []
        assert not report.is_common and not report.is_leaked
        assert not any(report.patterns.model_dump().values())
        assert report.report.is_empty
