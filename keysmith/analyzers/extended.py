"""
Extended Password Analysis
===========================

Combines the heuristic strength report with pattern detection and the
common / leaked password checks, and turns the detections into tagged
recommendations.

Recommendation order is fixed:
common -> leaked -> keyboard -> dictionary -> personal -> repeated -> low entropy.
"""

from __future__ import annotations

from typing import Optional

from keysmith.analyzers.patterns import PatternDetector
from keysmith.analyzers.strength import StrengthAnalyzer
from keysmith.core.models import (
    ExtendedReport,
    PatternFlags,
    Recommendation,
    RecommendationType,
    StrengthReport,
)

DEFAULT_LOW_ENTROPY_THRESHOLD = 50.0


class ExtendedAnalyzer:
    """Strength analysis plus weak-pattern recommendations.

    Args:
        strength_analyzer: Analyzer producing the base report.
        low_entropy_threshold: Entropy (bits) below which an
            "increase complexity" recommendation is emitted.
    """

    def __init__(
        self,
        strength_analyzer: Optional[StrengthAnalyzer] = None,
        low_entropy_threshold: float = DEFAULT_LOW_ENTROPY_THRESHOLD,
    ) -> None:
        self._strength = strength_analyzer or StrengthAnalyzer()
        self._low_entropy_threshold = low_entropy_threshold

    def analyze(self, password: str) -> ExtendedReport:
        """Analyse *password*; the empty string yields an empty report."""
        if not password:
            return ExtendedReport()

        report = self._strength.analyze(password)
        patterns = PatternDetector.detect(password)
        is_common = PatternDetector.is_common_password(password)
        is_leaked = PatternDetector.matches_leaked_pattern(password)

        return ExtendedReport(
            report=report,
            patterns=patterns,
            is_common=is_common,
            is_leaked=is_leaked,
            recommendations=self._recommendations(report, patterns, is_common, is_leaked),
        )

    def _recommendations(
        self,
        report: StrengthReport,
        patterns: PatternFlags,
        is_common: bool,
        is_leaked: bool,
    ) -> list[Recommendation]:
        checks: list[tuple[bool, RecommendationType, str]] = [
            (is_common, RecommendationType.CRITICAL, "Avoid common passwords"),
            (is_leaked, RecommendationType.CRITICAL, "This pattern appears in data breaches"),
            (patterns.keyboard, RecommendationType.WARNING, "Avoid keyboard patterns"),
            (patterns.dictionary, RecommendationType.WARNING, "Avoid dictionary words"),
            (patterns.personal, RecommendationType.WARNING, "Avoid personal information like dates"),
            (patterns.repeated, RecommendationType.INFO, "Avoid repeated character patterns"),
            (
                report.entropy_bits < self._low_entropy_threshold,
                RecommendationType.INFO,
                "Increase password complexity",
            ),
        ]
        return [Recommendation(type=kind, text=text) for hit, kind, text in checks if hit]


_default_extended = ExtendedAnalyzer()


def analyze_extended(password: str) -> ExtendedReport:
    """Extended analysis with the module-level default analyzer."""
    return _default_extended.analyze(password)
