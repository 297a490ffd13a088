"""
Password Strength Analyzer
===========================

Deterministic heuristic scoring of arbitrary password strings.

Feature extraction:
- Character class presence (uppercase, lowercase, digits, symbols)
- Repeated characters (any character at more than one position)
- Sequential runs of three characters taken from the alphabet, the
  digits or a keyboard row, forward or reversed

Entropy is the nominal combinatorial estimate ``length * log2(pool)``,
where the pool adds 26 / 26 / 10 / 32 for each class present. It is a
heuristic over nominal alphabet sizes, not the Shannon entropy of the
actual string.

Scoring (clamped to [0, 100]):

    +25 length >= 8      +15 length >= 12     +10 length >= 16
    +10 uppercase        +10 lowercase        +10 digits      +15 symbols
    +10 entropy > 40     +5  entropy > 60
    -10 repeated chars   -15 sequential run   -20 length < 8
"""

from __future__ import annotations

import math
import re

from keysmith.core.models import StrengthBreakdown, StrengthLevel, StrengthReport


_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")

SEQUENCES: tuple[str, ...] = (
    "0123456789",
    "abcdefghijklmnopqrstuvwxyz",
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)

# Nominal pool sizes per class present.
_POOL_LOWER = 26
_POOL_UPPER = 26
_POOL_DIGITS = 10
_POOL_SYMBOLS = 32

# (minimum score, level), highest first
_LEVEL_THRESHOLDS: tuple[tuple[int, StrengthLevel], ...] = (
    (90, StrengthLevel.EXCELLENT),
    (75, StrengthLevel.STRONG),
    (60, StrengthLevel.GOOD),
    (40, StrengthLevel.FAIR),
    (20, StrengthLevel.WEAK),
)


def _sequence_windows() -> frozenset[str]:
    windows: set[str] = set()
    for seq in SEQUENCES:
        for i in range(len(seq) - 2):
            sub = seq[i : i + 3]
            windows.add(sub)
            windows.add(sub[::-1])
    return frozenset(windows)


_SEQUENCE_WINDOWS = _sequence_windows()


class StrengthAnalyzer:
    """Scores passwords with a fixed heuristic model.

    The analyzer is stateless: the same input always produces an equal
    report, and instances may be shared between threads.

    Usage::

        analyzer = StrengthAnalyzer()
        report = analyzer.analyze("Tr0ub4dor&3")
        print(report.score, report.level.label)
    """

    def analyze(self, password: str) -> StrengthReport:
        """Analyse *password*; the empty string yields the empty report."""
        if not password:
            return StrengthReport.empty()

        length = len(password)
        has_upper = bool(_UPPER_RE.search(password))
        has_lower = bool(_LOWER_RE.search(password))
        has_digits = bool(_DIGIT_RE.search(password))
        has_symbols = bool(_SYMBOL_RE.search(password))

        report = StrengthReport(
            length=length,
            has_uppercase=has_upper,
            has_lowercase=has_lower,
            has_numbers=has_digits,
            has_symbols=has_symbols,
            has_repeated_char=self.has_repeated_char(password),
            has_sequential_run=self.has_sequential_run(password),
            entropy_bits=self.entropy_bits(password),
        )

        report.score = self._calculate_score(report)
        report.level = self.level_for(report.score)
        report.suggestions = self._generate_suggestions(report)
        report.breakdown = self._breakdown(report)
        return report

    # ------------------------------------------------------------------ #
    #  Feature extraction
    # ------------------------------------------------------------------ #

    @staticmethod
    def has_repeated_char(password: str) -> bool:
        return len(set(password)) < len(password)

    @staticmethod
    def has_sequential_run(password: str) -> bool:
        """True if a 3-character reference window (or its reverse) occurs."""
        lowered = password.lower()
        return any(lowered[i : i + 3] in _SEQUENCE_WINDOWS for i in range(len(lowered) - 2))

    @staticmethod
    def pool_size(password: str) -> int:
        pool = 0
        if _LOWER_RE.search(password):
            pool += _POOL_LOWER
        if _UPPER_RE.search(password):
            pool += _POOL_UPPER
        if _DIGIT_RE.search(password):
            pool += _POOL_DIGITS
        if _SYMBOL_RE.search(password):
            pool += _POOL_SYMBOLS
        return pool

    @classmethod
    def entropy_bits(cls, password: str) -> float:
        """Nominal entropy ``length * log2(pool)``; 0.0 for empty input."""
        pool = cls.pool_size(password)
        if not password or pool <= 1:
            return 0.0
        return len(password) * math.log2(pool)

    # ------------------------------------------------------------------ #
    #  Scoring
    # ------------------------------------------------------------------ #

    @staticmethod
    def _calculate_score(report: StrengthReport) -> int:
        score = 0

        if report.length >= 8:
            score += 25
        if report.length >= 12:
            score += 15
        if report.length >= 16:
            score += 10

        if report.has_uppercase:
            score += 10
        if report.has_lowercase:
            score += 10
        if report.has_numbers:
            score += 10
        if report.has_symbols:
            score += 15

        if report.entropy_bits > 40:
            score += 10
        if report.entropy_bits > 60:
            score += 5

        if report.has_repeated_char:
            score -= 10
        if report.has_sequential_run:
            score -= 15
        if report.length < 8:
            score -= 20

        return max(0, min(100, score))

    @staticmethod
    def level_for(score: int) -> StrengthLevel:
        for threshold, level in _LEVEL_THRESHOLDS:
            if score >= threshold:
                return level
        return StrengthLevel.VERY_WEAK

    @staticmethod
    def _generate_suggestions(report: StrengthReport) -> list[str]:
        suggestions: list[str] = []

        if report.length < 8:
            suggestions.append("Use at least 8 characters")
        if report.length < 12:
            suggestions.append("Use 12+ characters for better security")
        if not report.has_uppercase:
            suggestions.append("Add uppercase letters")
        if not report.has_lowercase:
            suggestions.append("Add lowercase letters")
        if not report.has_numbers:
            suggestions.append("Add numbers")
        if not report.has_symbols:
            suggestions.append("Add special characters")
        if report.has_repeated_char:
            suggestions.append("Avoid repeated characters")
        if report.has_sequential_run:
            suggestions.append("Avoid sequential characters")

        return suggestions

    @staticmethod
    def _breakdown(report: StrengthReport) -> StrengthBreakdown:
        return StrengthBreakdown(
            length=min(report.length / 16, 1.0),
            variety=report.class_count / 4,
            entropy=min(report.entropy_bits / 80, 1.0),
        )


_default_analyzer = StrengthAnalyzer()


def analyze(password: str) -> StrengthReport:
    """Analyse *password* with the module-level default analyzer."""
    return _default_analyzer.analyze(password)
