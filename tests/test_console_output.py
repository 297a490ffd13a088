"""Tests for the Rich display formatters."""

from __future__ import annotations

import pytest

from shared.console import KeysmithConsole

from keysmith.analyzers.distribution import GenerationAuditor
from keysmith.analyzers.extended import analyze_extended
from keysmith.analyzers.strength import analyze
from keysmith.core.models import GenerationOptions
from keysmith.output.console import KeysmithConsoleOutput, mask_password


@pytest.fixture
def console():
    return KeysmithConsole(record=True)


def _text(console: KeysmithConsole) -> str:
    return console.rich.export_text()


class TestMaskPassword:
    @pytest.mark.parametrize(
        "password, masked",
        [("", ""), ("a", "*"), ("ab", "**"), ("abc", "a*c"), ("Secret!", "S*****!")],
    )
    def test_mask(self, password, masked):
        assert mask_password(password) == masked


class TestDisplay:
    def test_passwords_with_markup_characters(self, console):
        KeysmithConsoleOutput(console).display_passwords(["[bold]x[/bold]"])
        assert "[bold]x[/bold]" in _text(console)

    def test_history_truncated(self, console):
        KeysmithConsoleOutput(console).display_history(["z" * 40])
        assert "z" * 30 + "..." in _text(console)

    def test_strength_masked_by_default(self, console):
        KeysmithConsoleOutput(console).display_strength(analyze("Tr0ub4dor&3"), "Tr0ub4dor&3")
        text = _text(console)
        assert "T*********3" in text
        assert "STRONG" in text
        assert "Avoid repeated characters" in text

    def test_strength_unmasked(self, console):
        output = KeysmithConsoleOutput(console, mask_passwords=False)
        output.display_strength(analyze("Tr0ub4dor&3"), "Tr0ub4dor&3")
        assert "Tr0ub4dor&3" in _text(console)

    def test_empty_report(self, console):
        KeysmithConsoleOutput(console).display_strength(analyze(""))
        assert "Enter a password" in _text(console)

    def test_extended(self, console):
        KeysmithConsoleOutput(console).display_extended(analyze_extended("password"))
        text = _text(console)
        assert "This pattern appears in data breaches" in text
        assert "Pattern Checks" in text

    def test_audit(self, console):
        audit = GenerationAuditor().audit(GenerationOptions(length=8), samples=20)
        KeysmithConsoleOutput(console).display_audit(audit, top=5)
        text = _text(console)
        assert "Chi-Squared Test" in text
        assert "Largest Deviations (top 5)" in text
