"""
Character Classes
==================

Fixed candidate alphabets for password generation and the two filter
sets applied by the ``exclude_similar`` / ``exclude_ambiguous`` options.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

UPPERCASE: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE: str = "abcdefghijklmnopqrstuvwxyz"
NUMBERS: str = "0123456789"
SYMBOLS: str = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Glyphs that are easily confused with each other when read aloud or printed.
SIMILAR: str = "0Oo1lI"
# Characters that break quoting in shells, config files and URLs.
AMBIGUOUS: str = "{}[]()/\\\"'`~,;.<>"

DEFAULT_CLASSES: Mapping[str, str] = MappingProxyType(
    {
        "uppercase": UPPERCASE,
        "lowercase": LOWERCASE,
        "numbers": NUMBERS,
        "symbols": SYMBOLS,
    }
)


def remove_chars(charset: str, chars_to_remove: str) -> str:
    """Return *charset* without any character of *chars_to_remove*."""
    return "".join(ch for ch in charset if ch not in chars_to_remove)
