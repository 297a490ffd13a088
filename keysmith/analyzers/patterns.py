"""
Weak Pattern Detection
=======================

Pure predicates that flag common weakening patterns:

- Keyboard row fragments (``qwe``, ``sdf``, ``789``)
- Embedded dictionary words
- Date- and year-like fragments that may be personal information
- Repeated substrings (``abcabc``)
- Membership in a short list of common passwords
- Whole-string formats typical of breached passwords (``password123``,
  bare PINs, short all-letter words)

The word lists are small fixed heuristics, not breach corpora.

References:
    - Weir, M., Aggarwal, S., Collins, M., & Stern, H. (2010). Testing
      Metrics for Password Creation Policies by Attacking Large Sets of
      Revealed Passwords. ACM CCS.
"""

from __future__ import annotations

import re

from keysmith.core.models import PatternFlags

KEYBOARD_ROWS: tuple[str, ...] = (
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
    "1234567890",
)

DICTIONARY_WORDS: tuple[str, ...] = (
    "password", "welcome", "hello", "world", "love", "family",
    "friend", "computer", "internet", "security", "login",
)

COMMON_PASSWORDS: tuple[str, ...] = (
    "password", "123456", "password123", "admin", "qwerty",
    "letmein", "welcome", "monkey", "1234567890", "abc123",
)

_PERSONAL_INFO_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{2}/\d{2}/\d{4}", re.ASCII),
    re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII),
    re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII),
    re.compile(r"(19|20)\d{2}", re.ASCII),
    re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)", re.IGNORECASE | re.ASCII),
)

_LEAKED_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"password\d+", re.IGNORECASE | re.ASCII),
    re.compile(r"admin\d*", re.IGNORECASE | re.ASCII),
    re.compile(r"user\d*", re.IGNORECASE | re.ASCII),
    re.compile(r"test\d*", re.IGNORECASE | re.ASCII),
    re.compile(r"\d{4,8}", re.ASCII),
    re.compile(r"[a-zA-Z]{1,8}"),
)


def _keyboard_windows() -> frozenset[str]:
    return frozenset(
        row[i : i + 3] for row in KEYBOARD_ROWS for i in range(len(row) - 2)
    )


_KEYBOARD_WINDOWS = _keyboard_windows()


class PatternDetector:
    """Detects weak patterns in a password string.

    All methods are static and side-effect free.

    Usage::

        flags = PatternDetector.detect("qwerty2024")
        flags.keyboard, flags.personal   # (True, True)
    """

    @staticmethod
    def is_keyboard_pattern(password: str) -> bool:
        lowered = password.lower()
        return any(window in lowered for window in _KEYBOARD_WINDOWS)

    @staticmethod
    def is_dictionary_word(password: str) -> bool:
        lowered = password.lower()
        return any(word in lowered for word in DICTIONARY_WORDS)

    @staticmethod
    def might_be_personal_info(password: str) -> bool:
        """True for date-like, year-like or month-name fragments."""
        return any(p.search(password) for p in _PERSONAL_INFO_PATTERNS)

    @staticmethod
    def has_repeated_substring(password: str) -> bool:
        """True if a block of two or more characters recurs later on.

        Cubic in the password length, which is fine for passwords.
        """
        n = len(password)
        for size in range(2, n // 2 + 1):
            for i in range(n - 2 * size + 1):
                block = password[i : i + size]
                if block in password[i + size :]:
                    return True
        return False

    @staticmethod
    def is_common_password(password: str) -> bool:
        lowered = password.lower()
        return any(common in lowered for common in COMMON_PASSWORDS)

    @staticmethod
    def matches_leaked_pattern(password: str) -> bool:
        """True if the whole password has a typical breached format."""
        return any(p.fullmatch(password) for p in _LEAKED_PATTERNS)

    @classmethod
    def detect(cls, password: str) -> PatternFlags:
        return PatternFlags(
            keyboard=cls.is_keyboard_pattern(password),
            dictionary=cls.is_dictionary_word(password),
            personal=cls.might_be_personal_info(password),
            repeated=cls.has_repeated_substring(password),
        )
