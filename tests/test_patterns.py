"""Tests for PatternDetector."""

from __future__ import annotations

import pytest

from keysmith.analyzers.patterns import PatternDetector


class TestKeyboard:
    @pytest.mark.parametrize("pw", ["qwerty", "xxASDxx", "zxc", "7890", "my-jkl"])
    def test_detected(self, pw):
        assert PatternDetector.is_keyboard_pattern(pw)

    @pytest.mark.parametrize("pw", ["Kx9!mP2@", "qw", "ewq"])
    def test_not_detected(self, pw):
        assert not PatternDetector.is_keyboard_pattern(pw)


class TestDictionary:
    def test_embedded_word_case_insensitive(self):
        assert PatternDetector.is_dictionary_word("MyWelcome!9")

    def test_no_word(self):
        assert not PatternDetector.is_dictionary_word("Xk9#mQ2$")


class TestPersonalInfo:
    @pytest.mark.parametrize(
        "pw",
        ["born12/05/1990x", "2001-09-11", "11-09-2001", "tom1987", "Mar!ana", "jan"],
    )
    def test_detected(self, pw):
        assert PatternDetector.might_be_personal_info(pw)

    def test_month_needs_word_boundary(self):
        # "xmar" has no boundary before the month fragment
        assert not PatternDetector.might_be_personal_info("xmarz")

    def test_plain_digits(self):
        assert not PatternDetector.might_be_personal_info("Kx9!mP2@")

    def test_non_ascii_digits_are_not_a_date(self):
        assert not PatternDetector.might_be_personal_info("١٩٩٠")


class TestRepeatedSubstring:
    @pytest.mark.parametrize("pw", ["abcabc", "xyxy", "12ab12"])
    def test_detected(self, pw):
        assert PatternDetector.has_repeated_substring(pw)

    @pytest.mark.parametrize("pw", ["aaa", "abcdef", "a", ""])
    def test_not_detected(self, pw):
        assert not PatternDetector.has_repeated_substring(pw)

    def test_overlapping_occurrences_do_not_count(self):
        # "aa" overlaps itself in "aaa"
        assert not PatternDetector.has_repeated_substring("aaa")
        assert PatternDetector.has_repeated_substring("aaaa")


class TestCommonAndLeaked:
    def test_common_substring_match(self):
        assert PatternDetector.is_common_password("MyPassword123!")
        assert PatternDetector.is_common_password("QWERTY")

    def test_not_common(self):
        assert not PatternDetector.is_common_password("Xk9#mQ2$vL7@")

    @pytest.mark.parametrize(
        "pw", ["password123", "Admin", "admin42", "user", "test99", "123456", "hello"]
    )
    def test_leaked_formats(self, pw):
        assert PatternDetector.matches_leaked_pattern(pw)

    @pytest.mark.parametrize("pw", ["Password123!", "123", "abcdefghi", "admin-1"])
    def test_leaked_requires_whole_match(self, pw):
        assert not PatternDetector.matches_leaked_pattern(pw)

    @pytest.mark.parametrize("pw", ["١٢٣٤", "password١٢"])
    def test_leaked_digits_are_ascii_only(self, pw):
        assert not PatternDetector.matches_leaked_pattern(pw)


class TestDetect:
    def test_flags(self):
        flags = PatternDetector.detect("qwerty2024")
        assert flags.keyboard and flags.personal
        assert not flags.dictionary

    def test_clean_password(self):
        flags = PatternDetector.detect("Xk9#mQ2$vL7@pR4!")
        assert not any(flags.model_dump().values())
