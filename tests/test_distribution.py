"""Tests for GenerationAuditor and the chi-squared helpers."""

from __future__ import annotations

import numpy as np
import pytest

from keysmith.analyzers.distribution import GenerationAuditor
from keysmith.core.errors import NoCharacterClassSelected
from keysmith.core.models import GenerationOptions
from keysmith.generators.password import PasswordGenerator
from shared.math_utils import character_histogram, chi_squared_test, foreign_characters


class TestExpectedCounts:
    def test_single_class(self):
        alphabet, expected = GenerationAuditor.expected_per_password(
            {"numbers": "0123456789"}, length=4
        )
        assert alphabet == list("0123456789")
        assert np.allclose(expected, 0.4)

    @pytest.mark.parametrize("length", [1, 2, 4, 9, 32])
    def test_expected_sums_to_length(self, length):
        filtered = PasswordGenerator().filtered_classes(GenerationOptions())
        _, expected = GenerationAuditor.expected_per_password(filtered, length)
        assert np.isclose(expected.sum(), length)

    def test_shared_characters_weighted_by_multiplicity(self):
        filtered = {"uppercase": "AB", "lowercase": "A"}
        alphabet, expected = GenerationAuditor.expected_per_password(filtered, length=3)
        # guaranteed: A 1/2 + 1 ; remainder 1 draw from "ABA": A 2/3, B 1/3
        assert alphabet == ["A", "B"]
        assert np.allclose(expected, [0.5 + 1 + 2 / 3, 0.5 + 1 / 3])


class TestAudit:
    def test_secure_generator(self):
        audit = GenerationAuditor().audit(GenerationOptions(length=12), samples=300)
        assert audit.samples == 300
        assert audit.total_characters == 3600
        assert audit.class_coverage == 1.0
        assert audit.foreign_characters == []
        assert audit.degrees_of_freedom == len(audit.frequencies) - 1
        assert 0.0 <= audit.p_value <= 1.0
        assert sum(f.observed for f in audit.frequencies) == 3600

    def test_biased_generator_is_flagged(self, zero_source):
        auditor = GenerationAuditor(PasswordGenerator(zero_source))
        audit = auditor.audit(GenerationOptions(length=16), samples=200)
        assert not audit.consistent
        assert audit.p_value < 0.01

    def test_filtered_alphabet(self):
        options = GenerationOptions(length=8, exclude_similar=True)
        audit = GenerationAuditor().audit(options, samples=50)
        chars = {f.char for f in audit.frequencies}
        assert not chars & set("0Oo1lI")

    def test_zero_samples_rejected(self):
        with pytest.raises(ValueError, match="at least 1"):
            GenerationAuditor().audit(GenerationOptions(), samples=0)

    def test_invalid_options_propagate(self):
        options = GenerationOptions(
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
            include_symbols=False,
        )
        with pytest.raises(NoCharacterClassSelected):
            GenerationAuditor().audit(options, samples=10)


class TestMathUtils:
    def test_histogram(self):
        hist = character_histogram(["aab", "bc", "zz"], ["a", "b", "c"])
        assert hist.tolist() == [2.0, 2.0, 1.0]

    def test_foreign_characters(self):
        assert foreign_characters(["abz", "y"], "abc") == {"z", "y"}

    def test_perfect_fit(self):
        chi2, p = chi_squared_test(np.array([10.0, 10.0]), np.array([10.0, 10.0]))
        assert chi2 == 0.0
        assert p == pytest.approx(1.0)

    def test_known_value(self):
        # scipy.stats.chi2.sf(0.8, 1) ~= 0.3711
        chi2, p = chi_squared_test(np.array([12.0, 8.0]), np.array([10.0, 10.0]))
        assert chi2 == pytest.approx(0.8)
        assert p == pytest.approx(0.3711, abs=1e-3)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            chi_squared_test(np.array([1.0]), np.array([1.0, 2.0]))
