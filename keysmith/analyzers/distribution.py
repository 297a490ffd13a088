"""
Generator Distribution Audit
=============================

Generates a batch of passwords and compares the observed character
frequencies with the exact expectation under the generator's sampling
model, using Pearson's chi-squared goodness-of-fit test.

Expected occurrences of character ``x`` per password of length ``L``
with ``k`` selected classes:

    E[x] = sum over kept classes c of  mult(x, c) / |c|
         + max(0, L - k) * mult(x, charset) / |charset|

where the kept classes are the first ``min(L, k)`` selected classes and
``charset`` is their non-deduplicated concatenation. The shuffle does
not change counts, so it does not enter the model.

The audit also checks two generator invariants directly: every sample
contains each selected class, and no character outside the filtered
charset ever appears.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable ... Philosophical Magazine, 50(302).
    - NIST SP 800-22 Rev. 1a (2010). A Statistical Test Suite for
      Random and Pseudorandom Number Generators.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

import numpy as np

from shared.math_utils import character_histogram, chi_squared_test, foreign_characters

from keysmith.core.models import CharacterFrequency, GenerationAudit, GenerationOptions
from keysmith.generators.password import PasswordGenerator


class GenerationAuditor:
    """Statistical self-check of :class:`PasswordGenerator` output.

    Usage::

        auditor = GenerationAuditor()
        audit = auditor.audit(GenerationOptions(length=12), samples=2000)
        print(audit.chi_squared, audit.p_value, audit.consistent)

    Args:
        generator: Generator under test.
        significance: p-value below which the batch is reported as
            inconsistent with the sampling model.
    """

    def __init__(
        self,
        generator: Optional[PasswordGenerator] = None,
        significance: float = 0.01,
    ) -> None:
        self._generator = generator or PasswordGenerator()
        self._significance = significance

    def audit(self, options: GenerationOptions, samples: int) -> GenerationAudit:
        """Generate *samples* passwords and evaluate their distribution.

        Raises:
            ValueError: If *samples* is less than 1.
            NoCharacterClassSelected / EmptyFilteredClass: Invalid options.
        """
        if samples < 1:
            raise ValueError(f"samples must be at least 1, got {samples}")

        filtered = self._generator.filtered_classes(options)
        passwords = self._generator.generate_many(options, count=samples)

        alphabet, per_password = self.expected_per_password(filtered, options.length)
        expected = per_password * samples
        observed = character_histogram(passwords, alphabet)

        mask = expected > 0
        chi2, p_value = chi_squared_test(observed[mask], expected[mask])
        dof = max(int(mask.sum()) - 1, 0)

        classes = [set(chars) for chars in filtered.values()]
        covered = sum(
            1 for pw in passwords if all(any(ch in cls for ch in pw) for cls in classes)
        )

        return GenerationAudit(
            options=options,
            samples=samples,
            total_characters=sum(len(pw) for pw in passwords),
            frequencies=[
                CharacterFrequency(char=ch, observed=int(obs), expected=float(exp))
                for ch, obs, exp in zip(alphabet, observed, expected)
            ],
            chi_squared=chi2,
            p_value=p_value,
            degrees_of_freedom=dof,
            significance=self._significance,
            consistent=p_value >= self._significance,
            class_coverage=covered / samples,
            foreign_characters=sorted(foreign_characters(passwords, alphabet)),
        )

    @staticmethod
    def expected_per_password(
        filtered: dict[str, str], length: int
    ) -> tuple[list[str], np.ndarray]:
        """Return the distinct candidate characters and their expected
        occurrences in a single generated password.
        """
        charset = "".join(filtered.values())
        alphabet = list(dict.fromkeys(charset))
        index = {ch: i for i, ch in enumerate(alphabet)}
        expected = np.zeros(len(alphabet), dtype=np.float64)

        kept = list(filtered.values())[:length]
        for chars in kept:
            for ch, mult in Counter(chars).items():
                expected[index[ch]] += mult / len(chars)

        remaining = max(0, length - len(filtered))
        if remaining:
            for ch, mult in Counter(charset).items():
                expected[index[ch]] += remaining * mult / len(charset)

        return alphabet, expected
