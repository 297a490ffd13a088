"""
Keysmith Mathematical Utilities
================================

NumPy-backed statistics used by the generator audit: character
histograms over a batch of strings and Pearson's chi-squared
goodness-of-fit test.

References:
    [1] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [2] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]


def character_histogram(texts: Iterable[str], alphabet: Sequence[str]) -> FloatArray:
    """Count occurrences of each *alphabet* character across *texts*.

    Characters outside *alphabet* are ignored; use
    :func:`foreign_characters` to find them.

    Args:
        texts:    Strings to scan.
        alphabet: Ordered distinct characters; defines the bin order.

    Returns:
        1-D float64 array of length ``len(alphabet)`` with raw counts.
    """
    index = {ch: i for i, ch in enumerate(alphabet)}
    hist = np.zeros(len(alphabet), dtype=np.float64)
    for text in texts:
        positions = [index[ch] for ch in text if ch in index]
        if positions:
            hist += np.bincount(positions, minlength=len(alphabet))
    return hist


def foreign_characters(texts: Iterable[str], alphabet: Sequence[str]) -> set[str]:
    """Return the characters of *texts* that are not in *alphabet*."""
    allowed = set(alphabet)
    found: set[str] = set()
    for text in texts:
        found.update(ch for ch in text if ch not in allowed)
    return found


def chi_squared_test(
    observed: FloatArray, expected: FloatArray
) -> tuple[float, float]:
    """Perform Pearson's chi-squared goodness-of-fit test.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    The p-value is the regularised upper incomplete gamma function
    ``Q(dof/2, chi2/2)``, matching ``scipy.stats.chi2.sf``.

    Args:
        observed: Observed counts (1-D array of length *k*).
        expected: Expected counts (1-D array of length *k*).

    Returns:
        Tuple of ``(chi2_statistic, p_value)``.

    Raises:
        ValueError: If the shapes differ or expected contains non-positive values.
    """
    observed = np.asarray(observed, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)

    if observed.shape != expected.shape:
        raise ValueError("Array shapes must match")
    if np.any(expected <= 0):
        raise ValueError("Expected values must be > 0")

    chi2 = float(np.sum((observed - expected) ** 2 / expected))
    dof = len(observed) - 1

    if dof <= 0:
        return chi2, 1.0

    return chi2, _upper_inc_gamma_reg(dof / 2.0, chi2 / 2.0)


# --------------- Incomplete gamma helpers (Numerical Recipes, Ch. 6) ------


def _upper_inc_gamma_reg(a: float, x: float) -> float:
    """Regularised upper incomplete gamma Q(a, x) = 1 - P(a, x)."""
    if x <= 0.0 or a <= 0.0:
        return 1.0
    if x < a + 1.0:
        return 1.0 - _gamma_p_series(a, x)
    return _gamma_q_cf(a, x)


def _gamma_p_series(a: float, x: float) -> float:
    """Lower regularised incomplete gamma P(a, x) by series expansion."""
    ap = a
    delta = 1.0 / a
    total = delta
    for _ in range(300):
        ap += 1.0
        delta *= x / ap
        total += delta
        if abs(delta) < abs(total) * 1e-15:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _gamma_q_cf(a: float, x: float) -> float:
    """Upper regularised incomplete gamma Q(a, x) by Lentz continued fraction."""
    tiny = 1e-30
    b = x + 1.0 - a
    c = 1.0 / tiny
    d = 1.0 / b
    f = d
    for i in range(1, 300):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < tiny:
            d = tiny
        c = b + an / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        delta = d * c
        f *= delta
        if abs(delta - 1.0) < 1e-15:
            break
    return f * math.exp(-x + a * math.log(x) - math.lgamma(a))
