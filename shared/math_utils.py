"""
KeyForge Statistical Utilities
===============================

Goodness-of-fit helpers used to audit the uniformity of the generator's
random integer source. Counting and the test statistic are NumPy-backed;
the p-value comes from the regularised upper incomplete gamma function so
SciPy is not required.

References:
    [1] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [2] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
    [3] Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2,
        Section 3.3.1 (the chi-square test).
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]
IntArray = NDArray[np.integer]


def bin_counts(values: Sequence[int] | IntArray, bins: int) -> IntArray:
    """Count occurrences of each integer in ``[0, bins)``.

    Raises:
        ValueError: If any value falls outside ``[0, bins)``.
    """
    arr = np.asarray(values, dtype=np.int64)
    if arr.size and (arr.min() < 0 or arr.max() >= bins):
        raise ValueError(f"Values must lie in [0, {bins})")
    return np.bincount(arr, minlength=bins)


def chi_squared_test(
    observed: FloatArray | IntArray, expected: FloatArray | IntArray
) -> tuple[float, float]:
    """Perform Pearson's chi-squared goodness-of-fit test.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    Args:
        observed: Observed frequency counts (1-D array of length *k*).
        expected: Expected frequency counts (1-D array of length *k*).

    Returns:
        Tuple of ``(chi2_statistic, p_value)``.

    Raises:
        ValueError: If arrays differ in length or expected contains zeros.
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


def uniform_chi_squared(
    values: Sequence[int] | IntArray, bins: int
) -> tuple[float, float]:
    """Chi-squared test of *values* against the uniform law on ``[0, bins)``."""
    observed = bin_counts(values, bins)
    total = int(observed.sum())
    if total == 0:
        raise ValueError("At least one value is required")
    expected = np.full(bins, total / bins, dtype=np.float64)
    return chi_squared_test(observed, expected)


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
