"""
Numerically Stable Primitives
=============================

Element-wise helpers for log-space and tail computations shared by the
builtin families. All functions accept scalars or arrays and follow NumPy
broadcasting rules.

- :func:`log1pexp` : ``log(1 + exp(x))``;
- :func:`log1mexp` : ``log(1 - exp(x))`` for ``x <= 0``;
- :func:`logexpm1` : ``log(exp(x) - 1)`` for ``x >= 0``;
- :func:`log1psq` : ``log(1 + x**2)``;
- :func:`logistic`, :func:`logit` : re-exported from :mod:`scipy.special`;
- :func:`norm_logpdf` : log-density of the standard normal.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import expit, logit

if TYPE_CHECKING:
    from pysatl_univariate.types import NumericArray

LOG_2 = math.log(2.0)
LOG_PI = math.log(math.pi)
LOG_4PI = math.log(4.0 * math.pi)
LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)

logistic = expit
"""Logistic sigmoid ``1 / (1 + exp(-x))``."""

__all__ = [
    "LOG_2",
    "LOG_PI",
    "LOG_4PI",
    "LOG_SQRT_2PI",
    "log1pexp",
    "log1mexp",
    "logexpm1",
    "log1psq",
    "logistic",
    "logit",
    "norm_logpdf",
    "check_probability",
    "check_log_probability",
]


def log1pexp(x: NumericArray) -> NumericArray:
    """
    Compute ``log(1 + exp(x))`` without overflow for large ``x``.

    Parameters
    ----------
    x : NumericArray
        Input values.

    Returns
    -------
    NumericArray
        ``log(1 + exp(x))`` element-wise.
    """
    return cast("NumericArray", np.logaddexp(0.0, x))


def log1mexp(x: NumericArray) -> NumericArray:
    """
    Compute ``log(1 - exp(x))`` for non-positive ``x``.

    Uses ``log1p(-exp(x))`` when ``exp(x)`` is small and ``log(-expm1(x))``
    when it is close to one, so that neither branch loses precision.

    Parameters
    ----------
    x : NumericArray
        Input values, expected in ``[-inf, 0]``.

    Returns
    -------
    NumericArray
        ``log(1 - exp(x))`` element-wise; ``-inf`` at ``x = 0`` and ``NaN``
        for positive ``x``.
    """
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        return cast(
            "NumericArray",
            np.where(x < -LOG_2, np.log1p(-np.exp(x)), np.log(-np.expm1(x))),
        )


def logexpm1(x: NumericArray) -> NumericArray:
    """
    Compute ``log(exp(x) - 1)`` for non-negative ``x``.

    Parameters
    ----------
    x : NumericArray
        Input values, expected in ``[0, inf]``.

    Returns
    -------
    NumericArray
        ``log(exp(x) - 1)`` element-wise.
    """
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return cast("NumericArray", np.where(np.isposinf(x), x, x + log1mexp(-x)))


def log1psq(x: NumericArray) -> NumericArray:
    """
    Compute ``log(1 + x**2)`` without overflowing ``x**2``.

    Parameters
    ----------
    x : NumericArray
        Input values.

    Returns
    -------
    NumericArray
        ``log(1 + x**2)`` element-wise.
    """
    ax = np.abs(np.asarray(x, dtype=np.float64))
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        small = np.log1p(ax * ax)
        large = 2.0 * np.log(ax) + np.log1p(1.0 / (ax * ax))
    return cast("NumericArray", np.where(ax < 1.0, small, large))


def norm_logpdf(z: NumericArray) -> NumericArray:
    """Log-density of the standard normal distribution at ``z``."""
    z = np.asarray(z, dtype=np.float64)
    return cast("NumericArray", -(0.5 * z * z + LOG_SQRT_2PI))


def check_probability(p: NumericArray) -> NumericArray:
    """
    Validate probabilities and return them as a float array.

    Raises
    ------
    ValueError
        If any probability is outside ``[0, 1]``.
    """
    p = np.asarray(p, dtype=np.float64)
    if np.any((p < 0) | (p > 1)):
        raise ValueError("Probability must be in [0, 1]")
    return cast("NumericArray", p)


def check_log_probability(lp: NumericArray) -> NumericArray:
    """
    Validate log-probabilities and return them as a float array.

    Raises
    ------
    ValueError
        If any log-probability is above ``0``.
    """
    lp = np.asarray(lp, dtype=np.float64)
    if np.any(lp > 0):
        raise ValueError("Log-probability must be in [-inf, 0]")
    return cast("NumericArray", lp)
