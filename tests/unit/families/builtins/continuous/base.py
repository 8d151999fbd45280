"""
Common fixtures and utilities for continuous distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    # Probabilities used to check quantile functions
    PROBABILITIES = [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999]

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def assert_arrays_relatively_equal(
        actual: Any, expected: Any, rtol: float = 1e-10, atol: float = 0.0
    ) -> None:
        """Helper method for values spanning several orders of magnitude."""
        np.testing.assert_allclose(actual, expected, rtol=rtol, atol=atol)

    def assert_consistent_tails(self, dist: Any, x: Any) -> None:
        """Check complement and log identities between the tail functions."""
        x = np.asarray(x, dtype=float)
        cdf = dist.cdf(x)
        ccdf = dist.ccdf(x)

        self.assert_arrays_almost_equal(cdf + ccdf, np.ones_like(x))
        with np.errstate(divide="ignore"):
            self.assert_arrays_relatively_equal(np.exp(dist.logcdf(x)), cdf, rtol=1e-9)
            self.assert_arrays_relatively_equal(np.exp(dist.logccdf(x)), ccdf, rtol=1e-9)
            self.assert_arrays_relatively_equal(np.exp(dist.logpdf(x)), dist.pdf(x), rtol=1e-9)

    def assert_consistent_quantiles(
        self, dist: Any, p: Any = None, rtol: float = 1e-8, atol: float = 1e-12
    ) -> None:
        """Check that quantile functions invert the distribution functions."""
        p = np.asarray(self.PROBABILITIES if p is None else p, dtype=float)
        tol = {"rtol": rtol, "atol": atol}

        self.assert_arrays_relatively_equal(dist.cdf(dist.quantile(p)), p, **tol)
        self.assert_arrays_relatively_equal(dist.ccdf(dist.cquantile(p)), p, **tol)
        self.assert_arrays_relatively_equal(dist.invlogcdf(np.log(p)), dist.quantile(p), **tol)
        self.assert_arrays_relatively_equal(
            dist.invlogccdf(np.log(p)), dist.cquantile(p), **tol
        )
