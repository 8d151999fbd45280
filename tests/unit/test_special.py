from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_univariate.special import (
    LOG_SQRT_2PI,
    check_log_probability,
    check_probability,
    log1mexp,
    log1pexp,
    log1psq,
    logexpm1,
    logistic,
    logit,
    norm_logpdf,
)


class TestLogSpacePrimitives:
    def test_log1pexp_matches_naive_formula(self) -> None:
        x = np.array([-30.0, -1.0, 0.0, 1.0, 30.0])

        np.testing.assert_allclose(log1pexp(x), np.log1p(np.exp(x)), rtol=1e-14)

    def test_log1pexp_does_not_overflow(self) -> None:
        assert log1pexp(1000.0) == 1000.0
        assert log1pexp(-1000.0) == 0.0

    def test_log1mexp_both_branches(self) -> None:
        x = np.array([-50.0, -2.0, -math.log(2.0), -0.1, -1e-10])

        expected = np.array([math.log1p(-math.exp(v)) for v in x[:2]] + [
            math.log(-math.expm1(v)) for v in x[2:]
        ])
        np.testing.assert_allclose(log1mexp(x), expected, rtol=1e-14)

    def test_log1mexp_edges(self) -> None:
        assert log1mexp(0.0) == -math.inf
        assert log1mexp(-math.inf) == 0.0
        assert math.isnan(log1mexp(1.0))

    def test_logexpm1(self) -> None:
        x = np.array([1e-8, 0.5, 3.0, 40.0])

        np.testing.assert_allclose(logexpm1(x), np.log(np.expm1(x)), rtol=1e-13)
        assert logexpm1(800.0) == pytest.approx(800.0)
        assert logexpm1(math.inf) == math.inf
        assert logexpm1(0.0) == -math.inf

    def test_log1psq(self) -> None:
        x = np.array([-3.0, -0.5, 0.0, 0.5, 3.0])

        np.testing.assert_allclose(log1psq(x), np.log1p(x * x), rtol=1e-14)
        assert log1psq(1e200) == pytest.approx(400.0 * math.log(10.0))

    def test_logistic_and_logit_are_inverse(self) -> None:
        p = np.array([1e-12, 0.25, 0.5, 0.75, 1.0 - 1e-9])

        np.testing.assert_allclose(logistic(logit(p)), p, rtol=1e-9)
        assert logistic(0.0) == 0.5
        assert logit(0.0) == -math.inf

    def test_norm_logpdf(self) -> None:
        assert norm_logpdf(0.0) == -LOG_SQRT_2PI
        assert norm_logpdf(2.0) == pytest.approx(math.log(math.exp(-2.0) / math.sqrt(2 * math.pi)))


class TestProbabilityChecks:
    def test_valid_probabilities_become_float_arrays(self) -> None:
        p = check_probability([0, 1])

        assert p.dtype == np.float64
        np.testing.assert_array_equal(p, [0.0, 1.0])

    @pytest.mark.parametrize("p", [-1e-12, 1.0 + 1e-12, [0.5, 2.0]])
    def test_invalid_probability(self, p: object) -> None:
        with pytest.raises(ValueError, match=r"Probability must be in \[0, 1\]"):
            check_probability(p)  # type: ignore[arg-type]

    def test_nan_probability_passes_through(self) -> None:
        assert math.isnan(check_probability(math.nan))

    def test_valid_log_probabilities(self) -> None:
        lp = check_log_probability([-math.inf, -1.0, 0.0])

        np.testing.assert_array_equal(lp, [-math.inf, -1.0, 0.0])

    def test_invalid_log_probability(self) -> None:
        with pytest.raises(ValueError, match="Log-probability"):
            check_log_probability(1e-9)
