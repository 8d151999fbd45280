from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import Any

import numpy as np
import pytest

from pysatl_univariate.distributions.computation import AnalyticalComputation
from pysatl_univariate.distributions.strategies import DefaultComputationStrategy
from pysatl_univariate.errors import CharacteristicNotAvailableError
from pysatl_univariate.types import CharacteristicName, Kind
from tests.unit.distributions.test_basic import DistributionTestBase
from tests.utils.mocks import StandaloneEuclideanUnivariateDistribution


class TestComputationStrategy(DistributionTestBase):
    def test_analytical_method_is_returned_as_is(self) -> None:
        distr = self.make_uniform_quantile_distribution()

        method = distr.computation_strategy.query_method(self.QUANTILE, distr)

        assert method is distr.analytical_computations[self.QUANTILE]

    def test_uniform_quantile_only(self) -> None:
        distr = self.make_uniform_quantile_distribution()

        cquantile = distr.query_method(self.CQUANTILE)
        invlogcdf = distr.query_method(self.INVLOGCDF)
        invlogccdf = distr.query_method(self.INVLOGCCDF)

        assert cquantile(0.3) == pytest.approx(0.7, abs=1e-15)
        assert invlogcdf(math.log(0.3)) == pytest.approx(0.3, rel=1e-12)
        assert invlogccdf(math.log(0.3)) == pytest.approx(0.7, rel=1e-12)
        assert distr.median() == pytest.approx(0.5)

    def test_quantile_does_not_give_cdf(self) -> None:
        """Only exact conversions are registered: no numerical inversion."""
        distr = self.make_uniform_quantile_distribution()

        with pytest.raises(CharacteristicNotAvailableError, match="cdf"):
            distr.query_method(self.CDF)
        with pytest.raises(CharacteristicNotAvailableError):
            distr.pdf(0.5)

    def test_logistic_cdf_only(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        x = np.array([-3.0, -0.5, 0.0, 0.5, 3.0])
        expected_cdf = 1.0 / (1.0 + np.exp(-x))

        np.testing.assert_allclose(distr.cdf(x), expected_cdf, rtol=1e-14)
        np.testing.assert_allclose(distr.ccdf(x), 1.0 - expected_cdf, rtol=1e-14)
        np.testing.assert_allclose(distr.logcdf(x), np.log(expected_cdf), rtol=1e-14)
        np.testing.assert_allclose(distr.logccdf(x), np.log1p(-expected_cdf), rtol=1e-12)

    def test_scalar_input_gives_python_scalar(self) -> None:
        distr = self.make_logistic_cdf_distribution()

        value = distr.cdf(0.0)

        assert isinstance(value, float)
        assert value == 0.5

    def test_array_input_keeps_shape(self) -> None:
        distr = self.make_logistic_cdf_distribution()

        value = distr.ccdf(np.zeros((2, 3)))

        assert isinstance(value, np.ndarray)
        assert value.shape == (2, 3)

    def test_integer_input_is_evaluated_as_float(self) -> None:
        distr = self.make_uniform_pdf_distribution()

        np.testing.assert_array_equal(distr.pdf([0, 1, 2]), [1.0, 1.0, 0.0])

    def test_pdf_gives_logpdf(self) -> None:
        distr = self.make_uniform_pdf_distribution()

        assert distr.logpdf(0.5) == 0.0
        assert distr.logpdf(2.0) == -math.inf

    @pytest.mark.parametrize("variance", [0.25, 4.0, 9.0])
    def test_std_from_variance(self, variance: float) -> None:
        distr = self.make_variance_distribution(variance)

        assert distr.std() == pytest.approx(math.sqrt(variance))
        assert distr.var() == variance

    def test_variance_does_not_give_mean(self) -> None:
        distr = self.make_variance_distribution(1.0)

        with pytest.raises(CharacteristicNotAvailableError):
            distr.mean()

    def test_no_analytical_computations(self) -> None:
        distr = StandaloneEuclideanUnivariateDistribution(kind=Kind.CONTINUOUS)

        with pytest.raises(CharacteristicNotAvailableError, match="no analytical"):
            DefaultComputationStrategy().query_method(self.CDF, distr)

    def test_options_reach_analytical_function(self) -> None:
        def kurtosis(_: Any, excess: bool = False, **__: Any) -> float:
            return 0.0 if excess else 3.0

        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, float](target=CharacteristicName.KURT, func=kurtosis),
            ],
        )

        assert distr.kurtosis(excess=False) == 3.0
        assert distr.kurtosis() == 0.0

    def test_shortest_source_is_preferred(self) -> None:
        """With both ``pdf`` and ``cdf`` analytical, ``ccdf`` comes from ``cdf``."""

        def broken_pdf(x: Any, **_: Any) -> Any:
            raise AssertionError("pdf must not be used to derive ccdf")

        def half_cdf(x: Any, **_: Any) -> Any:
            return np.full_like(np.asarray(x, dtype=float), 0.25)

        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.PDF, func=broken_pdf),
                AnalyticalComputation[Any, Any](target=self.CDF, func=half_cdf),
            ],
        )

        assert distr.ccdf(1.0) == 0.75


class TestProbabilityValidation(DistributionTestBase):
    @pytest.mark.parametrize("p", [-0.1, 1.5, [0.2, 1.01]])
    def test_quantile_rejects_invalid_probability(self, p: Any) -> None:
        distr = self.make_uniform_quantile_distribution()

        with pytest.raises(ValueError, match="Probability"):
            distr.quantile(p)
        with pytest.raises(ValueError, match="Probability"):
            distr.cquantile(p)

    def test_inverse_log_functions_reject_positive_input(self) -> None:
        distr = self.make_uniform_quantile_distribution()

        with pytest.raises(ValueError, match="Log-probability"):
            distr.invlogcdf(0.5)
        with pytest.raises(ValueError, match="Log-probability"):
            distr.invlogccdf(0.5)

    def test_boundary_log_probabilities(self) -> None:
        distr = self.make_uniform_quantile_distribution()

        assert distr.invlogcdf(0.0) == 1.0
        assert distr.invlogcdf(-math.inf) == 0.0
        assert distr.invlogccdf(0.0) == 0.0
