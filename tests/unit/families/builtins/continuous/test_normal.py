"""
Tests for Normal Distribution Family

This module tests the functionality of the normal distribution family,
including parameterizations, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm

from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.families.configuration import configure_families_register
from pysatl_univariate.types import (
    CharacteristicName,
    ContinuousSupportShape1D,
    FamilyName,
    UnivariateContinuous,
)

from .base import BaseDistributionTest


class TestNormalFamily(BaseDistributionTest):
    """Test suite for Normal distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)
        self.normal_dist_example = self.normal_family(mu=2.0, sigma=1.5)

    def test_family_properties(self):
        """Test basic properties of normal family."""
        assert self.normal_family.name == FamilyName.NORMAL

        expected_parametrizations = {"meanStd", "meanPrec", "exponential"}
        assert set(self.normal_family.parametrization_names) == expected_parametrizations
        assert self.normal_family.base_parametrization_name == "meanStd"

    def test_mean_std_parametrization_creation(self):
        """Test creation of distribution with standard parametrization."""
        dist = self.normal_family(mu=2.0, sigma=1.5)

        assert dist.family_name == FamilyName.NORMAL
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters.parameters == {"mu": 2.0, "sigma": 1.5}
        assert dist.parametrization_name == "meanStd"

    def test_mean_prec_parametrization_creation(self):
        """Test creation of distribution with mean-precision parametrization."""
        dist = self.normal_family(mu=2.0, tau=0.25, parametrization_name="meanPrec")

        assert dist.parameters.parameters == {"mu": 2.0, "tau": 0.25}
        assert dist.parametrization_name == "meanPrec"

    def test_exponential_parametrization_creation(self):
        """Test creation of distribution with exponential parametrization."""
        # For N(2, 1.5): a = -1/(2*1.5²) = -0.222..., b = 2/1.5² = 0.888...
        dist = self.normal_family(a=-0.222, b=0.888, parametrization_name="exponential")

        assert dist.parameters.parameters == {"a": -0.222, "b": 0.888}
        assert dist.parametrization_name == "exponential"

    def test_positional_and_default_parameters(self):
        """Test Normal(), Normal(mu) and Normal(mu, sigma)."""
        assert self.normal_family().params == (0.0, 1.0)
        assert self.normal_family(3.0).params == (3.0, 1.0)
        assert self.normal_family(3.0, 2.0).params == (3.0, 2.0)

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="sigma > 0"):
            self.normal_family(mu=0, sigma=-1.0)

        with pytest.raises(ValueError, match="tau > 0"):
            self.normal_family(mu=0, tau=-1.0, parametrization_name="meanPrec")

        with pytest.raises(ValueError, match="a < 0"):
            self.normal_family(a=1.0, b=0.0, parametrization_name="exponential")

    @pytest.mark.parametrize(
        "char_func_getter, expected",
        [
            (lambda distr: distr.query_method(CharacteristicName.MEAN)(None), 2.0),
            (lambda distr: distr.query_method(CharacteristicName.VAR)(None), 2.25),
            (lambda distr: distr.query_method(CharacteristicName.STD)(None), 1.5),
            (lambda distr: distr.query_method(CharacteristicName.SKEW)(None), 0.0),
            (lambda distr: distr.mode(), 2.0),
            (lambda distr: distr.median(), 2.0),
            (lambda distr: distr.location(), 2.0),
            (lambda distr: distr.scale(), 1.5),
        ],
    )
    def test_moments(self, char_func_getter, expected):
        """Test moment calculations using parameterized tests."""
        actual = char_func_getter(self.normal_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_kurtosis_calculation(self):
        """Test kurtosis calculation with excess parameter."""
        kurt_func = self.normal_dist_example.query_method(CharacteristicName.KURT)

        raw_kurt = kurt_func(None)
        assert abs(raw_kurt - 3.0) < self.CALCULATION_PRECISION

        excess_kurt = kurt_func(None, excess=True)
        assert abs(excess_kurt - 0.0) < self.CALCULATION_PRECISION

        assert self.normal_dist_example.kurtosis(excess=False) == 3.0
        assert self.normal_dist_example.kurtosis() == 0.0

    def test_entropy(self):
        """Test differential entropy against scipy."""
        expected = norm(loc=2.0, scale=1.5).entropy()
        assert abs(self.normal_dist_example.entropy() - expected) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize(
        "parametrization_name, params, expected_mu, expected_sigma",
        [
            ("meanStd", {"mu": 2.0, "sigma": 1.5}, 2.0, 1.5),
            ("meanPrec", {"mu": 2.0, "tau": 0.25}, 2.0, math.sqrt(1 / 0.25)),
            ("exponential", {"a": -1 / (2 * 1.5**2), "b": 2 / (1.5**2)}, 2.0, 1.5),
        ],
    )
    def test_parametrization_conversions(
        self, parametrization_name, params, expected_mu, expected_sigma
    ):
        """Test conversions between different parameterizations."""
        base_params = self.normal_family.to_base(
            self.normal_family.get_parametrization(parametrization_name)(**params)
        )

        assert abs(base_params.parameters["mu"] - expected_mu) < self.CALCULATION_PRECISION
        assert abs(base_params.parameters["sigma"] - expected_sigma) < self.CALCULATION_PRECISION

    def test_analytical_computations_availability(self):
        """Test that analytical computations are available for normal distribution."""
        comp = self.normal_family(mu=0.0, sigma=1.0).analytical_computations

        expected_chars = {
            CharacteristicName.PDF,
            CharacteristicName.LOGPDF,
            CharacteristicName.CDF,
            CharacteristicName.CCDF,
            CharacteristicName.LOGCDF,
            CharacteristicName.LOGCCDF,
            CharacteristicName.QUANTILE,
            CharacteristicName.CQUANTILE,
            CharacteristicName.INVLOGCDF,
            CharacteristicName.INVLOGCCDF,
            CharacteristicName.MGF,
            CharacteristicName.CF,
            CharacteristicName.MEAN,
            CharacteristicName.MEDIAN,
            CharacteristicName.MODE,
            CharacteristicName.VAR,
            CharacteristicName.STD,
            CharacteristicName.SKEW,
            CharacteristicName.KURT,
            CharacteristicName.ENTROPY,
            CharacteristicName.LOCATION,
            CharacteristicName.SCALE,
        }
        assert set(comp.keys()) == expected_chars

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.pdf),
            (CharacteristicName.LOGPDF, [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.logpdf),
            (CharacteristicName.CDF, [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.cdf),
            (CharacteristicName.CCDF, [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0], norm.sf),
            (
                CharacteristicName.QUANTILE,
                [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999],
                norm.ppf,
            ),
            (
                CharacteristicName.CQUANTILE,
                [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999],
                norm.isf,
            ),
        ],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Test that characteristics support array inputs."""
        dist = self.normal_dist_example
        char_func = dist.query_method(char_name)

        input_array = np.array(test_data)
        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape

        expected_array = scipy_func(input_array, loc=2.0, scale=1.5)

        self.assert_arrays_almost_equal(result_array, expected_array)

    def test_log_tails_far_from_mean(self):
        """Test that log tails stay finite where the tails underflow."""
        dist = self.normal_family()
        x = np.array([-40.0, 40.0])

        self.assert_arrays_relatively_equal(dist.logcdf(x), norm.logcdf(x))
        self.assert_arrays_relatively_equal(dist.logccdf(x), norm.logsf(x))
        assert np.all(np.isfinite(dist.logcdf(x)))

    def test_tail_and_quantile_identities(self):
        """Test complement, log and inverse identities."""
        self.assert_consistent_tails(self.normal_dist_example, np.linspace(-5.0, 9.0, 15))
        self.assert_consistent_quantiles(self.normal_dist_example)

    def test_extreme_log_quantile(self):
        """Test invlogcdf where exp(lp) underflows."""
        dist = self.normal_family()

        x = dist.invlogcdf(-1000.0)

        assert x < -40.0
        assert dist.logcdf(x) == pytest.approx(-1000.0, rel=1e-9)
        assert dist.invlogccdf(-1000.0) == pytest.approx(-x)

    def test_characteristic_function_array_input(self):
        """Test characteristic function calculation with array input."""
        char_func = self.normal_dist_example.query_method(CharacteristicName.CF)
        t_array = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])

        cf_array = char_func(t_array)
        assert cf_array.shape == t_array.shape

        mu, sigma = 2.0, 1.5
        expected = np.exp(1j * mu * t_array - 0.5 * (sigma**2) * (t_array**2))

        self.assert_arrays_almost_equal(cf_array.real, expected.real)
        self.assert_arrays_almost_equal(cf_array.imag, expected.imag)

    def test_moment_generating_function(self):
        """Test mgf against its closed form."""
        t = np.array([-1.0, 0.0, 0.5])
        expected = np.exp(2.0 * t + 0.5 * 2.25 * t**2)

        self.assert_arrays_relatively_equal(self.normal_dist_example.mgf(t), expected)
        assert self.normal_dist_example.mgf(0.0) == 1.0

    def test_normal_support(self):
        """Test that normal distribution has correct support (entire real line)."""
        dist = self.normal_dist_example

        assert dist.support is not None
        assert isinstance(dist.support, ContinuousSupport)

        assert dist.support.left == float("-inf")
        assert dist.support.right == float("inf")
        assert not dist.support.left_closed
        assert not dist.support.right_closed

        assert dist.support.contains(0) is True
        assert dist.support.contains(float("inf")) is False
        assert dist.support.contains(float("-inf")) is False

        test_points = np.array([-500, 0, 5])
        results = dist.support.contains(test_points)
        assert np.all(results)

        assert dist.support.shape == ContinuousSupportShape1D.REAL_LINE

    def test_sampling(self):
        """Test sample size, determinism and moments."""
        sample = self.normal_dist_example.rand(20_000, rng=12345)

        assert sample.shape == (20_000,)
        np.testing.assert_array_equal(sample, self.normal_dist_example.rand(20_000, rng=12345))
        assert sample.mean() == pytest.approx(2.0, abs=0.05)
        assert sample.std() == pytest.approx(1.5, abs=0.05)


class TestNormalFamilyFitting(BaseDistributionTest):
    """Test maximum likelihood estimation."""

    def setup_method(self):
        """Setup before each test method."""
        self.normal_family = configure_families_register().get(FamilyName.NORMAL)

    def test_fit_mle(self):
        """Test MLE: sample mean and population standard deviation."""
        data = np.array([1.0, 2.0, 4.0, 7.0])

        fitted = self.normal_family.fit_mle(data)

        assert fitted.mean() == pytest.approx(3.5)
        assert fitted.std() == pytest.approx(np.std(data))

    def test_weighted_fit_mle(self):
        """Test that integer weights act as repeated observations."""
        fitted = self.normal_family.fit_mle([1.0, 3.0], weights=[3.0, 1.0])
        expected = self.normal_family.fit_mle([1.0, 1.0, 1.0, 3.0])

        assert fitted.params == pytest.approx(expected.params)

    def test_fit_recovers_parameters(self):
        """Test that fitting a large sample recovers the parameters."""
        sample = self.normal_family(-1.0, 0.5).rand(50_000, rng=7)

        fitted = self.normal_family.fit(sample)

        assert fitted.params == pytest.approx((-1.0, 0.5), abs=0.02)


class TestNormalFamilyEdgeCases(BaseDistributionTest):
    """Test edge cases and error conditions."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)

    def test_invalid_parameterization(self):
        """Test error for invalid parameterization name."""
        with pytest.raises(KeyError):
            self.normal_family.distribution(parametrization_name="invalid_name", mu=0, sigma=1)

    def test_missing_parameters(self):
        """Test error for missing required parameters."""
        with pytest.raises(TypeError):
            self.normal_family.distribution(mu=0, parametrization_name="meanPrec")

    def test_invalid_probability_quantile(self):
        """Test quantile with invalid probability values."""
        dist = self.normal_family(mu=2.0, sigma=1.5)
        quantile = dist.query_method(CharacteristicName.QUANTILE)

        assert quantile(0.0) == float("-inf")
        assert quantile(1.0) == float("inf")

        with pytest.raises(ValueError):
            quantile(-0.1)
        with pytest.raises(ValueError):
            quantile(1.1)
