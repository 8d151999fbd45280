"""
Tests for LogNormal Distribution Family

This module tests the functionality of the log-normal distribution family,
including moments of log(X) and maximum likelihood estimation.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import lognorm, norm

from pysatl_univariate.errors import EmptySampleError
from pysatl_univariate.families.configuration import configure_families_register
from pysatl_univariate.types import CharacteristicName, ContinuousSupportShape1D, FamilyName

from .base import BaseDistributionTest

_SCALE = math.exp(0.5)


class TestLogNormalFamily(BaseDistributionTest):
    """Test suite for log-normal distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.lognormal_family = registry.get(FamilyName.LOGNORMAL)
        self.lognormal_dist_example = self.lognormal_family(mu=0.5, sigma=0.75)

    def test_family_properties(self):
        """Test basic properties of log-normal family."""
        assert self.lognormal_family.name == "LogNormal"
        assert self.lognormal_family.parametrization_names == ["standard"]

    def test_defaults(self):
        """Test LogNormal() and LogNormal(mu)."""
        assert self.lognormal_family().params == (0.0, 1.0)
        assert self.lognormal_family(1.5).params == (1.5, 1.0)

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="sigma > 0"):
            self.lognormal_family(mu=0.0, sigma=0.0)

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [-1.0, 0.0, 0.1, 1.0, 1.6, 5.0, 40.0], lognorm.pdf),
            (CharacteristicName.LOGPDF, [0.1, 1.0, 1.6, 5.0, 40.0], lognorm.logpdf),
            (CharacteristicName.CDF, [-1.0, 0.0, 0.1, 1.0, 1.6, 5.0, 40.0], lognorm.cdf),
            (CharacteristicName.CCDF, [-1.0, 0.0, 0.1, 1.0, 1.6, 5.0, 40.0], lognorm.sf),
            (CharacteristicName.LOGCDF, [0.1, 1.0, 1.6, 5.0, 40.0], lognorm.logcdf),
            (CharacteristicName.LOGCCDF, [0.1, 1.0, 1.6, 5.0, 40.0], lognorm.logsf),
            (
                CharacteristicName.QUANTILE,
                [0.0, 0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999],
                lognorm.ppf,
            ),
            (
                CharacteristicName.CQUANTILE,
                [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999, 1.0],
                lognorm.isf,
            ),
        ],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Test characteristics against scipy on array inputs."""
        char_func = self.lognormal_dist_example.query_method(char_name)
        input_array = np.array(test_data)

        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape
        self.assert_arrays_relatively_equal(
            result_array, scipy_func(input_array, 0.75, scale=_SCALE), rtol=1e-9, atol=1e-14
        )

    def test_outside_support(self):
        """Test the distribution functions at non-positive points."""
        dist = self.lognormal_dist_example

        assert dist.pdf(0.0) == 0.0
        assert dist.logpdf(-1.0) == -math.inf
        assert dist.cdf(0.0) == 0.0
        assert dist.ccdf(-3.0) == 1.0
        assert dist.logcdf(0.0) == -math.inf
        assert dist.logccdf(0.0) == 0.0

    def test_statistics(self):
        """Test moments and other statistics against scipy."""
        dist = self.lognormal_dist_example
        mean, var, skew, ex_kurt = lognorm.stats(0.75, scale=_SCALE, moments="mvsk")

        assert dist.mean() == pytest.approx(float(mean))
        assert dist.var() == pytest.approx(float(var))
        assert dist.std() == pytest.approx(math.sqrt(float(var)))
        assert dist.skewness() == pytest.approx(float(skew))
        assert dist.kurtosis() == pytest.approx(float(ex_kurt))
        assert dist.kurtosis(excess=False) == pytest.approx(float(ex_kurt) + 3.0)
        assert dist.median() == pytest.approx(_SCALE)
        assert dist.mode() == pytest.approx(math.exp(0.5 - 0.75**2))
        assert dist.entropy() == pytest.approx(float(lognorm.entropy(0.75, scale=_SCALE)))

    def test_log_moments(self):
        """Test moments of log(X)."""
        dist = self.lognormal_dist_example

        assert dist.calculate_characteristic(CharacteristicName.MEANLOGX, None) == 0.5
        assert dist.calculate_characteristic(CharacteristicName.VARLOGX, None) == 0.5625
        assert dist.calculate_characteristic(CharacteristicName.STDLOGX, None) == 0.75

    def test_far_tails(self):
        """Test log tails and their inverses where probabilities underflow."""
        dist = self.lognormal_family(0.0, 1.0)
        x = math.exp(-40.0)

        assert dist.cdf(x) == pytest.approx(0.0, abs=1e-300)
        assert dist.logcdf(x) == pytest.approx(float(norm.logcdf(-40.0)), rel=1e-9)
        assert dist.invlogcdf(dist.logcdf(x)) == pytest.approx(x, rel=1e-8)
        assert dist.invlogccdf(dist.logccdf(1.0 / x)) == pytest.approx(1.0 / x, rel=1e-8)

    def test_tail_and_quantile_identities(self):
        """Test complement, log and inverse identities."""
        self.assert_consistent_tails(self.lognormal_dist_example, [-1.0, 0.0, 0.5, 1.6, 20.0])
        self.assert_consistent_quantiles(self.lognormal_dist_example)

    def test_lognormal_support(self):
        """Test that log-normal distribution has support [0, inf)."""
        support = self.lognormal_dist_example.support

        assert support.shape == ContinuousSupportShape1D.RAY_RIGHT
        assert support.left == 0.0

    def test_sampling(self):
        """Test that logarithms of the samples are normal with the right moments."""
        sample = self.lognormal_dist_example.rand(20_000, rng=41)

        assert np.all(sample > 0.0)
        assert np.log(sample).mean() == pytest.approx(0.5, abs=0.03)
        assert np.log(sample).std() == pytest.approx(0.75, rel=0.03)


class TestLogNormalFamilyFitting(BaseDistributionTest):
    """Test maximum likelihood estimation."""

    def setup_method(self):
        """Setup before each test method."""
        self.lognormal_family = configure_families_register().get(FamilyName.LOGNORMAL)

    def test_fit_mle(self):
        """Test that the MLE is the mean and population std of log(x)."""
        fitted = self.lognormal_family.fit_mle(np.exp([0.0, 1.0, 2.0]))

        assert fitted.params == pytest.approx((1.0, math.sqrt(2.0 / 3.0)))

    def test_weighted_fit_mle(self):
        """Test MLE with sample weights."""
        fitted = self.lognormal_family.fit_mle(np.exp([0.0, 2.0]), weights=[3.0, 1.0])

        assert fitted.params == pytest.approx((0.5, math.sqrt(0.75)))

    def test_fit_prefers_mle(self):
        """Test that fit uses the maximum likelihood estimator."""
        data = np.exp([0.0, 1.0, 2.0])

        assert self.lognormal_family.fit(data) == self.lognormal_family.fit_mle(data)

    def test_fit_non_positive_sample(self):
        """Test that a non-positive observation cannot be fitted."""
        with pytest.raises(ValueError, match="sigma > 0"):
            self.lognormal_family.fit_mle([1.0, -1.0])

    def test_fit_empty_sample(self):
        """Test that an empty sample cannot be fitted."""
        with pytest.raises(EmptySampleError):
            self.lognormal_family.fit_mle([])
