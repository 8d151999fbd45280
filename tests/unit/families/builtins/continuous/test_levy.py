"""
Tests for Levy Distribution Family

This module tests the functionality of the Lévy distribution family,
including heavy-tail statistics and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math

import numpy as np
import pytest
from scipy.stats import levy

from pysatl_univariate.families.configuration import configure_families_register
from pysatl_univariate.types import CharacteristicName, ContinuousSupportShape1D, FamilyName

from .base import BaseDistributionTest


class TestLevyFamily(BaseDistributionTest):
    """Test suite for Lévy distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.levy_family = registry.get(FamilyName.LEVY)
        self.levy_dist_example = self.levy_family(mu=1.0, sigma=2.0)

    def test_family_properties(self):
        """Test basic properties of Lévy family."""
        assert self.levy_family.name == FamilyName.LEVY
        assert self.levy_family.parametrization_names == ["standard"]

    def test_defaults(self):
        """Test Levy() and Levy(mu)."""
        assert self.levy_family().params == (0.0, 1.0)
        assert self.levy_family(-1.0).params == (-1.0, 1.0)

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="sigma > 0"):
            self.levy_family(mu=0.0, sigma=-1.0)

    @pytest.mark.parametrize(
        "char_name, test_data, scipy_func",
        [
            (CharacteristicName.PDF, [0.0, 1.0, 1.2, 2.0, 5.0, 100.0], levy.pdf),
            (CharacteristicName.LOGPDF, [1.2, 2.0, 5.0, 100.0], levy.logpdf),
            (CharacteristicName.CDF, [0.0, 1.0, 1.2, 2.0, 5.0, 100.0], levy.cdf),
            (CharacteristicName.CCDF, [0.0, 1.0, 1.2, 2.0, 5.0, 100.0], levy.sf),
            (
                CharacteristicName.QUANTILE,
                [0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99],
                levy.ppf,
            ),
            (
                CharacteristicName.CQUANTILE,
                [0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999],
                levy.isf,
            ),
        ],
    )
    def test_array_input_for_characteristics(self, char_name, test_data, scipy_func):
        """Test characteristics against scipy on array inputs."""
        char_func = self.levy_dist_example.query_method(char_name)
        input_array = np.array(test_data)

        result_array = char_func(input_array)

        assert result_array.shape == input_array.shape
        self.assert_arrays_relatively_equal(
            result_array, scipy_func(input_array, loc=1.0, scale=2.0), rtol=1e-9, atol=1e-14
        )

    def test_quantile_bounds(self):
        """Test quantiles of probabilities 0 and 1."""
        dist = self.levy_dist_example

        assert dist.quantile(0.0) == 1.0
        assert dist.quantile(1.0) == math.inf
        assert dist.cquantile(0.0) == math.inf
        assert dist.cquantile(1.0) == 1.0

    def test_heavy_tail_statistics(self):
        """Test infinite mean and variance, undefined higher moments."""
        dist = self.levy_dist_example

        assert dist.mean() == math.inf
        assert dist.var() == math.inf
        assert dist.std() == math.inf
        assert math.isnan(dist.skewness())
        assert math.isnan(dist.kurtosis(excess=True))

    def test_other_statistics(self):
        """Test mode, median, entropy and parameter accessors."""
        dist = self.levy_dist_example

        assert dist.mode() == pytest.approx(1.0 + 2.0 / 3.0)
        assert dist.median() == pytest.approx(float(levy.median(loc=1.0, scale=2.0)))
        assert dist.median() == pytest.approx(dist.quantile(0.5))
        assert dist.entropy() == pytest.approx(float(levy.entropy(loc=1.0, scale=2.0)))
        assert dist.location() == 1.0
        assert dist.scale() == 2.0

    def test_transforms(self):
        """Test characteristic and moment generating functions."""
        dist = self.levy_family(0.0, 2.0)

        assert dist.cf(0.0) == 1.0
        assert dist.cf(2.0) == pytest.approx(math.exp(-2.0) * cmath.exp(2j))
        assert abs(dist.cf(-7.5)) <= 1.0
        assert dist.mgf(0.0) == 1.0
        assert math.isnan(dist.mgf(1.0))

    def test_tail_and_quantile_identities(self):
        """Test complement, log and inverse identities."""
        self.assert_consistent_tails(self.levy_dist_example, [0.0, 1.0, 1.5, 3.0, 40.0])
        self.assert_consistent_quantiles(self.levy_dist_example)

    def test_levy_support(self):
        """Test that Lévy distribution is supported right of mu."""
        support = self.levy_dist_example.support

        assert support.shape == ContinuousSupportShape1D.RAY_RIGHT
        assert support.left == 1.0

    def test_sampling(self):
        """Test that samples lie right of mu with the right median."""
        sample = self.levy_dist_example.rand(20_000, rng=31)

        assert np.all(sample > 1.0)
        assert np.median(sample) == pytest.approx(self.levy_dist_example.median(), rel=0.05)

    def test_has_no_estimator(self):
        """Test that fitting is not available."""
        with pytest.raises(NotImplementedError, match="no estimator"):
            self.levy_family.fit([2.0, 3.0])
