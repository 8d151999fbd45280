"""
Cauchy distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_univariate.distributions.strategies import DefaultSamplingUnivariateStrategy
from pysatl_univariate.distributions.support import real_line
from pysatl_univariate.families.estimation import MOMENTS, as_sample
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import LOG_4PI, LOG_PI, check_probability, log1psq
from pysatl_univariate.types import (
    CharacteristicName,
    ComplexArray,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_univariate.distributions.support import ContinuousSupport


def configure_cauchy_family() -> None:
    """
    Configure and register the Cauchy distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CAUCHY):
        return

    CAUCHY_DOC = """
    Cauchy distribution.

    Probability density function:
        f(x) = 1 / (π σ (1 + ((x - μ) / σ)²))

    Cauchy()           standard Cauchy, i.e. Cauchy(0.0, 1.0)
    Cauchy(mu)         location mu and unit scale
    Cauchy(mu, sigma)  location mu and scale sigma

    The Cauchy distribution has no moments: mean, variance, skewness and
    kurtosis are NaN. ``fit`` matches the sample median and half the
    inter-quartile range; it is not a maximum likelihood estimator.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        z = (x - parameters.mu) / parameters.sigma
        return cast(NumericArray, 1.0 / (math.pi * parameters.sigma * (1.0 + z * z)))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        z = (x - parameters.mu) / parameters.sigma
        return cast(NumericArray, -(log1psq(z) + LOG_PI + np.log(parameters.sigma)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.arctan2(x - parameters.mu, parameters.sigma) / math.pi + 0.5)

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.arctan2(parameters.mu - x, parameters.sigma) / math.pi + 0.5)

    def _cot_pi(p: NumericArray) -> NumericArray:
        # 0.5 - p rounds away small p, so the near tail uses 1 / tan(pi * p)
        with np.errstate(divide="ignore"):
            near = 1.0 / np.tan(math.pi * p)
        return cast(NumericArray, np.where(p < 0.25, near, np.tan(math.pi * (0.5 - p))))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for Cauchy distribution.

        ``p = 0`` and ``p = 1`` map exactly to ``-inf`` and ``inf``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        z = -_cot_pi(p)
        z = np.where(p == 0.0, -np.inf, np.where(p == 1.0, np.inf, z))
        return cast(NumericArray, parameters.mu + parameters.sigma * z)

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        z = _cot_pi(p)
        z = np.where(p == 0.0, np.inf, np.where(p == 1.0, -np.inf, z))
        return cast(NumericArray, parameters.mu + parameters.sigma * z)

    def mgf(_: Parametrization, t: NumericArray) -> NumericArray:
        """The moment generating function exists only at ``t = 0``."""
        return cast(NumericArray, np.where(t == 0, 1.0, np.nan))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        parameters = cast(_Standard, parameters)
        return cast(
            ComplexArray, np.exp(1j * t * parameters.mu - parameters.sigma * np.abs(t))
        )

    def undefined_func(_1: Parametrization, _2: Any, **_: Any) -> float:
        return math.nan

    def location_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.sigma

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return LOG_4PI + math.log(parameters.sigma)

    def _support(_: Parametrization) -> ContinuousSupport:
        return real_line()

    def fit_moments(data: Any, weights: Any = None) -> dict[str, float]:
        """Sample median and half the inter-quartile range."""
        x = as_sample(data)
        lower, median, upper = np.quantile(x, [0.25, 0.5, 0.75])
        return {"mu": float(median), "sigma": float((upper - lower) / 2.0)}

    Cauchy = ParametricFamily(
        name=FamilyName.CAUCHY,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MGF: mgf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: undefined_func,
            CharacteristicName.VAR: undefined_func,
            CharacteristicName.STD: undefined_func,
            CharacteristicName.SKEW: undefined_func,
            CharacteristicName.KURT: undefined_func,
            CharacteristicName.MEDIAN: location_func,
            CharacteristicName.MODE: location_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.LOCATION: location_func,
            CharacteristicName.SCALE: scale_func,
        },
        sampling_strategy=DefaultSamplingUnivariateStrategy(),
        support_by_parametrization=_support,
        estimators={MOMENTS: fit_moments},
    )
    Cauchy.__doc__ = CAUCHY_DOC

    @parametrization(family=Cauchy, name="standard")
    class _Standard(Parametrization):
        """
        Location-scale parametrization of Cauchy distribution.

        Parameters
        ----------
        mu : float
            Location (median) of the distribution
        sigma : float
            Scale (half-width at half-maximum) of the distribution
        """

        mu: float = 0.0
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(Cauchy)
