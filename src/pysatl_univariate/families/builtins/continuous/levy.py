"""
Lévy distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfc, erfcinv, erfinv

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import half_line
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import LOG_SQRT_2PI, check_probability
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

# 2 * erfcinv(0.5)^2
_HALF_QUANTILE = 0.4549364231195728


def configure_levy_family() -> None:
    """
    Configure and register the Levy distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LEVY):
        return

    LEVY_DOC = """
    Lévy distribution.

    Probability density function:
        f(x) = sqrt(σ / 2π) exp(-σ / (2(x - μ))) / (x - μ)^(3/2) for x > μ

    Levy()           equivalent to Levy(0.0, 1.0)
    Levy(mu)         location mu and unit scale
    Levy(mu, sigma)  location mu and scale sigma

    Mean and variance are infinite; skewness and kurtosis are NaN.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Lévy distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (location)
            - sigma: float (scale)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values; 0 for x <= mu
        """
        parameters = cast(_Standard, parameters)

        sigma = parameters.sigma
        z = x - parameters.mu
        zc = np.where(z > 0, z, 1.0)
        value = math.sqrt(sigma / (2.0 * math.pi)) * np.exp(-sigma / (2.0 * zc)) / zc**1.5
        return cast(NumericArray, np.where(z > 0, value, 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        sigma = parameters.sigma
        z = x - parameters.mu
        zc = np.where(z > 0, z, 1.0)
        value = 0.5 * (math.log(sigma) - sigma / zc - 3.0 * np.log(zc)) - LOG_SQRT_2PI
        return cast(NumericArray, np.where(z > 0, value, -np.inf))

    def _tail_arg(parameters: _Standard, x: NumericArray) -> NumericArray:
        z = x - parameters.mu
        zc = np.where(z > 0, z, 1.0)
        return cast(NumericArray, np.sqrt(parameters.sigma / (2.0 * zc)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = erfc(_tail_arg(parameters, x))
        return cast(NumericArray, np.where(x > parameters.mu, value, 0.0))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = erf(_tail_arg(parameters, x))
        return cast(NumericArray, np.where(x > parameters.mu, value, 1.0))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for Lévy distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            return cast(
                NumericArray, parameters.mu + parameters.sigma / (2.0 * erfcinv(p) ** 2)
            )

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            return cast(
                NumericArray, parameters.mu + parameters.sigma / (2.0 * erfinv(p) ** 2)
            )

    def mgf(_: Parametrization, t: NumericArray) -> NumericArray:
        """The moment generating function exists only at ``t = 0``."""
        return cast(NumericArray, np.where(t == 0, 1.0, np.nan))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        parameters = cast(_Standard, parameters)
        return cast(
            ComplexArray,
            np.exp(1j * parameters.mu * t - np.sqrt(-2j * parameters.sigma * t)),
        )

    def infinite_func(_1: Parametrization, _2: Any) -> float:
        return math.inf

    def undefined_func(_1: Parametrization, _2: Any, **_: Any) -> float:
        return math.nan

    def mode_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu + parameters.sigma / 3.0

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu + parameters.sigma / _HALF_QUANTILE

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return (1.0 + 3.0 * np.euler_gamma + math.log(16.0 * math.pi * parameters.sigma**2)) / 2.0

    def location_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.sigma

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return half_line(parameters.mu)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return parameters.mu + parameters.sigma / rng.standard_normal(n) ** 2

    Levy = ParametricFamily(
        name=FamilyName.LEVY,
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
            CharacteristicName.MEAN: infinite_func,
            CharacteristicName.VAR: infinite_func,
            CharacteristicName.STD: infinite_func,
            CharacteristicName.SKEW: undefined_func,
            CharacteristicName.KURT: undefined_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.LOCATION: location_func,
            CharacteristicName.SCALE: scale_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
    )
    Levy.__doc__ = LEVY_DOC

    @parametrization(family=Levy, name="standard")
    class _Standard(Parametrization):
        """
        Location-scale parametrization of Lévy distribution.

        Parameters
        ----------
        mu : float
            Location (μ), the lower bound of the support
        sigma : float
            Scale (σ)
        """

        mu: float = 0.0
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(Levy)
