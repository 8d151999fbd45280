"""
Generalized Pareto distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import half_line, interval
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import LOG_2, check_probability
from pysatl_univariate.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_univariate.distributions.support import ContinuousSupport

_EPS = float(np.finfo(np.float64).eps)


def configure_generalized_pareto_family() -> None:
    """
    Configure and register the GeneralizedPareto distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GENERALIZED_PARETO):
        return

    GENERALIZED_PARETO_DOC = """
    Generalized Pareto distribution.

    Probability density function, with z = (x - μ) / σ:
        f(x) = (1 + ξ z)^(-1 - 1/ξ) / σ    for ξ ≠ 0
        f(x) = exp(-z) / σ                 for ξ = 0

    The support is [μ, ∞) for ξ ≥ 0 and [μ, μ - σ/ξ] for ξ < 0.

    GeneralizedPareto()                 equivalent to GeneralizedPareto(0.0, 1.0, 1.0)
    GeneralizedPareto(mu, sigma, xi)    location mu, scale sigma and shape xi

    Positional arguments fill (mu, sigma, xi). The shape-first form with zero
    location is the "shapeScale" parametrization:

    GeneralizedPareto(xi=xi, sigma=sigma, parametrization_name="shapeScale")

    Moments that do not exist for the given shape are infinite.
    """

    def _is_exponential(xi: float) -> bool:
        return abs(xi) < _EPS

    def _upper(parameters: _Standard) -> float:
        if parameters.xi < 0:
            return parameters.mu - parameters.sigma / parameters.xi
        return math.inf

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function for generalized Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (location)
            - sigma: float (scale)
            - xi: float (shape)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` outside of the support
        """
        parameters = cast(_Standard, parameters)

        mu, sigma, xi = parameters.mu, parameters.sigma, parameters.xi
        z = (x - mu) / sigma
        inside = (x >= mu) & (x < _upper(parameters))
        with np.errstate(divide="ignore", invalid="ignore"):
            if _is_exponential(xi):
                value = -z - math.log(sigma)
            else:
                value = (-1.0 - 1.0 / xi) * np.log1p(xi * z) - math.log(sigma)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log survival function: ``0`` below μ and ``-inf`` beyond the upper bound."""
        parameters = cast(_Standard, parameters)

        mu, sigma, xi = parameters.mu, parameters.sigma, parameters.xi
        z = np.maximum((x - mu) / sigma, 0.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            if _is_exponential(xi):
                value = -z
            else:
                value = (-1.0 / xi) * np.log1p(xi * z)
        return cast(NumericArray, np.where(x < _upper(parameters), value, -np.inf))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logccdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, -np.expm1(logccdf(parameters, x)))

    def _from_log_tail(parameters: _Standard, log_tail: NumericArray) -> NumericArray:
        # inverse of the standardized log survival function
        mu, sigma, xi = parameters.mu, parameters.sigma, parameters.xi
        with np.errstate(over="ignore", invalid="ignore"):
            if _is_exponential(xi):
                z = -log_tail
            else:
                z = np.expm1(-xi * log_tail) / xi
        return cast(NumericArray, mu + sigma * z)

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for generalized Pareto distribution.

        ``p = 0`` maps to μ and ``p = 1`` to the upper bound of the support.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            x = _from_log_tail(parameters, np.log1p(-p))
        return cast(NumericArray, np.where(p == 1.0, _upper(parameters), x))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            x = _from_log_tail(parameters, np.log(p))
        return cast(NumericArray, np.where(p == 0.0, _upper(parameters), x))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        if parameters.xi >= 1.0:
            return math.inf
        return parameters.mu + parameters.sigma / (1.0 - parameters.xi)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        xi = parameters.xi
        if xi >= 0.5:
            return math.inf
        return parameters.sigma**2 / ((1.0 - xi) ** 2 * (1.0 - 2.0 * xi))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        xi = parameters.xi
        if xi >= 1.0 / 3.0:
            return math.inf
        return 2.0 * (1.0 + xi) * math.sqrt(1.0 - 2.0 * xi) / (1.0 - 3.0 * xi)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of generalized Pareto distribution, infinite for ``xi >= 1/4``."""
        parameters = cast(_Standard, parameters)
        xi = parameters.xi
        if xi >= 0.25:
            return math.inf
        k1 = (1.0 - 2.0 * xi) * (2.0 * xi**2 + xi + 3.0)
        k2 = (1.0 - 3.0 * xi) * (1.0 - 4.0 * xi)
        raw = 3.0 * k1 / k2
        return raw - 3.0 if excess else raw

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        xi = parameters.xi
        if _is_exponential(xi):
            return parameters.mu + parameters.sigma * LOG_2
        return parameters.mu + parameters.sigma * math.expm1(xi * LOG_2) / xi

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """μ for ``xi >= -1``; for steeper negative shapes the density peaks at the upper bound."""
        parameters = cast(_Standard, parameters)
        return parameters.mu if parameters.xi >= -1.0 else _upper(parameters)

    def location_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.sigma

    def shape_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.xi

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        if parameters.xi < 0:
            return interval(parameters.mu, _upper(parameters))
        return half_line(parameters.mu)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        # uniform on (0, 1]
        u = 1.0 - rng.random(n)
        return _from_log_tail(parameters, np.log(u))

    GeneralizedPareto = ParametricFamily(
        name=FamilyName.GENERALIZED_PARETO,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "shapeScale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.LOGCCDF: logccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.LOCATION: location_func,
            CharacteristicName.SCALE: scale_func,
            CharacteristicName.SHAPE: shape_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
    )
    GeneralizedPareto.__doc__ = GENERALIZED_PARETO_DOC

    @parametrization(family=GeneralizedPareto, name="standard")
    class _Standard(Parametrization):
        """
        Location-scale-shape parametrization of generalized Pareto distribution.

        Parameters
        ----------
        mu : float
            Location (μ), the lower bound of the support
        sigma : float
            Scale (σ)
        xi : float
            Shape (ξ)
        """

        mu: float = 0.0
        sigma: float = 1.0
        xi: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

        @constraint(description="mu and xi are finite")
        def check_finite(self) -> bool:
            return math.isfinite(self.mu) and math.isfinite(self.xi)

    @parametrization(family=GeneralizedPareto, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization with the location fixed at zero.

        Parameters
        ----------
        xi : float
            Shape (ξ)
        sigma : float
            Scale (σ)
        """

        xi: float
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

        @constraint(description="xi is finite")
        def check_xi_finite(self) -> bool:
            return math.isfinite(self.xi)

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Standard(mu=0.0, sigma=self.sigma, xi=self.xi)

    ParametricFamilyRegister.register(GeneralizedPareto)
