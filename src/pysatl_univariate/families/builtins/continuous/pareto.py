"""
Pareto distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import half_line
from pysatl_univariate.families.estimation import MLE, as_sample
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import check_probability, log1mexp
from pysatl_univariate.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_univariate.distributions.support import ContinuousSupport


def configure_pareto_family() -> None:
    """
    Configure and register the Pareto distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PARETO):
        return

    PARETO_DOC = """
    Pareto distribution.

    Probability density function:
        f(x) = α θ^α / x^(α + 1) for x ≥ θ

    Pareto()             equivalent to Pareto(1.0, 1.0)
    Pareto(alpha)        shape alpha and unit scale
    Pareto(alpha, theta) shape alpha and scale theta

    Mean and variance are infinite for alpha <= 1 and alpha <= 2;
    skewness and kurtosis are NaN for alpha <= 3 and alpha <= 4.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape)
            - theta: float (scale, the lower bound of the support)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values; 0 for x < theta
        """
        parameters = cast(_Standard, parameters)

        alpha, theta = parameters.alpha, parameters.theta
        inside = x >= theta
        xc = np.where(inside, x, theta)
        return cast(NumericArray, np.where(inside, alpha * (theta / xc) ** alpha / xc, 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        alpha, theta = parameters.alpha, parameters.theta
        inside = x >= theta
        xc = np.where(inside, x, theta)
        value = math.log(alpha) + alpha * math.log(theta) - (alpha + 1.0) * np.log(xc)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        alpha, theta = parameters.alpha, parameters.theta
        inside = x >= theta
        xc = np.where(inside, x, theta)
        return cast(NumericArray, np.where(inside, alpha * np.log(theta / xc), 0.0))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log of the CDF as ``log(1 - (theta / x) ** alpha)``, exact far in the right tail."""
        return cast(NumericArray, log1mexp(logccdf(parameters, x)))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logccdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, -np.expm1(logccdf(parameters, x)))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for Pareto distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            return cast(NumericArray, parameters.theta / (1.0 - p) ** (1.0 / parameters.alpha))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        with np.errstate(divide="ignore"):
            return cast(NumericArray, parameters.theta / p ** (1.0 / parameters.alpha))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, theta = parameters.alpha, parameters.theta
        return alpha * theta / (alpha - 1.0) if alpha > 1.0 else math.inf

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, theta = parameters.alpha, parameters.theta
        if alpha <= 2.0:
            return math.inf
        return theta**2 * alpha / ((alpha - 1.0) ** 2 * (alpha - 2.0))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha = parameters.alpha
        if alpha <= 3.0:
            return math.nan
        return (2.0 * (1.0 + alpha) / (alpha - 3.0)) * math.sqrt((alpha - 2.0) / alpha)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Pareto distribution, NaN for ``alpha <= 4``."""
        parameters = cast(_Standard, parameters)
        alpha = parameters.alpha
        if alpha <= 4.0:
            return math.nan
        num = alpha**3 + alpha**2 - 6.0 * alpha - 2.0
        ex = 6.0 * num / (alpha * (alpha - 3.0) * (alpha - 4.0))
        return ex if excess else ex + 3.0

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.theta * 2.0 ** (1.0 / parameters.alpha)

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.theta

    def shape_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.alpha

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, theta = parameters.alpha, parameters.theta
        return math.log(theta / alpha) + 1.0 / alpha + 1.0

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return half_line(parameters.theta)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return parameters.theta * np.exp(rng.standard_exponential(n) / parameters.alpha)

    def fit_mle(data: Any, weights: Any = None) -> dict[str, float]:
        """MLE: ``θ = min(x)`` and ``α = n / Σ(log xᵢ - log θ)``."""
        if weights is not None:
            raise NotImplementedError("Weighted MLE is not supported for Pareto")
        x = as_sample(data)
        theta = float(np.min(x))
        with np.errstate(divide="ignore", invalid="ignore"):
            alpha = float(x.size / np.sum(np.log(x) - math.log(theta))) if theta > 0 else math.nan
        return {"alpha": alpha, "theta": theta}

    Pareto = ParametricFamily(
        name=FamilyName.PARETO,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.LOGCDF: logcdf,
            CharacteristicName.LOGCCDF: logccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: scale_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.SCALE: scale_func,
            CharacteristicName.SHAPE: shape_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
        estimators={MLE: fit_mle},
    )
    Pareto.__doc__ = PARETO_DOC

    @parametrization(family=Pareto, name="standard")
    class _Standard(Parametrization):
        """
        Shape-scale parametrization of Pareto distribution.

        Parameters
        ----------
        alpha : float
            Shape (α)
        theta : float
            Scale (θ), the lower bound of the support
        """

        alpha: float = 1.0
        theta: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="theta > 0")
        def check_theta_positive(self) -> bool:
            return self.theta > 0

    ParametricFamilyRegister.register(Pareto)
