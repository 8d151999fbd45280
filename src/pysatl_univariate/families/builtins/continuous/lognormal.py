"""
Log-normal distribution family implementation.

Log-normal characteristics are computed from the normal ones at ``log(x)``.
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
from pysatl_univariate.families.builtins.continuous.normal import (
    normal_ccdf,
    normal_cdf,
    normal_cquantile,
    normal_invlogccdf,
    normal_invlogcdf,
    normal_logccdf,
    normal_logcdf,
    normal_logpdf,
    normal_quantile,
)
from pysatl_univariate.families.estimation import MLE, as_sample, as_weights
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_univariate.distributions.support import ContinuousSupport


def _safe_log(x: NumericArray) -> NumericArray:
    """``log(x)`` for positive x; non-positive points are mapped to 0 and masked by callers."""
    return cast(NumericArray, np.log(np.where(x > 0, x, 1.0)))


def configure_lognormal_family() -> None:
    """
    Configure and register the LogNormal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOGNORMAL):
        return

    LOGNORMAL_DOC = """
    Log-normal distribution.

    If X ~ LogNormal(μ, σ) then log(X) ~ Normal(μ, σ).

    Probability density function:
        f(x) = 1/(x σ√(2π)) * exp(-(log(x) - μ)²/(2σ²)) for x > 0

    LogNormal()           equivalent to LogNormal(0.0, 1.0)
    LogNormal(mu)         equivalent to LogNormal(mu, 1.0)
    LogNormal(mu, sigma)  log-normal with log-mean mu and log-scale sigma

    meanlogx(d), varlogx(d) and stdlogx(d) give the moments of log(X).
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function for log-normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean of log(X))
            - sigma: float (standard deviation of log(X))
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` for non-positive x
        """
        parameters = cast(_Standard, parameters)

        lx = _safe_log(x)
        value = normal_logpdf(parameters.mu, parameters.sigma, lx) - lx
        return cast(NumericArray, np.where(x > 0, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = normal_cdf(parameters.mu, parameters.sigma, _safe_log(x))
        return cast(NumericArray, np.where(x > 0, value, 0.0))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = normal_ccdf(parameters.mu, parameters.sigma, _safe_log(x))
        return cast(NumericArray, np.where(x > 0, value, 1.0))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = normal_logcdf(parameters.mu, parameters.sigma, _safe_log(x))
        return cast(NumericArray, np.where(x > 0, value, -np.inf))

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        value = normal_logccdf(parameters.mu, parameters.sigma, _safe_log(x))
        return cast(NumericArray, np.where(x > 0, value, 0.0))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for log-normal distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.exp(normal_quantile(parameters.mu, parameters.sigma, p)))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.exp(normal_cquantile(parameters.mu, parameters.sigma, p)))

    def invlogcdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.exp(normal_invlogcdf(parameters.mu, parameters.sigma, lp)))

    def invlogccdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, np.exp(normal_invlogccdf(parameters.mu, parameters.sigma, lp)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return math.exp(parameters.mu + 0.5 * parameters.sigma**2)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        s2 = parameters.sigma**2
        return math.expm1(s2) * math.exp(2.0 * parameters.mu + s2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        s2 = parameters.sigma**2
        return (math.exp(s2) + 2.0) * math.sqrt(math.expm1(s2))

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of log-normal distribution."""
        parameters = cast(_Standard, parameters)
        e = math.exp(parameters.sigma**2)
        ex = e**4 + 2.0 * e**3 + 3.0 * e**2 - 6.0
        return ex if excess else ex + 3.0

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return math.exp(parameters.mu)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return math.exp(parameters.mu - parameters.sigma**2)

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return 0.5 * (1.0 + math.log(2.0 * math.pi * parameters.sigma**2)) + parameters.mu

    def meanlogx_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu

    def varlogx_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.sigma**2

    def _support(_: Parametrization) -> ContinuousSupport:
        return half_line(0.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return np.exp(parameters.mu + parameters.sigma * rng.standard_normal(n))

    def fit_mle(data: Any, weights: Any = None) -> dict[str, float]:
        """Mean and (population) standard deviation of ``log(x)``, optionally weighted."""
        x = as_sample(data)
        with np.errstate(divide="ignore", invalid="ignore"):
            lx = np.log(x)
        if weights is None:
            return {"mu": float(np.mean(lx)), "sigma": float(np.std(lx))}
        w = as_weights(weights, x)
        mu = float(np.average(lx, weights=w))
        return {"mu": mu, "sigma": math.sqrt(float(np.average((lx - mu) ** 2, weights=w)))}

    LogNormal = ParametricFamily(
        name=FamilyName.LOGNORMAL,
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
            CharacteristicName.INVLOGCDF: invlogcdf,
            CharacteristicName.INVLOGCCDF: invlogccdf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.MEANLOGX: meanlogx_func,
            CharacteristicName.VARLOGX: varlogx_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
        estimators={MLE: fit_mle},
    )
    LogNormal.__doc__ = LOGNORMAL_DOC

    @parametrization(family=LogNormal, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of log-normal distribution.

        Parameters
        ----------
        mu : float
            Mean of log(X)
        sigma : float
            Standard deviation of log(X)
        """

        mu: float = 0.0
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(LogNormal)
