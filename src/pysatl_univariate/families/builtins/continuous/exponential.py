"""
Exponential distribution family implementation.

Contains the Exponential family with scale and rate parameterizations.
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
from pysatl_univariate.families.estimation import MLE, ExponentialStats
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import (
    LOG_2,
    check_log_probability,
    check_probability,
    log1mexp,
)
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


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential distribution.

    The exponential distribution is a continuous probability distribution that
    describes the time between events in a Poisson process. It has a single
    parameter: scale (θ) or rate (λ = 1/θ).

    Probability density function (scale parametrization):
        f(x) = exp(-x / θ) / θ for x ≥ 0

    Exponential()       unit scale, i.e. Exponential(1.0)
    Exponential(theta)  exponential with scale theta (mean theta)

    The exponential distribution is memoryless and is widely used in reliability
    engineering, queuing theory, and survival analysis.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for exponential distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        parameters = cast(_Scale, parameters)

        theta = parameters.theta
        with np.errstate(over="ignore"):
            return cast(NumericArray, np.where(x >= 0, np.exp(-x / theta) / theta, 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Scale, parameters)

        theta = parameters.theta
        return cast(NumericArray, np.where(x >= 0, -x / theta - np.log(theta), -np.inf))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for exponential distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        parameters = cast(_Scale, parameters)

        with np.errstate(over="ignore"):
            return cast(NumericArray, np.where(x > 0, -np.expm1(-x / parameters.theta), 0.0))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Scale, parameters)

        with np.errstate(over="ignore"):
            return cast(NumericArray, np.where(x > 0, np.exp(-x / parameters.theta), 1.0))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Scale, parameters)

        return cast(NumericArray, np.where(x > 0, log1mexp(-x / parameters.theta), -np.inf))

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Scale, parameters)

        return cast(NumericArray, np.where(x > 0, -x / parameters.theta, 0.0))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for exponential distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (scale parameter)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            Quantiles corresponding to probabilities p:
            - For p = 0: returns 0.0
            - For p = 1: returns np.inf
            - For p in (0, 1): returns -θ ln(1-p)

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Scale, parameters)

        with np.errstate(divide="ignore"):
            return cast(NumericArray, -parameters.theta * np.log1p(-p))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Scale, parameters)

        with np.errstate(divide="ignore"):
            return cast(NumericArray, -parameters.theta * np.log(p))

    def invlogcdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        lp = check_log_probability(lp)
        parameters = cast(_Scale, parameters)

        return cast(NumericArray, -parameters.theta * log1mexp(lp))

    def invlogccdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        lp = check_log_probability(lp)
        parameters = cast(_Scale, parameters)

        return cast(NumericArray, -parameters.theta * lp)

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function ``1 / (1 - tθ)``, infinite for ``t ≥ 1/θ``."""
        parameters = cast(_Scale, parameters)

        st = t * parameters.theta
        with np.errstate(divide="ignore"):
            return cast(NumericArray, np.where(st < 1.0, 1.0 / (1.0 - st), np.inf))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """
        Characteristic function of exponential distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - theta: float (scale parameter)
        t : NumericArray
            Points at which to evaluate the characteristic function

        Returns
        -------
        ComplexArray
            Characteristic function values at points t
        """
        parameters = cast(_Scale, parameters)

        return cast(ComplexArray, 1.0 / (1.0 - 1j * t * parameters.theta))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of exponential distribution."""
        parameters = cast(_Scale, parameters)
        return parameters.theta

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of exponential distribution."""
        parameters = cast(_Scale, parameters)
        return parameters.theta**2

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of exponential distribution (always 2)."""
        return 2.0

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of exponential distribution.

        Parameters
        ----------
        _1 : Parametrization
            Needed by architecture parameter
        excess : bool
            A value defines if there will be raw or excess kurtosis
            default is False

        Returns
        -------
        float
            Kurtosis value
        """
        return 6.0 if excess else 9.0

    def mode_func(_1: Parametrization, _2: Any) -> float:
        return 0.0

    def median_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Scale, parameters)
        return LOG_2 * parameters.theta

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Scale, parameters)
        return 1.0 + math.log(parameters.theta)

    def rate_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Scale, parameters)
        return 1.0 / parameters.theta

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of exponential distribution"""
        return half_line(0.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Scale, parameters)
        return parameters.theta * rng.standard_exponential(n)

    def suffstats(data: Any, weights: Any = None) -> ExponentialStats:
        return ExponentialStats.from_sample(data, weights)

    def fit_mle(data: Any, weights: Any = None) -> dict[str, float]:
        """MLE of the scale: the (weighted) sample mean."""
        ss = data if isinstance(data, ExponentialStats) else suffstats(data, weights)
        return {"theta": ss.sx / ss.sw}

    Exponential = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["scale", "rate"],
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
            CharacteristicName.MGF: mgf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.SCALE: mean_func,
            CharacteristicName.RATE: rate_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
        estimators={MLE: fit_mle},
        sufficient_statistics=suffstats,
    )
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="scale")
    class _Scale(Parametrization):
        """
        Scale parametrization of exponential distribution.

        Parameters
        ----------
        theta : float
            Scale parameter (θ) of the distribution, θ = 1/λ
        """

        theta: float = 1.0

        @constraint(description="theta > 0")
        def check_theta_positive(self) -> bool:
            """Check that scale parameter is positive."""
            return self.theta > 0

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of exponential distribution.

        Parameters
        ----------
        lambda_ : float
            Rate parameter (λ) of the distribution
        """

        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            """Check that rate parameter is positive."""
            return self.lambda_ > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to Scale parametrization.

            Returns
            -------
            Parametrization
                Scale parametrization instance
            """
            return _Scale(theta=1.0 / self.lambda_)

    ParametricFamilyRegister.register(Exponential)
