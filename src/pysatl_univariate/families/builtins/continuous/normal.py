"""
Normal distribution family implementation.

Contains the Normal family with multiple parameterizations, and the
location-scale normal functions reused by the LogNormal family.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import log_ndtr, ndtr, ndtri, ndtri_exp

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import real_line
from pysatl_univariate.families.estimation import MLE, as_sample, as_weights
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import (
    LOG_SQRT_2PI,
    check_log_probability,
    check_probability,
    norm_logpdf,
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


def normal_logpdf(mu: float, sigma: float, x: NumericArray) -> NumericArray:
    """Log-density of ``N(mu, sigma^2)``."""
    return cast(NumericArray, norm_logpdf((x - mu) / sigma) - np.log(sigma))


def normal_cdf(mu: float, sigma: float, x: NumericArray) -> NumericArray:
    return cast(NumericArray, ndtr((x - mu) / sigma))


def normal_ccdf(mu: float, sigma: float, x: NumericArray) -> NumericArray:
    return cast(NumericArray, ndtr((mu - x) / sigma))


def normal_logcdf(mu: float, sigma: float, x: NumericArray) -> NumericArray:
    return cast(NumericArray, log_ndtr((x - mu) / sigma))


def normal_logccdf(mu: float, sigma: float, x: NumericArray) -> NumericArray:
    return cast(NumericArray, log_ndtr((mu - x) / sigma))


def normal_quantile(mu: float, sigma: float, p: NumericArray) -> NumericArray:
    return cast(NumericArray, mu + sigma * ndtri(check_probability(p)))


def normal_cquantile(mu: float, sigma: float, p: NumericArray) -> NumericArray:
    return cast(NumericArray, mu - sigma * ndtri(check_probability(p)))


def normal_invlogcdf(mu: float, sigma: float, lp: NumericArray) -> NumericArray:
    return cast(NumericArray, mu + sigma * ndtri_exp(check_log_probability(lp)))


def normal_invlogccdf(mu: float, sigma: float, lp: NumericArray) -> NumericArray:
    return cast(NumericArray, mu - sigma * ndtri_exp(check_log_probability(lp)))


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution.

    The normal distribution is a continuous probability distribution characterized
    by its bell-shaped curve. It is symmetric about its mean and is defined by
    two parameters: mean (μ) and standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Normal()          standard normal, i.e. Normal(0.0, 1.0)
    Normal(mu)        normal with mean mu and unit standard deviation
    Normal(mu, sigma) normal with mean mu and standard deviation sigma

    Tails are evaluated in log space through ``log_ndtr`` and inverted
    through ``ndtri``/``ndtri_exp``, so extreme quantiles keep full precision.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean)
            - sigma: float (standard deviation)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        parameters = cast(_MeanStd, parameters)
        return cast(NumericArray, np.exp(normal_logpdf(parameters.mu, parameters.sigma, x)))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_logpdf(parameters.mu, parameters.sigma, x)

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_cdf(parameters.mu, parameters.sigma, x)

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_ccdf(parameters.mu, parameters.sigma, x)

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_logcdf(parameters.mu, parameters.sigma, x)

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_logccdf(parameters.mu, parameters.sigma, x)

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean)
            - sigma: float (standard deviation)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            Quantiles corresponding to probabilities p; ``-inf`` at 0 and ``inf`` at 1

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        parameters = cast(_MeanStd, parameters)
        return normal_quantile(parameters.mu, parameters.sigma, p)

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_cquantile(parameters.mu, parameters.sigma, p)

    def invlogcdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_invlogcdf(parameters.mu, parameters.sigma, lp)

    def invlogccdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return normal_invlogccdf(parameters.mu, parameters.sigma, lp)

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function ``exp(μt + σ²t²/2)``."""
        parameters = cast(_MeanStd, parameters)
        mu, sigma = parameters.mu, parameters.sigma
        with np.errstate(over="ignore"):
            return cast(NumericArray, np.exp(mu * t + 0.5 * (sigma * t) ** 2))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """
        Characteristic function of normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean)
            - sigma: float (standard deviation)
        t : NumericArray
            Points at which to evaluate the characteristic function

        Returns
        -------
        ComplexArray
            Characteristic function values at points t
        """
        parameters = cast(_MeanStd, parameters)

        sigma = parameters.sigma
        mu = parameters.mu
        return cast(ComplexArray, np.exp(1j * mu * t - 0.5 * (sigma**2) * (t**2)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of normal distribution."""
        parameters = cast(_MeanStd, parameters)
        return parameters.mu

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of normal distribution."""
        parameters = cast(_MeanStd, parameters)
        return parameters.sigma**2

    def std_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_MeanStd, parameters)
        return parameters.sigma

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of normal distribution (always 0)."""
        return 0.0

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of normal distribution.

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
        return 0.0 if excess else 3.0

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_MeanStd, parameters)
        return 0.5 + LOG_SQRT_2PI + math.log(parameters.sigma)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of normal distribution"""
        return real_line()

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return parameters.mu + parameters.sigma * rng.standard_normal(n)

    def fit_mle(data: Any, weights: Any = None) -> dict[str, float]:
        """Sample mean and (population) standard deviation, optionally weighted."""
        x = as_sample(data)
        if weights is None:
            return {"mu": float(np.mean(x)), "sigma": float(np.std(x))}
        w = as_weights(weights, x)
        mu = float(np.average(x, weights=w))
        return {"mu": mu, "sigma": math.sqrt(float(np.average((x - mu) ** 2, weights=w)))}

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanPrec", "exponential"],
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
            CharacteristicName.MEDIAN: mean_func,
            CharacteristicName.MODE: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.STD: std_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.LOCATION: mean_func,
            CharacteristicName.SCALE: std_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
        estimators={MLE: fit_mle},
    )
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Standard parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        sigma : float
            Standard deviation of the distribution
        """

        mu: float = 0.0
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            """Check that standard deviation is positive."""
            return self.sigma > 0

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """
        Mean-precision parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        tau : float
            Precision parameter (inverse variance)
        """

        mu: float
        tau: float

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            """Check that precision parameter is positive."""
            return self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=math.sqrt(1 / self.tau))

    @parametrization(family=Normal, name="exponential")
    class _Exp(Parametrization):
        """
        Exponential family parametrization of normal distribution.
            Uses the form: y = exp(a*x² + b*x + c)

        Parameters
        ----------
        a : float
            Quadratic term coefficient in exponential form
        b : float
            Linear term coefficient in exponential form
        """

        a: float
        b: float

        @property
        def c(self) -> float:
            """Normalization constant of the exponential form."""
            return (self.b**2) / (4 * self.a) - (1 / 2) * math.log(math.pi / (-self.a))

        @constraint(description="a < 0")
        def check_a_negative(self) -> bool:
            return self.a < 0

        def transform_to_base_parametrization(self) -> Parametrization:
            mu = -self.b / (2 * self.a)
            sigma = math.sqrt(-1 / (2 * self.a))
            return _MeanStd(mu=mu, sigma=sigma)

    ParametricFamilyRegister.register(Normal)
