"""
Logistic distribution family implementation.
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
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import (
    check_log_probability,
    check_probability,
    log1pexp,
    logexpm1,
    logistic,
    logit,
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


def configure_logistic_family() -> None:
    """
    Configure and register the Logistic distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOGISTIC):
        return

    LOGISTIC_DOC = """
    Logistic distribution.

    Probability density function, with z = (x - μ) / θ:
        f(x) = exp(-z) / (θ (1 + exp(-z))²)

    Logistic()           equivalent to Logistic(0.0, 1.0)
    Logistic(mu)         location mu and unit scale
    Logistic(mu, theta)  location mu and scale theta
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        # symmetric in z, so exp(-|z|) never overflows
        e = np.exp(-np.abs((x - parameters.mu) / parameters.theta))
        return cast(NumericArray, e / (parameters.theta * (1.0 + e) ** 2))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        u = -np.abs((x - parameters.mu) / parameters.theta)
        return cast(NumericArray, u - 2.0 * log1pexp(u) - math.log(parameters.theta))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, logistic((x - parameters.mu) / parameters.theta))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, logistic((parameters.mu - x) / parameters.theta))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, -log1pexp((parameters.mu - x) / parameters.theta))

    def logccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, -log1pexp((x - parameters.mu) / parameters.theta))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for logistic distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, parameters.mu + parameters.theta * logit(p))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, parameters.mu - parameters.theta * logit(p))

    def invlogcdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        lp = check_log_probability(lp)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, parameters.mu - parameters.theta * logexpm1(-lp))

    def invlogccdf(parameters: Parametrization, lp: NumericArray) -> NumericArray:
        lp = check_log_probability(lp)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, parameters.mu + parameters.theta * logexpm1(-lp))

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function ``exp(μt) / sinc(θt)``, infinite for ``|θt| ≥ 1``."""
        parameters = cast(_Standard, parameters)

        u = parameters.theta * t
        with np.errstate(over="ignore", divide="ignore"):
            value = np.exp(parameters.mu * t) / np.sinc(u)
        return cast(NumericArray, np.where(np.abs(u) < 1.0, value, np.inf))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """
        Characteristic function of logistic distribution.

        Characteristic function formula:
            φ(t) = exp(iμt) a / sinh(a) with a = πθt, and φ(0) = 1
        """
        parameters = cast(_Standard, parameters)

        a = math.pi * parameters.theta * t
        a_safe = np.where(a == 0, 1.0, a)
        with np.errstate(over="ignore"):
            ratio = np.where(a == 0, 1.0, a_safe / np.sinh(a_safe))
        return cast(ComplexArray, np.exp(1j * parameters.mu * t) * ratio)

    def location_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.mu

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.theta

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return (math.pi * parameters.theta) ** 2 / 3.0

    def skew_func(_1: Parametrization, _2: Any) -> float:
        return 0.0

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of logistic distribution."""
        return 1.2 if excess else 4.2

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return math.log(parameters.theta) + 2.0

    def _support(_: Parametrization) -> ContinuousSupport:
        return real_line()

    Logistic = ParametricFamily(
        name=FamilyName.LOGISTIC,
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
            CharacteristicName.MGF: mgf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: location_func,
            CharacteristicName.MEDIAN: location_func,
            CharacteristicName.MODE: location_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.LOCATION: location_func,
            CharacteristicName.SCALE: scale_func,
        },
        sampling_strategy=DefaultSamplingUnivariateStrategy(),
        support_by_parametrization=_support,
    )
    Logistic.__doc__ = LOGISTIC_DOC

    @parametrization(family=Logistic, name="standard")
    class _Standard(Parametrization):
        """
        Location-scale parametrization of logistic distribution.

        Parameters
        ----------
        mu : float
            Location (μ)
        theta : float
            Scale (θ)
        """

        mu: float = 0.0
        theta: float = 1.0

        @constraint(description="theta > 0")
        def check_theta_positive(self) -> bool:
            return self.theta > 0

    ParametricFamilyRegister.register(Logistic)
