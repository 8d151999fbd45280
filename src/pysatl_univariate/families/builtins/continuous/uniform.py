"""
Uniform distribution family implementation.

Contains the Uniform family with bounds and center-width parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_univariate.distributions.strategies import DefaultSamplingUnivariateStrategy
from pysatl_univariate.distributions.support import interval
from pysatl_univariate.families.estimation import MLE, as_sample
from pysatl_univariate.families.parametric_family import ParametricFamily
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.families.registry import ParametricFamilyRegister
from pysatl_univariate.special import check_probability
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


def configure_uniform_family() -> None:
    """
    Configure and register the Uniform distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.UNIFORM):
        return

    UNIFORM_DOC = """
    Uniform (continuous) distribution.

    The uniform distribution is a continuous probability distribution where
    all intervals of the same length are equally probable. It is defined by
    two parameters: lower bound a and upper bound b.

    Probability density function:
        f(x) = 1/(b - a) for x in [a, b], 0 otherwise

    Uniform()       uniform over [0, 1]
    Uniform(a, b)   uniform over [a, b]

    location(d) returns a and scale(d) returns b - a.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for uniform distribution.
            - For x < a: returns 0
            - For x > b: returns 0
            - Otherwise: returns 1 / (b - a)

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (lower bound)
            - b: float (upper bound)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, np.where((x >= a) & (x <= b), 1.0 / (b - a), 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, np.where((x >= a) & (x <= b), -np.log(b - a), -np.inf))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for uniform distribution.
        Uses np.clip for vectorized computation:
            - For x < a: returns 0
            - For x > b: returns 1

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (lower bound)
            - b: float (upper bound)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, np.clip((x - a) / (b - a), 0.0, 1.0))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, np.clip((b - x) / (b - a), 0.0, 1.0))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for uniform distribution.

        For uniform distribution on [a, b]:
        - For p = 0: returns a
        - For p = 1: returns b
        - For p in (0, 1): returns a + p × (b - a)

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, a + p * (b - a))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        return cast(NumericArray, b + p * (a - b))

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function ``exp(ct) sinh(wt/2) / (wt/2)`` with center c and width w."""
        parameters = cast(_Standard, parameters)

        a, b = parameters.a, parameters.b
        u = 0.5 * (b - a) * t
        v = 0.5 * (a + b) * t
        with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
            return cast(NumericArray, np.where(u == 0, 1.0, np.exp(v) * np.sinh(u) / u))

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """
        Characteristic function of uniform distribution.

        Characteristic function formula for uniform distribution on [a, b]:
            φ(t) = sinc((b - a) * t / 2π) * exp(i * (a + b) * t / 2)
        where sinc(x) = sin(πx)/(πx) as defined by numpy.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (lower bound)
            - b: float (upper bound)
        t : NumericArray
            Points at which to evaluate the characteristic function

        Returns
        -------
        ComplexArray
            Characteristic function values at points t
        """
        parameters = cast(_Standard, parameters)

        width = parameters.b - parameters.a
        center = (parameters.a + parameters.b) / 2

        return cast(ComplexArray, np.sinc(width * t / (2 * np.pi)) * np.exp(1j * center * t))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of uniform distribution."""
        parameters = cast(_Standard, parameters)
        return (parameters.a + parameters.b) / 2

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of uniform distribution."""
        parameters = cast(_Standard, parameters)
        width = parameters.b - parameters.a
        return width**2 / 12

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of uniform distribution (always 0)."""
        return 0.0

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of uniform distribution.

        Parameters
        ----------
        _1 : Parametrization
            Needed by architecture parameter
        _2 : Any
            Needed by architecture parameter
        excess : bool
            A value defines if there will be raw or excess kurtosis
            default is False

        Returns
        -------
        float
            Kurtosis value
        """
        return -1.2 if excess else 1.8

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return math.log(parameters.b - parameters.a)

    def location_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.a

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.b - parameters.a

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of uniform distribution"""
        parameters = cast(_Standard, parameters)
        return interval(parameters.a, parameters.b)

    def fit_mle(data: Any, weights: Any = None) -> dict[str, float]:
        """MLE: the sample minimum and maximum."""
        if weights is not None:
            raise NotImplementedError("Weighted MLE is not supported for Uniform")
        x = as_sample(data)
        return {"a": float(np.min(x)), "b": float(np.max(x))}

    Uniform = ParametricFamily(
        name=FamilyName.UNIFORM,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "meanWidth"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MGF: mgf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.MEDIAN: mean_func,
            CharacteristicName.MODE: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.LOCATION: location_func,
            CharacteristicName.SCALE: scale_func,
        },
        sampling_strategy=DefaultSamplingUnivariateStrategy(),
        support_by_parametrization=_support,
        estimators={MLE: fit_mle},
    )
    Uniform.__doc__ = UNIFORM_DOC

    @parametrization(family=Uniform, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of uniform distribution.

        Parameters
        ----------
        a : float
            Lower bound of the distribution
        b : float
            Upper bound of the distribution
        """

        a: float = 0.0
        b: float = 1.0

        @constraint(description="a < b")
        def check_a_less_than_b(self) -> bool:
            """Check that lower bound is less than upper bound."""
            return self.a < self.b

        @constraint(description="a and b are finite")
        def check_bounds_finite(self) -> bool:
            return math.isfinite(self.a) and math.isfinite(self.b)

    @parametrization(family=Uniform, name="meanWidth")
    class _MeanWidth(Parametrization):
        """
        Mean-width parametrization of uniform distribution.

        Parameters
        ----------
        mean : float
            Mean (center) of the distribution
        width : float
            Width of the distribution (b - a)
        """

        mean: float
        width: float

        @constraint(description="width > 0")
        def check_width_positive(self) -> bool:
            """Check that width is positive."""
            return self.width > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            half_width = self.width / 2
            return _Standard(a=self.mean - half_width, b=self.mean + half_width)

    ParametricFamilyRegister.register(Uniform)
