"""
Erlang distribution family implementation.

Contains the Erlang family with shape-scale and shape-rate parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import digamma, gammainc, gammaincc, gammainccinv, gammaincinv, gammaln, xlogy

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import half_line
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


def configure_erlang_family() -> None:
    """
    Configure and register the Erlang distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ERLANG):
        return

    ERLANG_DOC = """
    Erlang distribution.

    The Erlang distribution is a special case of the Gamma distribution with
    an integer shape parameter k: the sum of k independent exponential
    variables with scale θ.

    Probability density function:
        f(x) = x^(k-1) exp(-x / θ) / (Γ(k) θ^k) for x ≥ 0

    Erlang()          Erlang distribution with unit shape and unit scale, i.e. Erlang(1, 1)
    Erlang(k)         Erlang distribution with shape k and unit scale, i.e. Erlang(k, 1)
    Erlang(k, theta)  Erlang distribution with shape k and scale theta
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function for Erlang distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - k: int (shape parameter)
            - theta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` for negative x
        """
        parameters = cast(_ShapeScale, parameters)

        k, theta = parameters.k, parameters.theta
        xc = np.maximum(x, 0.0)
        with np.errstate(divide="ignore"):
            value = xlogy(k - 1, xc) - xc / theta - gammaln(k) - k * math.log(theta)
        return cast(NumericArray, np.where(x >= 0, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, gammainc(parameters.k, np.maximum(x, 0.0) / parameters.theta))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, gammaincc(parameters.k, np.maximum(x, 0.0) / parameters.theta))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for Erlang distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, parameters.theta * gammaincinv(parameters.k, p))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, parameters.theta * gammainccinv(parameters.k, p))

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function ``(1 - tθ)^(-k)``, infinite for ``t ≥ 1/θ``."""
        parameters = cast(_ShapeScale, parameters)

        st = t * parameters.theta
        with np.errstate(divide="ignore", invalid="ignore"):
            return cast(
                NumericArray, np.where(st < 1.0, (1.0 - st) ** (-parameters.k), np.inf)
            )

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        parameters = cast(_ShapeScale, parameters)
        return cast(ComplexArray, (1.0 - 1j * t * parameters.theta) ** (-parameters.k))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.k * parameters.theta

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.k * parameters.theta**2

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return 2.0 / math.sqrt(parameters.k)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Erlang distribution."""
        parameters = cast(_ShapeScale, parameters)
        ex = 6.0 / parameters.k
        return ex if excess else ex + 3.0

    def mode_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.theta * (parameters.k - 1)

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        k = parameters.k
        return float(k + gammaln(k) + (1 - k) * digamma(k) + math.log(parameters.theta))

    def shape_func(parameters: Parametrization, _: Any) -> int:
        parameters = cast(_ShapeScale, parameters)
        return parameters.k

    def scale_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.theta

    def rate_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return 1.0 / parameters.theta

    def _support(_: Parametrization) -> ContinuousSupport:
        return half_line(0.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_ShapeScale, parameters)
        return rng.gamma(parameters.k, parameters.theta, n)

    Erlang = ParametricFamily(
        name=FamilyName.ERLANG,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapeScale", "shapeRate"],
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
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.SHAPE: shape_func,
            CharacteristicName.SCALE: scale_func,
            CharacteristicName.RATE: rate_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
    )
    Erlang.__doc__ = ERLANG_DOC

    @parametrization(family=Erlang, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization of Erlang distribution.

        Parameters
        ----------
        k : int
            Shape parameter, a positive integer
        theta : float
            Scale parameter (θ)
        """

        k: int = 1
        theta: float = 1.0

        @constraint(description="k is a positive integer")
        def check_k_positive_integer(self) -> bool:
            return isinstance(self.k, int) and self.k >= 1

        @constraint(description="theta > 0")
        def check_theta_positive(self) -> bool:
            return self.theta > 0

    @parametrization(family=Erlang, name="shapeRate")
    class _ShapeRate(Parametrization):
        """
        Shape-rate parametrization of Erlang distribution.

        Parameters
        ----------
        k : int
            Shape parameter, a positive integer
        lambda_ : float
            Rate parameter (λ = 1/θ)
        """

        k: int
        lambda_: float

        @constraint(description="k is a positive integer")
        def check_k_positive_integer(self) -> bool:
            return isinstance(self.k, int) and self.k >= 1

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _ShapeScale(k=self.k, theta=1.0 / self.lambda_)

    ParametricFamilyRegister.register(Erlang)
