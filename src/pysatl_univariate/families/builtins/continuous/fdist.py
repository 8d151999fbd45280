"""
F distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import (
    betainc,
    betaincc,
    betainccinv,
    betaincinv,
    betaln,
    digamma,
    gammaln,
    xlogy,
)

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
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_univariate.distributions.support import ContinuousSupport


def configure_fdist_family() -> None:
    """
    Configure and register the F distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.F):
        return

    F_DOC = """
    F distribution (Fisher-Snedecor).

    If X1 ~ χ²(ν1) and X2 ~ χ²(ν2) are independent, (X1 / ν1) / (X2 / ν2)
    follows the F distribution with ν1 and ν2 degrees of freedom.

    FDist(nu1, nu2)   F distribution with degrees of freedom nu1 and nu2

    Both parameters are required. Moments that do not exist for the given
    degrees of freedom are NaN.
    """

    def _to_beta(parameters: _Standard, x: NumericArray) -> NumericArray:
        # X ~ F(ν1, ν2)  <=>  ν1 X / (ν1 X + ν2) ~ Beta(ν1/2, ν2/2)
        u = parameters.nu1 * np.maximum(x, 0.0)
        with np.errstate(invalid="ignore"):
            y = u / (u + parameters.nu2)
        return cast(NumericArray, np.where(np.isposinf(u), 1.0, y))

    def _from_beta(parameters: _Standard, y: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            x = (parameters.nu2 / parameters.nu1) * y / (1.0 - y)
        return cast(NumericArray, np.where(y == 1.0, np.inf, x))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function for F distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - nu1: float (numerator degrees of freedom)
            - nu2: float (denominator degrees of freedom)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` for negative x
        """
        parameters = cast(_Standard, parameters)

        nu1, nu2 = parameters.nu1, parameters.nu2
        xc = np.maximum(x, 0.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            value = (
                xlogy(nu1 / 2.0 - 1.0, xc)
                + (nu1 / 2.0) * math.log(nu1)
                + (nu2 / 2.0) * math.log(nu2)
                - ((nu1 + nu2) / 2.0) * np.log(nu1 * xc + nu2)
                - betaln(nu1 / 2.0, nu2 / 2.0)
            )
        return cast(NumericArray, np.where(x >= 0, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        y = _to_beta(parameters, x)
        return cast(NumericArray, betainc(parameters.nu1 / 2.0, parameters.nu2 / 2.0, y))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        y = _to_beta(parameters, x)
        return cast(NumericArray, betaincc(parameters.nu1 / 2.0, parameters.nu2 / 2.0, y))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for F distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        y = betaincinv(parameters.nu1 / 2.0, parameters.nu2 / 2.0, p)
        return _from_beta(parameters, y)

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        y = betainccinv(parameters.nu1 / 2.0, parameters.nu2 / 2.0, p)
        return _from_beta(parameters, y)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        nu2 = parameters.nu2
        return nu2 / (nu2 - 2.0) if nu2 > 2.0 else math.nan

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        nu1, nu2 = parameters.nu1, parameters.nu2
        if nu2 <= 4.0:
            return math.nan
        return 2.0 * nu2**2 * (nu1 + nu2 - 2.0) / (nu1 * (nu2 - 2.0) ** 2 * (nu2 - 4.0))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        nu1, nu2 = parameters.nu1, parameters.nu2
        if nu2 <= 6.0:
            return math.nan
        return (
            (2.0 * nu1 + nu2 - 2.0)
            * math.sqrt(8.0 * (nu2 - 4.0))
            / ((nu2 - 6.0) * math.sqrt(nu1 * (nu1 + nu2 - 2.0)))
        )

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of F distribution, NaN for ``nu2 <= 8``."""
        parameters = cast(_Standard, parameters)
        nu1, nu2 = parameters.nu1, parameters.nu2
        if nu2 <= 8.0:
            return math.nan
        a = nu1 * (5.0 * nu2 - 22.0) * (nu1 + nu2 - 2.0) + (nu2 - 4.0) * (nu2 - 2.0) ** 2
        b = nu1 * (nu2 - 6.0) * (nu2 - 8.0) * (nu1 + nu2 - 2.0)
        ex = 12.0 * a / b
        return ex if excess else ex + 3.0

    def mode_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        nu1, nu2 = parameters.nu1, parameters.nu2
        return ((nu1 - 2.0) / nu1) * (nu2 / (nu2 + 2.0)) if nu1 > 2.0 else 0.0

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        nu1, nu2 = parameters.nu1, parameters.nu2
        h1, h2 = nu1 / 2.0, nu2 / 2.0
        hs = h1 + h2
        return float(
            math.log(nu2 / nu1)
            + gammaln(h1)
            + gammaln(h2)
            - gammaln(hs)
            + (1.0 - h1) * digamma(h1)
            + (-1.0 - h2) * digamma(h2)
            + hs * digamma(hs)
        )

    def _support(_: Parametrization) -> ContinuousSupport:
        return half_line(0.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        x1 = rng.chisquare(parameters.nu1, n) / parameters.nu1
        x2 = rng.chisquare(parameters.nu2, n) / parameters.nu2
        return cast(NumericArray, x1 / x2)

    FDist = ParametricFamily(
        name=FamilyName.F,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
    )
    FDist.__doc__ = F_DOC

    @parametrization(family=FDist, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of F distribution.

        Parameters
        ----------
        nu1 : float
            Numerator degrees of freedom (ν1)
        nu2 : float
            Denominator degrees of freedom (ν2)
        """

        nu1: float
        nu2: float

        @constraint(description="nu1 > 0")
        def check_nu1_positive(self) -> bool:
            return self.nu1 > 0

        @constraint(description="nu2 > 0")
        def check_nu2_positive(self) -> bool:
            return self.nu2 > 0

    ParametricFamilyRegister.register(FDist)
