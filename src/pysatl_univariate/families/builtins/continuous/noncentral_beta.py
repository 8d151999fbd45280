"""
Noncentral Beta distribution family implementation.

The noncentral Beta distribution is evaluated through the noncentral F
distribution: if ``X ~ NoncentralBeta(α, β, λ)`` then
``(X / (1 - X)) · (β / α) ~ F'(2α, 2β, λ)``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, betaincc, betaincinv
from scipy.stats import ncf

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import interval
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


def configure_noncentral_beta_family() -> None:
    """
    Configure and register the NoncentralBeta distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NONCENTRAL_BETA):
        return

    NONCENTRAL_BETA_DOC = """
    Noncentral Beta distribution.

    If A ~ χ'²(2α, λ) and B ~ χ²(2β) are independent, A / (A + B) follows
    the noncentral Beta distribution with shapes α, β and noncentrality λ.

    NoncentralBeta(alpha, beta, lambda_)

    All three parameters are required. Moments are not available: asking
    for the mean raises ``CharacteristicNotAvailableError``.
    """

    def _frozen(parameters: _Standard) -> Any:
        return ncf(2.0 * parameters.alpha, 2.0 * parameters.beta, parameters.lambda_)

    def _to_f(parameters: _Standard, x: NumericArray) -> NumericArray:
        xc = np.clip(x, 0.0, 1.0)
        with np.errstate(divide="ignore"):
            return cast(NumericArray, xc / (1.0 - xc) * (parameters.beta / parameters.alpha))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for noncentral Beta distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (first shape parameter)
            - beta: float (second shape parameter)
            - lambda_: float (noncentrality parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values; 0 outside of [0, 1)
        """
        parameters = cast(_Standard, parameters)

        inside = (x >= 0) & (x < 1)
        xc = np.where(inside, x, 0.0)
        jacobian = (parameters.beta / parameters.alpha) / (1.0 - xc) ** 2
        value = _frozen(parameters).pdf(_to_f(parameters, xc)) * jacobian
        return cast(NumericArray, np.where(inside, value, 0.0))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        if parameters.lambda_ == 0:
            xc = np.clip(x, 0.0, 1.0)
            return cast(NumericArray, betainc(parameters.alpha, parameters.beta, xc))
        return cast(NumericArray, _frozen(parameters).cdf(_to_f(parameters, x)))

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Complementary CDF; the central case uses the regularized beta complement."""
        parameters = cast(_Standard, parameters)
        if parameters.lambda_ == 0:
            xc = np.clip(x, 0.0, 1.0)
            return cast(NumericArray, betaincc(parameters.alpha, parameters.beta, xc))
        return cast(NumericArray, _frozen(parameters).sf(_to_f(parameters, x)))

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for noncentral Beta distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        if parameters.lambda_ == 0:
            return cast(NumericArray, betaincinv(parameters.alpha, parameters.beta, p))

        f = _frozen(parameters).ppf(p)
        with np.errstate(invalid="ignore"):
            u = parameters.alpha * f / parameters.beta
            x = u / (1.0 + u)
        return cast(NumericArray, np.where(p == 1.0, 1.0, x))

    def _support(_: Parametrization) -> ContinuousSupport:
        return interval(0.0, 1.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        if parameters.lambda_ > 0:
            a = rng.noncentral_chisquare(2.0 * parameters.alpha, parameters.lambda_, n)
        else:
            a = rng.chisquare(2.0 * parameters.alpha, n)
        b = rng.chisquare(2.0 * parameters.beta, n)
        return cast(NumericArray, a / (a + b))

    NoncentralBeta = ParametricFamily(
        name=FamilyName.NONCENTRAL_BETA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.QUANTILE: quantile,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
    )
    NoncentralBeta.__doc__ = NONCENTRAL_BETA_DOC

    @parametrization(family=NoncentralBeta, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of noncentral Beta distribution.

        Parameters
        ----------
        alpha : float
            First shape parameter (α)
        beta : float
            Second shape parameter (β)
        lambda_ : float
            Noncentrality parameter (λ)
        """

        alpha: float
        beta: float
        lambda_: float

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        @constraint(description="lambda_ >= 0")
        def check_lambda_non_negative(self) -> bool:
            return self.lambda_ >= 0

    ParametricFamilyRegister.register(NoncentralBeta)
