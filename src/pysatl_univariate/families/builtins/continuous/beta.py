"""
Beta distribution family implementation.

Contains the Beta family with shape and mean-precision parameterizations.
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
    hyp1f1,
    polygamma,
    xlog1py,
    xlogy,
)

from pysatl_univariate.distributions.strategies import VariateSamplingStrategy
from pysatl_univariate.distributions.support import interval
from pysatl_univariate.errors import UndefinedStatisticError
from pysatl_univariate.families.estimation import MOMENTS, as_sample
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


def configure_beta_family() -> None:
    """
    Configure and register the Beta distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BETA):
        return

    BETA_DOC = """
    Beta distribution.

    Probability density function:
        f(x) = x^(α-1) (1-x)^(β-1) / B(α, β) for x in [0, 1]

    If X ~ Gamma(α) and Y ~ Gamma(β) are independent, X / (X + Y) ~ Beta(α, β);
    variates are drawn this way.

    Beta()         equivalent to Beta(1.0, 1.0)
    Beta(a)        equivalent to Beta(a, a)
    Beta(a, b)     Beta distribution with shape parameters a and b

    ``fit`` uses moment matching, not maximum likelihood.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function for beta distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (first shape parameter)
            - beta: float (second shape parameter)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` outside of [0, 1]
        """
        parameters = cast(_Standard, parameters)

        alpha, beta = parameters.alpha, parameters.beta
        inside = (x >= 0) & (x <= 1)
        xc = np.clip(x, 0.0, 1.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            value = xlogy(alpha - 1.0, xc) + xlog1py(beta - 1.0, -xc) - betaln(alpha, beta)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(
            NumericArray, betainc(parameters.alpha, parameters.beta, np.clip(x, 0.0, 1.0))
        )

    def ccdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return cast(
            NumericArray, betaincc(parameters.alpha, parameters.beta, np.clip(x, 0.0, 1.0))
        )

    def quantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function (inverse CDF) for beta distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, betaincinv(parameters.alpha, parameters.beta, p))

    def cquantile(parameters: Parametrization, p: NumericArray) -> NumericArray:
        p = check_probability(p)
        parameters = cast(_Standard, parameters)
        return cast(NumericArray, betainccinv(parameters.alpha, parameters.beta, p))

    def mgf(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function, Kummer's ``1F1(α; α + β; t)``."""
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        return cast(NumericArray, hyp1f1(alpha, alpha + beta, t))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.alpha / (parameters.alpha + parameters.beta)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        s = alpha + beta
        return (alpha * beta) / (s**2 * (s + 1.0))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        if alpha == beta:
            return 0.0
        s = alpha + beta
        return (2.0 * (beta - alpha) * math.sqrt(s + 1.0)) / ((s + 2.0) * math.sqrt(alpha * beta))

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of beta distribution."""
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        s = alpha + beta
        p = alpha * beta
        ex = 6.0 * ((alpha - beta) ** 2 * (s + 1.0) - p * (s + 2.0)) / (p * (s + 2.0) * (s + 3.0))
        return ex if excess else ex + 3.0

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """
        Mode of beta distribution.

        Raises
        ------
        UndefinedStatisticError
            Unless both shape parameters exceed 1.
        """
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        if not (alpha > 1.0 and beta > 1.0):
            raise UndefinedStatisticError("Beta mode is defined only when alpha > 1 and beta > 1")
        return (alpha - 1.0) / (alpha + beta - 2.0)

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        s = alpha + beta
        return float(
            betaln(alpha, beta)
            - (alpha - 1.0) * digamma(alpha)
            - (beta - 1.0) * digamma(beta)
            + (s - 2.0) * digamma(s)
        )

    def meanlogx_func(parameters: Parametrization, _: Any) -> float:
        """``E[log X]``."""
        parameters = cast(_Standard, parameters)
        return float(digamma(parameters.alpha) - digamma(parameters.alpha + parameters.beta))

    def varlogx_func(parameters: Parametrization, _: Any) -> float:
        """``Var[log X]``."""
        parameters = cast(_Standard, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        return float(polygamma(1, alpha) - polygamma(1, alpha + beta))

    def _support(_: Parametrization) -> ContinuousSupport:
        return interval(0.0, 1.0)

    def _variate(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        g1 = rng.standard_gamma(parameters.alpha, n)
        g2 = rng.standard_gamma(parameters.beta, n)
        return cast(NumericArray, g1 / (g1 + g2))

    def fit_moments(data: Any, weights: Any = None) -> dict[str, float]:
        """Match the sample mean and (unbiased) variance."""
        x = as_sample(data)
        x_bar = float(np.mean(x))
        v_bar = float(np.var(x, ddof=1)) if x.size > 1 else math.nan
        # a degenerate sample yields NaN shapes, rejected by the constraints
        common = x_bar * (1.0 - x_bar) / v_bar - 1.0 if v_bar > 0 else math.nan
        return {"alpha": x_bar * common, "beta": (1.0 - x_bar) * common}

    Beta = ParametricFamily(
        name=FamilyName.BETA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "meanPrecision"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.CCDF: ccdf,
            CharacteristicName.QUANTILE: quantile,
            CharacteristicName.CQUANTILE: cquantile,
            CharacteristicName.MGF: mgf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
            CharacteristicName.MEANLOGX: meanlogx_func,
            CharacteristicName.VARLOGX: varlogx_func,
        },
        sampling_strategy=VariateSamplingStrategy(_variate),
        support_by_parametrization=_support,
        estimators={MOMENTS: fit_moments},
    )
    Beta.__doc__ = BETA_DOC

    @parametrization(family=Beta, name="standard")
    class _Standard(Parametrization):
        """
        Shape parametrization of beta distribution.

        Parameters
        ----------
        alpha : float
            First shape parameter (α), 1 if omitted
        beta : float, optional
            Second shape parameter (β), equal to α if omitted
        """

        alpha: float = 1.0
        beta: float | None = None

        def _resolve_defaults(self) -> None:
            if self.beta is None:
                object.__setattr__(self, "beta", self.alpha)

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    @parametrization(family=Beta, name="meanPrecision")
    class _MeanPrecision(Parametrization):
        """
        Mean-precision parametrization of beta distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution, in (0, 1)
        phi : float
            Precision α + β
        """

        mu: float
        phi: float

        @constraint(description="0 < mu < 1")
        def check_mu_in_unit_interval(self) -> bool:
            return 0 < self.mu < 1

        @constraint(description="phi > 0")
        def check_phi_positive(self) -> bool:
            return self.phi > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Standard(alpha=self.mu * self.phi, beta=(1.0 - self.mu) * self.phi)

    ParametricFamilyRegister.register(Beta)
