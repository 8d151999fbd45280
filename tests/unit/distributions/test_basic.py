from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg

from pysatl_univariate.distributions.computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from pysatl_univariate.distributions.support import interval, real_line
from pysatl_univariate.special import check_probability
from pysatl_univariate.types import CharacteristicName, Kind
from tests.utils.mocks import (
    StandaloneEuclideanUnivariateDistribution,
)

if TYPE_CHECKING:
    from collections.abc import Sequence


class DistributionTestBase:
    PDF = CharacteristicName.PDF
    LOGPDF = CharacteristicName.LOGPDF
    CDF = CharacteristicName.CDF
    CCDF = CharacteristicName.CCDF
    LOGCDF = CharacteristicName.LOGCDF
    LOGCCDF = CharacteristicName.LOGCCDF
    QUANTILE = CharacteristicName.QUANTILE
    CQUANTILE = CharacteristicName.CQUANTILE
    INVLOGCDF = CharacteristicName.INVLOGCDF
    INVLOGCCDF = CharacteristicName.INVLOGCCDF
    MEDIAN = CharacteristicName.MEDIAN
    VAR = CharacteristicName.VAR
    STD = CharacteristicName.STD

    def make_uniform_quantile_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        def uniform_quantile(p: Any, **_: Any) -> Any:
            return check_probability(p)

        quantile_func = cast(Callable[[Any, KwArg(Any)], Any], uniform_quantile)
        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.QUANTILE, func=quantile_func),
            ],
            support=interval(0, 1),
        )

    def make_logistic_cdf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        def logistic_cdf(x: Any, **_: Any) -> Any:
            return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=float)))

        logistic_cdf_func = cast(Callable[[Any, KwArg(Any)], Any], logistic_cdf)
        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.CDF, func=logistic_cdf_func),
            ],
            support=real_line(),
        )

    def make_uniform_pdf_distribution(
        self,
    ) -> StandaloneEuclideanUnivariateDistribution:
        def uniform_pdf(x: Any, **_: Any) -> Any:
            x = np.asarray(x, dtype=float)
            return np.where((x >= 0.0) & (x <= 1.0), 1.0, 0.0)

        uniform_pdf_func = cast(Callable[[Any, KwArg(Any)], Any], uniform_pdf)

        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, Any](target=self.PDF, func=uniform_pdf_func),
            ],
            support=interval(0, 1),
        )

    def make_variance_distribution(
        self, variance: float
    ) -> StandaloneEuclideanUnivariateDistribution:
        return StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[Any, float](target=self.VAR, func=lambda _, **__: variance),
            ],
        )

    @staticmethod
    def make_fictitious_computation_method(
        target: str, sources: Sequence[str]
    ) -> ComputationMethod[Any, Any]:
        def _fitted_const(val: Any) -> FittedComputationMethod[Any, Any]:
            return FittedComputationMethod[Any, Any](
                target=target, sources=sources, func=lambda *_a, **_k: val
            )

        return ComputationMethod(
            target=target, sources=sources, fitter=lambda *_a, **_k: _fitted_const(None)
        )
