"""
Distribution Interface
======================

This module defines the public :class:`Distribution` protocol used throughout
the library. Besides the structural members a concrete distribution provides
(type, analytical computations, strategies, support), the protocol carries the
user-facing method surface:

- density and tail evaluation: ``pdf``, ``logpdf``, ``cdf``, ``ccdf``,
  ``logcdf``, ``logccdf``;
- inverse functions: ``quantile``, ``cquantile``, ``invlogcdf``, ``invlogccdf``;
- transforms: ``mgf``, ``cf``;
- statistics: ``mean``, ``var``, ``std``, ``skewness``, ``kurtosis``, ``mode``,
  ``median``, ``entropy``;
- parameter accessors: ``location``, ``scale``, ``shape``, ``rate``;
- sampling: ``sample`` and ``rand``.

Notes
-----
- Every method resolves its characteristic through the computation strategy,
  so characteristics a distribution lacks analytically are derived on demand.
- Point functions accept scalars or array-likes. Scalars produce Python
  scalars, arrays produce NumPy arrays of the same shape.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_univariate.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_univariate.distributions.computation import AnalyticalComputation
    from pysatl_univariate.distributions.sampling import RandomSource, Sample
    from pysatl_univariate.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_univariate.distributions.support import Support
    from pysatl_univariate.types import (
        DistributionType,
        GenericCharacteristicName,
        Number,
        NumericArray,
    )

CN = CharacteristicName


def _as_input(x: Any) -> Any:
    arr = np.asarray(x)
    if not np.issubdtype(arr.dtype, np.inexact):
        arr = arr.astype(np.float64)
    return arr


def _as_output(value: Any) -> Any:
    arr = np.asarray(value)
    if arr.ndim == 0:
        return arr.item()
    return arr


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and fitters."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name)(value, **options)

    def _evaluate(self, characteristic_name: GenericCharacteristicName, x: Any) -> Any:
        return _as_output(self.calculate_characteristic(characteristic_name, _as_input(x)))

    def _statistic(self, characteristic_name: GenericCharacteristicName, **options: Any) -> Any:
        return _as_output(self.calculate_characteristic(characteristic_name, None, **options))

    # Density and tails

    def pdf(self, x: Number | NumericArray) -> Any:
        """Probability density at ``x``."""
        return self._evaluate(CN.PDF, x)

    def logpdf(self, x: Number | NumericArray) -> Any:
        """Logarithm of the probability density at ``x``."""
        return self._evaluate(CN.LOGPDF, x)

    def cdf(self, x: Number | NumericArray) -> Any:
        """``P(X <= x)``."""
        return self._evaluate(CN.CDF, x)

    def ccdf(self, x: Number | NumericArray) -> Any:
        """``P(X > x)``."""
        return self._evaluate(CN.CCDF, x)

    def logcdf(self, x: Number | NumericArray) -> Any:
        """``log P(X <= x)``."""
        return self._evaluate(CN.LOGCDF, x)

    def logccdf(self, x: Number | NumericArray) -> Any:
        """``log P(X > x)``."""
        return self._evaluate(CN.LOGCCDF, x)

    # Inverse functions

    def quantile(self, p: Number | NumericArray) -> Any:
        """
        Inverse of :meth:`cdf`.

        Parameters
        ----------
        p : Number or NumericArray
            Probabilities in ``[0, 1]``.

        Raises
        ------
        ValueError
            If any probability is outside ``[0, 1]``.
        """
        return self._evaluate(CN.QUANTILE, p)

    def cquantile(self, p: Number | NumericArray) -> Any:
        """Inverse of :meth:`ccdf`."""
        return self._evaluate(CN.CQUANTILE, p)

    def invlogcdf(self, lp: Number | NumericArray) -> Any:
        """Inverse of :meth:`logcdf`; ``lp`` must lie in ``[-inf, 0]``."""
        return self._evaluate(CN.INVLOGCDF, lp)

    def invlogccdf(self, lp: Number | NumericArray) -> Any:
        """Inverse of :meth:`logccdf`; ``lp`` must lie in ``[-inf, 0]``."""
        return self._evaluate(CN.INVLOGCCDF, lp)

    # Transforms

    def mgf(self, t: Number | NumericArray) -> Any:
        """Moment generating function ``E[exp(tX)]``."""
        return self._evaluate(CN.MGF, t)

    def cf(self, t: Number | NumericArray) -> Any:
        """Characteristic function ``E[exp(itX)]``."""
        return self._evaluate(CN.CF, t)

    # Statistics

    def mean(self) -> float:
        return self._statistic(CN.MEAN)

    def var(self) -> float:
        return self._statistic(CN.VAR)

    def std(self) -> float:
        return self._statistic(CN.STD)

    def skewness(self) -> float:
        return self._statistic(CN.SKEW)

    def kurtosis(self, excess: bool = True) -> float:
        """
        Kurtosis of the distribution.

        Parameters
        ----------
        excess : bool, default True
            Return the excess kurtosis (raw kurtosis minus 3). Pass ``False`` for the
            raw fourth standardized moment.
        """
        return self._statistic(CN.KURT, excess=excess)

    def mode(self) -> float:
        return self._statistic(CN.MODE)

    def median(self) -> float:
        return self._statistic(CN.MEDIAN)

    def entropy(self) -> float:
        """Differential entropy in nats."""
        return self._statistic(CN.ENTROPY)

    # Parameter accessors

    def location(self) -> float:
        return self._statistic(CN.LOCATION)

    def scale(self) -> float:
        return self._statistic(CN.SCALE)

    def shape(self) -> float:
        return self._statistic(CN.SHAPE)

    def rate(self) -> float:
        return self._statistic(CN.RATE)

    # Sampling

    def sample(self, n: int, rng: RandomSource = None, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, rng=rng, **options)

    def rand(self, n: int | None = None, rng: RandomSource = None) -> Any:
        """
        Draw random variates.

        Parameters
        ----------
        n : int, optional
            Number of variates. If omitted, a single float is returned.
        rng : numpy.random.Generator, int or None
            Random source; see :func:`~pysatl_univariate.distributions.sampling.resolve_rng`.

        Returns
        -------
        float or numpy.ndarray
            One variate, or a 1D array of ``n`` variates.
        """
        if n is None:
            return float(self.sample(1, rng=rng).array[0, 0])
        return self.sample(n, rng=rng).array[:, 0]
