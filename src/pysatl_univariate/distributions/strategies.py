"""
Computation and Sampling Strategies
===================================

This module defines the pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` : resolves characteristic methods.
- :class:`DefaultComputationStrategy` : returns analytical characteristics and
  derives the others by walking the characteristic graph.
- :class:`SamplingStrategy` : draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` : draws ``(n, 1)`` samples by
  applying ``quantile`` to i.i.d. uniform variates.
- :class:`VariateSamplingStrategy` : draws ``(n, 1)`` samples from a
  family-specific transform of standard variates.

Notes
-----
Strategies hold no random state: the random source is passed to
:meth:`SamplingStrategy.sample` on every call.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_univariate.errors import CharacteristicNotAvailableError
from pysatl_univariate.types import CharacteristicName

from .registry import distribution_type_register
from .sampling import ArraySample, resolve_rng

if TYPE_CHECKING:
    from collections.abc import Callable

    import numpy.typing as npt

    from pysatl_univariate.distributions.computation import (
        AnalyticalComputation,
        FittedComputationMethod,
    )
    from pysatl_univariate.types import GenericCharacteristicName

    from .distribution import Distribution
    from .sampling import RandomSource, Sample

    type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]
    type Variate = Callable[[Any, np.random.Generator, int], npt.NDArray[np.floating[Any]]]

logger = logging.getLogger(__name__)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else:
       a) get the graph for the distribution type,
       b) find the shortest conversion chain starting at any analytical
          characteristic and ending at the target,
       c) fit the edges along the chain, each one on top of the previous.

    Raises
    ------
    CharacteristicNotAvailableError
        If the distribution has no analytical base or no chain reaches the target.
    """

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitter(s) when conversions are required.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        if not analytical:
            raise CharacteristicNotAvailableError(
                "Distribution provides no analytical computations to ground conversions."
            )

        reg = distribution_type_register().get(distr.distribution_type)
        found = reg.find_shortest_path(analytical.keys(), state)
        if found is None:
            raise CharacteristicNotAvailableError(
                f"Characteristic '{state}' is not available: no conversion path from "
                f"{sorted(str(name) for name in analytical)}."
            )

        origin, path = found
        method: Method[In, Out] = analytical[origin]
        for edge in path:
            method = edge.fit(distr, source=method, **options)

        logger.debug(
            "Derived '%s' from '%s' via %s",
            state,
            origin,
            " -> ".join(str(edge.target) for edge in path),
        )
        return method


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(
        self, n: int, distr: Distribution, rng: RandomSource = None, **options: Any
    ) -> Sample: ...


def _check_size(n: int) -> int:
    if n < 0:
        raise ValueError(f"Sample size must be non-negative, got {n}")
    return int(n)


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``quantile`` and applies it to
    i.i.d. uniforms ``U ~ U(0, 1)``.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(
        self, n: int, distr: Distribution, rng: RandomSource = None, **options: Any
    ) -> ArraySample:
        n = _check_size(n)
        quantile = distr.query_method(CharacteristicName.QUANTILE, **options)
        U = resolve_rng(rng).random(n)
        vals = np.asarray(quantile(U), dtype=np.float64).reshape(n, 1)
        return ArraySample(vals)


class VariateSamplingStrategy(SamplingStrategy):
    """
    Sampler built from a transform of standard variates.

    Parameters
    ----------
    variate : Callable
        ``variate(parameters, rng, n)`` returning ``n`` draws, where
        ``parameters`` is the distribution's base parametrization object.
    """

    def __init__(self, variate: Variate) -> None:
        self.variate = variate

    def sample(
        self, n: int, distr: Distribution, rng: RandomSource = None, **options: Any
    ) -> ArraySample:
        n = _check_size(n)
        parameters = getattr(distr, "base_parameters", None)
        if parameters is None:
            raise TypeError("VariateSamplingStrategy requires a parametric distribution.")
        vals = np.asarray(self.variate(parameters, resolve_rng(rng), n), dtype=np.float64)
        return ArraySample(vals.reshape(n, 1))
