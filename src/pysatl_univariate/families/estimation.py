"""
Estimation helpers for parametric families.

This module provides the building blocks used by the builtin families to fit
parameters from data:

- :class:`SufficientStats` : marker base for sufficient statistics;
- :class:`ExponentialStats` : weighted sum and total weight of a sample;
- :func:`as_sample` / :func:`as_weights` : input normalisation with the empty
  sample and weight checks shared by all estimators.

Estimators themselves are plain functions ``(data, weights=None)`` returning
the estimated base parameter values by field name. They are registered on a
family under a method name (``"mle"`` or ``"moments"``).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate.errors import EmptySampleError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    import numpy.typing as npt

    type Estimator = Callable[..., Mapping[str, Any]]
    type StatsBuilder = Callable[..., SufficientStats]

MLE = "mle"
MOMENTS = "moments"


class SufficientStats:
    """Base class for sufficient statistics of a family."""

    __slots__ = ()


@dataclass(slots=True, frozen=True)
class ExponentialStats(SufficientStats):
    """
    Sufficient statistics of the exponential family.

    Parameters
    ----------
    sx : float
        (Weighted) sum of the observations.
    sw : float
        Total weight; the number of observations for an unweighted sample.
    """

    sx: float
    sw: float

    @classmethod
    def from_sample(cls, data: Any, weights: Any = None) -> ExponentialStats:
        x = as_sample(data)
        if weights is None:
            return cls(sx=float(np.sum(x)), sw=float(x.size))
        w = as_weights(weights, x)
        return cls(sx=float(np.dot(x, w)), sw=float(np.sum(w)))


def as_sample(data: Any) -> npt.NDArray[np.float64]:
    """
    Flatten observations into a 1D float array.

    Raises
    ------
    EmptySampleError
        If there are no observations.
    """
    if hasattr(data, "array") and not isinstance(data, np.ndarray):
        data = data.array
    x = np.asarray(data, dtype=np.float64).ravel()
    if x.size == 0:
        raise EmptySampleError("Cannot fit a distribution to an empty sample")
    return x


def as_weights(weights: Any, x: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Validate sample weights against observations ``x``.

    Raises
    ------
    ValueError
        If shapes differ, a weight is negative or all weights are zero.
    """
    w = np.asarray(weights, dtype=np.float64).ravel()
    if w.shape != x.shape:
        raise ValueError(
            f"Weights must have the same length as the sample: {w.size} != {x.size}"
        )
    if np.any(w < 0):
        raise ValueError("Weights must be non-negative")
    if not np.sum(w) > 0:
        raise EmptySampleError("Total sample weight must be positive")
    return w


__all__ = [
    "MLE",
    "MOMENTS",
    "SufficientStats",
    "ExponentialStats",
    "as_sample",
    "as_weights",
]
