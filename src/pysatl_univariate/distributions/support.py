from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Protocol, overload, runtime_checkable

from pysatl_univariate.types import Interval1D

if TYPE_CHECKING:
    from pysatl_univariate.types import BoolArray, Number, NumericArray


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """
    Interval support of a univariate continuous distribution.

    Densities vanish outside of it, and the cumulative distribution function
    equals ``0`` to the left and ``1`` to the right of it.
    """

    @property
    def is_bounded(self) -> bool:
        return math.isfinite(self.left) and math.isfinite(self.right)


def real_line() -> ContinuousSupport:
    """Support ``(-inf, inf)``."""
    return ContinuousSupport()


def half_line(left: float = 0.0, *, left_closed: bool = True) -> ContinuousSupport:
    """Support ``[left, inf)`` (or ``(left, inf)`` if ``left_closed`` is false)."""
    return ContinuousSupport(left=float(left), left_closed=left_closed)


def interval(left: float, right: float) -> ContinuousSupport:
    """Closed support ``[left, right]``."""
    return ContinuousSupport(
        left=float(left), right=float(right), left_closed=True, right_closed=True
    )


__all__ = [
    "Support",
    "ContinuousSupport",
    "real_line",
    "half_line",
    "interval",
]
