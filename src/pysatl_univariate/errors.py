"""
Exception taxonomy shared by families, strategies and estimators.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ParameterConstraintError(ValueError):
    """
    Raised when parameters violate the constraints of their parametrization.

    Parameters
    ----------
    descriptions : Sequence[str]
        Descriptions of every violated constraint.
    """

    def __init__(self, descriptions: Sequence[str]) -> None:
        self.descriptions = tuple(descriptions)
        if len(self.descriptions) == 1:
            message = f'Constraint "{self.descriptions[0]}" does not hold'
        else:
            listed = ", ".join(f'"{d}"' for d in self.descriptions)
            message = f"Constraints {listed} do not hold"
        super().__init__(message)


class UndefinedStatisticError(ValueError):
    """Raised when a statistic has no value for the given parameters."""


class EmptySampleError(ValueError):
    """Raised when an estimator receives no observations."""


class CharacteristicNotAvailableError(RuntimeError):
    """
    Raised when a characteristic is neither analytical for a distribution
    nor derivable from its analytical characteristics.
    """


__all__ = [
    "ParameterConstraintError",
    "UndefinedStatisticError",
    "EmptySampleError",
    "CharacteristicNotAvailableError",
]
