"""
Parametric Families module for working with statistical distribution families.

This package provides the framework for defining, registering and fitting
parametric families of univariate continuous distributions, together with the
builtin families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import configure_families_register, get_family, reset_families_register
from .distribution import ParametricFamilyDistribution
from .estimation import MLE, MOMENTS, ExponentialStats, SufficientStats
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParametricFamilyDistribution",
    "SufficientStats",
    "ExponentialStats",
    "MLE",
    "MOMENTS",
    "constraint",
    "parametrization",
    "configure_families_register",
    "get_family",
    "reset_families_register",
]
