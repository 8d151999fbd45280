"""
Distributions subpackage

Interfaces and default implementations for probability distributions used by
PySATL univariate:

- computation primitives and exact conversions (:mod:`.computation`);
- distribution protocol (:mod:`.distribution`);
- characteristic graph registry (:mod:`.registry`);
- sampling protocol, array-backed samples and random sources (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`);
- continuous supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .registry import (
    DEFAULT_COMPUTATION_KEY,
    distribution_type_register,
    reset_characteristic_registry,
)
from .sampling import ArraySample, Sample, resolve_rng
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
    VariateSamplingStrategy,
)
from .support import ContinuousSupport, Support, half_line, interval, real_line

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    # distribution
    "Distribution",
    # sampling
    "Sample",
    "ArraySample",
    "resolve_rng",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    "VariateSamplingStrategy",
    # support
    "Support",
    "ContinuousSupport",
    "real_line",
    "half_line",
    "interval",
    # registry
    "DEFAULT_COMPUTATION_KEY",
    "distribution_type_register",
    "reset_characteristic_registry",
]
