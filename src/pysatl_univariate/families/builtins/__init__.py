"""
Built-in distribution families for PySATL.

This package contains implementations of standard statistical distribution families
that are available by default in PySATL univariate.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_univariate.families.builtins.continuous import (
    configure_beta_family,
    configure_cauchy_family,
    configure_erlang_family,
    configure_exponential_family,
    configure_fdist_family,
    configure_generalized_pareto_family,
    configure_levy_family,
    configure_logistic_family,
    configure_lognormal_family,
    configure_noncentral_beta_family,
    configure_normal_family,
    configure_pareto_family,
    configure_uniform_family,
)

__all__ = [
    "configure_beta_family",
    "configure_cauchy_family",
    "configure_erlang_family",
    "configure_exponential_family",
    "configure_fdist_family",
    "configure_generalized_pareto_family",
    "configure_levy_family",
    "configure_logistic_family",
    "configure_lognormal_family",
    "configure_noncentral_beta_family",
    "configure_normal_family",
    "configure_pareto_family",
    "configure_uniform_family",
]
