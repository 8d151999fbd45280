"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_univariate.families.builtins.continuous.beta import configure_beta_family
from pysatl_univariate.families.builtins.continuous.cauchy import configure_cauchy_family
from pysatl_univariate.families.builtins.continuous.erlang import configure_erlang_family
from pysatl_univariate.families.builtins.continuous.exponential import (
    configure_exponential_family,
)
from pysatl_univariate.families.builtins.continuous.fdist import configure_fdist_family
from pysatl_univariate.families.builtins.continuous.generalized_pareto import (
    configure_generalized_pareto_family,
)
from pysatl_univariate.families.builtins.continuous.levy import configure_levy_family
from pysatl_univariate.families.builtins.continuous.logistic import configure_logistic_family
from pysatl_univariate.families.builtins.continuous.lognormal import configure_lognormal_family
from pysatl_univariate.families.builtins.continuous.noncentral_beta import (
    configure_noncentral_beta_family,
)
from pysatl_univariate.families.builtins.continuous.normal import configure_normal_family
from pysatl_univariate.families.builtins.continuous.pareto import configure_pareto_family
from pysatl_univariate.families.builtins.continuous.uniform import configure_uniform_family

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
