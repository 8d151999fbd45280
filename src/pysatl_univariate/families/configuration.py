"""
Distribution Families Configuration
====================================

This module registers the builtin univariate continuous families of
PySATL univariate in the global :class:`ParametricFamilyRegister`:

Beta, Cauchy, Erlang, Exponential, FDist, GeneralizedPareto, Levy, Logistic,
LogNormal, NoncentralBeta, Normal, Pareto and Uniform.

Notes
-----
- Registration is lazy and cached: the first call to
  :func:`configure_families_register` (or :func:`get_family`) configures all
  families, subsequent calls are no-ops.
- Characteristics a family does not define analytically are derived through the
  characteristic graph, see :mod:`pysatl_univariate.distributions.registry`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from pysatl_univariate.families.builtins import (
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
from pysatl_univariate.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from pysatl_univariate.families.parametric_family import ParametricFamily

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_beta_family()
    configure_cauchy_family()
    configure_erlang_family()
    configure_exponential_family()
    configure_fdist_family()
    configure_generalized_pareto_family()
    configure_levy_family()
    configure_logistic_family()
    configure_lognormal_family()
    configure_noncentral_beta_family()
    configure_normal_family()
    configure_pareto_family()
    configure_uniform_family()
    register = ParametricFamilyRegister()
    logger.debug("Configured families register: %s", ", ".join(register.names()))
    return register


def get_family(name: str) -> ParametricFamily:
    """
    Fetch a builtin family by name, configuring the register on first use.

    Parameters
    ----------
    name : str
        Family name, e.g. ``FamilyName.NORMAL`` or ``"Normal"``.

    Raises
    ------
    ValueError
        If no family with this name is registered.
    """
    return configure_families_register().get(name)


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
