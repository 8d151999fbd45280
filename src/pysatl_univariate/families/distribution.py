"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_univariate.distributions.distribution import Distribution
from pysatl_univariate.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_univariate.distributions.computation import AnalyticalComputation
    from pysatl_univariate.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_univariate.distributions.support import Support
    from pysatl_univariate.families.parametric_family import ParametricFamily
    from pysatl_univariate.families.parametrizations import Parametrization
    from pysatl_univariate.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(slots=True, frozen=True)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Represents a concrete distribution with specific, validated parameter
    values. Instances are immutable and hold no random state; two instances
    compare equal when their family, parameters and support coincide.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values as given by the user.
    base_parameters : Parametrization
        The same parameters converted to the family's base parametrization.
    _support : Support or None
        Support of this distribution.
    _family : ParametricFamily or None
        Family that created the instance; looked up in the register if omitted.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    base_parameters: Parametrization
    _support: Support | None
    _family: ParametricFamily | None = field(default=None, compare=False, repr=False)
    _analytical: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = field(
        default_factory=dict, init=False, compare=False, repr=False
    )

    @property
    def distribution_type(self) -> DistributionType:
        """Get the distribution type."""
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        """
        Get the parametric family this distribution belongs to.

        Returns
        -------
        ParametricFamily
            The parametric family of this distribution.
        """
        if self._family is not None:
            return self._family
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parametrization_name(self) -> str:
        """Name of the parametrization the instance was created with."""
        return self.parameters.name

    @property
    def params(self) -> tuple[Any, ...]:
        """Base parameter values in canonical order."""
        return self.base_parameters.values

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Get analytical computations for this distribution.

        Lazily computed on first access and cached per instance.
        """
        if not self._analytical:
            self._analytical.update(self.family._build_analytical_computations(self.parameters))
        return self._analytical

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        """Get the sampling strategy for this distribution."""
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        """Get the computation strategy for this distribution."""
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        """Get the support of this distribution."""
        return self._support

    def __str__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.base_parameters.parameters.items())
        return f"{self.family_name}({values})"
