"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions, including support for multiple parameterizations, distribution
characteristics, sampling strategies, computation methods and estimators.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import logging
from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from pysatl_univariate.distributions.computation import AnalyticalComputation
from pysatl_univariate.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_univariate.families.distribution import ParametricFamilyDistribution
from pysatl_univariate.families.estimation import MLE, MOMENTS
from pysatl_univariate.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from pysatl_univariate.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_univariate.distributions.support import Support
    from pysatl_univariate.families.estimation import Estimator, StatsBuilder, SufficientStats
    from pysatl_univariate.families.parametrizations import (
        Parametrization,
    )
    from pysatl_univariate.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportArg = Callable[[Parametrization], Support | None] | None
    type SupportResolver = Callable[[Parametrization], Support | None]

logger = logging.getLogger(__name__)


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Represents a parametric family of distributions (e.g., normal, lognormal)
    that can be parameterized in different ways. Manages parametrizations,
    distribution characteristics and estimators, and provides factory methods
    for creating distribution instances.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type or function that infers type from base parametrization.
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is base parametrization).
    distr_characteristics : dict[str, dict[str, Callable] or Callable]
        Mapping from characteristic names to computation functions.
        Single functions are treated as defined for the base parametrization.
    sampling_strategy : SamplingStrategy, optional
        Strategy for sampling from distributions.
    computation_strategy : ComputationStrategy, optional
        Strategy for computing distribution characteristics.
    support_by_parametrization : Callable or None, optional
        Function that returns support for given base parameters.
    estimators : Mapping[str, Callable], optional
        Parameter estimators by method name (``"mle"``, ``"moments"``). Each is
        called as ``estimator(data, weights=None)`` and returns base parameter
        values by field name.
    sufficient_statistics : Callable, optional
        Builder ``(data, weights=None) -> SufficientStats``.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportArg = None,
        estimators: Mapping[str, Estimator] | None = None,
        sufficient_statistics: StatsBuilder | None = None,
    ):
        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )

        if support_by_parametrization is None:
            self._support_resolver: SupportResolver
            self._support_resolver = lambda _params: None
        else:
            self._support_resolver = support_by_parametrization

        # Ordered names; the first one is the base parametrization name
        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        # Runtime registry of parametrization classes
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )

        self._estimators: dict[str, Estimator] = dict(estimators or {})
        self._sufficient_statistics = sufficient_statistics

        def _process_char_val(
            value: dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ) -> dict[ParametrizationName, ParametrizedFunction]:
            return value if isinstance(value, dict) else {self.parametrization_names[0]: value}

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {key: _process_char_val(val) for key, val in distr_characteristics.items()}

        # Precompute analytical plan
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        base_name = self.base_parametrization_name
        for pname in self.parametrization_names:
            plan_for_p: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan_for_p[characteristic] = pname
                elif base_name in forms:
                    plan_for_p[characteristic] = base_name
            self._analytical_plan[pname] = plan_for_p

    def __repr__(self) -> str:
        return (
            f"ParametricFamily(name={self._name!r}, "
            f"parametrizations={self.parametrization_names})"
        )

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Get the base parametrization class.

        Raises
        ------
        ValueError
            If base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def support_resolver(self) -> SupportResolver:
        """Get the support resolver function."""
        return self._support_resolver

    @property
    def estimators(self) -> dict[str, Estimator]:
        """Get mapping from estimation method names to estimators."""
        return self._estimators

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Parameters
        ----------
        name : ParametrizationName
            Unique parametrization name.
        parametrization_class : type[Parametrization]
            Parametrization class to register.

        Raises
        ------
        ValueError
            If name is already registered.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """
        Convert parameters to the base parametrization.

        Parameters
        ----------
        parameters : Parametrization
            Parameters in any parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in base parametrization.
        """
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Build analytical computations for given parameters.

        Uses precomputed provider plan for efficient computation.
        """
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func_factory = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func_factory, params_obj),
            )

        return result

    def distribution(
        self,
        *parameters_values: Any,
        parametrization_name: str | None = None,
        **named_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        *parameters_values
            Parameter values in the declaration order of the parametrization.
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        **named_values
            Parameter values by field name.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        TypeError
            If a value is not a real number or arguments do not match the fields.
        ParameterConstraintError
            If parameters don't satisfy constraints.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(*parameters_values, **named_values)
        parameters.validate()
        base_parameters = self.to_base(parameters)
        distribution_type = self._distr_type(base_parameters)
        return ParametricFamilyDistribution(
            self.name,
            distribution_type,
            parameters,
            base_parameters,
            self.support_resolver(base_parameters),
            self,
        )

    def suffstats(self, data: Any, weights: Any = None) -> SufficientStats:
        """
        Compute sufficient statistics of ``data``.

        Raises
        ------
        NotImplementedError
            If the family defines no sufficient statistics.
        EmptySampleError
            If ``data`` is empty.
        """
        if self._sufficient_statistics is None:
            raise NotImplementedError(f"Family {self.name} defines no sufficient statistics")
        return self._sufficient_statistics(data, weights)

    def _estimate(self, method: str, data: Any, weights: Any) -> ParametricFamilyDistribution:
        logger.debug("Fitting %s with '%s' estimator", self.name, method)
        values = self._estimators[method](data, weights)
        return self.distribution(**values)

    def fit_mle(self, data: Any, weights: Any = None) -> ParametricFamilyDistribution:
        """
        Maximum likelihood estimate from a sample.

        Parameters
        ----------
        data : array_like or SufficientStats
            Observations, or sufficient statistics for families that define them.
        weights : array_like, optional
            Non-negative sample weights, where the estimator supports them.

        Raises
        ------
        NotImplementedError
            If the family has no maximum likelihood estimator.
        EmptySampleError
            If ``data`` is empty.
        ParameterConstraintError
            If the estimate lies outside the parameter domain.
        """
        if MLE not in self._estimators:
            raise NotImplementedError(f"Family {self.name} has no maximum likelihood estimator")
        return self._estimate(MLE, data, weights)

    def fit(self, data: Any) -> ParametricFamilyDistribution:
        """
        Fit the family to ``data``.

        Uses the maximum likelihood estimator when the family has one, otherwise
        the method of moments.

        Raises
        ------
        NotImplementedError
            If the family has no estimator at all.
        """
        for method in (MLE, MOMENTS):
            if method in self._estimators:
                return self._estimate(method, data, None)
        raise NotImplementedError(f"Family {self.name} has no estimator")

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        If you want to use this syntax and so that Mypy doesn't swear,
        you should mark your class as a dataclass.
        At the moment, Mypy cannot identify dataclass_transform if the decorator is a class method.

        Parameters
        ----------
        name : str
            Name of the parametrization.

        Returns
        -------
        Callable[[type[Parametrization]], type[Parametrization]]
            Class decorator for registering parametrizations.
        """
        from pysatl_univariate.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    __call__ = distribution
