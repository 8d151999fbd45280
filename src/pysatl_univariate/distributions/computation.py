"""
Computation Primitives and Conversions
======================================

This module defines the core building blocks used to compute distribution
characteristics:

- :class:`AnalyticalComputation` : an analytical callable provided by a
  distribution directly.
- :class:`FittedComputationMethod` : a fitted conversion method
  (e.g., from ``cdf`` to ``ccdf``) ready to be called.
- :class:`ComputationMethod` : a factory that *fits* a conversion given a
  distribution and returns :class:`FittedComputationMethod`.

It also exposes the canonical univariate continuous conversions. They are
exact identities between characteristics (complements, logarithms and
inverse maps), never numerical approximations:

- ``pdf <-> logpdf``
- ``cdf <-> ccdf``, ``cdf <-> logcdf``, ``ccdf <-> logccdf``,
  ``logcdf <-> logccdf``
- ``quantile <-> cquantile``, ``quantile <-> invlogcdf``,
  ``cquantile <-> invlogccdf``
- ``quantile -> median``, ``var -> std``, ``varlogx -> stdlogx``

Notes
-----
- All callables accept scalars or arrays and work element-wise.
- ``**options`` are forwarded unchanged to the source characteristic.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
from mypy_extensions import KwArg

from pysatl_univariate.special import check_log_probability, check_probability, log1mexp
from pysatl_univariate.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_univariate.distributions.distribution import Distribution

    type SourceMethod = Callable[..., Any]


@runtime_checkable
class Computation[In, Out](Protocol):
    """Callable for a single characteristic.

    Attributes
    ----------
    target : str
        The characteristic name this computation represents.

    Methods
    -------
    __call__(data, **options)
        Evaluate the characteristic at ``data``.
    """

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """Fitted conversion method (ready-to-use).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary conversions use length 1).
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the fitted conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the fitted conversion."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """Conversion method factory (to be fitted).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary for current graph edges).
    fitter : Callable
        Fitter ``(distribution, source=None, **options)`` that prepares a
        callable conversion for the given distribution. When ``source`` is
        ``None`` the fitter resolves the source characteristic itself.

    Methods
    -------
    fit(distribution, source=None, **options)
        Fit and return a :class:`FittedComputationMethod`.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[..., FittedComputationMethod[In, Out]]

    def fit(
        self,
        distribution: Distribution,
        source: SourceMethod | None = None,
        **options: Any,
    ) -> FittedComputationMethod[In, Out]:
        """Fit and return a :class:`FittedComputationMethod`."""
        return self.fitter(distribution, source=source, **options)


def _resolve(
    distribution: Distribution, name: GenericCharacteristicName, source: SourceMethod | None
) -> SourceMethod:
    """Return ``source`` if given, otherwise resolve ``name`` via the distribution."""
    if source is not None:
        return source
    return distribution.query_method(name)


def output_conversion(
    target: GenericCharacteristicName,
    source_name: GenericCharacteristicName,
    transform: Callable[[Any], Any],
) -> ComputationMethod[Any, Any]:
    """
    Build a conversion that post-processes the value of another characteristic.

    Parameters
    ----------
    target : str
        Characteristic produced by the conversion.
    source_name : str
        Characteristic consumed by the conversion.
    transform : Callable
        Element-wise map applied to the source value.

    Returns
    -------
    ComputationMethod
        Unary conversion ``source_name -> target``.
    """

    def _fit(
        distribution: Distribution, source: SourceMethod | None = None, **_: Any
    ) -> FittedComputationMethod[Any, Any]:
        src = _resolve(distribution, source_name, source)

        def _impl(data: Any, **options: Any) -> Any:
            with np.errstate(divide="ignore", invalid="ignore"):
                return transform(src(data, **options))

        return FittedComputationMethod(target=target, sources=[source_name], func=_impl)

    return ComputationMethod(target=target, sources=[source_name], fitter=_fit)


def input_conversion(
    target: GenericCharacteristicName,
    source_name: GenericCharacteristicName,
    transform: Callable[[Any], Any],
) -> ComputationMethod[Any, Any]:
    """
    Build a conversion that evaluates another characteristic at mapped input.

    Parameters
    ----------
    target : str
        Characteristic produced by the conversion.
    source_name : str
        Characteristic consumed by the conversion.
    transform : Callable
        Map applied to the input before calling the source. It is also
        responsible for validating the input domain of ``target``.

    Returns
    -------
    ComputationMethod
        Unary conversion ``source_name -> target``.
    """

    def _fit(
        distribution: Distribution, source: SourceMethod | None = None, **_: Any
    ) -> FittedComputationMethod[Any, Any]:
        src = _resolve(distribution, source_name, source)

        def _impl(data: Any, **options: Any) -> Any:
            return src(transform(data), **options)

        return FittedComputationMethod(target=target, sources=[source_name], func=_impl)

    return ComputationMethod(target=target, sources=[source_name], fitter=_fit)


def _complement_probability(p: Any) -> Any:
    return 1.0 - check_probability(p)


def _exp_log_probability(lp: Any) -> Any:
    return np.exp(check_log_probability(lp))


def _log_probability(p: Any) -> Any:
    with np.errstate(divide="ignore"):
        return np.log(check_probability(p))


def _one_minus(x: Any) -> Any:
    return 1.0 - np.asarray(x)


CN = CharacteristicName

pdf_to_logpdf_1C = output_conversion(CN.LOGPDF, CN.PDF, np.log)
logpdf_to_pdf_1C = output_conversion(CN.PDF, CN.LOGPDF, np.exp)

cdf_to_ccdf_1C = output_conversion(CN.CCDF, CN.CDF, _one_minus)
ccdf_to_cdf_1C = output_conversion(CN.CDF, CN.CCDF, _one_minus)
cdf_to_logcdf_1C = output_conversion(CN.LOGCDF, CN.CDF, np.log)
logcdf_to_cdf_1C = output_conversion(CN.CDF, CN.LOGCDF, np.exp)
ccdf_to_logccdf_1C = output_conversion(CN.LOGCCDF, CN.CCDF, np.log)
logccdf_to_ccdf_1C = output_conversion(CN.CCDF, CN.LOGCCDF, np.exp)
logcdf_to_logccdf_1C = output_conversion(CN.LOGCCDF, CN.LOGCDF, log1mexp)
logccdf_to_logcdf_1C = output_conversion(CN.LOGCDF, CN.LOGCCDF, log1mexp)

quantile_to_cquantile_1C = input_conversion(CN.CQUANTILE, CN.QUANTILE, _complement_probability)
cquantile_to_quantile_1C = input_conversion(CN.QUANTILE, CN.CQUANTILE, _complement_probability)
quantile_to_invlogcdf_1C = input_conversion(CN.INVLOGCDF, CN.QUANTILE, _exp_log_probability)
invlogcdf_to_quantile_1C = input_conversion(CN.QUANTILE, CN.INVLOGCDF, _log_probability)
cquantile_to_invlogccdf_1C = input_conversion(CN.INVLOGCCDF, CN.CQUANTILE, _exp_log_probability)
invlogccdf_to_cquantile_1C = input_conversion(CN.CQUANTILE, CN.INVLOGCCDF, _log_probability)

quantile_to_median_1C = input_conversion(CN.MEDIAN, CN.QUANTILE, lambda _: 0.5)
var_to_std_1C = output_conversion(CN.STD, CN.VAR, np.sqrt)
varlogx_to_stdlogx_1C = output_conversion(CN.STDLOGX, CN.VARLOGX, np.sqrt)

CONTINUOUS_CONVERSIONS: tuple[ComputationMethod[Any, Any], ...] = (
    pdf_to_logpdf_1C,
    logpdf_to_pdf_1C,
    cdf_to_ccdf_1C,
    ccdf_to_cdf_1C,
    cdf_to_logcdf_1C,
    logcdf_to_cdf_1C,
    ccdf_to_logccdf_1C,
    logccdf_to_ccdf_1C,
    logcdf_to_logccdf_1C,
    logccdf_to_logcdf_1C,
    quantile_to_cquantile_1C,
    cquantile_to_quantile_1C,
    quantile_to_invlogcdf_1C,
    invlogcdf_to_quantile_1C,
    cquantile_to_invlogccdf_1C,
    invlogccdf_to_cquantile_1C,
    quantile_to_median_1C,
    var_to_std_1C,
    varlogx_to_stdlogx_1C,
)
"""Conversions registered for univariate continuous distributions."""
