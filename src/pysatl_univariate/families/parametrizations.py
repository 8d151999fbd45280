"""
Parameterization classes and specifications for distribution families.

This module provides the core abstractions for defining different parameterizations
of statistical distributions, including constraints validation, promotion of
parameter values to a common numeric type and conversion between
parameterization formats.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numbers
from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

import numpy as np

from pysatl_univariate.errors import ParameterConstraintError
from pysatl_univariate.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from dataclasses import Field
    from typing import Any, ClassVar

    from pysatl_univariate.families.parametric_family import ParametricFamily


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


def _annotation(f: Field[Any]) -> str:
    ann = f.type
    if isinstance(ann, str):
        return ann.replace(" ", "")
    return getattr(ann, "__name__", str(ann))


def _is_float_field(f: Field[Any]) -> bool:
    return _annotation(f) in ("float", "float|None")


def _is_int_field(f: Field[Any]) -> bool:
    return _annotation(f) in ("int", "int|None")


def _check_real(name: str, value: Any) -> None:
    if not isinstance(value, numbers.Real):
        raise TypeError(f"Parameter '{name}' must be a real number, got {type(value).__name__}")


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    This class defines the interface for parametrizations, including
    parameter validation and conversion to base parametrization format.

    Notes
    -----
    On construction, fields annotated as ``float`` are promoted to one common
    floating type: the NumPy result type of all of them, with integer-only
    inputs promoted to ``float64`` (stored as Python ``float``). Fields
    annotated as ``int`` keep integral values as Python ``int``.
    """

    # These attributes are set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    def __post_init__(self) -> None:
        self._resolve_defaults()
        self._promote()

    def _resolve_defaults(self) -> None:
        """Fill defaults that depend on other parameters (no-op by default)."""

    def _promote(self) -> None:
        float_fields = []
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            if _is_float_field(f):
                _check_real(f.name, value)
                float_fields.append(f.name)
            elif _is_int_field(f):
                _check_real(f.name, value)
                if isinstance(value, numbers.Integral):
                    object.__setattr__(self, f.name, int(value))
                elif float(value).is_integer():
                    object.__setattr__(self, f.name, int(value))

        if not float_fields:
            return

        values = [getattr(self, name) for name in float_fields]
        dtype = np.result_type(*values)
        if not np.issubdtype(dtype, np.floating):
            dtype = np.dtype(np.float64)
        for name, value in zip(float_fields, values, strict=True):
            promoted = float(value) if dtype == np.float64 else dtype.type(value)
            object.__setattr__(self, name, promoted)

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        fields_ = getattr(self, "__dataclass_fields__", None)
        if fields_:
            return {f: getattr(self, f) for f in fields_}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def values(self) -> tuple[Any, ...]:
        """Get parameter values in declaration order."""
        return tuple(self.parameters.values())

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        ParameterConstraintError
            Listing every constraint that is not satisfied.
        """
        with np.errstate(invalid="ignore"):
            violated = [c.description for c in self._constraints if not c.check(self)]
        if violated:
            raise ParameterConstraintError(violated)

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        Base implementation returns self. Subclasses should override
        if conversion to a different parametrization is needed.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    Sets marker attributes on the function:
    - __is_constraint: True
    - __constraint_description: description
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to register a class as a parametrization for a family.

    Parameters
    ----------
    family : ParametricFamily
        Family to register the parametrization with.
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator that registers the parametrization.

    Notes
    -----
    Automatically converts the class to a frozen dataclass if not already one.
    Collects and registers constraint methods marked with @constraint.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        """Collect constraint methods from the class."""
        constraints: list[ParametrizationConstraint] = []
        for attr_name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(
                        f"@constraint '{attr_name}' must be an instance method, not @staticmethod"
                    )
                continue
            if isinstance(attr, classmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(
                        f"@constraint '{attr_name}' must be an instance method, not @classmethod"
                    )
                continue

            func = attr if callable(attr) and isfunction(attr) else None
            if not func:
                continue
            if getattr(func, "__is_constraint", False):
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        # Attach metadata
        cls.__family__ = family
        cls.__param_name__ = name

        # Discover and store constraints
        cls._constraints = _collect_constraints(cls)

        # Register in the family
        family.register_parametrization(name, cls)
        return cls

    return decorator
