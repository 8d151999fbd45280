from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np
import pytest

from pysatl_univariate.errors import ParameterConstraintError
from pysatl_univariate.families import (
    ParametricFamily,
    Parametrization,
    ParametrizationConstraint,
    configure_families_register,
    constraint,
)
from pysatl_univariate.types import FamilyName, UnivariateContinuous
from tests.unit.families.test_basic import TestBaseFamily
from tests.utils.mocks import MockSamplingStrategy


class TestParametrizationAPI(TestBaseFamily):
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive")
        def check_positive(self: Any) -> bool:  # noqa: ANN001 (test signature)
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint", None) is True
        assert getattr(check_positive, "__constraint_description", None) == "Value must be positive"

    def test_free_function_parametrization_decorator(self) -> None:
        family = ParametricFamily(
            name="FreeDecoratorFamily",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
            sampling_strategy=MockSamplingStrategy(),
        )

        @family.parametrization(name="kind")
        class Kind(Parametrization):
            value: float

        obj = Kind(value=1.25)  # type: ignore[call-arg]
        assert obj.name == "kind"
        assert obj.parameters == {"value": 1.25}
        assert obj.values == (1.25,)
        assert getattr(Kind, "__family__", None) is family
        assert getattr(Kind, "__param_name__", None) == "kind"
        assert hasattr(Kind, "__dataclass_fields__")

    def test_duplicate_parametrization_name_is_rejected(self) -> None:
        family = self.make_default_family()

        with pytest.raises(ValueError, match="already registered"):

            @family.parametrization(name="base")
            class Again(Parametrization):
                value: float

    def test_static_constraint_is_rejected(self) -> None:
        family = ParametricFamily(
            name="StaticConstraintFamily",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
        )

        with pytest.raises(TypeError, match="instance method"):

            @family.parametrization(name="base")
            class Broken(Parametrization):
                value: float

                @staticmethod
                @constraint(description="always")
                def check() -> bool:
                    return True

    # ---------- Family-level conversion to base ----------

    def test_get_base_parameters_uses_family_logic(self) -> None:
        family = self.make_default_family()

        BaseCls = family.parametrizations["base"]
        AltCls = family.parametrizations["alt"]

        base_params = BaseCls(value=5.0)  # type: ignore[call-arg]
        assert family.to_base(base_params) is base_params

        alt_params = AltCls(value=3.0)  # type: ignore[call-arg]
        base_from_alt = family.to_base(alt_params)
        assert isinstance(base_from_alt, BaseCls)
        assert base_from_alt.value == 6.0  # type: ignore[attr-defined]

    def test_unknown_base_parametrization(self) -> None:
        family = ParametricFamily(
            name="NoBase",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
        )

        with pytest.raises(ValueError, match="not registered"):
            _ = family.base


class TestConstraintValidation(TestBaseFamily):
    def setup_method(self) -> None:
        self.registry = configure_families_register()

    def test_single_violation_is_reported(self) -> None:
        normal = self.registry.get(FamilyName.NORMAL)

        with pytest.raises(ParameterConstraintError, match="sigma > 0") as exc_info:
            normal(0.0, -1.0)

        assert exc_info.value.descriptions == ("sigma > 0",)

    def test_every_violation_is_reported(self) -> None:
        noncentral_beta = self.registry.get(FamilyName.NONCENTRAL_BETA)

        with pytest.raises(ParameterConstraintError) as exc_info:
            noncentral_beta(-1.0, 0.0, -2.0)

        assert set(exc_info.value.descriptions) == {"alpha > 0", "beta > 0", "lambda_ >= 0"}

    def test_constraint_error_is_value_error(self) -> None:
        exponential = self.registry.get(FamilyName.EXPONENTIAL)

        with pytest.raises(ValueError):
            exponential(0.0)

    def test_nan_parameter_violates_constraint(self) -> None:
        exponential = self.registry.get(FamilyName.EXPONENTIAL)

        with pytest.raises(ParameterConstraintError, match="theta > 0"):
            exponential(float("nan"))

    def test_constraints_of_alternative_parametrization(self) -> None:
        exponential = self.registry.get(FamilyName.EXPONENTIAL)

        with pytest.raises(ParameterConstraintError, match="lambda_ > 0"):
            exponential(lambda_=0.0, parametrization_name="rate")

    def test_non_real_parameter_is_type_error(self) -> None:
        normal = self.registry.get(FamilyName.NORMAL)

        with pytest.raises(TypeError, match="real number"):
            normal("0", 1.0)
        with pytest.raises(TypeError, match="real number"):
            normal(0.0, 1.0 + 2.0j)


class TestPromotionAndDefaults:
    def setup_method(self) -> None:
        self.registry = configure_families_register()

    def test_integer_values_are_promoted_to_float(self) -> None:
        d = self.registry.get(FamilyName.NORMAL)(1, 2)

        assert d.parameters.values == (1.0, 2.0)
        assert all(type(v) is float for v in d.parameters.values)

    def test_mixed_precision_promotes_to_widest(self) -> None:
        d = self.registry.get(FamilyName.NORMAL)(np.float32(1.0), np.float64(2.0))

        assert all(type(v) is float for v in d.parameters.values)

    def test_single_precision_is_kept(self) -> None:
        d = self.registry.get(FamilyName.NORMAL)(np.float32(1.0), np.float32(2.0))

        assert all(isinstance(v, np.float32) for v in d.parameters.values)

    def test_integral_shape_is_stored_as_int(self) -> None:
        d = self.registry.get(FamilyName.ERLANG)(3.0, 2)

        assert d.parameters.k == 3  # type: ignore[attr-defined]
        assert type(d.parameters.k) is int  # type: ignore[attr-defined]
        assert d.parameters.theta == 2.0  # type: ignore[attr-defined]
        assert type(d.parameters.theta) is float  # type: ignore[attr-defined]

    def test_fractional_shape_violates_integer_constraint(self) -> None:
        erlang = self.registry.get(FamilyName.ERLANG)

        with pytest.raises(ParameterConstraintError, match="k is a positive integer"):
            erlang(2.5, 1.0)

    @pytest.mark.parametrize(
        "family_name, expected",
        [
            (FamilyName.NORMAL, (0.0, 1.0)),
            (FamilyName.UNIFORM, (0.0, 1.0)),
            (FamilyName.EXPONENTIAL, (1.0,)),
            (FamilyName.CAUCHY, (0.0, 1.0)),
            (FamilyName.LOGISTIC, (0.0, 1.0)),
            (FamilyName.LOGNORMAL, (0.0, 1.0)),
            (FamilyName.LEVY, (0.0, 1.0)),
            (FamilyName.PARETO, (1.0, 1.0)),
            (FamilyName.ERLANG, (1, 1.0)),
            (FamilyName.BETA, (1.0, 1.0)),
            (FamilyName.GENERALIZED_PARETO, (0.0, 1.0, 1.0)),
        ],
    )
    def test_default_parameters(self, family_name: str, expected: tuple[Any, ...]) -> None:
        d = self.registry.get(family_name)()

        assert d.params == expected

    def test_dependent_default(self) -> None:
        d = self.registry.get(FamilyName.BETA)(2.5)

        assert d.params == (2.5, 2.5)

    @pytest.mark.parametrize("family_name", [FamilyName.F, FamilyName.NONCENTRAL_BETA])
    def test_families_without_defaults(self, family_name: str) -> None:
        with pytest.raises(TypeError):
            self.registry.get(family_name)()
