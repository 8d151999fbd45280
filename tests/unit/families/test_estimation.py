from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_univariate.distributions.sampling import ArraySample
from pysatl_univariate.errors import EmptySampleError
from pysatl_univariate.families.estimation import ExponentialStats, as_sample, as_weights


class TestAsSample:
    def test_nested_data_is_flattened(self) -> None:
        x = as_sample([[1, 2], [3, 4]])

        assert x.dtype == np.float64
        np.testing.assert_array_equal(x, [1.0, 2.0, 3.0, 4.0])

    def test_sample_container_is_accepted(self) -> None:
        sample = ArraySample(np.array([[1.0], [2.0]]))

        np.testing.assert_array_equal(as_sample(sample), [1.0, 2.0])

    def test_empty_sample(self) -> None:
        with pytest.raises(EmptySampleError):
            as_sample([])

    def test_empty_sample_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            as_sample(np.array([]))


class TestAsWeights:
    x = np.array([1.0, 2.0, 3.0])

    def test_valid_weights(self) -> None:
        np.testing.assert_array_equal(as_weights([1, 0, 2], self.x), [1.0, 0.0, 2.0])

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="same length"):
            as_weights([1.0, 2.0], self.x)

    def test_negative_weight(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            as_weights([1.0, -1.0, 1.0], self.x)

    def test_zero_total_weight(self) -> None:
        with pytest.raises(EmptySampleError):
            as_weights([0.0, 0.0, 0.0], self.x)


class TestExponentialStats:
    def test_unweighted(self) -> None:
        ss = ExponentialStats.from_sample([1.0, 2.0, 3.0])

        assert ss == ExponentialStats(sx=6.0, sw=3.0)

    def test_weighted(self) -> None:
        ss = ExponentialStats.from_sample([1.0, 2.0, 3.0], weights=[1.0, 0.0, 2.0])

        assert ss.sx == 7.0
        assert ss.sw == 3.0
