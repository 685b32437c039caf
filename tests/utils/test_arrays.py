"""
Unit tests for coordarray.utils.arrays.
"""

import numpy as np
import pytest

from coordarray.utils.arrays import (
    EXACT_PLACES,
    MIN_CAPACITY,
    apply_permutation,
    as_float_array,
    delete_at,
    ensure_capacity,
    round_half_away_from_zero,
)


class TestAsFloatArray:
    def test_as_float_array_when_ints_then_float64_copy(self):
        src = np.array([1, 2, 3])

        arr = as_float_array(src)

        assert arr.dtype == np.float64
        assert arr.tolist() == [1.0, 2.0, 3.0]

    def test_as_float_array_when_2d_then_raises(self):
        with pytest.raises(ValueError, match="1-dimensional"):
            as_float_array([[1.0, 2.0]])

    def test_as_float_array_when_generator_then_consumed(self):
        arr = as_float_array(v / 2 for v in range(3))

        assert arr.dtype == np.float64
        assert arr.tolist() == [0.0, 0.5, 1.0]


class TestEnsureCapacity:
    def test_ensure_capacity_when_room_left_then_same_buffer(self):
        buf = np.zeros(10)

        assert ensure_capacity(buf, 3, 10) is buf

    def test_ensure_capacity_when_full_then_doubled_and_values_kept(self):
        buf = np.arange(MIN_CAPACITY, dtype=np.float64)

        grown = ensure_capacity(buf, MIN_CAPACITY, MIN_CAPACITY + 1)

        assert grown.size == 2 * MIN_CAPACITY
        assert grown[:MIN_CAPACITY].tolist() == buf.tolist()

    def test_ensure_capacity_when_empty_then_minimum(self):
        grown = ensure_capacity(np.zeros(0), 0, 1)

        assert grown.size == MIN_CAPACITY


def test_delete_at_when_middle_then_shifted_down():
    buf = np.array([1.0, 2.0, 3.0, 4.0, 0.0, 0.0])

    delete_at(buf, 4, 1)

    assert buf[:3].tolist() == [1.0, 3.0, 4.0]


class TestRoundHalfAwayFromZero:
    def test_round_when_halves_then_away_from_zero(self):
        vals = np.array([0.5, 1.5, 2.5, -0.5, -2.5])

        round_half_away_from_zero(vals, 0)

        assert vals.tolist() == [1.0, 2.0, 3.0, -1.0, -3.0]

    def test_round_when_small_negative_then_positive_zero(self):
        vals = np.array([-0.04])

        round_half_away_from_zero(vals, 1)

        assert vals[0] == 0.0
        assert not np.signbit(vals[0])

    def test_round_when_negative_places_then_raises(self):
        with pytest.raises(ValueError):
            round_half_away_from_zero(np.array([1.0]), -2)

    def test_round_when_scaled_value_overflows_then_unchanged(self):
        vals = np.array([1e300, -1e308, 0.125])

        round_half_away_from_zero(vals, 20)

        assert vals.tolist() == [1e300, -1e308, 0.125]

    def test_round_when_not_finite_then_unchanged(self):
        vals = np.array([np.inf, -np.inf, np.nan, 2.5])

        round_half_away_from_zero(vals, 0)

        assert vals[0] == np.inf
        assert vals[1] == -np.inf
        assert np.isnan(vals[2])
        assert vals[3] == 3.0

    def test_round_when_places_exceed_single_scale_then_tiny_values_rounded(self):
        vals = np.array([3.4e-310, 0.25])

        round_half_away_from_zero(vals, 310)

        assert vals[0] == pytest.approx(3e-310, rel=1e-6)
        assert vals[1] == 0.25

    def test_round_when_exact_places_then_nothing_changes(self):
        vals = np.array([5e-324, 1 / 3, -1e308])
        before = vals.tolist()

        round_half_away_from_zero(vals, EXACT_PLACES)

        assert vals.tolist() == before


def test_apply_permutation_when_view_then_reordered_in_place():
    buf = np.array([10.0, 20.0, 30.0, 0.0])
    view = buf[:3]

    apply_permutation(view, np.array([2, 0, 1]))

    assert buf.tolist() == [30.0, 10.0, 20.0, 0.0]
