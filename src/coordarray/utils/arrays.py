from collections.abc import Iterator

import numpy as np
import numpy.typing as npt

MIN_CAPACITY = 8

"""
Rounding to this many decimals (or more) cannot change any double: the smallest
subnormal is about 4.9e-324, so a granularity of 1e-324 is finer than half the
spacing between any two neighbouring doubles.
"""
EXACT_PLACES = 324
"""
Largest power of ten applied in one multiplication. 10**300 and the remaining factor
(at most 10**23) are both finite, so the scale itself never overflows.
"""
MAX_SCALE_EXPONENT = 300
"""
At or above 2**52 every double is an integer, so there is nothing left to round.
"""
INTEGRAL_LIMIT = 2.0**52


def as_float_array(values) -> npt.NDArray:
    """
    Always returns a new array, never a view on the input. Iterators and generators
    are consumed.
    """
    if isinstance(values, Iterator):
        return np.fromiter(values, dtype=np.float64)

    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1-dimensional sequence, got shape {arr.shape}")
    return arr


def ensure_capacity(buffer: npt.NDArray, count: int, needed: int) -> npt.NDArray:
    """
    Returns `buffer` itself when it can already hold `needed` values, otherwise a
    larger copy holding the first `count` values. Capacity doubles so that repeated
    appends stay amortized O(1).
    """
    if needed <= buffer.size:
        return buffer

    capacity = max(MIN_CAPACITY, buffer.size)
    while capacity < needed:
        capacity *= 2

    grown = np.zeros(capacity, dtype=buffer.dtype)
    grown[:count] = buffer[:count]
    return grown


def delete_at(buffer: npt.NDArray, count: int, index: int) -> None:
    assert 0 <= index < count
    buffer[index : count - 1] = buffer[index + 1 : count]
    buffer[count - 1] = 0


def apply_permutation(vals: npt.NDArray, perm: npt.NDArray) -> None:
    """
    Reorders in place so that vals[i] becomes the old vals[perm[i]]. Views on `vals`
    see the new order.
    """
    assert perm.shape == vals.shape
    vals[:] = vals[perm]


def round_half_away_from_zero(vals: npt.NDArray, places: int) -> None:
    """
    Rounds in place. np.round would round halves to even (2.5 -> 2), which is not
    what anyone formatting coordinates expects.

    Values that already have no digits beyond `places` are left alone, which also
    keeps large coordinates from overflowing once scaled.
    """
    if places < 0:
        raise ValueError(f"Decimal places must be non-negative, got {places}")
    if places >= EXACT_PLACES:
        return

    scale_hi = 10.0 ** min(places, MAX_SCALE_EXPONENT)
    scale_lo = 10.0 ** max(places - MAX_SCALE_EXPONENT, 0)

    with np.errstate(over="ignore", invalid="ignore"):
        scaled = np.abs(vals) * scale_hi * scale_lo
        rounded = np.sign(vals) * (np.floor(scaled + 0.5) / scale_lo / scale_hi)

    # also false for inf and nan, which stay as they are
    to_round = scaled < INTEGRAL_LIMIT
    # adding 0.0 turns -0.0 into 0.0
    vals[to_round] = rounded[to_round] + 0.0
