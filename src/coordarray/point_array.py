import operator
import warnings
from typing import Iterable, Iterator, Optional

import numpy as np
import numpy.typing as npt
import pandas as pd
from skimage.transform import EuclideanTransform, SimilarityTransform

from coordarray.errors import IncompatibleSizeError, OddLengthError, RangeError
from coordarray.parsing import (
    format_bracketed,
    format_flat,
    parse_coords,
    split_pairs,
)
from coordarray.utils.arrays import (
    apply_permutation,
    as_float_array,
    delete_at,
    ensure_capacity,
    round_half_away_from_zero,
)
from coordarray.utils.geoms import (
    Point2D,
    Range2D,
    Transform,
    get_center_of_points,
)
from coordarray.utils.search import (
    index_of_largest,
    index_of_smallest,
    index_sort_ascending,
    index_sort_descending,
)

X_AXIS = 0
Y_AXIS = 1


class Point2DArray:
    """
    An ordered collection of 2D points stored as two parallel float64 arrays, one for
    the x coordinates and one for the y coordinates.

    This is not a list of Point2D objects: points are only materialized when asked
    for, and every Point2D handed out is a fresh copy, so changing it does not
    change the array. Use `array[i] = point` to write a point back.

    The coordinate arrays are kept in buffers larger than the number of points so
    that appending is cheap. `x_values` and `y_values` are views on the used part of
    those buffers.
    """

    def __init__(
        self,
        x: Optional[Iterable[float]] = None,
        y: Optional[Iterable[float]] = None,
    ):
        if x is None and y is None:
            self._x = np.zeros(0, dtype=np.float64)
            self._y = np.zeros(0, dtype=np.float64)
        elif x is None or y is None:
            raise ValueError("Both x and y values are needed")
        else:
            x_arr = as_float_array(x)
            y_arr = as_float_array(y)
            if x_arr.size != y_arr.size:
                raise IncompatibleSizeError(x_arr.size, y_arr.size)
            self._x = x_arr
            self._y = y_arr
        self._count = self._x.size

    # construction

    @classmethod
    def with_size(cls, n: int) -> "Point2DArray":
        if n < 0:
            raise ValueError(f"Size must be non-negative, got {n}")
        return cls(np.zeros(n), np.zeros(n))

    @classmethod
    def from_points(cls, points: Iterable[Point2D]) -> "Point2DArray":
        array = cls()
        for point in points:
            array.append(point)
        return array

    @classmethod
    def from_array(cls, other: Optional["Point2DArray"]) -> "Point2DArray":
        """
        Deep copy of `other`; an empty array when `other` is None.
        """
        if other is None:
            return cls()
        return cls(other.x_values, other.y_values)

    @classmethod
    def from_flat_values(cls, values: Iterable[float]) -> "Point2DArray":
        """
        Builds from x0, y0, x1, y1, ...
        """
        if values is None:
            raise ValueError("No values given")
        flat = as_float_array(values)
        if flat.size % 2 != 0:
            raise OddLengthError(flat.size)
        return cls(flat[0::2], flat[1::2])

    @classmethod
    def from_pairs(
        cls, text: Optional[str], delimiter: str = r"\s+"
    ) -> Optional["Point2DArray"]:
        """
        Parses "x0<delim>y0<delim>x1<delim>y1..." where `delimiter` is a regex, e.g.
        ",| " for comma or space. Malformed text gives None, not an exception.
        """
        values = split_pairs(text, delimiter)
        if values is None:
            return None
        return cls.from_flat_values(values)

    @classmethod
    def from_coords(cls, text: Optional[str]) -> Optional["Point2DArray"]:
        """
        Parses the "[(x0,y0)(x1,y1)...]" form written by str(). Malformed text gives
        None, never a partially filled array.
        """
        coords = parse_coords(text)
        if coords is None:
            return None
        return cls([x for x, _ in coords], [y for _, y in coords])

    @classmethod
    def from_frame(
        cls, df: pd.DataFrame, *, x: str = "x", y: str = "y"
    ) -> "Point2DArray":
        return cls(
            df[x].to_numpy(dtype=np.float64),
            df[y].to_numpy(dtype=np.float64),
        )

    def copy(self) -> "Point2DArray":
        return Point2DArray.from_array(self)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # size and element access

    def __len__(self):
        return self._count

    def size(self) -> int:
        return self._count

    def _check_index(self, index) -> int:
        index = operator.index(index)
        if not 0 <= index < self._count:
            raise RangeError(f"Index {index} out of range for {self._count} points")
        return index

    def __getitem__(self, index) -> Point2D:
        index = self._check_index(index)
        return Point2D(x=self._x[index].item(), y=self._y[index].item())

    def get(self, index: int) -> Point2D:
        return self[index]

    def element_at(self, index: int) -> Point2D:
        return self[index]

    def __setitem__(self, index, point: Point2D):
        index = self._check_index(index)
        self._x[index] = point.x
        self._y[index] = point.y

    def set_element(self, index: int, point: Point2D) -> None:
        self[index] = point

    def __delitem__(self, index):
        index = self._check_index(index)
        delete_at(self._x, self._count, index)
        delete_at(self._y, self._count, index)
        self._count -= 1

    def delete_element(self, index: int) -> None:
        del self[index]

    def __iter__(self) -> Iterator[Point2D]:
        # a new generator per call, so the array can be iterated more than once
        for x, y in zip(self.x_values, self.y_values):
            yield Point2D(x=x.item(), y=y.item())

    @property
    def x_values(self) -> npt.NDArray:
        """
        Live view on the x coordinates; writing to it writes to the array, and
        in-place operations (sorting, reversing, format, transform_by) show
        through it.

        A view covers the points present when it was taken and never grows: points
        added later by append or extend are not in it. Once the buffer has to grow
        the old view stops tracking the array altogether. Take a fresh view after
        adding points.
        """
        return self._x[: self._count]

    @property
    def y_values(self) -> npt.NDArray:
        """
        Live view on the y coordinates, see `x_values`.
        """
        return self._y[: self._count]

    def get_x_copy(self) -> npt.NDArray:
        return self.x_values.copy()

    def get_y_copy(self) -> npt.NDArray:
        return self.y_values.copy()

    def last_point(self) -> Optional[Point2D]:
        if self._count == 0:
            return None
        return self[self._count - 1]

    def to_list(self) -> list[Point2D]:
        return list(self)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(dict(x=self.get_x_copy(), y=self.get_y_copy()))

    # mutation

    def _reserve(self, n_extra: int):
        needed = self._count + n_extra
        self._x = ensure_capacity(self._x, self._count, needed)
        self._y = ensure_capacity(self._y, self._count, needed)

    def append(self, point: Point2D) -> None:
        self._reserve(1)
        self._x[self._count] = point.x
        self._y[self._count] = point.y
        self._count += 1

    def extend(self, other: Optional["Point2DArray"]) -> None:
        if other is None:
            return

        n = len(other)
        # copy first in case other is self
        xs = other.get_x_copy()
        ys = other.get_y_copy()
        self._reserve(n)
        self._x[self._count : self._count + n] = xs
        self._y[self._count : self._count + n] = ys
        self._count += n

    def reverse(self) -> None:
        self.x_values[:] = self.x_values[::-1].copy()
        self.y_values[:] = self.y_values[::-1].copy()

    def transform_by(self, transform: Transform) -> None:
        """
        Replaces every point with its image under `transform`, e.g. a
        skimage.transform.AffineTransform. All points go through the transform in a
        single call.
        """
        if self._count == 0:
            return

        xy = np.asarray(transform(np.column_stack([self.x_values, self.y_values])))
        assert xy.shape == (self._count, 2)
        self.x_values[:] = xy[:, 0]
        self.y_values[:] = xy[:, 1]

    def translate_by(self, shift: Point2D) -> None:
        self.transform_by(EuclideanTransform(translation=[shift.x, shift.y]))

    def scale_by(self, scale: float, center: Optional[Point2D] = None) -> None:
        """
        Scales about `center`, which stays where it is. Defaults to the origin.
        """
        if center is None:
            center = Point2D(x=0.0, y=0.0)
        dx = (1 - scale) * center.x
        dy = (1 - scale) * center.y
        self.transform_by(SimilarityTransform(scale=scale, translation=[dx, dy]))

    def format(self, places: int) -> "Point2DArray":
        """
        Rounds all coordinates in place to `places` decimals, halves away from zero.
        Returns self so calls can be chained.
        """
        round_half_away_from_zero(self.x_values, places)
        round_half_away_from_zero(self.y_values, places)
        return self

    def _values_for_axis(self, axis: int) -> npt.NDArray:
        if axis == X_AXIS:
            return self.x_values
        elif axis == Y_AXIS:
            return self.y_values
        else:
            raise ValueError(f"Unsupported axis {axis}, expected 0 (x) or 1 (y)")

    def _reorder(self, perm: npt.NDArray):
        apply_permutation(self.x_values, perm)
        apply_permutation(self.y_values, perm)

    def sort_ascending(self, axis: int) -> None:
        """
        Sorts points by x (axis 0) or y (axis 1), smallest first. Points with equal
        values keep their order.
        """
        self._reorder(index_sort_ascending(self._values_for_axis(axis)))

    def sort_descending(self, axis: int) -> None:
        """
        Sorts points by x (axis 0) or y (axis 1), largest first. Points with equal
        values keep their order.
        """
        self._reorder(index_sort_descending(self._values_for_axis(axis)))

    def create_sub_array(self, start: int, end: Optional[int] = None) -> "Point2DArray":
        """
        New array holding points start..end, both inclusive. `end` defaults to the
        last point.
        """
        if end is None:
            end = self._count - 1
        if not 0 <= start < self._count:
            raise RangeError(f"Start {start} out of range for {self._count} points")
        if not 0 <= end < self._count:
            raise RangeError(f"End {end} out of range for {self._count} points")
        if start > end + 1:
            raise RangeError(f"Start {start} after end {end}")
        return Point2DArray(
            self.x_values[start : end + 1], self.y_values[start : end + 1]
        )

    # comparison

    def is_equal_to(self, other: Optional["Point2DArray"], epsilon: float) -> bool:
        if other is None or len(self) != len(other):
            return False
        return bool(
            np.all(np.abs(self.x_values - other.x_values) <= epsilon)
            and np.all(np.abs(self.y_values - other.y_values) <= epsilon)
        )

    # statistics

    def get_range(self) -> Range2D:
        range2 = Range2D()
        for point in self:
            range2.add(point)
        return range2

    def get_mean(self) -> Optional[Point2D]:
        if self._count == 0:
            return None
        return Point2D(
            x=np.mean(self.x_values).item(),
            y=np.mean(self.y_values).item(),
        )

    def get_center(self) -> Optional[Point2D]:
        """
        Center of the bounding box, as opposed to the mean of the points.
        """
        if self._count == 0:
            return None
        return get_center_of_points(self.x_values.tolist(), self.y_values.tolist())

    def get_mid_point_array(
        self, other: Optional["Point2DArray"]
    ) -> Optional["Point2DArray"]:
        if other is None:
            return None
        if len(self) != len(other):
            warnings.warn(f"Cannot pair {len(self)} points with {len(other)} points")
            return None
        return Point2DArray(
            (self.x_values + other.x_values) * 0.5,
            (self.y_values + other.y_values) * 0.5,
        )

    def sum_product_of_all_elements(self) -> float:
        """
        Dot product of the x array with the y array, i.e. sum(x[i] * y[i]).
        """
        return np.dot(self.x_values, self.y_values).item()

    def _point_at_or_none(self, index: int) -> Optional[Point2D]:
        return None if index == -1 else self[index]

    def get_point_with_minimum_x(self) -> Optional[Point2D]:
        return self._point_at_or_none(index_of_smallest(self.x_values))

    def get_point_with_maximum_x(self) -> Optional[Point2D]:
        return self._point_at_or_none(index_of_largest(self.x_values))

    def get_point_with_minimum_y(self) -> Optional[Point2D]:
        return self._point_at_or_none(index_of_smallest(self.y_values))

    def get_point_with_maximum_y(self) -> Optional[Point2D]:
        return self._point_at_or_none(index_of_largest(self.y_values))

    # text

    def get_string_array(self) -> str:
        return format_flat(self.x_values.tolist(), self.y_values.tolist())

    def __str__(self):
        return format_bracketed(self.x_values.tolist(), self.y_values.tolist())

    def __repr__(self):
        points = ", ".join(
            f"({x}, {y})"
            for x, y in zip(self.x_values.tolist(), self.y_values.tolist())
        )
        return f"Point2DArray([{points}])"
