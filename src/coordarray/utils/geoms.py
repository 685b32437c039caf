from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import numpy.typing as npt

"""
Anything that maps an (N, 2) array of (x, y) rows onto another (N, 2) array. The
geometric transforms in skimage.transform (AffineTransform, SimilarityTransform,
EuclideanTransform, ...) all qualify.
"""
Transform = Callable[[npt.NDArray], npt.NDArray]


@dataclass(frozen=True)
class Range:
    min: float
    max: float

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"{self.min} greater than {self.max}")

    def __contains__(self, value: float):
        return self.min <= value <= self.max

    @property
    def span(self) -> float:
        return self.max - self.min

    def add(self, value: float) -> "Range":
        return Range(min=min(self.min, value), max=max(self.max, value))


@dataclass
class Point2D:
    """
    I like being strict about the dunder methods.
    """

    x: float
    y: float

    def __add__(self, other: "Point2D"):
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point2D"):
        return Point2D(x=self.x - other.x, y=self.y - other.y)

    def __truediv__(self, other):
        if isinstance(other, Point2D):
            return Point2D(x=self.x / other.x, y=self.y / other.y)
        else:
            return Point2D(x=self.x / other, y=self.y / other)

    def is_equal_to(self, other: "Point2D", epsilon: float) -> bool:
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon

    def transform_by(self, transform: Transform) -> "Point2D":
        return apply_transform(self, transform)

    def as_dict(self):
        return dict(x=self.x, y=self.y)

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass
class Range2D:
    """
    Running bounding box. Both axes stay None until the first point is added.
    """

    x: Optional[Range] = None
    y: Optional[Range] = None

    @property
    def is_empty(self) -> bool:
        return self.x is None or self.y is None

    def add(self, point: Point2D) -> "Range2D":
        if self.is_empty:
            self.x = Range(min=point.x, max=point.x)
            self.y = Range(min=point.y, max=point.y)
        else:
            self.x = self.x.add(point.x)
            self.y = self.y.add(point.y)
        return self

    def __contains__(self, point: Point2D):
        if self.is_empty:
            return False
        return point.x in self.x and point.y in self.y


def apply_transform(point: Point2D, transform: Transform) -> Point2D:
    xy = transform(np.array([[point.x, point.y]], dtype=np.float64))
    return Point2D(x=float(xy[0, 0]), y=float(xy[0, 1]))


def get_center_of_points(x: list[float], y: list[float]) -> Point2D:
    cx = min(x) / 2 + max(x) / 2
    cy = min(y) / 2 + max(y) / 2
    return Point2D(x=cx, y=cy)
