import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import coordarray without installing it
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from coordarray.point_array import Point2DArray  # noqa: E402
from coordarray.utils.geoms import Point2D  # noqa: E402


@pytest.fixture
def diagonal():
    """(1,1), (2,2), (3,3)"""
    return Point2DArray([1.0, 2.0, 3.0], [1.0, 2.0, 3.0])


@pytest.fixture
def scattered():
    """Points whose x and y extremes sit at different indexes, with a tie on x."""
    return Point2DArray.from_points(
        [
            Point2D(3.0, 10.0),
            Point2D(-1.0, 4.0),
            Point2D(5.0, -2.0),
            Point2D(-1.0, 7.0),
            Point2D(5.0, 12.0),
        ]
    )
