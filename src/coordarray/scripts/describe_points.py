import argparse
import logging
import sys
from typing import Optional

from coordarray.point_array import Point2DArray
from coordarray.utils.geoms import Point2D

logger = logging.getLogger(__name__)


def _fmt_point(point: Optional[Point2D]) -> str:
    return "-" if point is None else f"({point.x},{point.y})"


def parse_points(
    *, coords: Optional[str], pairs: Optional[str], delimiter: str
) -> Optional[Point2DArray]:
    if coords is not None:
        return Point2DArray.from_coords(coords)
    return Point2DArray.from_pairs(pairs, delimiter)


def describe_points(points: Point2DArray) -> str:
    range2 = points.get_range()
    if range2.is_empty:
        x_range = y_range = "-"
    else:
        x_range = f"[{range2.x.min}, {range2.x.max}]"
        y_range = f"[{range2.y.min}, {range2.y.max}]"

    lines = [
        f"points: {points}",
        f"size: {len(points)}",
        f"mean: {_fmt_point(points.get_mean())}",
        f"center: {_fmt_point(points.get_center())}",
        f"x range: {x_range}",
        f"y range: {y_range}",
        f"min x: {_fmt_point(points.get_point_with_minimum_x())}",
        f"max x: {_fmt_point(points.get_point_with_maximum_x())}",
        f"min y: {_fmt_point(points.get_point_with_minimum_y())}",
        f"max y: {_fmt_point(points.get_point_with_maximum_y())}",
    ]
    return "\n".join(lines)


def run(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser()
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--coords", type=str, default=None)
    source.add_argument("--pairs", type=str, default=None)
    parser.add_argument("--delimiter", type=str, default=r"\s+")

    parser.add_argument("--places", type=int, default=None)
    parser.add_argument("--sort-axis", type=int, choices=[0, 1], default=None)
    parser.add_argument("--descending", action="store_true")
    parser.add_argument("--log-level", type=str, default="WARNING")

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    points = parse_points(
        coords=args.coords, pairs=args.pairs, delimiter=args.delimiter
    )
    if points is None:
        print("Could not parse points", file=sys.stderr)
        sys.exit(1)
    logger.info(f"Parsed {len(points)} points")

    if args.places is not None:
        points.format(args.places)

    if args.sort_axis is not None:
        if args.descending:
            points.sort_descending(args.sort_axis)
        else:
            points.sort_ascending(args.sort_axis)

    print(describe_points(points))
