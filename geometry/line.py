"""
Infinite lines in the plane.

A line is stored as ``y = slope * x + intercept``. Vertical lines use an
infinite slope (``+inf`` or ``-inf``, the sign recording the direction the
line was drawn in) and store their x-coordinate in ``intercept`` instead.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from utils.errors import LineOrientationError

POS_INF = math.inf
NEG_INF = -math.inf


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Line:
    """
    An infinite straight line.

    Attributes:
        slope (float): Rate of change of y along x. ``+inf``/``-inf`` marks a
            vertical line.
        intercept (float): y at x=0, or the line's x for a vertical line.
    """

    slope: float
    intercept: float

    def is_horizontal(self) -> bool:
        return self.slope == 0

    def is_vertical(self) -> bool:
        return math.isinf(self.slope)

    def evaluate_at_x(self, x: float) -> float:
        """
        Evaluates the line's y at a given x.

        Raises:
            LineOrientationError: If the line is vertical.
        """
        if self.is_vertical():
            raise LineOrientationError(
                "Cannot evaluate a vertical line given an x coordinate."
            )
        if self.is_horizontal():
            # Keeps floors at x=+-inf finite (0 * inf is nan).
            return self.intercept
        return self.slope * x + self.intercept

    def evaluate_at_y(self, y: float) -> float:
        """
        Evaluates the line's x at a given y.

        Raises:
            LineOrientationError: If the line is horizontal.
        """
        if self.is_horizontal():
            raise LineOrientationError(
                "Cannot evaluate a horizontal line given a y coordinate."
            )
        if self.is_vertical():
            return self.intercept
        return (y - self.intercept) / self.slope

    def intersect(self, other: "Line") -> Optional[Point]:
        """
        Computes the point where two lines cross.

        Parallel lines (coincident ones included) have no intersection. Two
        coincident vertical lines yield the sentinel ``Point(x, 0.0)``; callers
        only rely on its x.

        Returns:
            Optional[Point]: The crossing point, or None.
        """
        if self.is_vertical() and other.is_vertical():
            if self.intercept == other.intercept:
                return Point(self.intercept, 0.0)
            return None

        if self.is_vertical() or other.is_vertical():
            vertical_line, sloped = (self, other) if self.is_vertical() else (other, self)
            x = vertical_line.intercept
            return Point(x, sloped.evaluate_at_x(x))

        if self.slope == other.slope:
            return None

        x = (other.intercept - self.intercept) / (self.slope - other.slope)
        return Point(x, self.evaluate_at_x(x))


def between_points(p1: Point, p2: Point) -> Line:
    """Builds the line through two points; equal x gives a vertical line."""
    if p1.x == p2.x:
        return Line(POS_INF if p1.y < p2.y else NEG_INF, p1.x)

    left, right = (p1, p2) if p1.x < p2.x else (p2, p1)
    slope = (right.y - left.y) / (right.x - left.x)
    return Line(slope, left.y - slope * left.x)


def from_point_and_slope(point: Point, slope: float) -> Line:
    if math.isinf(slope):
        return Line(slope, point.x)
    if slope == 0:
        return Line(0.0, point.y)
    return Line(slope, point.y - slope * point.x)


def vertical(x: float) -> Line:
    return Line(POS_INF, x)
