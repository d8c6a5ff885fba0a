"""
Bounded line segments.

A segment is a line plus an inclusive ``[start, end]`` range. The range runs
along x for ordinary lines and along y for vertical ones.
"""

from dataclasses import dataclass
from typing import Optional

from geometry import line as _line
from geometry.line import Line, Point, POS_INF, NEG_INF
from utils.errors import ConfigurationError


@dataclass(frozen=True)
class LineSegment:
    """
    A line restricted to a range.

    Attributes:
        slope (float): Slope of the underlying line (``+-inf`` when vertical).
        intercept (float): y at x=0, or x for a vertical line.
        start (float): Smaller bound (y if vertical, x otherwise).
        end (float): Bigger bound (y if vertical, x otherwise).
    """

    slope: float
    intercept: float
    start: float
    end: float

    def __post_init__(self):
        if self.start > self.end:
            raise ConfigurationError(
                f"Segment bounds out of order: start={self.start}, end={self.end}"
            )

    @property
    def line(self) -> Line:
        return Line(self.slope, self.intercept)

    def is_horizontal(self) -> bool:
        return self.line.is_horizontal()

    def is_vertical(self) -> bool:
        return self.line.is_vertical()

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def evaluate_at_x(self, x: float) -> Optional[float]:
        """
        Evaluates the segment's y at a given x.

        Raises:
            LineOrientationError: If the segment is vertical.

        Returns:
            Optional[float]: None when x lies outside the segment (ends inclusive).
        """
        y = self.line.evaluate_at_x(x)
        if not self.contains(x):
            return None
        return y

    def evaluate_at_y(self, y: float) -> Optional[float]:
        """
        Evaluates the segment's x at a given y.

        Raises:
            LineOrientationError: If the segment is horizontal.

        Returns:
            Optional[float]: None when the point lies outside the segment.
        """
        x = self.line.evaluate_at_y(y)
        bound = y if self.is_vertical() else x
        if not self.contains(bound):
            return None
        return x

    def intersect(self, other: "LineSegment") -> Optional[Point]:
        """
        Computes the intersection of two segments, end points included.

        Returns:
            Optional[Point]: None if the segments don't meet.
        """
        first, second = self, other

        if first.is_vertical() and second.is_vertical():
            overlapping = second.end >= first.start and second.start <= first.end
            if first.intercept == second.intercept and overlapping:
                return Point(first.intercept, 0.0)
            return None

        if first.is_vertical() or second.is_vertical():
            # Make `second` the vertical one
            if first.is_vertical():
                first, second = second, first

            x = second.intercept
            y = first.evaluate_at_x(x)
            if y is None or not second.contains(y):
                return None
            return Point(x, y)

        point = first.line.intersect(second.line)
        if point is None:
            return None

        if not (first.contains(point.x) and second.contains(point.x)):
            return None

        return point


def restrict_x_domain(line: Line, x1: float, x2: float) -> LineSegment:
    """Creates a segment on ``line`` spanning the x range between x1 and x2."""
    return LineSegment(line.slope, line.intercept, min(x1, x2), max(x1, x2))


def restrict_y_domain(line: Line, y1: float, y2: float) -> LineSegment:
    """
    Creates a segment on ``line`` spanning the y range between y1 and y2.

    For sloped lines the bounds are the x's where the line reaches y1 and y2;
    their order depends on the slope's sign. Vertical lines keep the y range.
    """
    if line.is_vertical():
        return LineSegment(line.slope, line.intercept, min(y1, y2), max(y1, y2))

    x1 = line.evaluate_at_y(y1)
    x2 = line.evaluate_at_y(y2)
    return LineSegment(line.slope, line.intercept, min(x1, x2), max(x1, x2))


def between_points(p1: Point, p2: Point) -> LineSegment:
    if p1.x == p2.x:
        if p1.y < p2.y:
            return LineSegment(POS_INF, p1.x, p1.y, p2.y)
        return LineSegment(NEG_INF, p1.x, p2.y, p1.y)

    return restrict_x_domain(_line.between_points(p1, p2), p1.x, p2.x)


def horizontal(y: float, x_from: float, x_to: float) -> LineSegment:
    return LineSegment(0.0, y, x_from, x_to)


def vertical(x: float, y_from: float, y_to: float) -> LineSegment:
    return LineSegment(POS_INF, x, y_from, y_to)
