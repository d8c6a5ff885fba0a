"""
Trapezoid (and triangle) membership functions with closed-form integrals.

The shape has height 1 between ``from_high`` and ``to_high`` and ramps linearly
down to 0 at ``from_low`` and ``to_low``. A triangle is the case
``from_high == to_high``; a zero-width ramp is an instant step.

Cut at a height ``c``, the shape splits into three regions separated by the
x's where the cutoff line crosses the ramps::

        x2 ________ x3
          /        \\
    _____/          \\_____
       from_low     to_low

Each region is linear, so its area and ``integral(x * y dx)`` are exact.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from geometry import line as line_
from geometry import line_segment as segment_
from geometry.line import Point, POS_INF, NEG_INF
from geometry.line_segment import LineSegment
from membership.base import MembershipFunction
from utils.errors import InvalidShapeError


def _linear_piece(
    x_a: float, y_a: float, x_b: float, y_b: float, start: float, end: float
) -> Tuple[float, float]:
    """
    Integrates the straight line through (x_a, y_a) and (x_b, y_b), clipped to
    [start, end].

    Returns:
        Tuple[float, float]: (area, x-center-of-mass times area).
    """
    lo = max(x_a, start)
    hi = min(x_b, end)
    if not lo < hi:
        return 0.0, 0.0

    slope = (y_b - y_a) / (x_b - x_a)
    y_lo = y_a + slope * (lo - x_a)
    y_hi = y_a + slope * (hi - x_a)

    area = (y_lo + y_hi) * (hi - lo) / 2
    comta = (hi - lo) / 6 * (y_lo * (2 * lo + hi) + y_hi * (lo + 2 * hi))
    return area, comta


@dataclass(frozen=True)
class TrapezoidShape(MembershipFunction):
    """
    A trapezoid of height 1.

    lower base = to_low - from_low
    upper base = to_high - from_high
    """

    from_low: float
    from_high: float
    to_high: float
    to_low: float

    kind = "trapezoid"

    def __post_init__(self):
        a, b, c, d = self.from_low, self.from_high, self.to_high, self.to_low
        if not a <= b <= c <= d:
            raise InvalidShapeError(f"Invalid trapezoid params [{a}, {b}, {c}, {d}]")
        if (a == NEG_INF and b != NEG_INF) or (d == POS_INF and c != POS_INF):
            raise InvalidShapeError(
                f"Trapezoid ramps must have finite width: [{a}, {b}, {c}, {d}]"
            )

    @property
    def left_most_non_zero(self) -> Point:
        if self.from_high > self.from_low:
            # Has a ramp
            return Point(self.from_low, 0.0)
        # Instant jump to 1
        return Point(self.from_low, 1.0)

    @property
    def right_most_non_zero(self) -> Point:
        if self.to_low > self.to_high:
            return Point(self.to_low, 0.0)
        return Point(self.to_low, 1.0)

    def evaluate(self, x: float) -> float:
        if x < self.from_low:
            return 0.0
        if x < self.from_high:
            return (x - self.from_low) / (self.from_high - self.from_low)
        if x < self.to_high:
            return 1.0
        if x < self.to_low:
            return 1.0 - (x - self.to_high) / (self.to_low - self.to_high)
        return 0.0

    def _cutoff_crossings(self, cutoff_height: float) -> Tuple[float, float]:
        """x's where the line y=cutoff_height meets the rising and falling edges."""
        inv = 1.0 - cutoff_height
        if self.from_high == self.from_low:
            x2 = self.from_low
        else:
            x2 = cutoff_height * self.from_high + inv * self.from_low
        if self.to_high == self.to_low:
            x3 = self.to_low
        else:
            x3 = cutoff_height * self.to_high + inv * self.to_low
        return x2, x3

    def _integrate(self, start: float, end: float, cutoff_height: float) -> Tuple[float, float]:
        cutoff_height = max(0.0, min(cutoff_height, 1.0))
        if cutoff_height == 0.0 or not start < end:
            return 0.0, 0.0

        x2, x3 = self._cutoff_crossings(cutoff_height)

        left = (0.0, 0.0)
        if x2 > self.from_low:
            left = _linear_piece(self.from_low, 0.0, x2, cutoff_height, start, end)

        right = (0.0, 0.0)
        if self.to_low > x3:
            right = _linear_piece(x3, cutoff_height, self.to_low, 0.0, start, end)

        middle = (0.0, 0.0)
        lo, hi = max(x2, start), min(x3, end)
        if lo < hi:
            middle = (
                cutoff_height * (hi - lo),
                (cutoff_height / 2) * (hi * hi - lo * lo),
            )

        return left[0] + middle[0] + right[0], left[1] + middle[1] + right[1]

    def get_area(self, start: float, end: float, cutoff_height: float) -> float:
        """
        Computes the area of the trapezoid within the (start, 0) -> (end, cutoff_height)
        bounding box.

        Args:
            start (float): The bounding box's left edge x coordinate.
            end (float): The bounding box's right edge x coordinate.
            cutoff_height (float): The bounding box's top edge y coordinate,
                clamped to [0, 1].

        Returns:
            float: Area of the shape within the bounding box.
        """
        return self._integrate(start, end, cutoff_height)[0]

    def get_x_center_of_mass_times_area(
        self, start: float, end: float, cutoff_height: float
    ) -> float:
        return self._integrate(start, end, cutoff_height)[1]

    def get_line_segments(self, cutoff_height: float) -> List[LineSegment]:
        """
        Decomposes the shape cut at ``cutoff_height`` into five ordered segments:
        floor before, rising edge, flat top, falling edge, floor after.
        """
        cutoff_height = max(0.0, min(cutoff_height, 1.0))
        x2, x3 = self._cutoff_crossings(cutoff_height)

        if self.from_low == self.from_high:
            rising_slope = POS_INF
        else:
            rising_slope = 1 / (self.from_high - self.from_low)

        if self.to_high == self.to_low:
            falling_slope = NEG_INF
        else:
            falling_slope = 1 / (self.to_high - self.to_low)

        return [
            segment_.horizontal(0.0, NEG_INF, self.from_low),
            segment_.restrict_y_domain(
                line_.from_point_and_slope(Point(self.from_low, 0.0), rising_slope),
                0.0,
                cutoff_height,
            ),
            segment_.horizontal(cutoff_height, x2, x3),
            segment_.restrict_y_domain(
                line_.from_point_and_slope(Point(self.to_low, 0.0), falling_slope),
                0.0,
                cutoff_height,
            ),
            segment_.horizontal(0.0, self.to_low, POS_INF),
        ]


class Trapezoid:
    """
    Builder for ``TrapezoidShape``.

    Example:
        Trapezoid().from_(-1, 0).to(1, 3).result   # ramps on both sides
        Trapezoid().from_(-1).to(-0.7, -0.4).result  # step up at -1

    An omitted side extends to infinity at height 1.
    """

    def __init__(self):
        self._from_low = NEG_INF
        self._from_high = NEG_INF
        self._to_high = POS_INF
        self._to_low = POS_INF

    def from_(self, low: float, high: Optional[float] = None) -> "Trapezoid":
        high = low if high is None else high
        if high < low:
            raise InvalidShapeError("from-high must be after from-low")
        self._from_low, self._from_high = float(low), float(high)
        return self

    def to(self, high: float, low: Optional[float] = None) -> "Trapezoid":
        low = high if low is None else low
        if low < high:
            raise InvalidShapeError("to-low must be after to-high")
        self._to_high, self._to_low = float(high), float(low)
        return self

    @property
    def result(self) -> TrapezoidShape:
        return TrapezoidShape(self._from_low, self._from_high, self._to_high, self._to_low)


def from_params(params) -> TrapezoidShape:
    """
    Builds a shape from a flat parameter list.

    Args:
        params: ``[a, b, c]`` for a triangle (left foot, peak, right foot) or
            ``[a, b, c, d]`` for a trapezoid.
    """
    values = [float(p) for p in params]
    if len(values) == 3:
        a, b, c = values
        return TrapezoidShape(a, b, b, c)
    if len(values) == 4:
        return TrapezoidShape(*values)
    raise InvalidShapeError(f"Invalid membership function shape: {list(params)}")
