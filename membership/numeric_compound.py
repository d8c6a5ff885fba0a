"""
Envelope (pointwise maximum) of several shapes, integrated numerically.

This is the always-correct fallback to stitching: no assumption is made about
how the shapes are laid out, at the price of a fixed-resolution quadrature.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from geometry.line import Point, NEG_INF, POS_INF
from membership.base import MembershipFunction
from utils.errors import ConfigurationError, InvalidShapeError

DEFAULT_SLICES = 25


class NumericCompoundShape(MembershipFunction):
    """
    Pointwise maximum of ``shapes``.

    Both integrals clamp the sampled heights to ``cutoff_height``, so
    ``get_area`` and ``get_x_center_of_mass_times_area`` always describe the
    same clamped shape.

    Args:
        shapes (Sequence[MembershipFunction]): At least one shape.
        slices (int): Number of equal-width slices used by the quadrature.
    """

    kind = "numeric_compound"

    def __init__(self, shapes: Sequence[MembershipFunction], slices: int = DEFAULT_SLICES):
        self.shapes = tuple(shapes)
        if not self.shapes:
            raise InvalidShapeError("A numeric compound shape needs at least one shape")
        if slices < 1:
            raise InvalidShapeError(f"slices must be positive, got {slices}")
        self.slices = int(slices)

    @property
    def left_most_non_zero(self) -> Point:
        return self.shapes[0].left_most_non_zero

    @property
    def right_most_non_zero(self) -> Point:
        return self.shapes[-1].right_most_non_zero

    def evaluate(self, x: float) -> float:
        return max(shape.evaluate(x) for shape in self.shapes)

    def _resolve_domain(self, start: float, end: float) -> Tuple[float, float]:
        if start == NEG_INF:
            start = min(shape.left_most_non_zero.x for shape in self.shapes)
        if end == POS_INF:
            end = max(shape.right_most_non_zero.x for shape in self.shapes)
        if not (math.isfinite(start) and math.isfinite(end)):
            raise ConfigurationError(
                f"Cannot integrate numerically over an unbounded domain [{start}, {end}]"
            )
        return start, end

    def _sample(self, start: float, end: float, cutoff_height: float):
        start, end = self._resolve_domain(start, end)
        xs = start + (end - start) / self.slices * np.arange(self.slices + 1)
        ys = np.minimum([self.evaluate(float(x)) for x in xs], cutoff_height)
        return xs, ys

    def get_area(self, start: float, end: float, cutoff_height: float) -> float:
        xs, ys = self._sample(start, end, cutoff_height)
        return float(np.sum(np.diff(xs) * (ys[:-1] + ys[1:]) / 2))

    def get_x_center_of_mass_times_area(
        self, start: float, end: float, cutoff_height: float
    ) -> float:
        xs, ys = self._sample(start, end, cutoff_height)
        x1, x2 = xs[:-1], xs[1:]
        y1, y2 = ys[:-1], ys[1:]
        # Exact integral of x*y over each slice, y linear between the samples.
        return float(np.sum((x2 - x1) / 6 * (y1 * (2 * x1 + x2) + y2 * (x1 + 2 * x2))))
