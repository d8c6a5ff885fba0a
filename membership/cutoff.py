"""A shape clamped to a maximum height (a rule's certainty)."""

from dataclasses import dataclass

from geometry.line import Point
from membership.base import MembershipFunction


@dataclass(frozen=True)
class CutoffShape(MembershipFunction):
    """
    Wraps another shape, limiting its height to ``cutoff_height``.

    Attributes:
        inner (MembershipFunction): The shape being clamped.
        cutoff_height (float): Upper bound on the height.
    """

    inner: MembershipFunction
    cutoff_height: float

    kind = "cutoff"

    @property
    def left_most_non_zero(self) -> Point:
        return self.inner.left_most_non_zero

    @property
    def right_most_non_zero(self) -> Point:
        return self.inner.right_most_non_zero

    def evaluate(self, x: float) -> float:
        return min(self.inner.evaluate(x), self.cutoff_height)

    def get_area(self, start: float, end: float, cutoff_height: float) -> float:
        return self.inner.get_area(start, end, min(self.cutoff_height, cutoff_height))

    def get_x_center_of_mass_times_area(
        self, start: float, end: float, cutoff_height: float
    ) -> float:
        return self.inner.get_x_center_of_mass_times_area(
            start, end, min(self.cutoff_height, cutoff_height)
        )
