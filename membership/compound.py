"""
A shape made up of several shapes, each responsible for a slice of the x axis.

Each breakpoint says where its shape starts taking responsibility; the shape
owns the interval up to the next breakpoint. The first breakpoint starts at
-inf, so the breakpoints partition the whole real line.
"""

from typing import Iterator, NamedTuple, Sequence, Tuple

from geometry.line import Point, NEG_INF, POS_INF
from membership.base import MembershipFunction
from utils.errors import InvalidShapeError


class Breakpoint(NamedTuple):
    start: float
    shape: MembershipFunction


class CompoundShape(MembershipFunction):
    """
    Piecewise composition of shapes.

    Args:
        breakpoints (Sequence[Breakpoint]): Ordered by strictly increasing
            ``start``, the first one starting at -inf.

    Raises:
        InvalidShapeError: If the breakpoints don't partition the real line.
    """

    kind = "compound"

    def __init__(self, breakpoints: Sequence[Breakpoint]):
        self.breakpoints: Tuple[Breakpoint, ...] = tuple(breakpoints)
        if not self.breakpoints:
            raise InvalidShapeError("A compound shape needs at least one breakpoint")
        if self.breakpoints[0].start != NEG_INF:
            raise InvalidShapeError(
                f"First breakpoint must start at -inf, got {self.breakpoints[0].start}"
            )
        for prev, curr in zip(self.breakpoints, self.breakpoints[1:]):
            if not curr.start > prev.start:
                raise InvalidShapeError(
                    f"Breakpoints must be strictly increasing: {prev.start} -> {curr.start}"
                )

    def __repr__(self):
        sections = ", ".join(f"{bp.start:g}: {bp.shape!r}" for bp in self.breakpoints)
        return f"CompoundShape({sections})"

    @property
    def left_most_non_zero(self) -> Point:
        return self.breakpoints[0].shape.left_most_non_zero

    @property
    def right_most_non_zero(self) -> Point:
        return self.breakpoints[-1].shape.right_most_non_zero

    def evaluate(self, x: float) -> float:
        idx = self._breakpoint_index_containing(x)
        return self.breakpoints[idx].shape.evaluate(x)

    def get_area(self, start: float, end: float, cutoff_height: float) -> float:
        return sum(
            bp.shape.get_area(sec_start, sec_end, cutoff_height)
            for bp, sec_start, sec_end in self.for_each_section(start, end)
        )

    def get_x_center_of_mass_times_area(
        self, start: float, end: float, cutoff_height: float
    ) -> float:
        return sum(
            bp.shape.get_x_center_of_mass_times_area(sec_start, sec_end, cutoff_height)
            for bp, sec_start, sec_end in self.for_each_section(start, end)
        )

    def for_each_section(
        self, start: float, end: float
    ) -> Iterator[Tuple[Breakpoint, float, float]]:
        """
        Walks the sections overlapping [start, end].

        Yields:
            Tuple[Breakpoint, float, float]: The owning breakpoint and the
            section's bounds clipped to [start, end].
        """
        idx = self._breakpoint_index_containing(start)
        sec_start = start

        while sec_start < end:
            sec_end = min(self._breakpoint_end(idx), end)
            yield self.breakpoints[idx], sec_start, sec_end

            idx += 1
            sec_start = self.breakpoints[idx].start if idx < len(self.breakpoints) else POS_INF

    def _breakpoint_end(self, idx: int) -> float:
        if idx + 1 < len(self.breakpoints):
            return self.breakpoints[idx + 1].start
        return POS_INF

    def _breakpoint_index_containing(self, x: float) -> int:
        # Linear scan; compounds only hold a handful of sections.
        idx = 0
        while idx + 1 < len(self.breakpoints) and x >= self.breakpoints[idx + 1].start:
            idx += 1
        return idx
