"""
Intersection resolvers used by the stitching walk.

A resolver receives the shape currently owning the envelope (``primary``) and
a candidate replacement, each with the certainty it is cut at, and returns
the points where the walk may switch from the primary to the replacement.

Resolvers are registered per ordered pair of shape kinds in an explicit
``ResolverRegistry``; only the trapezoid/trapezoid pair is built in.
"""

import logging
from typing import Callable, Dict, List, Tuple

from geometry.line import Point
from membership.base import MembershipFunction
from membership.trapezoid import TrapezoidShape
from utils.errors import ConfigurationError

logic_log = logging.getLogger("logic")

IntersectionResolver = Callable[
    [MembershipFunction, float, MembershipFunction, float], List[Point]
]


def resolve_two_trapezoids(
    primary: TrapezoidShape,
    certainty_a: float,
    replacement: TrapezoidShape,
    certainty_b: float,
) -> List[Point]:
    """
    Finds where the envelope may switch from ``primary`` to ``replacement``.

    Walking along the cut outline of ``primary``, a crossing with the cut
    outline of ``replacement`` is only kept if switching there takes us
    higher (the replacement segment's slope is at least as steep) and, for
    equal slopes, further right (the replacement segment ends strictly later).

    Returns:
        List[Point]: Candidate points, ordered by the primary's segments.
    """
    a_segments = primary.get_line_segments(certainty_a)
    b_segments = replacement.get_line_segments(certainty_b)

    points = []
    for a_seg in a_segments:
        for b_seg in b_segments:
            if b_seg.slope < a_seg.slope:
                continue
            if b_seg.slope == a_seg.slope and b_seg.end <= a_seg.end:
                continue

            point = a_seg.intersect(b_seg)
            if point is not None:
                points.append(point)

    return points


class ResolverRegistry:
    """
    Maps an ordered ``(kind_a, kind_b)`` pair of shape kinds to a resolver.

    The registry is configuration: fill it during setup, before the engine
    starts serving ticks.
    """

    def __init__(self):
        self._resolvers: Dict[Tuple[str, str], IntersectionResolver] = {}

    @classmethod
    def with_defaults(cls) -> "ResolverRegistry":
        registry = cls()
        registry.register(TrapezoidShape.kind, TrapezoidShape.kind, resolve_two_trapezoids)
        return registry

    def register(self, kind_a: str, kind_b: str, resolver: IntersectionResolver) -> None:
        self._resolvers[(kind_a, kind_b)] = resolver
        logic_log.info("Registered intersection resolver for (%s, %s)", kind_a, kind_b)

    def __contains__(self, kinds: Tuple[str, str]) -> bool:
        return kinds in self._resolvers

    def get(self, kind_a: str, kind_b: str) -> IntersectionResolver:
        """
        Raises:
            ConfigurationError: If no resolver handles the pair.
        """
        try:
            return self._resolvers[(kind_a, kind_b)]
        except KeyError:
            raise ConfigurationError(
                f"No intersection resolver registered for ({kind_a}, {kind_b})"
            ) from None
