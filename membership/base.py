"""
The contract shared by every membership function shape.

Shapes are immutable. ``get_area`` and ``get_x_center_of_mass_times_area``
integrate the shape clamped to ``cutoff_height`` over ``[start, end]``; both
bounds may be infinite. Dividing the second by the first gives the x-centroid
used for defuzzification.
"""

from abc import ABC, abstractmethod

from geometry.line import Point


class MembershipFunction(ABC):
    """
    Maps a crisp value to a degree of membership in [0, 1].

    Attributes:
        kind (str): Tag used to look up intersection resolvers.
    """

    kind: str = ""

    @property
    @abstractmethod
    def left_most_non_zero(self) -> Point:
        """The first point going from -inf where the shape is non-zero."""

    @property
    @abstractmethod
    def right_most_non_zero(self) -> Point:
        """The last point going towards +inf where the shape is non-zero."""

    @abstractmethod
    def evaluate(self, x: float) -> float:
        ...

    @abstractmethod
    def get_area(self, start: float, end: float, cutoff_height: float) -> float:
        ...

    @abstractmethod
    def get_x_center_of_mass_times_area(
        self, start: float, end: float, cutoff_height: float
    ) -> float:
        ...
