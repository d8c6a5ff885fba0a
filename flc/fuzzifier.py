"""
Linguistic variables: named, ordered collections of membership functions.

A Fuzzifier describes one variable (e.g. "distance" -> very close, close, far)
and determines the degree of membership of crisp values in each of its fuzzy
sets. Label order is preserved; the output variable's order drives the
stitching walk in ``flc.logic``.
"""

import logging
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from membership.base import MembershipFunction
from membership.trapezoid import Trapezoid
from utils.errors import ConfigurationError

fuzzifier_log = logging.getLogger("fuzzifier")

ShapeSpec = Union[MembershipFunction, Trapezoid]


class Fuzzifier:
    """
    Calculates membership degrees for crisp inputs.

    Attributes:
        membership_functions (List[Tuple[str, MembershipFunction]]): The
            (label, shape) pairs in configuration order.
    """

    def __init__(self, fuzzy_values: Sequence[Tuple[str, ShapeSpec]]) -> None:
        """
        Initializes the Fuzzifier with its labelled shapes.

        Args:
            fuzzy_values (Sequence[Tuple[str, ShapeSpec]]): (label, shape) pairs.
                A ``Trapezoid`` builder is finished into its shape.

        Raises:
            ConfigurationError: If a label appears twice.
        """
        self.membership_functions: List[Tuple[str, MembershipFunction]] = []
        self._by_label: Dict[str, MembershipFunction] = {}

        for label, func in fuzzy_values:
            if label in self._by_label:
                raise ConfigurationError(f"Duplicate fuzzy value label '{label}'")
            shape = func.result if isinstance(func, Trapezoid) else func
            self.membership_functions.append((label, shape))
            self._by_label[label] = shape

        fuzzifier_log.info(
            "Fuzzifier initialized with %d membership functions: %s",
            len(self.membership_functions),
            self.labels,
        )

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.membership_functions]

    def __contains__(self, label: str) -> bool:
        return label in self._by_label

    def __getitem__(self, label: str) -> MembershipFunction:
        return self._by_label[label]

    def __len__(self) -> int:
        return len(self.membership_functions)

    def fuzzify(self, crisp_value: float) -> Dict[str, float]:
        """
        Fuzzifies a single crisp value.

        Args:
            crisp_value (float): The value to fuzzify.

        Returns:
            Dict[str, float]: Membership degree per label. Only sets with a
                degree > 0 are included.
        """
        fuzzified_output = {}
        for label, shape in self.membership_functions:
            degree = shape.evaluate(crisp_value)
            if degree > 0:
                fuzzified_output[label] = degree

        formatted_output = {k: f"{v:.3f}" for k, v in fuzzified_output.items()}
        fuzzifier_log.debug("Fuzzified %.3f -> %s", crisp_value, formatted_output)
        return fuzzified_output

    def sample(self, domain: Tuple[float, float], delta_x: float) -> List[Dict[str, float]]:
        """
        Evaluates every membership function across a domain, for plotting.

        Args:
            domain (Tuple[float, float]): Inclusive (low, high) x range.
            delta_x (float): Step between samples.

        Returns:
            List[Dict[str, float]]: One point per step, ``{"x": x, label: height, ...}``
                with x rounded to two decimals.
        """
        points = []
        for x in sample_grid(domain, delta_x):
            point = {"x": round(x, 2)}
            for label, shape in self.membership_functions:
                point[label] = shape.evaluate(x)
            points.append(point)
        return points


def sample_grid(domain: Tuple[float, float], delta_x: float) -> List[float]:
    """x's from domain[0] to domain[1] (inclusive) every delta_x."""
    low, high = domain
    if delta_x <= 0:
        raise ConfigurationError(f"delta_x must be positive, got {delta_x}")
    count = int(np.floor((high - low) / delta_x + 1e-9)) + 1
    return [float(x) for x in low + delta_x * np.arange(max(count, 0))]
