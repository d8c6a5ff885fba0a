"""
The fuzzy inference engine.

FuzzyLogic turns a tick's crisp inputs into one crisp output:

    1. every output label's rule computes a certainty,
    2. each output membership function is cut at its certainty and the cut
       shapes are stitched into one envelope (a CompoundShape),
    3. the envelope's centroid is the crisp output.

Stitching walks the envelope from the left. It starts on the first output
label's shape, which must be the left-most one, and repeatedly asks the
resolver registered for the current pair of shape kinds where the envelope
switches to another shape. The result is the pointwise maximum of the cut
shapes, integrated in closed form.

The walk takes the first label in output order that offers a forward crossing,
which can skip a shape that still rises above the envelope further right.
``construct_shape`` therefore checks the stitched result against the pointwise
maximum and falls back to ``construct_numeric_compound_shape`` when they
disagree, as it does for output variables that break the left-most assumption.
"""

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from geometry.line import NEG_INF
from membership.base import MembershipFunction
from membership.compound import Breakpoint, CompoundShape
from membership.cutoff import CutoffShape
from membership.numeric_compound import DEFAULT_SLICES, NumericCompoundShape
from membership.trapezoid import TrapezoidShape
from flc.defuzzifier import centroid
from flc.fuzzifier import Fuzzifier, sample_grid
from flc.resolvers import ResolverRegistry
from flc.rule_engine import Condition, FuzzyVar
from utils.errors import ConfigurationError

logic_log = logging.getLogger("logic")

ENVELOPE_TOLERANCE = 1e-9


def find_envelope_gap(
    compound: CompoundShape, cut_shapes: Sequence[CutoffShape]
) -> Optional[float]:
    """
    Finds where a stitched envelope falls below the maximum of ``cut_shapes``.

    Between consecutive kinks (shape corners, cutoff crossings, breakpoints)
    the compound and every cut shape are linear, so comparing them at the two
    ends of each interval settles the whole interval. The ends are
    extrapolated from two interior samples to stay clear of step edges.

    Returns:
        Optional[float]: An x inside the first interval where a cut shape
            rises above the compound, or None if the compound is the envelope.
            Outputs with non-trapezoid shapes are not checked.
    """
    kinks = {bp.start for bp in compound.breakpoints[1:]}
    for cut in cut_shapes:
        if not isinstance(cut.inner, TrapezoidShape):
            return None
        for seg in cut.inner.get_line_segments(cut.cutoff_height):
            ends = (seg.intercept,) if seg.is_vertical() else (seg.start, seg.end)
            kinks.update(x for x in ends if math.isfinite(x))

    edges = sorted(kinks) or [0.0]
    bounds = [edges[0] - 1.0] + edges + [edges[-1] + 1.0]

    for lo, hi in zip(bounds, bounds[1:]):
        a = lo + (hi - lo) / 3
        b = hi - (hi - lo) / 3
        env_a, env_b = compound.evaluate(a), compound.evaluate(b)
        for cut in cut_shapes:
            da = cut.evaluate(a) - env_a
            db = cut.evaluate(b) - env_b
            if max(da, db, 2 * da - db, 2 * db - da) > ENVELOPE_TOLERANCE:
                return a
    return None


class FuzzyLogic:
    """
    Evaluates a rule base against crisp inputs.

    Attributes:
        output_fuzzifier (Fuzzifier): Membership functions of the output variable.
        rules (Dict[str, Condition]): Output label -> condition.
        variables (List[FuzzyVar]): Input variables, kept for consumers that
            plot them.
        resolvers (ResolverRegistry): Intersection resolvers used for stitching.
        first_label_is_left_most (bool): Whether stitching can be used.
    """

    def __init__(
        self,
        output_fuzzifier: Fuzzifier,
        rules: Mapping[str, Condition],
        variables: Sequence[FuzzyVar] = (),
        resolvers: Optional[ResolverRegistry] = None,
        numeric_slices: int = DEFAULT_SLICES,
    ):
        """
        Args:
            output_fuzzifier (Fuzzifier): The output variable.
            rules (Mapping[str, Condition]): One condition per output label.
            variables (Sequence[FuzzyVar]): The input variables.
            resolvers (Optional[ResolverRegistry]): Defaults to the built-in
                trapezoid resolver.
            numeric_slices (int): Quadrature resolution of the numeric fallback.

        Raises:
            ConfigurationError: If the rule labels don't match the output labels.
        """
        if len(output_fuzzifier) == 0:
            raise ConfigurationError("The output fuzzifier has no membership functions")

        labels = set(output_fuzzifier.labels)
        missing = labels - set(rules)
        unknown = set(rules) - labels
        if missing or unknown:
            raise ConfigurationError(
                f"Rule labels must match output labels (missing: {sorted(missing)}, "
                f"unknown: {sorted(unknown)})"
            )

        self.output_fuzzifier = output_fuzzifier
        self.rules: Dict[str, Condition] = dict(rules)
        self.variables: List[FuzzyVar] = list(variables)
        self.resolvers = resolvers if resolvers is not None else ResolverRegistry.with_defaults()
        self.numeric_slices = numeric_slices
        self.first_label_is_left_most = self._first_label_is_left_most()

        if not self.first_label_is_left_most:
            logic_log.warning(
                "First output label '%s' is not the left-most shape; "
                "falling back to numeric integration.",
                output_fuzzifier.labels[0],
            )
        logic_log.info(
            "FuzzyLogic initialized with %d rules over outputs %s.",
            len(self.rules),
            output_fuzzifier.labels,
        )

    def _first_label_is_left_most(self) -> bool:
        shapes = [shape for _, shape in self.output_fuzzifier.membership_functions]
        first_x = shapes[0].left_most_non_zero.x
        return all(first_x <= shape.left_most_non_zero.x for shape in shapes[1:])

    def compute_certainties(self, values: Mapping[str, float]) -> Dict[str, float]:
        """Computes every output label's rule certainty, in output label order."""
        certainties = {
            label: self.rules[label].compute_certainty(values)
            for label in self.output_fuzzifier.labels
        }
        logic_log.debug(
            "Certainties: %s", {k: round(v, 3) for k, v in certainties.items()}
        )
        return certainties

    def construct_compound_shape(self, values: Mapping[str, float]) -> CompoundShape:
        """
        Stitches the output shapes, each cut at its certainty, into their envelope.

        Raises:
            ConfigurationError: If the first output label is not the left-most
                shape, or a pair of shape kinds has no resolver.
        """
        if not self.first_label_is_left_most:
            raise ConfigurationError(
                "Stitching requires the first output label to be the left-most shape"
            )
        return self._stitch(self.compute_certainties(values))

    def _stitch(self, certainties: Mapping[str, float]) -> CompoundShape:
        functions = self.output_fuzzifier.membership_functions

        breakpoints: List[Tuple[float, int]] = [(NEG_INF, 0)]
        visited: Set[Tuple[float, int]] = {(NEG_INF, 0)}
        current = 0

        while current < len(functions):
            label_a, shape_a = functions[current]
            last_x = breakpoints[-1][0]

            step = None
            for i, (label_b, shape_b) in enumerate(functions):
                if i == current:
                    continue

                resolver = self.resolvers.get(shape_a.kind, shape_b.kind)
                points = resolver(shape_a, certainties[label_a], shape_b, certainties[label_b])
                points = [p for p in points if p.x >= last_x and (p.x, i) not in visited]

                if points:
                    step = (points[0].x, i)
                    break

            if step is None:
                break

            logic_log.debug(
                "Envelope switches from '%s' to '%s' at x=%.4f",
                label_a, functions[step[1]][0], step[0],
            )
            visited.add(step)
            if step[0] == last_x:
                # The previous owner would span an empty interval
                breakpoints[-1] = (last_x, step[1])
            else:
                breakpoints.append(step)
            current = step[1]

        return CompoundShape([
            Breakpoint(start, CutoffShape(functions[idx][1], certainties[functions[idx][0]]))
            for start, idx in breakpoints
        ])

    def construct_numeric_compound_shape(
        self, values: Mapping[str, float]
    ) -> NumericCompoundShape:
        """Pointwise maximum of the cut output shapes, integrated numerically."""
        return NumericCompoundShape(
            self._cut_shapes(self.compute_certainties(values)), slices=self.numeric_slices
        )

    def _cut_shapes(self, certainties: Mapping[str, float]) -> List[CutoffShape]:
        return [
            CutoffShape(shape, certainties[label])
            for label, shape in self.output_fuzzifier.membership_functions
        ]

    def construct_shape(self, values: Mapping[str, float]) -> MembershipFunction:
        """
        Builds the composite shape ``determine`` integrates.

        The stitched envelope is used when it matches the pointwise maximum of
        the cut shapes; otherwise the numeric envelope is, with a warning.
        """
        certainties = self.compute_certainties(values)
        cut_shapes = self._cut_shapes(certainties)

        if self.first_label_is_left_most:
            compound = self._stitch(certainties)
            gap = find_envelope_gap(compound, cut_shapes)
            if gap is None:
                return compound
            logic_log.warning(
                "Stitched envelope falls below the maximum near x=%.4f; "
                "falling back to numeric integration.",
                gap,
            )

        return NumericCompoundShape(cut_shapes, slices=self.numeric_slices)

    def determine(self, values: Mapping[str, float]) -> Optional[float]:
        """
        Computes the crisp output for one set of inputs.

        Args:
            values (Mapping[str, float]): Crisp value per input variable.

        Returns:
            Optional[float]: The centroid of the composite shape, or None when
                every rule certainty is zero.
        """
        return centroid(self.construct_shape(values))

    def sample_compound_shape(
        self, values: Mapping[str, float], domain: Tuple[float, float], delta_x: float
    ) -> List[Dict[str, float]]:
        """Evaluates the composite shape across a domain, for plotting."""
        shape = self.construct_shape(values)
        return [{"x": x, "membership": shape.evaluate(x)} for x in sample_grid(domain, delta_x)]
