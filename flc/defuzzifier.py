"""
Computes the final crisp output from the composite output shape.

This module implements centroid (center of mass) defuzzification: the crisp
output is the x-coordinate of the center of mass of the area under the
composite membership shape.
"""

import logging
from typing import Optional

from geometry.line import NEG_INF, POS_INF
from membership.base import MembershipFunction

defuzzifier_log = logging.getLogger("defuzzifier")


def centroid(shape: MembershipFunction) -> Optional[float]:
    """
    Calculates the final crisp output value.

    The output is the area-weighted x centroid of the shape over the whole
    real line:

        output = ∫ x * y(x) dx / ∫ y(x) dx

    Args:
        shape (MembershipFunction): The composite output shape.

    Returns:
        Optional[float]: The crisp output, or None if the shape has no area
            (every rule certainty was zero).
    """
    total_area = shape.get_area(NEG_INF, POS_INF, 1.0)
    if total_area <= 0:
        defuzzifier_log.warning("Composite shape has no area. No crisp output.")
        return None

    center_of_mass_times_area = shape.get_x_center_of_mass_times_area(NEG_INF, POS_INF, 1.0)
    output = center_of_mass_times_area / total_area

    defuzzifier_log.debug("Defuzzified output: %.4f (area %.4f)", output, total_area)
    return output
