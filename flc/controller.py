"""
Orchestrates the Fuzzy Logic Controller (FLC) for the plane's tilt.

This module wraps the FuzzyLogic engine built from config/flc_config.toml and
is the interface used by the scene simulation each tick: it receives the
measured distances and produces a tilt acceleration. It does not measure the
distances itself.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from flc.config import build_logic, load_config
from flc.defuzzifier import centroid
from flc.logic import FuzzyLogic
from membership.base import MembershipFunction
from utils.profiler import CodeProfiler

controller_log = logging.getLogger("controller")


@dataclass
class ControllerInput:
    left_border_distance: float
    right_border_distance: float
    left_eye_distance: float
    right_eye_distance: float

    def as_values(self) -> Dict[str, float]:
        return {
            "left border": self.left_border_distance,
            "right border": self.right_border_distance,
            "left eye": self.left_eye_distance,
            "right eye": self.right_eye_distance,
        }


class TiltController:
    """
    The main Fuzzy Logic Controller class.

    Attributes:
        logic (FuzzyLogic): The inference engine.
        hold_last_output (bool): Reuse the previous output when no rule fires.
        last_output (float): Output of the previous tick.
        compound_shape (Optional[MembershipFunction]): Composite output shape of
            the previous tick, for plotting.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        """
        Initializes the FLC from a parsed configuration.

        Args:
            config (Optional[Mapping[str, Any]]): The full configuration
                dictionary. Defaults to config/flc_config.toml.
        """
        config = load_config() if config is None else config
        ctrl_cfg = config.get("controller", {})

        self.logic: FuzzyLogic = build_logic(config)
        self.hold_last_output = bool(ctrl_cfg.get("HOLD_LAST_OUTPUT", True))
        self.latency_budget_ms = float(ctrl_cfg.get("LATENCY_BUDGET_MS", 10.0))
        self.last_output = 0.0
        self.compound_shape: Optional[MembershipFunction] = None
        controller_log.info("FLC Controller initialized and ready.")

    def compute_tilt_acceleration(self, controller_input: ControllerInput) -> float:
        """
        Executes one full cycle of the fuzzy inference system.

        Args:
            controller_input (ControllerInput): Distances measured this tick.

        Returns:
            float: The tilt acceleration. When no rule fires, the previous
                output (or 0.0 if holding is disabled).
        """
        values = controller_input.as_values()
        controller_log.debug("--- FLC Cycle Start %s ---", values)

        with CodeProfiler("FLC cycle", budget_ms=self.latency_budget_ms):
            self.compound_shape = self.logic.construct_shape(values)
            output = centroid(self.compound_shape)

        if output is None:
            output = self.last_output if self.hold_last_output else 0.0
            controller_log.warning("No rule fired. Outputting %.4f.", output)

        self.last_output = output
        controller_log.debug("--- FLC Cycle End (tilt= %.4f) ---", output)
        return output
