# tests/test_controller.py

import pytest

from flc.config import load_config
from flc.controller import ControllerInput, TiltController
from membership.compound import CompoundShape

VERY_CLOSE = 0.5  # "very close", nothing else
CLOSE = 5.0       # "close", nothing else
FAR = 150.0       # "far", nothing else
NOWHERE = -5.0    # below every distance set


def inputs(left_border=FAR, right_border=FAR, left_eye=FAR, right_eye=FAR):
    return ControllerInput(left_border, right_border, left_eye, right_eye)


# ------------------------------------------------------------
# Fixture: the real FLC (from config/flc_config.toml)
# ------------------------------------------------------------
@pytest.fixture
def controller():
    return TiltController()


def test_controller_input_keys_match_config(controller):
    values = inputs().as_values()
    assert set(values) == {v.key for v in controller.logic.variables}


def test_centered_plane_keeps_level(controller):
    assert controller.compute_tilt_acceleration(inputs()) == pytest.approx(0.0, abs=1e-9)


# ------------------------------------------------------------
# Sign behavior: a close border tilts the plane away from it
# ------------------------------------------------------------
def test_close_left_border_tilts_right(controller):
    tilt = controller.compute_tilt_acceleration(inputs(left_border=CLOSE))
    assert tilt == pytest.approx(0.3)


def test_close_right_border_tilts_left(controller):
    tilt = controller.compute_tilt_acceleration(inputs(right_border=CLOSE))
    assert tilt == pytest.approx(-0.3)


def test_very_close_left_border_tilts_hard_right(controller):
    tilt = controller.compute_tilt_acceleration(inputs(left_border=VERY_CLOSE))
    assert tilt > 0.7


def test_very_close_right_border_tilts_hard_left(controller):
    tilt = controller.compute_tilt_acceleration(inputs(right_border=VERY_CLOSE))
    assert tilt < -0.7


def test_hard_tilts_are_symmetric(controller):
    right = controller.compute_tilt_acceleration(inputs(left_border=VERY_CLOSE))
    left = controller.compute_tilt_acceleration(inputs(right_border=VERY_CLOSE))
    # One side may go through the numeric envelope
    assert right == pytest.approx(-left, abs=0.01)


def test_compound_shape_is_kept_for_plotting(controller):
    assert controller.compound_shape is None
    controller.compute_tilt_acceleration(inputs(left_border=CLOSE))
    assert isinstance(controller.compound_shape, CompoundShape)


# ------------------------------------------------------------
# No rule fires
# ------------------------------------------------------------
def test_holds_last_output_when_no_rule_fires(controller):
    first = controller.compute_tilt_acceleration(inputs(left_border=CLOSE))
    held = controller.compute_tilt_acceleration(
        inputs(NOWHERE, NOWHERE, NOWHERE, NOWHERE)
    )
    assert held == pytest.approx(first)
    assert controller.last_output == pytest.approx(first)


def test_outputs_zero_when_holding_is_disabled():
    config = load_config()
    config["controller"]["HOLD_LAST_OUTPUT"] = False
    controller = TiltController(config)

    controller.compute_tilt_acceleration(inputs(left_border=CLOSE))
    assert controller.compute_tilt_acceleration(
        inputs(NOWHERE, NOWHERE, NOWHERE, NOWHERE)
    ) == 0.0


def test_missing_controller_section_uses_defaults():
    config = load_config()
    del config["controller"]
    controller = TiltController(config)
    assert controller.hold_last_output is True
    assert controller.latency_budget_ms == pytest.approx(10.0)
