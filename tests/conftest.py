# tests/conftest.py
import logging

import pytest

from flc.fuzzifier import Fuzzifier
from flc.rule_engine import Condition
from membership.trapezoid import Trapezoid
from utils.logger import LOGGER_NAMES, set_loop_index


class FixedCertainty(Condition):
    """Condition stub returning the same certainty whatever the inputs."""

    def __init__(self, certainty: float):
        self.certainty = certainty
        self.calls = 0

    def compute_certainty(self, values):
        self.calls += 1
        return self.certainty


@pytest.fixture
def fixed():
    return FixedCertainty


@pytest.fixture
def distance_fuzzifier():
    return Fuzzifier([
        ("very close", Trapezoid().from_(-1, 0).to(1, 3)),
        ("close", Trapezoid().from_(1, 3).to(10, 20)),
        ("far", Trapezoid().from_(10, 20).to(200, 1000)),
    ])


@pytest.fixture
def low_high_fuzzifier():
    """Two trapezoids at opposite ends of [-1, 1]."""
    return Fuzzifier([
        ("low", Trapezoid().from_(-1).to(-0.7, -0.4)),
        ("high", Trapezoid().from_(0.4, 0.7).to(1)),
    ])


@pytest.fixture
def tilt_fuzzifier():
    return Fuzzifier([
        ("big left", Trapezoid().from_(-1).to(-0.7, -0.4)),
        ("small left", Trapezoid().from_(-0.5, -0.3).to(-0.3, -0.1)),
        ("neutral", Trapezoid().from_(-0.1, 0).to(0, 0.1)),
        ("small right", Trapezoid().from_(0.1, 0.3).to(0.3, 0.5)),
        ("big right", Trapezoid().from_(0.4, 0.7).to(1)),
    ])


@pytest.fixture
def restore_loggers():
    """setup_logging rewires global loggers; put them back for the other tests."""
    saved = {}
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        saved[name] = (log.level, log.propagate, list(log.handlers))
    yield
    for name, (level, propagate, handlers) in saved.items():
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()
        log.setLevel(level)
        log.propagate = propagate
        for h in handlers:
            log.addHandler(h)
    set_loop_index(-1)
