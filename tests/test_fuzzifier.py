import pytest

from flc.fuzzifier import Fuzzifier, sample_grid
from membership.trapezoid import Trapezoid, TrapezoidShape
from utils.errors import ConfigurationError


@pytest.fixture
def basic_fuzzifier():
    """Returns a Fuzzifier instance with simple, clear membership functions."""
    return Fuzzifier([
        ("ZERO", TrapezoidShape(-0.5, 0.0, 0.0, 0.5)),
        ("POS", Trapezoid().from_(0.0, 0.5).to(0.5, 1.0)),
    ])


def test_fuzzifier_init(basic_fuzzifier):
    assert basic_fuzzifier.labels == ["ZERO", "POS"]
    assert "POS" in basic_fuzzifier
    assert len(basic_fuzzifier) == 2


def test_builders_are_finished(basic_fuzzifier):
    assert basic_fuzzifier["POS"] == TrapezoidShape(0.0, 0.5, 0.5, 1.0)


def test_label_order_is_preserved(tilt_fuzzifier):
    assert tilt_fuzzifier.labels == ["big left", "small left", "neutral", "small right", "big right"]


def test_duplicate_labels_are_rejected():
    with pytest.raises(ConfigurationError):
        Fuzzifier([("a", Trapezoid().from_(0, 1).to(2, 3)), ("a", Trapezoid().from_(1, 2).to(3, 4))])


def test_fuzzify_single_activation(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify(-0.25)
    assert result["ZERO"] == pytest.approx(0.5)
    assert "POS" not in result


def test_fuzzify_multiple_activation(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify(0.25)
    assert result["ZERO"] == pytest.approx(0.5)
    assert result["POS"] == pytest.approx(0.5)


def test_fuzzify_peak_activation(basic_fuzzifier):
    result = basic_fuzzifier.fuzzify(0.5)
    assert "ZERO" not in result  # Should be exactly 0
    assert result["POS"] == pytest.approx(1.0)


def test_fuzzify_no_activation(basic_fuzzifier):
    assert basic_fuzzifier.fuzzify(3.0) == {}


def test_sample_covers_domain_inclusive(distance_fuzzifier):
    points = distance_fuzzifier.sample((0, 70), 10)
    assert [p["x"] for p in points] == [0, 10, 20, 30, 40, 50, 60, 70]
    assert points[0]["very close"] == pytest.approx(1.0)
    assert points[1]["close"] == pytest.approx(1.0)
    assert points[2]["far"] == pytest.approx(1.0)
    assert set(points[0]) == {"x", "very close", "close", "far"}


def test_sample_rounds_x(tilt_fuzzifier):
    points = tilt_fuzzifier.sample((-1, 1), 0.1)
    assert len(points) == 21
    assert points[3]["x"] == -0.7
    assert points[-1]["x"] == 1.0


def test_sample_grid_rejects_non_positive_step():
    with pytest.raises(ConfigurationError):
        sample_grid((0, 1), 0)
