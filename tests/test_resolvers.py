# tests/test_resolvers.py
import pytest

from geometry.line import Point
from flc.resolvers import ResolverRegistry, resolve_two_trapezoids
from membership.cutoff import CutoffShape
from membership.trapezoid import Trapezoid
from utils.errors import ConfigurationError


@pytest.fixture
def left():
    return Trapezoid().from_(0, 1).to(2, 3).result


@pytest.fixture
def right():
    return Trapezoid().from_(2, 3).to(4, 5).result


def test_switches_where_falling_edge_meets_rising_edge(left, right):
    points = resolve_two_trapezoids(left, 1.0, right, 1.0)
    assert points
    assert points[0].x == pytest.approx(2.5)
    assert points[0].y == pytest.approx(0.5)


def test_only_switches_to_steeper_segments(left, right):
    # Walking right's rising edge, left's falling edge never takes us higher
    points = resolve_two_trapezoids(right, 1.0, left, 1.0)
    assert all(p.x != pytest.approx(2.5) for p in points)


def test_switch_point_follows_cutoffs(left, right):
    # Cut at 0.25, left stays flat up to x=2.75; right climbs past 0.25 at x=2.25.
    points = resolve_two_trapezoids(left, 0.25, right, 1.0)
    assert points[0].x == pytest.approx(2.25)
    assert points[0].y == pytest.approx(0.25)


def test_zero_certainty_primary_hands_over_on_the_floor(right):
    low = Trapezoid().from_(-1).to(-0.7, -0.4).result
    points = resolve_two_trapezoids(low, 0.0, right, 1.0)
    # Where the collapsed falling edge meets right's floor, then right's rising edge
    assert points[0].x == pytest.approx(-0.4)
    assert points[0].y == pytest.approx(0)
    assert Point(2, 0) in points


def test_registry_defaults_handle_trapezoids():
    registry = ResolverRegistry.with_defaults()
    assert ("trapezoid", "trapezoid") in registry
    assert registry.get("trapezoid", "trapezoid") is resolve_two_trapezoids


def test_registry_is_keyed_by_ordered_pair(left):
    registry = ResolverRegistry()

    def resolver(a, ca, b, cb):
        return []

    registry.register("trapezoid", "cutoff", resolver)
    assert registry.get("trapezoid", "cutoff") is resolver
    with pytest.raises(ConfigurationError, match="cutoff, trapezoid"):
        registry.get("cutoff", "trapezoid")


def test_missing_resolver_is_a_configuration_error(left):
    registry = ResolverRegistry()
    cut = CutoffShape(left, 0.5)
    with pytest.raises(ConfigurationError):
        registry.get(cut.kind, left.kind)
