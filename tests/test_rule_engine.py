# tests/test_rule_engine.py
import pytest

from flc.rule_engine import FuzzyVar, all_of, any_of
from utils.errors import ConfigurationError, UnknownFuzzyValueError


@pytest.fixture
def left_border(distance_fuzzifier):
    return FuzzyVar("left border", distance_fuzzifier)


@pytest.fixture
def right_border(distance_fuzzifier):
    return FuzzyVar("right border", distance_fuzzifier)


def test_is_computes_membership(left_border):
    cond = left_border.is_("close")
    assert cond.compute_certainty({"left border": 2.0}) == pytest.approx(0.5)
    assert cond.compute_certainty({"left border": 5.0}) == pytest.approx(1.0)
    assert cond.compute_certainty({"left border": 50.0}) == pytest.approx(0.0)


def test_is_ignores_other_inputs(left_border):
    cond = left_border.is_("very close")
    values = {"left border": 0.5, "right border": 100.0}
    assert cond.compute_certainty(values) == pytest.approx(1.0)


def test_unknown_label_fails_at_call_time(left_border):
    with pytest.raises(UnknownFuzzyValueError, match="Unknown fuzzy value: nearby"):
        left_border.is_("nearby")


def test_unknown_label_is_a_configuration_error(left_border):
    with pytest.raises(ConfigurationError):
        left_border.is_("nearby")


def test_missing_input_names_the_variable(left_border):
    with pytest.raises(KeyError, match="left border"):
        left_border.is_("far").compute_certainty({"right border": 3.0})


def test_empty_all_is_certain():
    assert all_of().compute_certainty({}) == 1.0


def test_empty_any_is_impossible():
    assert any_of().compute_certainty({}) == 0.0


@pytest.mark.parametrize(
    "certainties, expected_all, expected_any",
    [
        ((0.2, 0.9), 0.2, 0.9),
        ((0.95, 0.1), 0.1, 0.95),
        ((0.4, 0.4), 0.4, 0.4),
        ((0.0, 1.0, 0.5), 0.0, 1.0),
    ],
)
def test_all_is_min_any_is_max(fixed, certainties, expected_all, expected_any):
    conds = [fixed(c) for c in certainties]
    assert all_of(*conds).compute_certainty({}) == pytest.approx(expected_all)
    assert any_of(*conds).compute_certainty({}) == pytest.approx(expected_any)


def test_combinators_nest(left_border, right_border):
    rule = any_of(
        all_of(left_border.is_("far"), right_border.is_("far")),
        left_border.is_("very close"),
    )
    # left=15: far 0.5, very close 0; right=100: far 1
    assert rule.compute_certainty({"left border": 15.0, "right border": 100.0}) == pytest.approx(0.5)
    # left=2: very close 0.5, far 0
    assert rule.compute_certainty({"left border": 2.0, "right border": 100.0}) == pytest.approx(0.5)
