"""
Rule antecedents: conditions over crisp inputs and their fuzzy combinators.

A rule maps an output label to a Condition. Evaluating the condition against
the tick's crisp inputs yields the rule's certainty in [0, 1], which later
caps the output label's membership function.

    rules = {
        "big left":  right_border.is_("very close"),
        "neutral":   all_of(left_border.is_("far"), right_border.is_("far")),
    }

Fuzzy AND is the minimum of the certainties and fuzzy OR the maximum. There
is no negation operator.
"""

import logging
from abc import ABC, abstractmethod
from functools import reduce
from typing import Mapping, Tuple

from flc.fuzzifier import Fuzzifier
from utils.errors import UnknownFuzzyValueError

rule_engine_log = logging.getLogger("rule_engine")


class Condition(ABC):
    """Anything that can compute a certainty from the crisp inputs."""

    @abstractmethod
    def compute_certainty(self, values: Mapping[str, float]) -> float:
        ...


class FuzzyVar:
    """
    Binds an input variable name to the Fuzzifier describing it.

    Attributes:
        key (str): Name of the crisp input in the values mapping.
        fuzzifier (Fuzzifier): The variable's membership functions.
    """

    def __init__(self, key: str, fuzzifier: Fuzzifier):
        self.key = key
        self.fuzzifier = fuzzifier

    def __repr__(self):
        return f"FuzzyVar({self.key!r})"

    def is_(self, label: str) -> "MembershipCondition":
        """
        Builds the condition "<variable> is <label>".

        Raises:
            UnknownFuzzyValueError: If the fuzzifier has no such label.
        """
        if label not in self.fuzzifier:
            raise UnknownFuzzyValueError(label)
        return MembershipCondition(self, label)


class MembershipCondition(Condition):
    """Certainty is the membership degree of the variable's value in one set."""

    def __init__(self, var: FuzzyVar, label: str):
        self.var = var
        self.label = label
        self._shape = var.fuzzifier[label]

    def __repr__(self):
        return f"({self.var.key} is {self.label})"

    def compute_certainty(self, values: Mapping[str, float]) -> float:
        try:
            crisp_value = values[self.var.key]
        except KeyError:
            raise KeyError(f"No crisp value supplied for input '{self.var.key}'") from None

        certainty = self._shape.evaluate(crisp_value)
        rule_engine_log.debug(
            "%s = %.3f -> %s: %.3f", self.var.key, crisp_value, self.label, certainty
        )
        return certainty


class AllCondition(Condition):
    """Fuzzy AND. An empty conjunction is certain (1.0)."""

    def __init__(self, conditions: Tuple[Condition, ...]):
        self.conditions = conditions

    def __repr__(self):
        return "all(" + ", ".join(map(repr, self.conditions)) + ")"

    def compute_certainty(self, values: Mapping[str, float]) -> float:
        return reduce(lambda prev, c: min(prev, c.compute_certainty(values)), self.conditions, 1.0)


class AnyCondition(Condition):
    """Fuzzy OR. An empty disjunction is impossible (0.0)."""

    def __init__(self, conditions: Tuple[Condition, ...]):
        self.conditions = conditions

    def __repr__(self):
        return "any(" + ", ".join(map(repr, self.conditions)) + ")"

    def compute_certainty(self, values: Mapping[str, float]) -> float:
        return reduce(lambda prev, c: max(prev, c.compute_certainty(values)), self.conditions, 0.0)


def all_of(*conditions: Condition) -> Condition:
    return AllCondition(conditions)


def any_of(*conditions: Condition) -> Condition:
    return AnyCondition(conditions)
