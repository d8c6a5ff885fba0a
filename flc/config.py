"""
Builds a FuzzyLogic engine from a TOML configuration file.

Layout of the file (see config/flc_config.toml):

    [fuzzifiers.distance]          # ordered label -> [a, b, c] or [a, b, c, d]
    "very close" = [-1, 0, 1, 3]

    [inputs]                       # input variable -> fuzzifier name
    "left border" = "distance"

    [output]
    fuzzifier = "tilt"
    numeric_slices = 200           # optional, numeric envelope resolution

    [rules]                        # output label -> condition
    "big left" = { var = "right border", is = "very close" }
    "neutral"  = { all = [ { var = "left border", is = "far" },
                           { var = "right border", is = "far" } ] }

    [controller]
    HOLD_LAST_OUTPUT = true
    LATENCY_BUDGET_MS = 10.0

TOML parsing is done via Python's built-in ``tomllib`` module; table order is
preserved, which keeps the fuzzifier label order of the file.
"""

import logging
import os
import tomllib
from typing import Any, Dict, Mapping

from flc.fuzzifier import Fuzzifier
from flc.logic import FuzzyLogic
from flc.rule_engine import Condition, FuzzyVar, all_of, any_of
from membership.numeric_compound import DEFAULT_SLICES
from membership.trapezoid import from_params
from utils.errors import ConfigurationError

config_log = logging.getLogger("config")

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "flc_config.toml"
)


# ------------------------------------------------------------
# Load TOML
# ------------------------------------------------------------
def load_config(path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    with open(path, "rb") as f:
        cfg = tomllib.load(f)
    config_log.info("Configuration file '%s' loaded.", path)
    return cfg


# ------------------------------------------------------------
# Sections
# ------------------------------------------------------------
def build_fuzzifiers(cfg: Mapping[str, Any]) -> Dict[str, Fuzzifier]:
    fuzzifiers = {}
    for name, labels in cfg.get("fuzzifiers", {}).items():
        fuzzifiers[name] = Fuzzifier(
            [(label, from_params(params)) for label, params in labels.items()]
        )
    if not fuzzifiers:
        raise ConfigurationError("No [fuzzifiers] defined")
    return fuzzifiers


def build_variables(
    cfg: Mapping[str, Any], fuzzifiers: Mapping[str, Fuzzifier]
) -> Dict[str, FuzzyVar]:
    variables = {}
    for key, fuzzifier_name in cfg.get("inputs", {}).items():
        if fuzzifier_name not in fuzzifiers:
            raise ConfigurationError(
                f"Input '{key}' refers to unknown fuzzifier '{fuzzifier_name}'"
            )
        variables[key] = FuzzyVar(key, fuzzifiers[fuzzifier_name])
    return variables


def build_condition(spec: Mapping[str, Any], variables: Mapping[str, FuzzyVar]) -> Condition:
    """
    Converts one rule table into a Condition.

    Raises:
        ConfigurationError: On unknown variables or malformed tables.
    """
    if not isinstance(spec, Mapping):
        raise ConfigurationError(f"Invalid rule condition: {spec!r}")
    if "all" in spec:
        return all_of(*(build_condition(s, variables) for s in spec["all"]))
    if "any" in spec:
        return any_of(*(build_condition(s, variables) for s in spec["any"]))
    if "var" in spec and "is" in spec:
        if spec["var"] not in variables:
            raise ConfigurationError(f"Rule refers to unknown input '{spec['var']}'")
        return variables[spec["var"]].is_(spec["is"])
    raise ConfigurationError(f"Invalid rule condition: {dict(spec)}")


def build_logic(cfg: Mapping[str, Any]) -> FuzzyLogic:
    """Builds the engine described by an already-parsed configuration."""
    fuzzifiers = build_fuzzifiers(cfg)
    variables = build_variables(cfg, fuzzifiers)

    output_cfg = cfg.get("output", {})
    output_name = output_cfg.get("fuzzifier")
    if output_name not in fuzzifiers:
        raise ConfigurationError(f"Unknown output fuzzifier '{output_name}'")

    rules = {
        label: build_condition(spec, variables)
        for label, spec in cfg.get("rules", {}).items()
    }
    config_log.info(
        "Built %d fuzzifiers, %d inputs and %d rules.",
        len(fuzzifiers), len(variables), len(rules),
    )
    return FuzzyLogic(
        fuzzifiers[output_name],
        rules,
        list(variables.values()),
        numeric_slices=int(output_cfg.get("numeric_slices", DEFAULT_SLICES)),
    )


def load_logic_from_file(path: str = DEFAULT_CONFIG_PATH) -> FuzzyLogic:
    return build_logic(load_config(path))
