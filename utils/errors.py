"""
Error types shared by the geometry, membership and inference layers.

Every configuration problem derives from ``ConfigurationError`` (itself a
``ValueError``) so callers can catch setup mistakes with a single clause.
A zero-area defuzzification is not an error: ``determine`` returns ``None``.
"""


class ConfigurationError(ValueError):
    """Raised when the engine is wired or queried inconsistently."""


class UnknownFuzzyValueError(ConfigurationError):
    """Raised when a rule references a label its fuzzifier does not define."""

    def __init__(self, label: str):
        super().__init__(f"Unknown fuzzy value: {label}")
        self.label = label


class LineOrientationError(ConfigurationError):
    """Raised when a line is evaluated along an axis it has no single value for."""


class InvalidShapeError(ConfigurationError):
    """Raised when membership function parameters are out of order or empty."""
