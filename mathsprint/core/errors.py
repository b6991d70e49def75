"""
Exception types for mathsprint.

Runtime input problems (negative tier, accuracy outside [0, 1]) are clamped
rather than raised; these exceptions cover the cases that must stop the
caller, such as a broken configuration at startup.
"""


class MathSprintError(Exception):
    """Base class for mathsprint errors."""
    pass


class ConfigurationError(MathSprintError):
    """Raised when progression settings fail validation at load time."""
    pass
