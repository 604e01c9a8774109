"""Sieve exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Configuration-time failures are raised to callers; evaluation-time
failures stay internal to the rule engine.
"""

from __future__ import annotations


class SieveError(Exception):
    """Base exception for all Sieve failures."""


class SieveConfigError(SieveError):
    """Raised for invalid runtime configuration or vocabulary files."""


class InvalidPatternError(SieveError):
    """Raised when a pattern fails validation for its matcher kind."""


class UnsupportedFieldMatcherError(SieveError):
    """Raised when a field is paired with an incompatible matcher kind."""


class NotConfiguredError(SieveError):
    """Raised when an unset matcher is tested or bound to a rule."""


class UnknownFieldError(SieveError):
    """Raised when a field name is not a known data category field."""


class MissingMetadataValue(SieveError):
    """Signals that one metadata instance lacks the requested field.

    This is not a failure: the rule engine treats the instance as
    non-matching and continues with the remaining instances.
    """
