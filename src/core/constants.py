"""Core constants used across Sieve modules.

This module centralizes defaults and closed vocabularies.
Keeping values here avoids magic literals in rule logic.
"""

from __future__ import annotations

DEFAULT_FILTER_WORKERS = 1
VOCABULARY_PATH_ENV = "SIEVE_VOCABULARY_PATH"
FILTER_WORKERS_ENV = "SIEVE_FILTER_WORKERS"
SUPPORTED_VOCABULARY_VERSION = 1

# ITS 2.0 localization quality issue types.
DEFAULT_LQI_TYPES = (
    "terminology",
    "mistranslation",
    "omission",
    "untranslated",
    "addition",
    "duplication",
    "inconsistency",
    "grammar",
    "legal",
    "register",
    "locale-specific-content",
    "locale-violation",
    "style",
    "characters",
    "misspelling",
    "typographical",
    "formatting",
    "inconsistent-entities",
    "numbers",
    "markup",
    "pattern-problem",
    "whitespace",
    "internationalization",
    "length",
    "non-conformance",
    "uncategorized",
    "other",
)
DEFAULT_SEVERITY_RANGE = (0, 100)
DEFAULT_MT_CONFIDENCE_RANGE = (0, 100)

BOOLEAN_TRUE_LITERAL = "true"
BOOLEAN_FALSE_LITERAL = "false"
