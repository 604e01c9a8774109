"""Typed value matchers used by rule conditions.

A matcher is either unset or holds a validated pattern. Patterns are
checked with ``validate_pattern`` for immediate feedback and committed
with ``set_pattern``, which re-validates so it is safe on its own.
Testing an unset matcher raises ``NotConfiguredError``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from core.constants import BOOLEAN_FALSE_LITERAL, BOOLEAN_TRUE_LITERAL
from core.data_category import MatcherKind
from core.errors import InvalidPatternError, NotConfiguredError

_NUMERIC_RANGE_PATTERN = re.compile(r"([0-9]+)-([0-9]+)")

CompiledT = TypeVar("CompiledT")


class Matcher(ABC, Generic[CompiledT]):
    """Base predicate over one metadata value."""

    kind: MatcherKind

    def __init__(self) -> None:
        # Pattern and compiled form are swapped together on commit.
        self._state: tuple[str, CompiledT] | None = None

    @property
    def pattern(self) -> str | None:
        """Committed raw pattern, or None when unset."""
        return None if self._state is None else self._state[0]

    @property
    def is_configured(self) -> bool:
        """Whether a valid pattern has been committed."""
        return self._state is not None

    def validate_pattern(self, raw: str) -> bool:
        """Return whether ``raw`` is a valid pattern without committing it."""
        return self._parse(raw) is not None

    def set_pattern(self, raw: str) -> None:
        """Validate and commit a pattern.

        Raises:
            InvalidPatternError: If the pattern fails validation. The
                previously committed pattern, if any, is kept.
        """
        compiled = self._parse(raw)
        if compiled is None:
            raise InvalidPatternError(
                f"Invalid {self.kind} pattern '{raw}'. {self.pattern_hint()}"
            )
        self._state = (raw, compiled)

    def test(self, value: object) -> bool:
        """Return whether ``value`` satisfies the committed pattern.

        Raises:
            NotConfiguredError: If no pattern has been committed.
        """
        if self._state is None:
            raise NotConfiguredError(
                f"{type(self).__name__} has no pattern. Call set_pattern before testing values."
            )
        return self._test_compiled(self._state[1], value)

    @abstractmethod
    def pattern_hint(self) -> str:
        """Describe the accepted pattern shape for error messages."""

    @abstractmethod
    def _parse(self, raw: str) -> CompiledT | None:
        """Parse a raw pattern, returning None when it is invalid."""

    @abstractmethod
    def _test_compiled(self, compiled: CompiledT, value: object) -> bool:
        """Test a value against the compiled pattern."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pattern={self.pattern!r})"


class RegexMatcher(Matcher["re.Pattern[str]"]):
    """Case-sensitive regular expression search over string values."""

    kind: MatcherKind = "regex"

    def pattern_hint(self) -> str:
        return "Provide a valid regular expression."

    def _parse(self, raw: str) -> re.Pattern[str] | None:
        if not isinstance(raw, str):
            return None
        try:
            return re.compile(raw)
        except re.error:
            return None

    def _test_compiled(self, compiled: re.Pattern[str], value: object) -> bool:
        if not isinstance(value, str):
            return False
        return compiled.search(value) is not None


class NumericMatcher(Matcher[tuple[int, int]]):
    """Inclusive numeric range parsed from a ``min-max`` literal."""

    kind: MatcherKind = "numeric"

    def pattern_hint(self) -> str:
        return "Use the form '<min>-<max>' with integers and min <= max, for example '85-100'."

    def _parse(self, raw: str) -> tuple[int, int] | None:
        if not isinstance(raw, str):
            return None
        match = _NUMERIC_RANGE_PATTERN.fullmatch(raw)
        if match is None:
            return None
        lower, upper = int(match.group(1)), int(match.group(2))
        if lower > upper:
            return None
        return lower, upper

    def _test_compiled(self, compiled: tuple[int, int], value: object) -> bool:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        lower, upper = compiled
        return lower <= value <= upper

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Committed inclusive bounds, or None when unset."""
        return None if self._state is None else self._state[1]


class BooleanMatcher(Matcher[bool]):
    """Equality against a ``true``/``false`` literal."""

    kind: MatcherKind = "boolean"

    def pattern_hint(self) -> str:
        return f"Use '{BOOLEAN_TRUE_LITERAL}' or '{BOOLEAN_FALSE_LITERAL}'."

    def _parse(self, raw: str) -> bool | None:
        if not isinstance(raw, str):
            return None
        normalized = raw.strip().lower()
        if normalized == BOOLEAN_TRUE_LITERAL:
            return True
        if normalized == BOOLEAN_FALSE_LITERAL:
            return False
        return None

    def _test_compiled(self, compiled: bool, value: object) -> bool:
        return isinstance(value, bool) and value is compiled


_MATCHER_TYPES: dict[MatcherKind, type[Matcher]] = {
    "regex": RegexMatcher,
    "numeric": NumericMatcher,
    "boolean": BooleanMatcher,
}


def new_matcher(kind: MatcherKind) -> Matcher:
    """Create an unset matcher of the given kind."""
    return _MATCHER_TYPES[kind]()
