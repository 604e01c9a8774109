"""Segment-level predicate combining rule conditions.

Conditions are partitioned by metadata category. Within a repeating
category (LQI, provenance) a single instance must satisfy every
condition of that category: the group keys each condition applies to
are intersected and the category holds when the intersection is
non-empty. Scalar metadata uses one segment-level key, so the same
intersection reduces to plain conjunction. Categories are combined by
AND, and instances are never correlated across categories.

A filter with no conditions matches every segment. It is the no-op
filter used when a rule has not been given any condition yet.
"""

from __future__ import annotations

from typing import Iterable

from core.data_category import MetadataCategory
from core.segment_types import SegmentMetadataSource
from rules.field_extraction import GroupKey
from rules.rule_matcher import RuleMatcher


class RuleFilter:
    """Read-only predicate over segments built from rule conditions."""

    def __init__(self, rule_matchers: Iterable[RuleMatcher]) -> None:
        self._rule_matchers = tuple(rule_matchers)
        partitions: dict[MetadataCategory, list[RuleMatcher]] = {}
        for rule_matcher in self._rule_matchers:
            partitions.setdefault(rule_matcher.category, []).append(rule_matcher)
        self._partitions = {
            category: tuple(members) for category, members in partitions.items()
        }

    @property
    def rule_matchers(self) -> tuple[RuleMatcher, ...]:
        """Conditions in construction order."""
        return self._rule_matchers

    def is_empty(self) -> bool:
        """Return whether the filter has no conditions."""
        return len(self._rule_matchers) == 0

    def matches(self, segment: SegmentMetadataSource) -> bool:
        """Return whether the segment satisfies every category partition."""
        for members in self._partitions.values():
            if not _partition_matches(members, segment):
                return False
        return True

    def __repr__(self) -> str:
        conditions = ", ".join(
            f"{rule_matcher.data_field.name}={rule_matcher.matcher.pattern!r}"
            for rule_matcher in self._rule_matchers
        )
        return f"RuleFilter([{conditions}])"


def _partition_matches(
    members: tuple[RuleMatcher, ...],
    segment: SegmentMetadataSource,
) -> bool:
    """Return whether one instance satisfies all conditions of a category."""
    candidates: frozenset[GroupKey] | None = None
    for rule_matcher in members:
        applicable = rule_matcher.applies_to(segment)
        candidates = applicable if candidates is None else candidates & applicable
        if not candidates:
            return False
    return True
