"""Named rule sets and segment visibility.

A rule configuration keeps labelled rules in insertion order, tracks
which of them are enabled, decides which segments a review view
shows under the active filter mode, and attaches quick-add issue
templates to segments.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from core.errors import SieveConfigError
from core.logging_config import get_logger
from core.segment_types import LanguageQualityIssue, Segment, SegmentMetadataSource
from rules.rule_filter import RuleFilter

_LOGGER = get_logger(__name__)


class FilterMode(str, Enum):
    """Which segments are visible.

    ALL shows every segment, WITH_METADATA shows segments carrying any
    metadata, and CUSTOM shows segments matched by an enabled rule.
    """

    ALL = "all"
    WITH_METADATA = "with_metadata"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DisplayFlag:
    """Marker shown next to segments a rule matches."""

    text: str = ""
    color: str | None = None


@dataclass(frozen=True)
class Rule:
    """Labelled rule filter.

    Attributes:
        label: Unique rule name.
        rule_filter: Predicate evaluated against segments.
        enabled: Whether the rule takes part in custom filtering.
        display_flag: Optional marker for matched segments.
        quick_add: Optional issue template reviewers attach to a segment.
    """

    label: str
    rule_filter: RuleFilter
    enabled: bool = False
    display_flag: DisplayFlag | None = None
    quick_add: LanguageQualityIssue | None = None


class RuleConfiguration:
    """Ordered set of labelled rules with a filter mode."""

    def __init__(self, filter_mode: FilterMode = FilterMode.ALL) -> None:
        self._rules: dict[str, Rule] = {}
        self._filter_mode = filter_mode

    @property
    def filter_mode(self) -> FilterMode:
        """Active filter mode."""
        return self._filter_mode

    @filter_mode.setter
    def filter_mode(self, mode: FilterMode) -> None:
        self._filter_mode = FilterMode(mode)
        _LOGGER.info("filter_mode_changed", mode=self._filter_mode.value)

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in insertion order."""
        return tuple(self._rules.values())

    def add_rule(self, rule: Rule) -> None:
        """Register a new rule.

        Raises:
            SieveConfigError: If the label is empty or already used.
        """
        label = _normalize_label(rule.label)
        if not label:
            raise SieveConfigError("Rule label must be a non-empty string.")
        if label in self._rules:
            raise SieveConfigError(f"Rule '{label}' already exists. Choose a unique label.")
        self._rules[label] = replace(rule, label=label)

    def remove_rule(self, label: str) -> Rule:
        """Remove and return a rule by label."""
        rule = self.rule(label)
        del self._rules[rule.label]
        return rule

    def rule(self, label: str) -> Rule:
        """Return a rule by label.

        Raises:
            SieveConfigError: If no rule has this label.
        """
        try:
            return self._rules[_normalize_label(label)]
        except KeyError as error:
            raise SieveConfigError(f"Unknown rule '{label}'.") from error

    def set_enabled(self, label: str, enabled: bool) -> None:
        """Enable or disable a rule by label."""
        rule = self.rule(label)
        self._rules[rule.label] = replace(rule, enabled=enabled)

    def quick_add_rules(self) -> tuple[Rule, ...]:
        """Rules carrying an issue template, in insertion order."""
        return tuple(rule for rule in self._rules.values() if rule.quick_add is not None)

    def apply_quick_add(self, label: str, segment: Segment) -> LanguageQualityIssue:
        """Attach a copy of a rule's issue template to a segment.

        Raises:
            SieveConfigError: If the rule is unknown or has no template.
        """
        rule = self.rule(label)
        if rule.quick_add is None:
            raise SieveConfigError(f"Rule '{rule.label}' has no quick-add issue template.")
        issue = replace(rule.quick_add)
        segment.add_lqi(issue)
        _LOGGER.info(
            "quick_add_applied",
            rule=rule.label,
            segment_number=segment.segment_number,
            issue_type=issue.issue_type,
        )
        return issue

    def enabled_rules(self) -> tuple[Rule, ...]:
        """Enabled rules in insertion order."""
        return tuple(rule for rule in self._rules.values() if rule.enabled)

    def matching_rules(self, segment: SegmentMetadataSource) -> tuple[Rule, ...]:
        """Return the enabled rules whose filter matches the segment."""
        return tuple(rule for rule in self.enabled_rules() if rule.rule_filter.matches(segment))

    def is_visible(self, segment: SegmentMetadataSource) -> bool:
        """Return whether the segment is shown under the active filter mode.

        In CUSTOM mode with no enabled rule every segment stays visible.
        """
        if self._filter_mode is FilterMode.ALL:
            return True
        if self._filter_mode is FilterMode.WITH_METADATA:
            return _has_metadata(segment)
        enabled = self.enabled_rules()
        if not enabled:
            return True
        return any(rule.rule_filter.matches(segment) for rule in enabled)


def _normalize_label(label: str) -> str:
    return label.strip()


def _has_metadata(segment: SegmentMetadataSource) -> bool:
    return bool(segment.lqis or segment.provenance or segment.other_metadata)
