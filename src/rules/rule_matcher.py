"""Atomic rule condition binding a field to a matcher."""

from __future__ import annotations

from dataclasses import dataclass

from core.data_category import DataCategoryField, MetadataCategory
from core.errors import NotConfiguredError, UnsupportedFieldMatcherError
from core.logging_config import get_logger
from core.segment_types import SegmentMetadataSource
from rules.field_extraction import GroupKey, extract_values
from rules.matchers import Matcher

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RuleMatcher:
    """Immutable (field, matcher) pair.

    Attributes:
        data_field: Metadata field the condition reads.
        matcher: Configured matcher of the kind the field requires.

    Raises:
        UnsupportedFieldMatcherError: If the matcher kind does not fit the field.
        NotConfiguredError: If the matcher has no committed pattern.
    """

    data_field: DataCategoryField
    matcher: Matcher

    def __post_init__(self) -> None:
        if self.matcher.kind != self.data_field.matcher_kind:
            raise UnsupportedFieldMatcherError(
                f"Field {self.data_field.name} requires a {self.data_field.matcher_kind} "
                f"matcher, got {type(self.matcher).__name__}."
            )
        if not self.matcher.is_configured:
            raise NotConfiguredError(
                f"Matcher for field {self.data_field.name} has no pattern. "
                "Call set_pattern before building the rule."
            )

    @property
    def category(self) -> MetadataCategory:
        """Metadata category of the bound field."""
        return self.data_field.category

    def applies_to(self, segment: SegmentMetadataSource) -> frozenset[GroupKey]:
        """Return group keys of the instances whose value passes the matcher."""
        matching_keys: set[GroupKey] = set()
        for group_key, value in extract_values(self.data_field, segment):
            try:
                passed = self.matcher.test(value)
            except Exception as error:
                _LOGGER.debug(
                    "metadata_instance_skipped",
                    field=self.data_field.name,
                    group_key=list(group_key),
                    reason=f"{type(error).__name__}: {error}",
                )
                continue
            if passed:
                matching_keys.add(group_key)
        return frozenset(matching_keys)
