"""Typed models for segment metadata.

Segments carry ordered collections of language quality issues,
provenance records, and scalar metadata entries. The rule engine reads
these collections and never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from core.data_category import DataCategoryField, MetadataCategory


@dataclass(frozen=True)
class LanguageQualityIssue:
    """One localization quality issue attached to a segment.

    Attributes:
        issue_type: Issue type from the quality issue vocabulary.
        severity: Severity score in [0, 100].
        comment: Free-text reviewer comment.
        enabled: Whether the issue is currently active.
    """

    issue_type: str | None = None
    severity: float | None = None
    comment: str | None = None
    enabled: bool = True


@dataclass(frozen=True)
class Provenance:
    """One provenance record attached to a segment.

    Attributes:
        person: Translating person.
        org: Translating organization.
        tool: Translating tool.
        rev_person: Revising person.
        rev_org: Revising organization.
        rev_tool: Revising tool.
        prov_ref: Reference to external provenance information.
    """

    person: str | None = None
    org: str | None = None
    tool: str | None = None
    rev_person: str | None = None
    rev_org: str | None = None
    rev_tool: str | None = None
    prov_ref: str | None = None


@dataclass(frozen=True)
class OtherMetadata:
    """Scalar segment-level metadata entry such as MT confidence."""

    field: DataCategoryField
    value: float | str

    def __post_init__(self) -> None:
        if self.field.category is not MetadataCategory.OTHER:
            raise ValueError(
                f"Field '{self.field.name}' belongs to {self.field.category.value} "
                "metadata and cannot be stored as a scalar entry."
            )


@dataclass
class Segment:
    """Translation segment with its attached quality metadata.

    Attributes:
        segment_number: Position of the segment in its document.
        source: Source-language text.
        target: Target-language text.
        lqis: Ordered language quality issues.
        provenance: Ordered provenance records.
        other_metadata: Ordered scalar metadata entries.
    """

    segment_number: int
    source: str = ""
    target: str = ""
    lqis: list[LanguageQualityIssue] = field(default_factory=list)
    provenance: list[Provenance] = field(default_factory=list)
    other_metadata: list[OtherMetadata] = field(default_factory=list)

    def add_lqi(self, issue: LanguageQualityIssue) -> None:
        """Attach one language quality issue."""
        self.lqis.append(issue)

    def add_provenance(self, record: Provenance) -> None:
        """Attach one provenance record."""
        self.provenance.append(record)

    def add_other_metadata(self, entry: OtherMetadata) -> None:
        """Attach one scalar metadata entry."""
        self.other_metadata.append(entry)

    def has_metadata(self) -> bool:
        """Return whether any metadata is attached."""
        return bool(self.lqis or self.provenance or self.other_metadata)


class SegmentMetadataSource(Protocol):
    """Read-only accessor the rule engine needs from a segment."""

    @property
    def lqis(self) -> Sequence[LanguageQualityIssue]:
        """Ordered language quality issues."""
        ...

    @property
    def provenance(self) -> Sequence[Provenance]:
        """Ordered provenance records."""
        ...

    @property
    def other_metadata(self) -> Sequence[OtherMetadata]:
        """Ordered scalar metadata entries."""
        ...
