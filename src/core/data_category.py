"""Closed set of filterable metadata fields.

Each field is tagged with the metadata category it is read from and the
matcher kind it accepts. The association is fixed here so rule
construction can validate pairings before any segment is evaluated.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

MatcherKind = Literal["regex", "numeric", "boolean"]


class MetadataCategory(str, Enum):
    """Metadata category a field belongs to."""

    LQI = "lqi"
    PROVENANCE = "provenance"
    OTHER = "other"

    @property
    def repeats_per_segment(self) -> bool:
        """Whether several instances of this category may share a segment."""
        return self is not MetadataCategory.OTHER


class DataCategoryField(Enum):
    """Filterable metadata field with its category and matcher kind."""

    LQI_TYPE = ("LQI Type", MetadataCategory.LQI, "regex")
    LQI_COMMENT = ("LQI Comment", MetadataCategory.LQI, "regex")
    LQI_SEVERITY = ("LQI Severity", MetadataCategory.LQI, "numeric")
    LQI_ENABLED = ("LQI Enabled", MetadataCategory.LQI, "boolean")
    PROV_PERSON = ("Provenance Person", MetadataCategory.PROVENANCE, "regex")
    PROV_ORG = ("Provenance Organization", MetadataCategory.PROVENANCE, "regex")
    PROV_TOOL = ("Provenance Tool", MetadataCategory.PROVENANCE, "regex")
    PROV_REVPERSON = ("Provenance Revision Person", MetadataCategory.PROVENANCE, "regex")
    PROV_REVORG = ("Provenance Revision Organization", MetadataCategory.PROVENANCE, "regex")
    PROV_REVTOOL = ("Provenance Revision Tool", MetadataCategory.PROVENANCE, "regex")
    PROV_PROVREF = ("Provenance Reference", MetadataCategory.PROVENANCE, "regex")
    MT_CONFIDENCE = ("MT Confidence", MetadataCategory.OTHER, "numeric")

    def __init__(
        self,
        display_name: str,
        category: MetadataCategory,
        matcher_kind: MatcherKind,
    ) -> None:
        self.display_name = display_name
        self.category = category
        self.matcher_kind = matcher_kind

    def __str__(self) -> str:
        return self.display_name


def fields_in_category(category: MetadataCategory) -> tuple[DataCategoryField, ...]:
    """Return every field that belongs to one category."""
    return tuple(field for field in DataCategoryField if field.category is category)
