"""Per-field value extraction from segment metadata.

Every data category field resolves through a lookup table to the
segment collection it reads and the attribute it reads from each
instance. Values are paired with a group key naming the instance they
came from, so conditions on the same category can be correlated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from core.data_category import DataCategoryField, MetadataCategory
from core.errors import MissingMetadataValue
from core.logging_config import get_logger
from core.segment_types import SegmentMetadataSource

_LOGGER = get_logger(__name__)

GroupKey = tuple[str, int]
SEGMENT_SCOPE_KEY: GroupKey = (MetadataCategory.OTHER.value, 0)

InstanceReader = Callable[[SegmentMetadataSource], Sequence[object]]
InstanceSelector = Callable[[object, DataCategoryField], bool]


def _every_instance(instance: object, data_field: DataCategoryField) -> bool:
    return True


@dataclass(frozen=True)
class FieldAccessor:
    """How one field is located on a segment.

    Attributes:
        read_instances: Returns the ordered instances the field is read from.
        attribute: Attribute holding the field value on each instance.
        selects: Whether an instance carries this field at all.
    """

    read_instances: InstanceReader
    attribute: str
    selects: InstanceSelector = _every_instance


def _lqi_instances(segment: SegmentMetadataSource) -> Sequence[object]:
    return segment.lqis


def _provenance_instances(segment: SegmentMetadataSource) -> Sequence[object]:
    return segment.provenance


def _other_instances(segment: SegmentMetadataSource) -> Sequence[object]:
    return segment.other_metadata


def _is_entry_for(instance: object, data_field: DataCategoryField) -> bool:
    return instance.field is data_field  # type: ignore[attr-defined]


_FIELD_ACCESSORS: dict[DataCategoryField, FieldAccessor] = {
    DataCategoryField.LQI_TYPE: FieldAccessor(_lqi_instances, "issue_type"),
    DataCategoryField.LQI_COMMENT: FieldAccessor(_lqi_instances, "comment"),
    DataCategoryField.LQI_SEVERITY: FieldAccessor(_lqi_instances, "severity"),
    DataCategoryField.LQI_ENABLED: FieldAccessor(_lqi_instances, "enabled"),
    DataCategoryField.PROV_PERSON: FieldAccessor(_provenance_instances, "person"),
    DataCategoryField.PROV_ORG: FieldAccessor(_provenance_instances, "org"),
    DataCategoryField.PROV_TOOL: FieldAccessor(_provenance_instances, "tool"),
    DataCategoryField.PROV_REVPERSON: FieldAccessor(_provenance_instances, "rev_person"),
    DataCategoryField.PROV_REVORG: FieldAccessor(_provenance_instances, "rev_org"),
    DataCategoryField.PROV_REVTOOL: FieldAccessor(_provenance_instances, "rev_tool"),
    DataCategoryField.PROV_PROVREF: FieldAccessor(_provenance_instances, "prov_ref"),
    DataCategoryField.MT_CONFIDENCE: FieldAccessor(_other_instances, "value", _is_entry_for),
}


def read_field(data_field: DataCategoryField, instance: object) -> object:
    """Read one field value from one metadata instance.

    Args:
        data_field: Field to read.
        instance: LQI, provenance, or scalar metadata record.

    Returns:
        The field value.

    Raises:
        MissingMetadataValue: If the instance does not carry the field.
    """
    attribute = _FIELD_ACCESSORS[data_field].attribute
    value = getattr(instance, attribute, None)
    if value is None:
        raise MissingMetadataValue(
            f"{type(instance).__name__} has no value for {data_field.name}."
        )
    return value


def group_key_for(data_field: DataCategoryField, position: int) -> GroupKey:
    """Return the group key for the instance at ``position``."""
    if data_field.category.repeats_per_segment:
        return (data_field.category.value, position)
    return SEGMENT_SCOPE_KEY


def extract_values(
    data_field: DataCategoryField,
    segment: SegmentMetadataSource,
) -> tuple[tuple[GroupKey, object], ...]:
    """Extract ``(group_key, value)`` pairs for one field from a segment.

    Instances that lack the field, or whose read fails, are skipped and
    count as non-matching. A segment without any instance of the
    field's category yields an empty tuple.

    Args:
        data_field: Field to extract.
        segment: Segment metadata source, read only.

    Returns:
        Ordered pairs of instance group key and field value.
    """
    accessor = _FIELD_ACCESSORS[data_field]
    extracted: list[tuple[GroupKey, object]] = []
    for position, instance in enumerate(accessor.read_instances(segment)):
        try:
            if not accessor.selects(instance, data_field):
                continue
            value = read_field(data_field, instance)
        except MissingMetadataValue:
            _log_skipped(data_field, position, "missing_value")
            continue
        except Exception as error:
            _log_skipped(data_field, position, f"{type(error).__name__}: {error}")
            continue
        extracted.append((group_key_for(data_field, position), value))
    return tuple(extracted)


def _log_skipped(data_field: DataCategoryField, position: int, reason: str) -> None:
    _LOGGER.debug(
        "metadata_instance_skipped",
        field=data_field.name,
        position=position,
        reason=reason,
    )
