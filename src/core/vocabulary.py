"""Value vocabulary tables for filterable metadata fields.

This module loads the allowed LQI types and numeric field ranges from a
YAML table once at process start. The matching engine itself never
consults the vocabulary; only the rule configuration surface does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.config import SieveConfig
from core.constants import (
    DEFAULT_LQI_TYPES,
    DEFAULT_MT_CONFIDENCE_RANGE,
    DEFAULT_SEVERITY_RANGE,
    SUPPORTED_VOCABULARY_VERSION,
)
from core.data_category import DataCategoryField
from core.errors import SieveConfigError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Vocabulary:
    """Allowed values per metadata field.

    Attributes:
        lqi_types: Known language quality issue types.
        ranges: Inclusive bounds for numeric fields.
    """

    lqi_types: tuple[str, ...]
    ranges: Mapping[DataCategoryField, tuple[int, int]] = field(default_factory=dict)

    def range_for(self, data_field: DataCategoryField) -> tuple[int, int] | None:
        """Return inclusive bounds for a numeric field when known."""
        return self.ranges.get(data_field)


def default_vocabulary() -> Vocabulary:
    """Return the built-in ITS 2.0 vocabulary."""
    return Vocabulary(
        lqi_types=DEFAULT_LQI_TYPES,
        ranges={
            DataCategoryField.LQI_SEVERITY: DEFAULT_SEVERITY_RANGE,
            DataCategoryField.MT_CONFIDENCE: DEFAULT_MT_CONFIDENCE_RANGE,
        },
    )


def load_configured_vocabulary(config: SieveConfig) -> Vocabulary:
    """Load the vocabulary selected by runtime configuration.

    Args:
        config: Runtime configuration.

    Returns:
        File-backed vocabulary, or the built-in one when no path is set.
    """
    if config.vocabulary_path is None:
        return default_vocabulary()
    return load_vocabulary(str(config.vocabulary_path))


def load_vocabulary(vocabulary_path: str) -> Vocabulary:
    """Load and validate a YAML vocabulary table from disk.

    Args:
        vocabulary_path: File path to the YAML vocabulary.

    Returns:
        Validated vocabulary.

    Raises:
        SieveConfigError: If the file is unreadable or fails schema checks.
    """
    payload = _load_yaml_payload(vocabulary_path)
    root_mapping = _expect_mapping(payload, "vocabulary root")
    _validate_root_keys(root_mapping)
    _parse_version(root_mapping)
    lqi_types = _parse_lqi_types(root_mapping)
    ranges = _parse_ranges(root_mapping)
    _LOGGER.info(
        "vocabulary_loaded",
        path=vocabulary_path,
        lqi_type_count=len(lqi_types),
        range_fields=sorted(data_field.name for data_field in ranges),
    )
    return Vocabulary(lqi_types=lqi_types, ranges=ranges)


def _load_yaml_payload(vocabulary_path: str) -> object:
    vocabulary_file = Path(vocabulary_path).expanduser().resolve()
    if not vocabulary_file.exists():
        raise SieveConfigError(
            f"Vocabulary file does not exist at {vocabulary_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(vocabulary_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SieveConfigError(
            f"Failed to read vocabulary at {vocabulary_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise SieveConfigError(
            f"Failed to parse YAML vocabulary at {vocabulary_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        raise SieveConfigError(
            f"Vocabulary at {vocabulary_file} is empty. Define 'version' and 'lqi_types'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise SieveConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise SieveConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SieveConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise SieveConfigError("Vocabulary field 'version' must be an integer. Set version: 1.")
    if raw_version != SUPPORTED_VOCABULARY_VERSION:
        raise SieveConfigError(f"Unsupported vocabulary version {raw_version}. Use version: 1.")
    return raw_version


def _parse_lqi_types(root_mapping: Mapping[str, object]) -> tuple[str, ...]:
    raw_types = root_mapping.get("lqi_types")
    if raw_types is None:
        raise SieveConfigError("Vocabulary missing required field 'lqi_types'.")
    type_rows = _expect_sequence(raw_types, "vocabulary lqi_types")
    parsed_types: list[str] = []
    for index, raw_type in enumerate(type_rows):
        if not isinstance(raw_type, str) or not raw_type.strip():
            raise SieveConfigError(
                f"Invalid vocabulary lqi_types entry #{index + 1}: expected non-empty string."
            )
        parsed_types.append(raw_type.strip())
    if len(parsed_types) == 0:
        raise SieveConfigError("Vocabulary field 'lqi_types' must include at least one type.")
    return tuple(parsed_types)


def _parse_ranges(
    root_mapping: Mapping[str, object],
) -> dict[DataCategoryField, tuple[int, int]]:
    raw_ranges = root_mapping.get("ranges")
    if raw_ranges is None:
        return {}
    range_mapping = _expect_mapping(raw_ranges, "vocabulary ranges")
    parsed_ranges: dict[DataCategoryField, tuple[int, int]] = {}
    for field_name, raw_bounds in range_mapping.items():
        data_field = _parse_numeric_field(field_name)
        parsed_ranges[data_field] = _parse_bounds(raw_bounds, field_name)
    return parsed_ranges


def _parse_numeric_field(field_name: str) -> DataCategoryField:
    try:
        data_field = DataCategoryField[field_name]
    except KeyError as error:
        raise SieveConfigError(
            f"Vocabulary range references unknown field '{field_name}'."
        ) from error
    if data_field.matcher_kind != "numeric":
        raise SieveConfigError(
            f"Vocabulary range field '{field_name}' is not numeric; ranges apply to numeric fields."
        )
    return data_field


def _parse_bounds(raw_bounds: object, field_name: str) -> tuple[int, int]:
    bounds = _expect_sequence(raw_bounds, f"vocabulary range for {field_name}")
    if len(bounds) != 2 or not all(
        isinstance(bound, int) and not isinstance(bound, bool) for bound in bounds
    ):
        raise SieveConfigError(
            f"Vocabulary range for {field_name} must be a [min, max] pair of integers."
        )
    lower, upper = cast(int, bounds[0]), cast(int, bounds[1])
    if lower > upper:
        raise SieveConfigError(
            f"Vocabulary range for {field_name} is inverted: {lower} > {upper}."
        )
    return lower, upper


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    allowed_keys = {"version", "lqi_types", "ranges"}
    unknown_keys = sorted(set(root_mapping) - allowed_keys)
    if unknown_keys:
        raise SieveConfigError(
            f"Vocabulary contains unknown root fields: {', '.join(unknown_keys)}."
        )
