"""Unit tests for vocabulary loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import SieveConfig
from core.data_category import DataCategoryField
from core.errors import SieveConfigError
from core.vocabulary import default_vocabulary, load_configured_vocabulary, load_vocabulary
from tests.fixture_paths import vocabulary_fixture


def test_load_vocabulary_valid_file_parses_types_and_ranges() -> None:
    """Valid vocabulary should expose types and numeric bounds."""
    vocabulary = load_vocabulary(vocabulary_fixture("valid.yaml"))

    assert vocabulary.lqi_types == ("omission", "terminology", "mistranslation")
    assert vocabulary.range_for(DataCategoryField.MT_CONFIDENCE) == (10, 90)
    assert vocabulary.range_for(DataCategoryField.LQI_TYPE) is None


@pytest.mark.parametrize(
    "file_name",
    [
        "unknown_root_key.yaml",
        "inverted_range.yaml",
        "non_numeric_range_field.yaml",
        "missing_types.yaml",
        "empty.yaml",
        "does_not_exist.yaml",
    ],
)
def test_load_vocabulary_rejects_invalid_files(file_name: str) -> None:
    """Malformed vocabulary files should raise a config error."""
    with pytest.raises(SieveConfigError):
        load_vocabulary(vocabulary_fixture(file_name))


def test_default_vocabulary_includes_its_issue_types() -> None:
    """Built-in vocabulary should carry the standard issue types."""
    vocabulary = default_vocabulary()

    assert "omission" in vocabulary.lqi_types
    assert vocabulary.range_for(DataCategoryField.LQI_SEVERITY) == (0, 100)


def test_load_configured_vocabulary_uses_config_path() -> None:
    """Configured path should take precedence over the built-in table."""
    config = SieveConfig(vocabulary_path=Path(vocabulary_fixture("valid.yaml")), filter_workers=1)

    vocabulary = load_configured_vocabulary(config)

    assert len(vocabulary.lqi_types) == 3


def test_load_configured_vocabulary_defaults_without_path() -> None:
    """Missing path should fall back to the built-in table."""
    config = SieveConfig(vocabulary_path=None, filter_workers=1)

    assert load_configured_vocabulary(config) == default_vocabulary()
