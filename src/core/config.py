"""Runtime configuration model for Sieve.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_FILTER_WORKERS, FILTER_WORKERS_ENV, VOCABULARY_PATH_ENV
from core.errors import SieveConfigError


@dataclass(frozen=True)
class SieveConfig:
    """Validated runtime configuration.

    Attributes:
        vocabulary_path: Optional YAML vocabulary file; built-in table if omitted.
        filter_workers: Thread count used for batch segment filtering.
    """

    vocabulary_path: Path | None
    filter_workers: int

    @classmethod
    def from_env(cls) -> "SieveConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SieveConfigError: If environment values are invalid.
        """
        vocabulary_value = os.getenv(VOCABULARY_PATH_ENV)
        workers_value = os.getenv(FILTER_WORKERS_ENV, str(DEFAULT_FILTER_WORKERS))
        vocabulary_path = None
        if vocabulary_value and vocabulary_value.strip():
            vocabulary_path = Path(vocabulary_value.strip()).expanduser().resolve()
        return cls(
            vocabulary_path=vocabulary_path,
            filter_workers=_parse_filter_workers(workers_value),
        )


def _parse_filter_workers(raw_value: str) -> int:
    """Parse the filter worker count environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive worker count.

    Raises:
        SieveConfigError: If value is not a positive integer.
    """
    try:
        workers = int(raw_value)
    except ValueError as error:
        raise SieveConfigError(
            f"Invalid {FILTER_WORKERS_ENV} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {FILTER_WORKERS_ENV} to a positive number."
        ) from error
    if workers < 1:
        raise SieveConfigError(
            f"Invalid {FILTER_WORKERS_ENV} value {workers}: must be at least 1."
        )
    return workers
