"""Runtime configuration model for the catalog store.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOAD_POLICY,
    DEFAULT_LONGITUDE_FIRST,
    RECORD_FILE_PATTERN,
    SUPPORTED_LOAD_POLICIES,
)
from core.errors import CatalogConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class CatalogConfig:
    """Validated runtime configuration.

    Attributes:
        record_file_pattern: Glob pattern selecting record files in the root.
        load_policy: ``abort`` or ``skip`` handling for unreadable files.
        longitude_first: Axis order assumed for bare ``EPSG:4326`` boxes
            found in record files.
    """

    record_file_pattern: str = RECORD_FILE_PATTERN
    load_policy: str = DEFAULT_LOAD_POLICY
    longitude_first: bool = DEFAULT_LONGITUDE_FIRST

    def __post_init__(self) -> None:
        if self.load_policy not in SUPPORTED_LOAD_POLICIES:
            raise CatalogConfigError(
                f"Unsupported load policy '{self.load_policy}'. "
                f"Use one of: {', '.join(SUPPORTED_LOAD_POLICIES)}."
            )
        if not self.record_file_pattern:
            raise CatalogConfigError(
                "Record file pattern must not be empty. "
                "Set CSW_STORE_RECORD_PATTERN to a glob such as 'Record_*.xml'."
            )

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CatalogConfigError: If environment values are invalid.
        """
        pattern = os.getenv("CSW_STORE_RECORD_PATTERN", RECORD_FILE_PATTERN)
        load_policy = os.getenv("CSW_STORE_LOAD_POLICY", DEFAULT_LOAD_POLICY).strip().lower()
        longitude_first_value = os.getenv("CSW_STORE_LONGITUDE_FIRST")
        longitude_first = DEFAULT_LONGITUDE_FIRST
        if longitude_first_value is not None:
            longitude_first = _parse_bool("CSW_STORE_LONGITUDE_FIRST", longitude_first_value)
        return cls(
            record_file_pattern=pattern,
            load_policy=load_policy,
            longitude_first=longitude_first,
        )


def _parse_bool(variable: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        variable: Environment variable name, for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        CatalogConfigError: If value is not a recognized boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise CatalogConfigError(
        f"Invalid {variable} value: expected a boolean, got '{raw_value}'. "
        "Set it to 'true' or 'false'."
    )
