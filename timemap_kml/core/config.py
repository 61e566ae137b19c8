"""Loader configuration loaded from arguments or environment variables.

Fail-fast validation:
    ``from_env()`` and ``validated()`` raise ``ConfigValidationError``
    if any value is out of its valid range, so bad configuration is
    caught before a document is parsed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from timemap_kml.core.constants import (
    DEFAULT_DATE_PRECISION,
    DEFAULT_MAX_ANCESTOR_DEPTH,
    PRECISION_DATE,
    PRECISION_SECONDS,
)
from timemap_kml.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable KML loader configuration.

    Attributes:
        extended_data: ``ExtendedData/Data`` names bound into item options.
        extra_tags: Child tags of each item copied into item options.
        tag_map: Renames extra tags (tag name -> option key).
        date_precision: Precision of the generated end time of open spans
            (``1`` date, ``2`` minutes, ``3`` seconds).
        max_ancestor_depth: Maximum number of Folder/Document levels
            searched for an inherited time declaration.
    """

    extended_data: tuple[str, ...] = ()
    extra_tags: tuple[str, ...] = ()
    tag_map: dict[str, str] = field(default_factory=dict)
    date_precision: int = DEFAULT_DATE_PRECISION
    max_ancestor_depth: int = DEFAULT_MAX_ANCESTOR_DEPTH

    @classmethod
    def from_env(cls) -> LoaderConfig:
        """Load and validate configuration from environment variables.

        Reads ``TIMEMAP_KML_EXTENDED_DATA`` and ``TIMEMAP_KML_EXTRA_TAGS``
        (comma-separated), ``TIMEMAP_KML_DATE_PRECISION`` and
        ``TIMEMAP_KML_MAX_ANCESTOR_DEPTH``.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If a numeric variable cannot be parsed.
        """
        config = cls(
            extended_data=_split_names(os.getenv("TIMEMAP_KML_EXTENDED_DATA", "")),
            extra_tags=_split_names(os.getenv("TIMEMAP_KML_EXTRA_TAGS", "")),
            date_precision=int(
                os.getenv("TIMEMAP_KML_DATE_PRECISION", str(DEFAULT_DATE_PRECISION))
            ),
            max_ancestor_depth=int(
                os.getenv("TIMEMAP_KML_MAX_ANCESTOR_DEPTH", str(DEFAULT_MAX_ANCESTOR_DEPTH))
            ),
        )
        return config.validated()

    def validated(self) -> LoaderConfig:
        """Return ``self`` after range checks.  Raises ``ConfigValidationError``."""
        if not PRECISION_DATE <= self.date_precision <= PRECISION_SECONDS:
            raise ConfigValidationError(
                "date_precision",
                self.date_precision,
                f"must be between {PRECISION_DATE} and {PRECISION_SECONDS}",
            )

        if self.max_ancestor_depth < 0:
            raise ConfigValidationError(
                "max_ancestor_depth",
                self.max_ancestor_depth,
                "must be >= 0",
            )

        for name in self.extended_data:
            if not name:
                raise ConfigValidationError(
                    "extended_data", self.extended_data, "names must not be empty"
                )

        for tag in self.extra_tags:
            if not tag:
                raise ConfigValidationError("extra_tags", self.extra_tags, "tags must not be empty")

        return self


def _split_names(raw: str) -> tuple[str, ...]:
    """Split a comma-separated env value, dropping blanks."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())
