"""Exception taxonomy for the KML loader.

Every domain exception inherits from ``TimemapError`` and carries
structured context fields so callers can log and report failures
consistently.

Taxonomy categories
-------------------
- ``ValidationError``: configuration or input contract violations.
- ``TimemapError``: anything else raised by the loader.

Missing data inside a document (no title, no time, no geometry, no
ExtendedData match) is never an error; only whole-document failures
and bad configuration raise.
"""

from __future__ import annotations


class TimemapError(Exception):
    """Base exception for all loader-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Loader stage where the error occurred
            (e.g. ``"parse_kml"``, ``"config"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
        source: Name of the document being loaded, when known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        source: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.source = source
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "parse"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "source": self.source,
        }


class ValidationError(TimemapError):
    """Configuration or input contract violation."""


class KmlParseError(TimemapError):
    """Raised when a KML document cannot be parsed into a tree.

    The underlying lxml error, when there is one, is chained as
    ``__cause__``.
    """

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"
