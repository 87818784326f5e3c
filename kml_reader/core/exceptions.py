"""Unified exception taxonomy for the KML reader.

Every domain exception inherits from ``KmlReaderError`` and carries
structured context fields so callers (and the presentation layer) get a
consistent, stable error payload.

Taxonomy categories
-------------------
- ``ValidationError``  — input or domain-model shape violations.
- ``PermanentError``   — unrecoverable failures for the current load
  (unreadable file, malformed document).

Measurement problems are not exceptions: degenerate input
yields ``None`` and internal faults yield ``0.0`` (see
``kml_reader.pipeline.measure``).
"""

from __future__ import annotations


class KmlReaderError(Exception):
    """Base exception for all KML reader errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"parse_kml"``, ``"load_kml"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
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
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(KmlReaderError):
    """Input or domain-model validation failure."""


class PermanentError(KmlReaderError):
    """Unrecoverable failure for the current load."""


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class ParseError(PermanentError):
    """Raised when a KML document cannot be parsed or converted.

    All sub-causes (syntax error, empty document, conversion fault)
    collapse into one message; the underlying exception is kept as
    ``__cause__`` for diagnostics.
    """

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"

    def __init__(self, message: str = "Failed to parse KML file", **kwargs: str) -> None:
        super().__init__(message, **kwargs)


class KmlReadError(PermanentError):
    """Raised when the input file cannot be read."""

    default_stage = "load_kml"
    default_code = "KML_READ_FAILED"


class GeometryShapeError(ValidationError):
    """Raised when feature coordinates do not match the geometry's nesting depth."""

    default_stage = "normalize"
    default_code = "GEOMETRY_SHAPE_INVALID"
