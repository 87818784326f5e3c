"""Reader configuration loaded from environment variables.

All values have sensible defaults; ``from_env()`` fails fast with
``ConfigValidationError`` when a value is out of its valid range so that
bad configuration is caught at startup rather than mid-measurement.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from kml_reader.core.constants import (
    AREA_METHOD_GEODESIC,
    AREA_METHODS,
    DEFAULT_ELLIPSOID,
    DEFAULT_MAX_FILE_BYTES,
)
from kml_reader.core.exceptions import KmlReaderError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigValidationError(KmlReaderError):
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
class ReaderConfig:
    """Immutable reader configuration.

    Attributes:
        area_method: ``"geodesic"`` (pyproj) or ``"planar"`` (bounding-box
            approximation only).
        geodesic_ellipsoid: Ellipsoid name passed to ``pyproj.Geod``.
        max_file_bytes: Largest file the loader will read.
        log_level: Level name for the ``kml_reader`` logger.
    """

    area_method: str = AREA_METHOD_GEODESIC
    geodesic_ellipsoid: str = DEFAULT_ELLIPSOID
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ReaderConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If ``KML_READER_MAX_FILE_BYTES`` is not an integer.
        """
        config = cls(
            area_method=os.getenv("KML_READER_AREA_METHOD", AREA_METHOD_GEODESIC).lower(),
            geodesic_ellipsoid=os.getenv("KML_READER_GEOD_ELLIPSOID", DEFAULT_ELLIPSOID),
            max_file_bytes=int(
                os.getenv("KML_READER_MAX_FILE_BYTES", str(DEFAULT_MAX_FILE_BYTES))
            ),
            log_level=os.getenv("KML_READER_LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config


def _validate(config: ReaderConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.area_method not in AREA_METHODS:
        raise ConfigValidationError(
            "KML_READER_AREA_METHOD",
            config.area_method,
            f"must be one of {sorted(AREA_METHODS)}",
        )

    if not config.geodesic_ellipsoid:
        raise ConfigValidationError(
            "KML_READER_GEOD_ELLIPSOID",
            config.geodesic_ellipsoid,
            "must not be empty",
        )

    if config.max_file_bytes <= 0:
        raise ConfigValidationError(
            "KML_READER_MAX_FILE_BYTES",
            config.max_file_bytes,
            "must be > 0 (bytes)",
        )

    if config.log_level not in _LOG_LEVELS:
        raise ConfigValidationError(
            "KML_READER_LOG_LEVEL",
            config.log_level,
            f"must be one of {sorted(_LOG_LEVELS)}",
        )


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the ``kml_reader`` logger.

    Safe to call repeatedly; only the level changes on later calls.
    """
    logger = logging.getLogger("kml_reader")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
