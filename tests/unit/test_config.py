"""Tests for reader configuration.

Covers:
- Default values
- Loading from environment variables
- Normalisation of case-insensitive values
- Fail-fast range validation
- Logging setup
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from kml_reader.core.config import ConfigValidationError, ReaderConfig, configure_logging
from kml_reader.core.exceptions import KmlReaderError


class TestReaderConfigDefaults:
    """Verify default configuration values."""

    def test_default_area_method(self) -> None:
        assert ReaderConfig().area_method == "geodesic"

    def test_default_ellipsoid(self) -> None:
        assert ReaderConfig().geodesic_ellipsoid == "WGS84"

    def test_default_max_file_bytes(self) -> None:
        assert ReaderConfig().max_file_bytes == 50 * 1024 * 1024

    def test_default_log_level(self) -> None:
        assert ReaderConfig().log_level == "INFO"


class TestReaderConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "KML_READER_AREA_METHOD": "planar",
            "KML_READER_GEOD_ELLIPSOID": "GRS80",
            "KML_READER_MAX_FILE_BYTES": "1024",
            "KML_READER_LOG_LEVEL": "DEBUG",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = ReaderConfig.from_env()

        assert cfg.area_method == "planar"
        assert cfg.geodesic_ellipsoid == "GRS80"
        assert cfg.max_file_bytes == 1024
        assert cfg.log_level == "DEBUG"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = ReaderConfig.from_env()
        assert cfg == ReaderConfig()

    def test_values_are_case_normalised(self) -> None:
        env = {"KML_READER_AREA_METHOD": "PLANAR", "KML_READER_LOG_LEVEL": "warning"}
        with patch.dict(os.environ, env, clear=True):
            cfg = ReaderConfig.from_env()
        assert cfg.area_method == "planar"
        assert cfg.log_level == "WARNING"

    def test_non_integer_size_raises(self) -> None:
        with (
            patch.dict(os.environ, {"KML_READER_MAX_FILE_BYTES": "lots"}, clear=True),
            pytest.raises(ValueError, match="invalid literal"),
        ):
            ReaderConfig.from_env()


class TestConfigValidation:
    """Out-of-range values fail fast with the offending key."""

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("KML_READER_AREA_METHOD", "spherical"),
            ("KML_READER_GEOD_ELLIPSOID", ""),
            ("KML_READER_MAX_FILE_BYTES", "0"),
            ("KML_READER_MAX_FILE_BYTES", "-5"),
            ("KML_READER_LOG_LEVEL", "VERBOSE"),
        ],
    )
    def test_invalid_values_rejected(self, key: str, value: str) -> None:
        with (
            patch.dict(os.environ, {key: value}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            ReaderConfig.from_env()
        assert exc_info.value.key == key
        assert key in str(exc_info.value)

    def test_error_carries_value_and_stage(self) -> None:
        with (
            patch.dict(os.environ, {"KML_READER_AREA_METHOD": "spherical"}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            ReaderConfig.from_env()
        err = exc_info.value
        assert err.value == "spherical"
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert isinstance(err, KmlReaderError)

    def test_direct_construction_is_not_validated(self) -> None:
        """Only ``from_env`` validates; direct construction is trusted."""
        assert ReaderConfig(area_method="anything").area_method == "anything"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logger(self) -> Iterator[None]:
        logger = logging.getLogger("kml_reader")
        handlers = list(logger.handlers)
        level = logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_attaches_single_handler(self) -> None:
        logger = logging.getLogger("kml_reader")
        logger.handlers.clear()
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_later_call_changes_level(self) -> None:
        logger = logging.getLogger("kml_reader")
        logger.handlers.clear()
        configure_logging(logging.DEBUG)
        configure_logging(logging.WARNING)
        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)
