"""Tests for the unified exception taxonomy.

Validates:
- KmlReaderError hierarchy and structured attributes
- Category classification (validation, permanent)
- ``to_error_dict()`` produces stable payload keys
- All reader exceptions are KmlReaderError subclasses
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from kml_reader.core.config import ConfigValidationError
from kml_reader.core.exceptions import (
    GeometryShapeError,
    KmlReaderError,
    KmlReadError,
    ParseError,
    PermanentError,
    ValidationError,
)


class TestKmlReaderErrorBase:
    """KmlReaderError base class behavior."""

    def test_default_attributes(self) -> None:
        err = KmlReaderError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert str(err) == "boom"

    def test_custom_attributes(self) -> None:
        err = KmlReaderError("fail", stage="load_kml", code="CUSTOM")
        assert err.stage == "load_kml"
        assert err.code == "CUSTOM"

    def test_base_category_is_permanent(self) -> None:
        assert KmlReaderError("x").category == "permanent"

    def test_to_error_dict_keys(self) -> None:
        payload = KmlReaderError("fail", stage="s", code="C").to_error_dict()
        assert payload == {
            "category": "permanent",
            "code": "C",
            "stage": "s",
            "message": "fail",
        }


class TestCategories:
    """Each concrete error maps to its category and defaults."""

    CASES: ClassVar[list[tuple[KmlReaderError, str, str, str]]] = [
        (ParseError(), "permanent", "parse_kml", "KML_PARSE_FAILED"),
        (KmlReadError("gone"), "permanent", "load_kml", "KML_READ_FAILED"),
        (GeometryShapeError("bad"), "validation", "normalize", "GEOMETRY_SHAPE_INVALID"),
        (
            ConfigValidationError("K", "v", "nope"),
            "permanent",
            "config",
            "CONFIG_VALIDATION_FAILED",
        ),
    ]

    @pytest.mark.parametrize(("err", "category", "stage", "code"), CASES)
    def test_defaults(self, err: KmlReaderError, category: str, stage: str, code: str) -> None:
        assert err.category == category
        assert err.stage == stage
        assert err.code == code
        assert err.to_error_dict()["category"] == category

    def test_stage_override(self) -> None:
        assert KmlReadError("x", stage="custom").stage == "custom"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("exc_type", "parent"),
        [
            (ParseError, PermanentError),
            (KmlReadError, PermanentError),
            (GeometryShapeError, ValidationError),
            (ConfigValidationError, KmlReaderError),
            (ValidationError, KmlReaderError),
            (PermanentError, KmlReaderError),
        ],
    )
    def test_subclassing(self, exc_type: type[Exception], parent: type[Exception]) -> None:
        assert issubclass(exc_type, parent)

    def test_parse_error_default_message(self) -> None:
        err = ParseError()
        assert err.message == "Failed to parse KML file"
        assert str(err) == "Failed to parse KML file"

    def test_parse_error_keeps_cause(self) -> None:
        cause = ValueError("unclosed tag")
        with pytest.raises(ParseError) as exc_info:
            raise ParseError from cause
        assert exc_info.value.__cause__ is cause

    def test_all_caught_by_base(self) -> None:
        for err in (ParseError(), KmlReadError("x"), GeometryShapeError("y")):
            with pytest.raises(KmlReaderError):
                raise err
