"""Summary and detail tables derived from ``KmlData``.

These are the row models the presentation layer renders; they carry no
styling. The detail table keeps a one-to-one row/feature correspondence:
a feature whose row cannot be built is replaced by an error placeholder
row rather than dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kml_reader.core.constants import (
    ERROR_FEATURE_NAME,
    LINE_STRING,
    POINT,
    POLYGON,
    UNKNOWN_TYPE,
)
from kml_reader.pipeline.measure import measure_feature
from kml_reader.utils.helpers import PLACEHOLDER, format_measurement, safe_string

if TYPE_CHECKING:
    from kml_reader.core.config import ReaderConfig
    from kml_reader.models.document import KmlData
    from kml_reader.models.feature import Feature

logger = logging.getLogger("kml_reader.pipeline.tabulate")


@dataclass(frozen=True, slots=True)
class SummaryCounts:
    """Element counts for the summary table."""

    point: int = 0
    line_string: int = 0
    polygon: int = 0
    folder: int = 0
    document: int = 0
    total: int = 0

    def as_rows(self) -> list[tuple[str, int]]:
        """``(element type, count)`` rows in display order."""
        return [
            (POINT, self.point),
            (LINE_STRING, self.line_string),
            (POLYGON, self.polygon),
            ("Folder", self.folder),
            ("Document", self.document),
            ("Total", self.total),
        ]


@dataclass(frozen=True, slots=True)
class DetailRow:
    """One detail-table row per feature."""

    type: str
    name: str
    description: str
    length_km: float | None = None
    area_km2: float | None = None

    @property
    def length_text(self) -> str:
        return format_measurement(self.length_km)

    @property
    def area_text(self) -> str:
        return format_measurement(self.area_km2)


def build_summary(kml_data: KmlData) -> SummaryCounts:
    """Count features by renderable type plus folders, documents and total.

    ``total`` counts every feature, unsupported ones included.
    """
    counts = kml_data.count_by_type()
    return SummaryCounts(
        point=counts.get(POINT, 0),
        line_string=counts.get(LINE_STRING, 0),
        polygon=counts.get(POLYGON, 0),
        folder=len(kml_data.folders),
        document=len(kml_data.documents),
        total=len(kml_data.features),
    )


def build_detail_rows(kml_data: KmlData, config: ReaderConfig | None = None) -> list[DetailRow]:
    """One row per feature, in feature order, with length and area."""
    return [_detail_row(feature, config) for feature in kml_data.features]


def _detail_row(feature: Feature, config: ReaderConfig | None) -> DetailRow:
    try:
        measurement = measure_feature(feature, config)
        return DetailRow(
            type=feature.type,
            name=safe_string(feature.name),
            description=safe_string(feature.description),
            length_km=measurement.length_km,
            area_km2=measurement.area_km2,
        )
    except Exception:
        logger.exception("Error processing feature for table")
        return DetailRow(
            type=getattr(feature, "type", None) or UNKNOWN_TYPE,
            name=ERROR_FEATURE_NAME,
            description=PLACEHOLDER,
        )
