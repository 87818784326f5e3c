"""Data models.

Defines the data structures produced by the normalizer:
- Feature variants: one per geometry kind, plus unsupported/error placeholders
- Folder / Document: flattened metadata records
- KmlData: the immutable document-level container
"""

from kml_reader.models.document import Document, Folder, KmlData
from kml_reader.models.feature import (
    ErrorFeature,
    Feature,
    LineStringFeature,
    PointFeature,
    PolygonFeature,
    Position,
    Ring,
    UnsupportedFeature,
)

__all__ = [
    "Document",
    "ErrorFeature",
    "Feature",
    "Folder",
    "KmlData",
    "LineStringFeature",
    "PointFeature",
    "PolygonFeature",
    "Position",
    "Ring",
    "UnsupportedFeature",
]
