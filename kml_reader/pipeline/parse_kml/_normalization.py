"""GeoJSON feature and KML metadata normalization.

Responsibilities:
- Map GeoJSON geometry kinds onto the feature variants, exploding
  ``MultiLineString`` / ``MultiPolygon`` into sibling features
- Drop features whose coordinates do not match their kind's nesting
- Isolate per-feature faults behind ``ErrorFeature`` placeholders
- Extract flattened Folder / Document metadata from the KML tree
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kml_reader.core.constants import (
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POLYGON,
    POINT,
    POLYGON,
    UNKNOWN_TYPE,
)
from kml_reader.core.exceptions import GeometryShapeError
from kml_reader.models.document import Document, Folder
from kml_reader.models.feature import (
    ErrorFeature,
    Feature,
    LineStringFeature,
    PointFeature,
    PolygonFeature,
    UnsupportedFeature,
)
from kml_reader.pipeline.parse_kml._xml import first_text, iter_local

if TYPE_CHECKING:
    from collections.abc import Callable

    from lxml.etree import _Element

logger = logging.getLogger("kml_reader.pipeline.parse_kml")

# GeoJSON kind -> feature type
GEOMETRY_TYPE_MAP: dict[str, str] = {
    POINT: POINT,
    LINE_STRING: LINE_STRING,
    MULTI_LINE_STRING: LINE_STRING,
    POLYGON: POLYGON,
    MULTI_POLYGON: POLYGON,
}


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


def normalize_features(collection: Mapping[str, Any]) -> list[Feature]:
    """Normalize a GeoJSON ``FeatureCollection`` into a flat feature list.

    Features with ``null`` geometry are skipped. Output order is collection
    order, then member order for exploded Multi* geometries.
    """
    features: list[Feature] = []
    for idx, geo_feature in enumerate(collection.get("features") or []):
        geometry = geo_feature.get("geometry") if isinstance(geo_feature, Mapping) else None
        if isinstance(geo_feature, Mapping) and not geometry:
            continue
        try:
            features.extend(_normalize_feature(geo_feature, idx))
        except Exception:
            logger.exception("Failed to normalize feature %d; inserting placeholder", idx)
            features.append(ErrorFeature(type=_placeholder_type(geometry)))
    return features


def _normalize_feature(geo_feature: Mapping[str, Any], idx: int) -> list[Feature]:
    geometry = geo_feature["geometry"]
    properties = geo_feature.get("properties") or {}
    name = _property_text(properties, "name")
    description = _property_text(properties, "description")
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    label = name or f"Feature {idx}"

    def build(factory: Callable[..., Feature], coordinates: object, part: str = "") -> list[Feature]:
        try:
            return [factory(name=name, description=description, coordinates=coordinates)]
        except GeometryShapeError as exc:
            logger.warning("Dropping %s '%s'%s: %s", kind, label, part, exc)
            return []

    if kind == POINT:
        return build(PointFeature, (coords,))

    if kind == LINE_STRING:
        return build(LineStringFeature, coords)

    if kind == POLYGON:
        return build(PolygonFeature, _outer_ring_only(coords, label))

    if kind in (MULTI_LINE_STRING, MULTI_POLYGON):
        members = _members(coords, kind, label)
        exploded: list[Feature] = []
        for sub_idx, member in enumerate(members):
            part = f" (part {sub_idx})"
            if kind == MULTI_LINE_STRING:
                exploded.extend(build(LineStringFeature, member, part))
            else:
                exploded.extend(build(PolygonFeature, _outer_ring_only(member, label), part))
        return exploded

    raw_type = kind if isinstance(kind, str) and kind else UNKNOWN_TYPE
    logger.info(
        "Unsupported geometry %s in feature '%s'; kept without coordinates", raw_type, label
    )
    return [UnsupportedFeature(type=raw_type, name=name, description=description)]


def _outer_ring_only(rings: object, label: str) -> object:
    """Keep only the first ring of a GeoJSON polygon; holes are not modeled."""
    if not isinstance(rings, list | tuple) or not rings:
        return rings
    if len(rings) > 1:
        logger.debug("Ignoring %d inner ring(s) of polygon '%s'", len(rings) - 1, label)
    return rings[:1]


def _members(coords: object, kind: str, label: str) -> list[Any]:
    if not isinstance(coords, list | tuple):
        msg = f"{kind} '{label}': expected an array of members, got {type(coords).__name__}"
        raise GeometryShapeError(msg)
    return list(coords)


def _property_text(properties: Mapping[str, Any], key: str) -> str:
    value = properties.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _placeholder_type(geometry: object) -> str:
    if isinstance(geometry, Mapping):
        kind = geometry.get("type")
        if isinstance(kind, str) and kind:
            return GEOMETRY_TYPE_MAP.get(kind, kind)
    return UNKNOWN_TYPE


# ---------------------------------------------------------------------------
# Document metadata
# ---------------------------------------------------------------------------


def extract_document_metadata(root: _Element) -> tuple[str, str]:
    """Top-level name/description: first matching element in document order."""
    return (
        first_text(root, "name", include_self=True),
        first_text(root, "description", include_self=True),
    )


def extract_folders(root: _Element) -> list[Folder]:
    """Every ``<Folder>`` in document order, hierarchy flattened."""
    return [
        Folder(name=first_text(elem, "name"), description=first_text(elem, "description"))
        for elem in iter_local(root, "Folder", include_self=True)
    ]


def extract_documents(root: _Element) -> list[Document]:
    """Every ``<Document>`` in document order, hierarchy flattened."""
    return [
        Document(name=first_text(elem, "name"), description=first_text(elem, "description"))
        for elem in iter_local(root, "Document", include_self=True)
    ]
