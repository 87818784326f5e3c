"""KML to GeoJSON conversion built on the lxml element tree.

Each ``<Placemark>`` (document order, any folder depth) becomes one
GeoJSON ``Feature`` whose properties hold ``name``/``description`` and
whose geometry follows these rules:

- ``Point`` / ``LineString`` / ``Polygon`` map one-to-one (polygon rings
  are ordered outer first, then inner).
- ``gx:Track`` becomes a ``LineString`` of its ``gx:coord`` samples;
  ``gx:MultiTrack`` is treated like a ``MultiGeometry`` of tracks.
- ``MultiGeometry`` is flattened; one member collapses to that member,
  several members of the same kind become ``MultiPoint`` /
  ``MultiLineString`` / ``MultiPolygon``, mixed kinds become a
  ``GeometryCollection``.
- A Placemark without geometry gets ``"geometry": None``.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from kml_reader.core.constants import (
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)
from kml_reader.pipeline.parse_kml._constants import GEOMETRY_TAGS
from kml_reader.pipeline.parse_kml._xml import (
    child,
    children,
    element_text,
    iter_local,
    local_name,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element

logger = logging.getLogger("kml_reader.pipeline.parse_kml")

GeoJson = dict[str, Any]

_MULTI_KINDS = {
    POINT: MULTI_POINT,
    LINE_STRING: MULTI_LINE_STRING,
    POLYGON: MULTI_POLYGON,
}

# "lon , lat" -> "lon,lat" so tuples split cleanly on whitespace
_COMMA_SPACING = re.compile(r"\s*,\s*")


def kml_to_geojson(root: _Element) -> GeoJson:
    """Convert a parsed KML tree to a GeoJSON ``FeatureCollection`` dict."""
    features = [
        _placemark_to_feature(placemark)
        for placemark in iter_local(root, "Placemark", include_self=True)
    ]
    return {"type": "FeatureCollection", "features": features}


# ---------------------------------------------------------------------------
# Coordinate text parsing
# ---------------------------------------------------------------------------


def parse_coordinates_text(text: str) -> list[list[float]]:
    """Parse KML ``lon,lat[,alt] lon,lat[,alt] ...`` text into positions.

    Tuples with fewer than two values, or values that are not numbers,
    are skipped.
    """
    positions: list[list[float]] = []
    for token in _COMMA_SPACING.sub(",", text.strip()).split():
        parts = token.split(",")
        if len(parts) < 2:
            logger.debug("Skipping coordinate tuple with fewer than 2 values: %r", token)
            continue
        try:
            positions.append([float(p) for p in parts[:3]])
        except ValueError:
            logger.debug("Skipping non-numeric coordinate tuple: %r", token)
    return positions


def _coordinates_of(node: _Element) -> list[list[float]]:
    coords_elem = child(node, "coordinates")
    if coords_elem is None:
        return []
    return parse_coordinates_text(element_text(coords_elem))


def _track_coordinates(track: _Element) -> list[list[float]]:
    """Parse ``gx:coord`` samples (space separated ``lon lat alt``)."""
    positions: list[list[float]] = []
    for coord in children(track, "coord"):
        parts = element_text(coord).split()
        if len(parts) < 2:
            continue
        try:
            positions.append([float(p) for p in parts[:3]])
        except ValueError:
            logger.debug("Skipping non-numeric gx:coord: %r", parts)
    return positions


# ---------------------------------------------------------------------------
# Geometry conversion
# ---------------------------------------------------------------------------


def _placemark_to_feature(placemark: _Element) -> GeoJson:
    properties: dict[str, str] = {}
    for key in ("name", "description"):
        elem = child(placemark, key)
        if elem is not None:
            properties[key] = element_text(elem)

    geometries = list(_iter_geometries(placemark))
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": _combine(geometries),
    }


def _iter_geometries(node: _Element) -> Iterator[GeoJson]:
    """Yield GeoJSON geometries for the geometry children of ``node``."""
    for elem in node:
        tag = local_name(elem)
        if tag not in GEOMETRY_TAGS:
            continue

        if tag == "Point":
            coords = _coordinates_of(elem)
            if coords:
                yield {"type": POINT, "coordinates": coords[0]}

        elif tag == "LineString":
            coords = _coordinates_of(elem)
            if coords:
                yield {"type": LINE_STRING, "coordinates": coords}

        elif tag == "Track":
            coords = _track_coordinates(elem)
            if coords:
                yield {"type": LINE_STRING, "coordinates": coords}

        elif tag == "Polygon":
            rings = _polygon_rings(elem)
            if rings:
                yield {"type": POLYGON, "coordinates": rings}

        else:  # MultiGeometry / MultiTrack
            yield from _iter_geometries(elem)


def _polygon_rings(polygon: _Element) -> list[list[list[float]]]:
    """Outer ring first, then any non-empty inner rings; [] without an outer ring."""
    outer_boundary = child(polygon, "outerBoundaryIs")
    ring = child(outer_boundary, "LinearRing") if outer_boundary is not None else None
    outer = _coordinates_of(ring) if ring is not None else []
    if not outer:
        return []

    rings = [outer]
    for inner_boundary in children(polygon, "innerBoundaryIs"):
        for inner_ring in children(inner_boundary, "LinearRing"):
            inner = _coordinates_of(inner_ring)
            if inner:
                rings.append(inner)
    return rings


def _combine(geometries: list[GeoJson]) -> GeoJson | None:
    if not geometries:
        return None
    if len(geometries) == 1:
        return geometries[0]

    kinds = {g["type"] for g in geometries}
    if len(kinds) == 1:
        (kind,) = kinds
        return {
            "type": _MULTI_KINDS[kind],
            "coordinates": [g["coordinates"] for g in geometries],
        }
    return {"type": GEOMETRY_COLLECTION, "geometries": geometries}
