"""Geometric Measurement Engine.

Derives scalar measurements from normalized coordinates:

- **Length** (LineString): sum of Haversine great-circle distances between
  consecutive positions, Earth radius 6371 km.
- **Area** (Polygon): geodesic area of the outer ring via ``pyproj.Geod``,
  falling back to a planar bounding-box approximation (x 0.7) when the
  geodesic computation raises or is disabled by configuration.

Best-effort policy for malformed real-world KML:
- A position whose latitude/longitude is not a finite number is skipped
  (length: the pair is not counted; area: the vertex is ignored).
- Inputs that do not apply (wrong type, nested line coordinates, fewer
  than three usable polygon vertices) yield ``None``.
- Any unexpected internal fault is logged and yields ``0.0``; the public
  functions never raise.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
from itertools import pairwise
from numbers import Real
from typing import TYPE_CHECKING

from pyproj import Geod
from shapely.geometry import MultiPoint

from kml_reader.core.constants import (
    AREA_METHOD_GEODESIC,
    AREA_METHOD_PLANAR,
    DEFAULT_ELLIPSOID,
    EARTH_RADIUS_KM,
    KM_PER_DEGREE,
    LINE_STRING,
    PLANAR_AREA_CORRECTION,
    POLYGON,
    SQ_METRES_PER_SQ_KM,
)
from kml_reader.models.feature import LineStringFeature, PolygonFeature

if TYPE_CHECKING:
    from kml_reader.core.config import ReaderConfig
    from kml_reader.models.feature import Feature

logger = logging.getLogger("kml_reader.pipeline.measure")

# Minimum usable vertices for an area computation
MIN_AREA_VERTICES = 3


@dataclass(frozen=True, slots=True)
class Measurement:
    """Derived measurements for one feature (``None`` when not applicable)."""

    length_km: float | None = None
    area_km2: float | None = None


# ---------------------------------------------------------------------------
# Haversine
# ---------------------------------------------------------------------------


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points in degrees."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a just past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def line_length_km(coordinates: object, feature_type: str = LINE_STRING) -> float | None:
    """Total Haversine length of a flat position sequence, in kilometres.

    Returns:
        The summed length, ``None`` if ``feature_type`` is not LineString or
        the coordinates are nested rings, ``0.0`` on an internal fault.
    """
    if feature_type != LINE_STRING:
        return None

    try:
        if not _is_sequence(coordinates):
            return None
        if _is_nested(coordinates):
            logger.debug("Nested LineString coordinates; length not computed")
            return None

        total = 0.0
        skipped = 0
        for start, end in pairwise(coordinates):
            a = _lon_lat(start)
            b = _lon_lat(end)
            if a is None or b is None:
                skipped += 1
                continue
            total += haversine_km(a[1], a[0], b[1], b[0])

        if skipped:
            logger.debug("Skipped %d segment(s) with non-numeric coordinates", skipped)
        return total
    except Exception:
        logger.exception("Error calculating length")
        return 0.0


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------


def polygon_area_km2(
    coordinates: object,
    feature_type: str = POLYGON,
    *,
    method: str = AREA_METHOD_GEODESIC,
    ellipsoid: str = DEFAULT_ELLIPSOID,
) -> float | None:
    """Area of a polygon's outer ring in square kilometres.

    Args:
        coordinates: Ring list as carried by ``PolygonFeature.coordinates``;
            only the first (outer) ring is measured.
        feature_type: Must be ``"Polygon"``; anything else returns ``None``.
        method: ``"geodesic"`` (pyproj, planar fallback on error) or
            ``"planar"`` (bounding-box approximation only).
        ellipsoid: ``pyproj.Geod`` ellipsoid name for the geodesic method.

    Returns:
        Area in km², ``None`` for non-polygons or fewer than three usable
        vertices, ``0.0`` on an internal fault.
    """
    if feature_type != POLYGON:
        return None

    try:
        if not _is_sequence(coordinates) or not coordinates:
            return None
        outer = coordinates[0]
        if not _is_sequence(outer):
            return None

        points = [p for p in (_lon_lat(pos) for pos in outer) if p is not None]
        if len(points) < MIN_AREA_VERTICES:
            logger.debug("Polygon has %d usable vertices; area not computed", len(points))
            return None

        if method == AREA_METHOD_GEODESIC:
            try:
                return geodesic_area_km2(points, ellipsoid=ellipsoid)
            except Exception as exc:
                logger.warning("Geodesic area failed, using planar approximation: %s", exc)
        elif method != AREA_METHOD_PLANAR:
            logger.warning("Unknown area method %r, using planar approximation", method)

        return planar_area_km2(points)
    except Exception:
        logger.exception("Error calculating area")
        return 0.0


def geodesic_area_km2(
    points: Sequence[tuple[float, float]], *, ellipsoid: str = DEFAULT_ELLIPSOID
) -> float:
    """Geodesic area of a ring of ``(lon, lat)`` points, winding-order agnostic.

    Raises whatever ``pyproj`` raises; callers wanting the fallback go
    through ``polygon_area_km2``.
    """
    geod = _geod(ellipsoid)
    lons = [p[0] for p in points]
    lats = [p[1] for p in points]
    area_m2, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(area_m2) / SQ_METRES_PER_SQ_KM


def planar_area_km2(points: Sequence[tuple[float, float]]) -> float:
    """Bounding-box area approximation in km².

    Degrees are converted with 111.32 km per degree (longitude scaled by
    the cosine of the box's centre latitude), then multiplied by a fixed
    0.7 correction since the box overestimates the polygon. This is an
    approximation, not a guaranteed-accurate area.
    """
    min_lon, min_lat, max_lon, max_lat = MultiPoint(list(points)).bounds
    width = max_lon - min_lon
    height = max_lat - min_lat
    centre_lat_rad = math.radians((min_lat + max_lat) / 2)

    km_per_deg_lat = KM_PER_DEGREE
    km_per_deg_lon = KM_PER_DEGREE * math.cos(centre_lat_rad)

    return (width * km_per_deg_lon) * (height * km_per_deg_lat) * PLANAR_AREA_CORRECTION


# ---------------------------------------------------------------------------
# Feature-level dispatch
# ---------------------------------------------------------------------------


def feature_length_km(feature: Feature) -> float | None:
    """Length of a LineString feature; ``None`` for every other variant."""
    if not isinstance(feature, LineStringFeature):
        return None
    return line_length_km(feature.coordinates, feature.type)


def feature_area_km2(
    feature: Feature,
    *,
    method: str = AREA_METHOD_GEODESIC,
    ellipsoid: str = DEFAULT_ELLIPSOID,
) -> float | None:
    """Area of a Polygon feature; ``None`` for every other variant."""
    if not isinstance(feature, PolygonFeature):
        return None
    return polygon_area_km2(feature.coordinates, feature.type, method=method, ellipsoid=ellipsoid)


def measure_feature(feature: Feature, config: ReaderConfig | None = None) -> Measurement:
    """Compute every measurement that applies to ``feature``."""
    method = config.area_method if config is not None else AREA_METHOD_GEODESIC
    ellipsoid = config.geodesic_ellipsoid if config is not None else DEFAULT_ELLIPSOID
    return Measurement(
        length_km=feature_length_km(feature),
        area_km2=feature_area_km2(feature, method=method, ellipsoid=ellipsoid),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=8)
def _geod(ellipsoid: str) -> Geod:
    return Geod(ellps=ellipsoid)


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _is_nested(coordinates: Sequence[object]) -> bool:
    """True when the first entry is itself a list of positions (ring list)."""
    if not coordinates:
        return False
    first = coordinates[0]
    return _is_sequence(first) and bool(first) and _is_sequence(first[0])  # type: ignore[index]


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _lon_lat(position: object) -> tuple[float, float] | None:
    """``(lon, lat)`` as floats, or ``None`` if the position is unusable."""
    if not _is_sequence(position) or len(position) < 2:  # type: ignore[arg-type]
        return None
    lon, lat = position[0], position[1]  # type: ignore[index]
    if not (_is_number(lon) and _is_number(lat)):
        return None
    return (float(lon), float(lat))
