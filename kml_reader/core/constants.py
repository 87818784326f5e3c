"""Shared constants — single source of truth.

Geometry kind names, Earth model constants and the user-facing messages
surfaced by the loader.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Geometry kinds
# ---------------------------------------------------------------------------

POINT = "Point"
LINE_STRING = "LineString"
POLYGON = "Polygon"
MULTI_POINT = "MultiPoint"
MULTI_LINE_STRING = "MultiLineString"
MULTI_POLYGON = "MultiPolygon"
GEOMETRY_COLLECTION = "GeometryCollection"

UNKNOWN_TYPE = "Unknown"
"""Feature type used for error placeholders whose original type is lost."""

ERROR_FEATURE_NAME = "Error processing feature"

# ---------------------------------------------------------------------------
# Earth model
# ---------------------------------------------------------------------------

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius used by the Haversine formula."""

KM_PER_DEGREE = 111.32
"""Approximate kilometres per degree of latitude."""

PLANAR_AREA_CORRECTION = 0.7
"""Empirical factor applied to the bounding-box area in the planar fallback."""

SQ_METRES_PER_SQ_KM = 1_000_000.0

# ---------------------------------------------------------------------------
# Area methods
# ---------------------------------------------------------------------------

AREA_METHOD_GEODESIC = "geodesic"
AREA_METHOD_PLANAR = "planar"
AREA_METHODS = frozenset({AREA_METHOD_GEODESIC, AREA_METHOD_PLANAR})

DEFAULT_ELLIPSOID = "WGS84"

# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

DEFAULT_MAX_FILE_BYTES = 50 * 1024 * 1024

READ_FAILED_MESSAGE = "Failed to read the file. Please try again."
PARSE_FAILED_MESSAGE = "Failed to parse KML file. Please ensure it's a valid KML format."
