"""KML Reader.

Ingests a KML document, normalizes its Point / LineString / Polygon
geometry (including Multi* variants) into a flat immutable feature
collection, and derives great-circle lengths and polygon areas for map,
summary and detail views.
"""

__version__ = "0.1.0"
