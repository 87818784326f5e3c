"""Shared constants for KML parsing."""

from __future__ import annotations

# KML 2.2 namespace (2.0/2.1 and un-namespaced documents are matched by local name)
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"

# Google extension namespace (gx:Track, gx:coord)
GX_NAMESPACE = "http://www.google.com/kml/ext/2.2"

# lxml parser hardening: no entity expansion, no network, bounded tree
XML_PARSER_OPTIONS: dict[str, bool] = {
    "resolve_entities": False,
    "no_network": True,
    "huge_tree": False,
}

# Placemark geometry element local names
GEOMETRY_TAGS = frozenset({"Point", "LineString", "Polygon", "MultiGeometry", "Track", "MultiTrack"})
