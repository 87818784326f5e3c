"""Processing pipeline.

- parse_kml: KML -> GeoJSON -> normalized ``KmlData``
- measure: Haversine length and geodesic/planar area
- tabulate: summary counts and detail rows for presentation
- load_kml: asynchronous file loading with request-token sequencing
"""
