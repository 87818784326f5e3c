"""Data model for a normalized KML feature.

A feature is one geometric element extracted from a KML document. Each
geometry kind has its own variant carrying a precisely shaped coordinate
tuple, so consumers dispatch on the variant instead of sniffing array
depth at runtime:

- ``PointFeature``       — ``(position,)``
- ``LineStringFeature``  — ``(position, position, ...)`` (>= 2)
- ``PolygonFeature``     — ``(outer_ring,)`` where the ring has >= 3 positions
- ``UnsupportedFeature`` — any other GeoJSON kind, no coordinates
- ``ErrorFeature``       — placeholder for a feature that failed to normalize

A position is ``(lon, lat)`` or ``(lon, lat, alt)``. Values are kept as
given by the source; the measurement engine skips entries that are not
numeric.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from kml_reader.core.constants import (
    ERROR_FEATURE_NAME,
    LINE_STRING,
    POINT,
    POLYGON,
    UNKNOWN_TYPE,
)
from kml_reader.core.exceptions import GeometryShapeError

Position: TypeAlias = tuple[float, ...]
Ring: TypeAlias = tuple[Position, ...]

MIN_LINE_POSITIONS = 2
MIN_RING_POSITIONS = 3


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def as_position(raw: object, context: str) -> Position:
    """Convert a raw ``[lon, lat(, alt)]`` array into a position tuple.

    Raises:
        GeometryShapeError: If ``raw`` is not a sequence of at least two values.
    """
    if isinstance(raw, str | bytes) or not isinstance(raw, Sequence):
        msg = f"{context}: expected a position array, got {type(raw).__name__}"
        raise GeometryShapeError(msg)
    if len(raw) < 2:
        msg = f"{context}: position needs at least lon, lat (got {len(raw)} value(s))"
        raise GeometryShapeError(msg)
    # Scalars pass through unchecked; a nested array means the wrong depth
    if any(isinstance(v, Sequence) and not isinstance(v, str | bytes) for v in raw):
        msg = f"{context}: position values must be scalars, got a nested array"
        raise GeometryShapeError(msg)
    return tuple(raw)


def as_positions(raw: object, context: str, *, minimum: int) -> tuple[Position, ...]:
    """Convert a raw array of positions, enforcing a minimum length.

    Raises:
        GeometryShapeError: If ``raw`` is not a flat sequence of positions
            or has fewer than ``minimum`` entries.
    """
    if isinstance(raw, str | bytes) or not isinstance(raw, Sequence):
        msg = f"{context}: expected an array of positions, got {type(raw).__name__}"
        raise GeometryShapeError(msg)
    positions = tuple(as_position(item, f"{context}[{idx}]") for idx, item in enumerate(raw))
    if len(positions) < minimum:
        msg = f"{context}: need at least {minimum} positions, got {len(positions)}"
        raise GeometryShapeError(msg)
    return positions


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PointFeature:
    """A single placemark location."""

    type: ClassVar[str] = POINT

    name: str = ""
    description: str = ""
    coordinates: tuple[Position] = ()  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if len(self.coordinates) != 1:
            msg = f"Point must hold exactly one position, got {len(self.coordinates)}"
            raise GeometryShapeError(msg)
        position = as_position(self.coordinates[0], "Point")
        object.__setattr__(self, "coordinates", (position,))

    @property
    def position(self) -> Position:
        """The point's only position."""
        return self.coordinates[0]

    def to_dict(self) -> dict[str, object]:
        return _to_dict(self)


@dataclass(frozen=True, slots=True)
class LineStringFeature:
    """An ordered path of two or more positions."""

    type: ClassVar[str] = LINE_STRING

    name: str = ""
    description: str = ""
    coordinates: tuple[Position, ...] = ()

    def __post_init__(self) -> None:
        positions = as_positions(self.coordinates, "LineString", minimum=MIN_LINE_POSITIONS)
        object.__setattr__(self, "coordinates", positions)

    def to_dict(self) -> dict[str, object]:
        return _to_dict(self)


@dataclass(frozen=True, slots=True)
class PolygonFeature:
    """A polygon described by its outer ring only.

    Inner rings (holes) are not modeled; ``coordinates`` always holds
    exactly one ring to keep the GeoJSON ring nesting.
    """

    type: ClassVar[str] = POLYGON

    name: str = ""
    description: str = ""
    coordinates: tuple[Ring] = ()  # type: ignore[assignment]

    def __post_init__(self) -> None:
        rings = self.coordinates
        if isinstance(rings, str | bytes) or not isinstance(rings, Sequence) or len(rings) != 1:
            msg = "Polygon must hold exactly one (outer) ring"
            raise GeometryShapeError(msg)
        outer = as_positions(rings[0], "Polygon outer ring", minimum=MIN_RING_POSITIONS)
        object.__setattr__(self, "coordinates", (outer,))

    @property
    def outer_ring(self) -> Ring:
        return self.coordinates[0]

    def to_dict(self) -> dict[str, object]:
        return _to_dict(self)


@dataclass(frozen=True, slots=True)
class UnsupportedFeature:
    """A geometry kind outside Point/LineString/Polygon and their Multi* forms.

    ``type`` carries the raw GeoJSON kind (e.g. ``"MultiPoint"``). There are
    no coordinates; renderers treat these as a no-op.
    """

    type: str
    name: str = ""
    description: str = ""
    coordinates: tuple[()] = ()

    def to_dict(self) -> dict[str, object]:
        return _to_dict(self)


@dataclass(frozen=True, slots=True)
class ErrorFeature:
    """Placeholder kept in place of a feature that failed to normalize."""

    type: str = UNKNOWN_TYPE
    name: str = ERROR_FEATURE_NAME
    description: str = ""
    coordinates: tuple[()] = ()

    def to_dict(self) -> dict[str, object]:
        return _to_dict(self)


Feature: TypeAlias = (
    PointFeature | LineStringFeature | PolygonFeature | UnsupportedFeature | ErrorFeature
)


def _to_dict(feature: Feature) -> dict[str, object]:
    """Serialise any variant to plain GeoJSON-like lists."""
    return {
        "type": feature.type,
        "name": feature.name,
        "description": feature.description,
        "coordinates": _listify(feature.coordinates),
    }


def _listify(value: object) -> object:
    if isinstance(value, tuple):
        return [_listify(v) for v in value]
    return value
