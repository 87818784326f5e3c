"""KML parsing: the Feature Normalizer.

Parses a KML document and produces an immutable ``KmlData``: document
metadata, flattened Folder/Document lists and one typed feature per
geometry.

The pipeline is split into focused stages:
- **_validation**: file reading, XML well-formedness (lxml)
- **_geojson**: KML element tree -> GeoJSON FeatureCollection
- **_normalization**: GeoJSON -> feature variants, Folder/Document metadata
- **_xml**: namespace-agnostic element helpers

Failure policy:
- Whole-document faults (empty input, malformed XML, a conversion
  exception) raise a single ``ParseError("Failed to parse KML file")``;
  no partial result is returned.
- Per-feature faults never abort the document: a feature with the wrong
  coordinate nesting is dropped, any other fault becomes an
  ``ErrorFeature`` placeholder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_reader.core.constants import DEFAULT_MAX_FILE_BYTES
from kml_reader.core.exceptions import KmlReadError, ParseError
from kml_reader.models.document import KmlData
from kml_reader.pipeline.parse_kml._constants import GX_NAMESPACE, KML_NAMESPACE
from kml_reader.pipeline.parse_kml._geojson import kml_to_geojson, parse_coordinates_text
from kml_reader.pipeline.parse_kml._normalization import (
    GEOMETRY_TYPE_MAP,
    extract_document_metadata,
    extract_documents,
    extract_folders,
    normalize_features,
)
from kml_reader.pipeline.parse_kml._validation import parse_xml, read_kml_bytes

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("kml_reader.pipeline.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "GEOMETRY_TYPE_MAP",
    "GX_NAMESPACE",
    "KML_NAMESPACE",
    "KmlReadError",
    "ParseError",
    "kml_to_geojson",
    "normalize_features",
    "parse_coordinates_text",
    "parse_kml",
    "parse_kml_file",
    "parse_xml",
    "read_kml_bytes",
]


def parse_kml(content: str | bytes) -> KmlData:
    """Parse KML text or bytes into a ``KmlData``.

    Args:
        content: The whole document. ``str`` is treated as UTF-8 text;
            ``bytes`` honour the XML-declared encoding.

    Returns:
        The normalized document. Parsing the same content twice yields
        equal values.

    Raises:
        ParseError: If the document is empty, not well-formed, or the
            GeoJSON conversion fails.
    """
    root = parse_xml(content)

    try:
        name, description = extract_document_metadata(root)
        folders = extract_folders(root)
        documents = extract_documents(root)
        collection = kml_to_geojson(root)
    except Exception as exc:
        logger.error("KML to GeoJSON conversion failed: %s", exc)
        raise ParseError from exc

    features = normalize_features(collection)

    logger.info(
        "Parsed KML | name=%s | features=%d | folders=%d | documents=%d",
        name or "-",
        len(features),
        len(folders),
        len(documents),
    )
    return KmlData(
        name=name,
        description=description,
        folders=tuple(folders),
        documents=tuple(documents),
        features=tuple(features),
    )


def parse_kml_file(kml_path: Path | str, *, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> KmlData:
    """Read a KML file from disk and parse it.

    Raises:
        KmlReadError: If the file cannot be read or exceeds ``max_bytes``.
        ParseError: If the content is not a parseable KML document.
    """
    return parse_kml(read_kml_bytes(kml_path, max_bytes=max_bytes))
