"""Input reading and XML well-formedness checks for KML parsing.

Responsibilities:
- Read KML bytes from disk with a size guard
- Parse bytes/text into an lxml element tree, collapsing every syntax
  failure into ``ParseError``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from kml_reader.core.constants import DEFAULT_MAX_FILE_BYTES
from kml_reader.core.exceptions import KmlReadError, ParseError
from kml_reader.pipeline.parse_kml._constants import KML_NAMESPACE, XML_PARSER_OPTIONS
from kml_reader.pipeline.parse_kml._xml import local_name

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_reader.pipeline.parse_kml")


# ---------------------------------------------------------------------------
# File reading
# ---------------------------------------------------------------------------


def read_kml_bytes(kml_path: Path | str, *, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> bytes:
    """Read a KML file fully into memory.

    Raises:
        KmlReadError: If the file is missing, unreadable, or larger than
            ``max_bytes``.
    """
    kml_path = Path(kml_path)
    try:
        size = kml_path.stat().st_size
        if size > max_bytes:
            msg = f"KML file {kml_path.name} is {size} bytes, limit is {max_bytes}"
            raise KmlReadError(msg)
        return kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file {kml_path.name}: {exc}"
        raise KmlReadError(msg) from exc


# ---------------------------------------------------------------------------
# XML parsing
# ---------------------------------------------------------------------------


def parse_xml(content: str | bytes) -> _Element:
    """Parse KML content into an lxml root element.

    Text is encoded as UTF-8 and parsed with an explicit UTF-8 override so
    an XML declaration naming another encoding cannot conflict with it;
    bytes are parsed as-is and honour the declared encoding.

    Raises:
        ParseError: If the content is empty or not well-formed XML.
    """
    if isinstance(content, str):
        data = content.encode("utf-8")
        parser = etree.XMLParser(encoding="utf-8", **XML_PARSER_OPTIONS)
    else:
        data = bytes(content)
        parser = etree.XMLParser(**XML_PARSER_OPTIONS)

    if not data.strip():
        logger.error("KML document is empty")
        raise ParseError

    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.error("KML document is not well-formed XML: %s", exc)
        raise ParseError from exc

    if local_name(root) != "kml":
        logger.warning(
            "Root element is <%s>, expected <kml> (%s); parsing anyway",
            root.tag,
            KML_NAMESPACE,
        )

    return root
