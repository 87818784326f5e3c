"""Document-level containers produced by the KML normalizer.

``KmlData`` is built once per parse call and never mutated; loading a
new file replaces it wholesale.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kml_reader.models.feature import Feature


@dataclass(frozen=True, slots=True)
class Folder:
    """A KML ``<Folder>``: metadata only, hierarchy flattened."""

    name: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True, slots=True)
class Document:
    """A KML ``<Document>``: metadata only, hierarchy flattened."""

    name: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass(frozen=True, slots=True)
class KmlData:
    """The normalized contents of one KML document.

    Attributes:
        name: Text of the first ``<name>`` element in document order.
        description: Text of the first ``<description>`` element in document order.
        folders: Every ``<Folder>`` in document order.
        documents: Every ``<Document>`` in document order.
        features: Features in source order; Multi* geometries are expanded
            in place into sibling features.
    """

    name: str = ""
    description: str = ""
    folders: tuple[Folder, ...] = field(default_factory=tuple)
    documents: tuple[Document, ...] = field(default_factory=tuple)
    features: tuple[Feature, ...] = field(default_factory=tuple)

    def count_by_type(self) -> dict[str, int]:
        """Number of features per ``type`` string, in first-seen order."""
        return dict(Counter(feature.type for feature in self.features))

    def to_dict(self) -> dict[str, object]:
        """Serialise to plain dicts/lists (e.g. for a JSON response)."""
        return {
            "name": self.name,
            "description": self.description,
            "folders": [f.to_dict() for f in self.folders],
            "documents": [d.to_dict() for d in self.documents],
            "features": [f.to_dict() for f in self.features],
        }
