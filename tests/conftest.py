"""Shared pytest fixtures for the KML Reader test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def single_polygon_kml(data_dir: Path) -> Path:
    """Path to a single-polygon KML with one inner ring."""
    return data_dir / "01_single_polygon_orchard.kml"


@pytest.fixture()
def mixed_kml(data_dir: Path) -> Path:
    """Path to a KML with Point/LineString/Polygon placemarks in nested folders."""
    return data_dir / "02_mixed_geometries_folders.kml"


@pytest.fixture()
def multigeometry_kml(data_dir: Path) -> Path:
    """Path to a KML with MultiGeometry placemarks (lines, polygons, mixed)."""
    return data_dir / "03_multigeometry.kml"


@pytest.fixture()
def gx_track_kml(data_dir: Path) -> Path:
    """Path to a KML containing a gx:Track."""
    return data_dir / "04_gx_track.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with mismatched/unclosed tags."""
    return edge_cases_dir / "12_malformed_unclosed_tags.kml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no placemarks."""
    return edge_cases_dir / "13_empty_no_features.kml"


@pytest.fixture()
def degenerate_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with degenerate and geometry-less placemarks."""
    return edge_cases_dir / "15_degenerate_geometries.kml"


@pytest.fixture()
def latin1_kml(edge_cases_dir: Path) -> Path:
    """Path to an ISO-8859-1 encoded KML."""
    return edge_cases_dir / "16_latin1_encoding.kml"


@pytest.fixture()
def no_namespace_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML without the KML namespace."""
    return edge_cases_dir / "17_no_namespace.kml"
