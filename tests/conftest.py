"""Shared pytest fixtures for the timemap-kml test suite."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"

FIXED_NOW = datetime(2024, 3, 15, 12, 30, 45, tzinfo=UTC)


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def fixed_clock():
    """A clock that always returns 2024-03-15 12:30:45 UTC."""
    return lambda: FIXED_NOW


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def placemarks_kml(data_dir: Path) -> Path:
    """Point, LineString and Polygon placemarks with their own times."""
    return data_dir / "01_placemarks_with_time.kml"


@pytest.fixture()
def nested_folders_kml(data_dir: Path) -> Path:
    """Placemarks inheriting time from an outer Folder."""
    return data_dir / "02_nested_folders.kml"


@pytest.fixture()
def ground_overlay_kml(data_dir: Path) -> Path:
    """A GroundOverlay with two LatLonBox elements, plus one Placemark."""
    return data_dir / "03_ground_overlay.kml"


@pytest.fixture()
def not_xml_kml(data_dir: Path) -> Path:
    """A file that is not valid XML."""
    return data_dir / "04_malformed_not_xml.kml"
