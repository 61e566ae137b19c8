"""Coordinate decoding and geometry extraction for KML items.

Coordinates are kept as source text: numeric validation is left to
the host renderer, and polygon rings are passed through unclosed.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from timemap_kml.core.constants import COORDINATES_TAG
from timemap_kml.models.item import (
    Coordinate,
    PointGeometry,
    PolygonGeometry,
    PolylineGeometry,
)
from timemap_kml.utils.xml import get_tag_value

if TYPE_CHECKING:
    from lxml.etree import _Element

_COMMA_SPACING = re.compile(r"\s*,\s*")


def decode_coordinates(text: str | None) -> list[Coordinate]:
    """Decode KML coordinate text (``lon,lat[,alt] lon,lat[,alt] ...``).

    Tuples are whitespace-separated and their components comma-separated.
    Whitespace around commas is dropped first, so ``1.0, 2.0`` reads as
    one tuple. Tokens with fewer than two components are skipped;
    components past the third are ignored.
    """
    if not text:
        return []
    coords: list[Coordinate] = []
    for token in _COMMA_SPACING.sub(",", text).split():
        parts = [part.strip() for part in token.split(",")]
        if len(parts) < 2:
            continue
        alt = parts[2] if len(parts) > 2 else None
        coords.append(Coordinate(parts[0], parts[1], alt))
    return coords


def extract_point(element: _Element) -> PointGeometry:
    """Build a point from a ``<Point>``; only the first tuple is used."""
    coords = decode_coordinates(get_tag_value(element, COORDINATES_TAG))
    return PointGeometry(coords[0] if coords else None)


def extract_polyline(element: _Element) -> PolylineGeometry:
    """Build a polyline from a ``<LineString>``."""
    return PolylineGeometry(tuple(decode_coordinates(get_tag_value(element, COORDINATES_TAG))))


def extract_polygon(element: _Element) -> PolygonGeometry:
    """Build a polygon from a ``<Polygon>``.

    Uses the first ``<coordinates>`` in the element, i.e. the outer
    boundary ring; inner boundaries are not extracted.
    """
    return PolygonGeometry(tuple(decode_coordinates(get_tag_value(element, COORDINATES_TAG))))
