"""KML loader.

Parses a KML document and extracts timeline items: one per Placemark
and one per GroundOverlay.

The loader is split into focused stages:
- **_time**: TimeStamp/TimeSpan resolution, inherited from Folder/Document
- **_geometry**: coordinate text decoding, Point/LineString/Polygon records
- **_params**: ExtendedData/Data binding into item options
- **_parser**: document walk, overlays, extra tags, preload/transform

Supported KML structures:
- Placemarks at any depth under nested Folders/Documents
- Multiple geometries per Placemark (including MultiGeometry)
- GroundOverlay with Icon/href and LatLonBox
- TimeStamp, TimeSpan (open-ended spans end at the loader clock)
- ExtendedData/Data name/value entries
"""

from __future__ import annotations

from timemap_kml.core.exceptions import KmlParseError
from timemap_kml.loaders.kml._geometry import (
    decode_coordinates,
    extract_point,
    extract_polygon,
    extract_polyline,
)
from timemap_kml.loaders.kml._params import ExtendedDataParam
from timemap_kml.loaders.kml._parser import KmlLoader, parse_kml
from timemap_kml.loaders.kml._time import resolve_time

__all__ = [
    "ExtendedDataParam",
    "KmlLoader",
    "KmlParseError",
    "decode_coordinates",
    "extract_point",
    "extract_polygon",
    "extract_polyline",
    "parse_kml",
    "resolve_time",
]
