"""Data models and schemas.

- ItemRecord: One timeline item (time, options, geometries or overlay)
- GeometryRecord: Point, polyline or polygon
- OverlayRecord: Ground overlay image and bounding box
- KmlDataset: Loaded dataset document with provenance
"""

from timemap_kml.models.dataset import KmlDataset
from timemap_kml.models.item import (
    Coordinate,
    GeometryRecord,
    ItemBuilder,
    ItemRecord,
    OverlayRecord,
    PointGeometry,
    PolygonGeometry,
    PolylineGeometry,
)

__all__ = [
    "Coordinate",
    "GeometryRecord",
    "ItemBuilder",
    "ItemRecord",
    "KmlDataset",
    "OverlayRecord",
    "PointGeometry",
    "PolygonGeometry",
    "PolylineGeometry",
]
