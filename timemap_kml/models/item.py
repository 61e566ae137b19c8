"""Data model for loaded timeline items.

An ``ItemRecord`` is one timeline entry: a title, a temporal extent,
an ``options`` bag (description plus any bound ExtendedData or extra
tag values) and either zero or more geometries or one image overlay.
This is the output of the KML loader and the input to the host
visualization engine (see ``ItemRecord.to_dict``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, NamedTuple


class Coordinate(NamedTuple):
    """A KML coordinate tuple, kept as the source text.

    Attributes:
        lon: Longitude text.
        lat: Latitude text.
        alt: Altitude text, ``None`` for 2-component tuples.
    """

    lon: str
    lat: str
    alt: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"lat": self.lat, "lon": self.lon}
        if self.alt is not None:
            data["alt"] = self.alt
        return data


@dataclass(frozen=True, slots=True)
class PointGeometry:
    """A single point. ``coordinate`` is ``None`` if the Point had no coordinates."""

    kind: ClassVar[str] = "point"

    coordinate: Coordinate | None = None

    def to_dict(self) -> dict[str, Any]:
        return {self.kind: self.coordinate.to_dict() if self.coordinate else {}}


@dataclass(frozen=True, slots=True)
class PolylineGeometry:
    """An open path of coordinates in document order."""

    kind: ClassVar[str] = "polyline"

    coordinates: tuple[Coordinate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {self.kind: [c.to_dict() for c in self.coordinates]}


@dataclass(frozen=True, slots=True)
class PolygonGeometry:
    """One polygon ring in document order. Unclosed rings are not closed."""

    kind: ClassVar[str] = "polygon"

    coordinates: tuple[Coordinate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {self.kind: [c.to_dict() for c in self.coordinates]}


GeometryRecord = PointGeometry | PolylineGeometry | PolygonGeometry


@dataclass(frozen=True, slots=True)
class OverlayRecord:
    """A ground overlay image and its bounding box edges (unvalidated text)."""

    image: str | None = None
    north: str | None = None
    south: str | None = None
    east: str | None = None
    west: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {
            key: value
            for key, value in (
                ("image", self.image),
                ("north", self.north),
                ("south", self.south),
                ("east", self.east),
                ("west", self.west),
            )
            if value is not None
        }


@dataclass(frozen=True, slots=True)
class ItemRecord:
    """A single timeline item extracted from a KML document.

    Attributes:
        title: Item name (KML ``<name>``), ``None`` if absent.
        start: Start time text, ``None`` if no time was declared.
        end: End time text, only set for time spans.
        options: Description and any bound extra fields.
        geometries: Point, polyline and polygon records in extraction order.
        overlay: Image overlay, only set for GroundOverlay items.
    """

    title: str | None = None
    start: str | None = None
    end: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    geometries: tuple[GeometryRecord, ...] = ()
    overlay: OverlayRecord | None = None

    @property
    def description(self) -> str | None:
        return self.options.get("description")

    @property
    def is_overlay(self) -> bool:
        return self.overlay is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the host item shape.

        Geometries are emitted under ``placemarks``; unset scalar fields
        are omitted.
        """
        data: dict[str, Any] = {"options": dict(self.options)}
        for key, value in (("title", self.title), ("start", self.start), ("end", self.end)):
            if value is not None:
                data[key] = value
        if self.overlay is not None:
            data["overlay"] = self.overlay.to_dict()
        else:
            data["placemarks"] = [g.to_dict() for g in self.geometries]
        return data


@dataclass(slots=True)
class ItemBuilder:
    """Mutable accumulator for one item under construction.

    Scoped to a single Placemark or GroundOverlay; ``build()`` returns
    the frozen record and the builder is then discarded.
    """

    title: str | None = None
    start: str | None = None
    end: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    geometries: list[GeometryRecord] = field(default_factory=list)
    overlay: OverlayRecord | None = None

    def build(self) -> ItemRecord:
        return ItemRecord(
            title=self.title,
            start=self.start,
            end=self.end,
            options=dict(self.options),
            geometries=tuple(self.geometries),
            overlay=self.overlay,
        )
