"""Tests for the KML document parser and loader.

Covers:
- Placemarks with Point / LineString / Polygon geometry
- Inherited time from nested Folders
- GroundOverlay extraction (first LatLonBox wins)
- Placemark items before overlay items
- ExtendedData binding and extra tags
- Malformed input rejection
- load / load_file / load_dataset with preload and transform
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from timemap_kml.core.config import LoaderConfig
from timemap_kml.core.exceptions import KmlParseError
from timemap_kml.loaders.kml import ExtendedDataParam, KmlLoader, parse_kml
from timemap_kml.models.dataset import SCHEMA_VERSION, KmlDataset
from timemap_kml.models.item import (
    Coordinate,
    PointGeometry,
    PolygonGeometry,
    PolylineGeometry,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestPlacemarks:
    """Placemark items."""

    def test_titles_descriptions_and_times(self, placemarks_kml: Path, fixed_clock) -> None:
        items = parse_kml(placemarks_kml.read_bytes(), clock=fixed_clock)

        assert [item.title for item in items] == [
            "Harbour survey",
            "Ferry route",
            "Pier footprint",
        ]
        survey, ferry, pier = items
        assert survey.description == "<p>Survey of the old harbour</p>"
        assert survey.start == "1985-04-12"
        assert survey.end is None
        assert ferry.description is None
        assert (ferry.start, ferry.end) == ("1990-01-01", "1995-06-30")
        assert (pier.start, pier.end) == ("2001-03-01", "2024-03-15T12:30:45Z")

    def test_geometry_kinds(self, placemarks_kml: Path, fixed_clock) -> None:
        survey, ferry, pier = parse_kml(placemarks_kml.read_bytes(), clock=fixed_clock)

        assert survey.geometries == (
            PointGeometry(Coordinate("-122.4194", "37.7749", "0")),
        )
        assert isinstance(ferry.geometries[0], PolylineGeometry)
        assert len(ferry.geometries[0].coordinates) == 3
        assert isinstance(pier.geometries[0], PolygonGeometry)
        assert len(pier.geometries[0].coordinates) == 3
        assert all(item.overlay is None for item in (survey, ferry, pier))

    def test_geometry_order_point_line_polygon(self, fixed_clock) -> None:
        kml = """
        <kml><Placemark><MultiGeometry>
          <Polygon><outerBoundaryIs><LinearRing>
            <coordinates>0,0 1,0 1,1</coordinates>
          </LinearRing></outerBoundaryIs></Polygon>
          <LineString><coordinates>5,5 6,6</coordinates></LineString>
          <Point><coordinates>1,1</coordinates></Point>
          <Point><coordinates>2,2</coordinates></Point>
        </MultiGeometry></Placemark></kml>
        """
        (item,) = parse_kml(kml, clock=fixed_clock)
        assert [g.kind for g in item.geometries] == ["point", "point", "polyline", "polygon"]
        assert item.geometries[1] == PointGeometry(Coordinate("2", "2"))

    def test_placemark_without_anything(self, fixed_clock) -> None:
        (item,) = parse_kml("<kml><Placemark/></kml>", clock=fixed_clock)
        assert item.title is None
        assert item.start is None
        assert item.geometries == ()
        assert item.options == {}

    def test_root_placemark_is_an_item(self, fixed_clock) -> None:
        (item,) = parse_kml("<Placemark><name>solo</name></Placemark>", clock=fixed_clock)
        assert item.title == "solo"

    def test_root_ground_overlay_is_an_item(self, fixed_clock) -> None:
        kml = "<GroundOverlay><name>map</name><Icon><href>m.png</href></Icon></GroundOverlay>"
        (item,) = parse_kml(kml, clock=fixed_clock)
        assert item.overlay is not None
        assert item.overlay.image == "m.png"

    def test_inherited_folder_time(self, nested_folders_kml: Path, fixed_clock) -> None:
        dubois, mandan, undated = parse_kml(nested_folders_kml.read_bytes(), clock=fixed_clock)

        assert (dubois.start, dubois.end) == ("1804-05-14", "1806-09-23")
        assert (mandan.start, mandan.end) == ("1804-11-02", None)
        assert (undated.start, undated.end) == (None, None)


class TestGroundOverlay:
    """GroundOverlay items."""

    def test_overlay_fields(self, ground_overlay_kml: Path, fixed_clock) -> None:
        items = parse_kml(ground_overlay_kml.read_bytes(), clock=fixed_clock)
        overlay_item = items[-1]

        assert overlay_item.title == "Fire map"
        assert overlay_item.description == "Burned district"
        assert overlay_item.start == "1906-04-18"
        assert overlay_item.geometries == ()
        overlay = overlay_item.overlay
        assert overlay is not None
        assert overlay.image == "http://example.com/fire-map.png"
        assert (overlay.north, overlay.south, overlay.east, overlay.west) == (
            "10",
            "0",
            "5",
            "-5",
        )

    def test_placemarks_before_overlays(self, ground_overlay_kml: Path, fixed_clock) -> None:
        items = parse_kml(ground_overlay_kml.read_bytes(), clock=fixed_clock)
        assert [item.title for item in items] == ["City hall", "Fire map"]
        assert items[0].overlay is None
        assert items[1].is_overlay

    def test_overlay_missing_icon_and_box(self, fixed_clock) -> None:
        (item,) = parse_kml("<kml><GroundOverlay><name>x</name></GroundOverlay></kml>")
        assert item.overlay is not None
        assert item.overlay.image is None
        assert item.overlay.north is None
        assert item.overlay.to_dict() == {}


class TestExtendedDataAndExtras:
    """ExtendedData binding and extra tags."""

    def test_extended_data_bound_into_options(self, placemarks_kml: Path, fixed_clock) -> None:
        items = parse_kml(
            placemarks_kml.read_bytes(),
            extended_data=["surveyor", "missing"],
            clock=fixed_clock,
        )
        assert items[0].options["surveyor"] == "J. Ortega"
        assert "missing" not in items[0].options
        assert "surveyor" not in items[1].options

    def test_unconfigured_fields_not_bound(self, placemarks_kml: Path, fixed_clock) -> None:
        (survey, *_rest) = parse_kml(placemarks_kml.read_bytes(), clock=fixed_clock)
        assert "crew" not in survey.options

    def test_last_duplicate_wins(self, fixed_clock) -> None:
        kml = """
        <kml><Placemark><ExtendedData>
          <Data name="X"><value>a</value></Data>
          <Data name="X"><value>b</value></Data>
        </ExtendedData></Placemark></kml>
        """
        (item,) = parse_kml(kml, extended_data=["X"], clock=fixed_clock)
        assert item.options["X"] == "b"

    def test_overlay_extended_data(self, fixed_clock) -> None:
        kml = """
        <kml><GroundOverlay>
          <ExtendedData><Data name="source"><value>USGS</value></Data></ExtendedData>
        </GroundOverlay></kml>
        """
        (item,) = parse_kml(kml, extended_data=["source"], clock=fixed_clock)
        assert item.options["source"] == "USGS"

    def test_param_with_transform(self, placemarks_kml: Path, fixed_clock) -> None:
        loader = KmlLoader(
            extended_data_params=[ExtendedDataParam("crew", transform=int)],
            clock=fixed_clock,
        )
        items = loader.parse(placemarks_kml.read_bytes())
        assert items[0].options["crew"] == 4

    def test_extra_tags_and_tag_map(self, fixed_clock) -> None:
        kml = """
        <kml><Placemark>
          <styleUrl>#red</styleUrl>
          <address>1 Market St</address>
        </Placemark></kml>
        """
        config = LoaderConfig(extra_tags=("styleUrl", "address"), tag_map={"styleUrl": "style"})
        (item,) = KmlLoader(config, clock=fixed_clock).parse(kml)
        assert item.options == {"style": "#red", "address": "1 Market St"}

    def test_parse_extra_override(self, fixed_clock) -> None:
        class TaggingLoader(KmlLoader):
            def parse_extra(self, builder, element) -> None:
                builder.options["kind"] = "overlay" if builder.overlay else "placemark"

        kml = "<kml><Placemark/><GroundOverlay/></kml>"
        items = TaggingLoader(clock=fixed_clock).parse(kml)
        assert [item.options["kind"] for item in items] == ["placemark", "overlay"]


class TestMalformedInput:
    """Whole-document failures."""

    def test_not_xml(self, not_xml_kml: Path) -> None:
        with pytest.raises(KmlParseError) as exc_info:
            parse_kml(not_xml_kml.read_bytes(), source=not_xml_kml.name)

        assert "Not valid XML" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None
        assert exc_info.value.source == "04_malformed_not_xml.kml"

    def test_empty_document(self) -> None:
        with pytest.raises(KmlParseError, match="empty"):
            parse_kml("   ")

    def test_unclosed_tags(self) -> None:
        with pytest.raises(KmlParseError):
            parse_kml("<kml><Placemark><name>x</Placemark></kml>")

    def test_str_with_encoding_declaration(self, fixed_clock) -> None:
        kml = '<?xml version="1.0" encoding="UTF-8"?><kml><Placemark><name>é</name></Placemark></kml>'
        (item,) = parse_kml(kml, clock=fixed_clock)
        assert item.title == "é"

    def test_str_with_latin1_declaration(self, fixed_clock) -> None:
        kml = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<kml><Placemark><name>café</name></Placemark></kml>"
        )
        (item,) = parse_kml(kml, clock=fixed_clock)
        assert item.title == "café"

    def test_bytes_with_latin1_declaration(self, fixed_clock) -> None:
        kml = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<kml><Placemark><name>café</name></Placemark></kml>"
        ).encode("iso-8859-1")
        (item,) = parse_kml(kml, clock=fixed_clock)
        assert item.title == "café"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(KmlParseError, match="Cannot read"):
            KmlLoader().load_file(tmp_path / "nope.kml")


class TestLoad:
    """Host dict output, preload/transform and dataset documents."""

    def test_host_dict_shape(self, ground_overlay_kml: Path, fixed_clock) -> None:
        city_hall, fire_map = KmlLoader(clock=fixed_clock).load_file(ground_overlay_kml)

        assert city_hall == {
            "title": "City hall",
            "start": "1906-04-18",
            "options": {},
            "placemarks": [{"point": {"lat": "37.779", "lon": "-122.419"}}],
        }
        assert fire_map["overlay"] == {
            "image": "http://example.com/fire-map.png",
            "north": "10",
            "south": "0",
            "east": "5",
            "west": "-5",
        }
        assert "placemarks" not in fire_map
        assert fire_map["options"] == {"description": "Burned district"}

    def test_preload_and_transform(self, placemarks_kml: Path, fixed_clock) -> None:
        def drop_ferry_route(items):
            return [item for item in items if item["title"] != "Ferry route"]

        def upper_title(item):
            return {**item, "title": item["title"].upper()}

        loader = KmlLoader(preload=drop_ferry_route, transform=upper_title, clock=fixed_clock)
        items = loader.load(placemarks_kml.read_bytes())
        assert [item["title"] for item in items] == ["HARBOUR SURVEY", "PIER FOOTPRINT"]

    def test_load_dataset(self, placemarks_kml: Path, fixed_clock) -> None:
        loader = KmlLoader(clock=fixed_clock)
        dataset = loader.load_dataset(placemarks_kml.read_bytes(), source=placemarks_kml.name)

        assert isinstance(dataset, KmlDataset)
        assert dataset.schema_version == SCHEMA_VERSION
        assert dataset.source == "01_placemarks_with_time.kml"
        assert dataset.loaded_at == "2024-03-15T12:30:45Z"
        assert dataset.item_count == 3
        assert dataset.model_dump()["items"][1]["title"] == "Ferry route"

    def test_repeated_parses_are_independent(self, placemarks_kml: Path, fixed_clock) -> None:
        loader = KmlLoader(clock=fixed_clock)
        first = loader.parse(placemarks_kml.read_bytes())
        second = loader.parse(placemarks_kml.read_bytes())
        assert first == second
        assert first[0] is not second[0]
