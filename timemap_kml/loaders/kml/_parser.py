"""KML document parser.

Walks an lxml element tree and builds one ``ItemRecord`` per
``Placemark`` and per ``GroundOverlay``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from timemap_kml.core.config import LoaderConfig
from timemap_kml.core.constants import (
    DATA_TAG,
    EXTENDED_DATA_TAG,
    GROUND_OVERLAY_TAG,
    LINESTRING_TAG,
    PLACEMARK_TAG,
    POINT_TAG,
    POLYGON_TAG,
)
from timemap_kml.core.exceptions import KmlParseError
from timemap_kml.core.params import OptionParam
from timemap_kml.loaders.kml._geometry import extract_point, extract_polygon, extract_polyline
from timemap_kml.loaders.kml._params import ExtendedDataParam
from timemap_kml.loaders.kml._time import resolve_time
from timemap_kml.models.dataset import KmlDataset
from timemap_kml.models.item import ItemBuilder, ItemRecord, OverlayRecord
from timemap_kml.utils.dates import Clock, format_date, utc_now
from timemap_kml.utils.xml import (
    child_text,
    find_child,
    get_node_list,
    get_tag_value,
    local_name,
    parse_to_tree,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("timemap_kml.loaders.kml")

# Geometry tags and their extractors, in the order they are collected
_GEOMETRY_EXTRACTORS = (
    (POINT_TAG, extract_point),
    (LINESTRING_TAG, extract_polyline),
    (POLYGON_TAG, extract_polygon),
)


class KmlLoader:
    """Loads KML documents into timeline items.

    Args:
        config: Loader configuration (defaults to ``LoaderConfig()``).
        extended_data_params: Extra ExtendedData bindings, e.g. with a
            transform or default, applied after those named in ``config``.
        preload: Called with the full list of item dicts by ``load``;
            returns the list to keep.
        transform: Called with each item dict by ``load``; returns the
            dict to keep.
        clock: Current-time source for open-ended time spans.
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        *,
        extended_data_params: Sequence[ExtendedDataParam] = (),
        preload: Callable[[list[dict[str, Any]]], list[dict[str, Any]]] | None = None,
        transform: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.config = (config or LoaderConfig()).validated()
        self.preload = preload
        self.transform = transform
        self.clock = clock
        self.extended_data_params: list[ExtendedDataParam] = [
            ExtendedDataParam(name) for name in self.config.extended_data
        ]
        self.extended_data_params.extend(extended_data_params)
        self.extra_params = [
            OptionParam(self.config.tag_map.get(tag, tag), source_name=tag)
            for tag in self.config.extra_tags
        ]

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, kml: str | bytes, *, source: str = "") -> list[ItemRecord]:
        """Parse KML text into item records.

        Placemark items come first, then GroundOverlay items, each group
        in document order.

        Raises:
            KmlParseError: If the text is empty or not well-formed XML.
        """
        root = parse_to_tree(kml, source=source)
        label = source or "<string>"
        logger.info("Parsing KML document: %s", label)

        items: list[ItemRecord] = []
        placemarks = get_node_list(root, PLACEMARK_TAG, include_self=True)
        for pm in placemarks:
            items.append(self._parse_placemark(pm))

        overlays = get_node_list(root, GROUND_OVERLAY_TAG, include_self=True)
        for overlay in overlays:
            items.append(self._parse_overlay(overlay))

        logger.info(
            "Parsed %d placemark(s) and %d overlay(s) from %s",
            len(placemarks),
            len(overlays),
            label,
        )
        return items

    def _parse_placemark(self, pm: _Element) -> ItemRecord:
        builder = self._start_item(pm)
        for tag, extract in _GEOMETRY_EXTRACTORS:
            for node in get_node_list(pm, tag):
                builder.geometries.append(extract(node))
        self._finish_item(builder, pm)
        logger.debug(
            "Placemark '%s': %d geometries", builder.title or "", len(builder.geometries)
        )
        return builder.build()

    def _parse_overlay(self, overlay: _Element) -> ItemRecord:
        builder = self._start_item(overlay)
        icons = get_node_list(overlay, "Icon")
        boxes = get_node_list(overlay, "LatLonBox")
        box = boxes[0] if boxes else None
        builder.overlay = OverlayRecord(
            image=get_tag_value(icons[0], "href") if icons else None,
            north=get_tag_value(box, "north"),
            south=get_tag_value(box, "south"),
            east=get_tag_value(box, "east"),
            west=get_tag_value(box, "west"),
        )
        self._finish_item(builder, overlay)
        logger.debug("GroundOverlay '%s': image %s", builder.title or "", builder.overlay.image)
        return builder.build()

    def _start_item(self, element: _Element) -> ItemBuilder:
        builder = ItemBuilder(title=child_text(element, "name"))
        description = child_text(element, "description")
        if description is not None:
            builder.options["description"] = description
        resolve_time(
            element,
            builder,
            clock=self.clock,
            precision=self.config.date_precision,
            max_depth=self.config.max_ancestor_depth,
        )
        return builder

    def _finish_item(self, builder: ItemBuilder, element: _Element) -> None:
        self.parse_extended_data(builder, element)
        self.parse_extra(builder, element)

    def parse_extended_data(self, builder: ItemBuilder, element: _Element) -> None:
        """Bind the configured ExtendedData fields from the item's first block."""
        block = find_child(element, EXTENDED_DATA_TAG)
        if block is None or not self.extended_data_params:
            return
        data_nodes = [node for node in block if _is_tag(node, DATA_TAG)]
        for param in self.extended_data_params:
            param.bind(builder, data_nodes)

    def parse_extra(self, builder: ItemBuilder, element: _Element) -> None:
        """Per-item hook: copy configured extra tags into the options.

        Subclasses may override this for further per-item processing.
        """
        for param in self.extra_params:
            param.set_config_xml(builder, element)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, kml: str | bytes, *, source: str = "") -> list[dict[str, Any]]:
        """Parse KML and return host item dicts after ``preload``/``transform``."""
        items = [item.to_dict() for item in self.parse(kml, source=source)]
        if self.preload is not None:
            items = self.preload(items)
        if self.transform is not None:
            items = [self.transform(item) for item in items]
        return items

    def load_file(self, kml_path: Path | str) -> list[dict[str, Any]]:
        """Read a KML file from disk and ``load`` it.

        Raises:
            KmlParseError: If the file cannot be read or parsed.
        """
        kml_path = Path(kml_path)
        try:
            content = kml_path.read_bytes()
        except OSError as exc:
            msg = f"Cannot read KML file: {exc}"
            raise KmlParseError(msg, source=kml_path.name) from exc
        return self.load(content, source=kml_path.name)

    def load_dataset(self, kml: str | bytes, *, source: str = "") -> KmlDataset:
        """``load`` KML and wrap the items in a ``KmlDataset``."""
        items = self.load(kml, source=source)
        return KmlDataset(
            source=source,
            loaded_at=format_date(self.clock()),
            item_count=len(items),
            items=items,
        )


def parse_kml(
    kml: str | bytes,
    *,
    extended_data: Sequence[str] = (),
    clock: Clock = utc_now,
    source: str = "",
) -> list[ItemRecord]:
    """Parse KML text with a default loader.

    Args:
        kml: Raw KML text or bytes.
        extended_data: ExtendedData names to bind into item options.
        clock: Current-time source for open-ended time spans.
        source: Document name used in logs and errors.

    Raises:
        KmlParseError: If the text is empty or not well-formed XML.
    """
    loader = KmlLoader(LoaderConfig(extended_data=tuple(extended_data)), clock=clock)
    return loader.parse(kml, source=source)


def _is_tag(node: _Element, tag: str) -> bool:
    return local_name(node) == tag
