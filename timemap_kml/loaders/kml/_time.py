"""Time resolution for KML items.

An item's time comes from its own ``TimeStamp``/``TimeSpan`` or, if it
has none, from the nearest enclosing ``Folder``/``Document`` that
declares one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from timemap_kml.core.constants import (
    CONTAINER_TAGS,
    DEFAULT_DATE_PRECISION,
    DEFAULT_MAX_ANCESTOR_DEPTH,
    TIMESPAN_TAG,
    TIMESTAMP_TAG,
)
from timemap_kml.utils.dates import Clock, format_date, utc_now
from timemap_kml.utils.xml import child_text, find_child, local_name

if TYPE_CHECKING:
    from lxml.etree import _Element

    from timemap_kml.models.item import ItemBuilder

logger = logging.getLogger("timemap_kml.loaders.kml")


def resolve_time(
    element: _Element,
    builder: ItemBuilder,
    *,
    clock: Clock = utc_now,
    precision: int = DEFAULT_DATE_PRECISION,
    max_depth: int = DEFAULT_MAX_ANCESTOR_DEPTH,
) -> None:
    """Set ``builder.start``/``builder.end`` from the nearest time declaration.

    A ``TimeStamp`` takes priority over a ``TimeSpan`` on the same element.
    The first element carrying either one ends the search. A span with
    no ``<end>`` ends at ``clock()``, formatted with ``precision``.

    The search climbs only through ``Folder``/``Document`` parents and
    stops after ``max_depth`` of them; the builder is left untouched if
    nothing is found.
    """
    node = element
    for depth in range(max_depth + 1):
        stamp = find_child(node, TIMESTAMP_TAG)
        if stamp is not None:
            builder.start = child_text(stamp, "when")
            return

        span = find_child(node, TIMESPAN_TAG)
        if span is not None:
            builder.start = child_text(span, "begin")
            # unbounded spans end at the present time
            builder.end = child_text(span, "end") or format_date(clock(), precision)
            return

        parent = node.getparent()
        if parent is None or local_name(parent) not in CONTAINER_TAGS:
            return
        node = parent
        logger.debug("No time on <%s>, checking ancestor level %d", local_name(element), depth + 1)

    logger.warning(
        "Stopped time search for <%s> after %d container level(s)",
        local_name(element),
        max_depth,
    )
