"""ExtendedData parameter binding."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from timemap_kml.core.constants import VALUE_TAG
from timemap_kml.core.params import OptionParam
from timemap_kml.utils.xml import get_tag_value

if TYPE_CHECKING:
    from lxml.etree import _Element

    from timemap_kml.core.params import SupportsOptions


class ExtendedDataParam(OptionParam):
    """Option loaded from a KML ``ExtendedData/Data`` entry.

    ``<Data name="...">`` entries are matched on their ``name`` attribute
    and their ``<value>`` text is written under the same option key.
    """

    def bind(self, config: SupportsOptions, data_nodes: Iterable[_Element]) -> None:
        """Write every matching ``Data`` value into ``config``; the last one wins."""
        for node in data_nodes:
            if node.get("name") == self.name:
                self.set_config(config, get_tag_value(node, VALUE_TAG))
