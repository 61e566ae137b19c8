"""Named-option parameters.

An ``OptionParam`` knows how to write one named value into an item's
``options`` bag, applying an optional transform and default. Loaders
specialise it for their own lookup rules (see
``timemap_kml.loaders.kml.ExtendedDataParam``).
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import TYPE_CHECKING, Any, Protocol

from timemap_kml.utils.xml import element_text, find_child

if TYPE_CHECKING:
    from lxml.etree import _Element


class SupportsOptions(Protocol):
    """Anything carrying a mutable ``options`` bag (e.g. ``ItemBuilder``)."""

    options: MutableMapping[str, Any]


class OptionParam:
    """A parameter that is written into ``config.options[name]``.

    Attributes:
        name: Key written into the options bag.
        source_name: Child tag read by ``set_config_xml``
            (defaults to ``name``).
        default: Value written instead of an empty raw value. ``None``
            means the empty value is written as-is.
        transform: Callable applied to non-empty raw values before writing.
    """

    def __init__(
        self,
        name: str,
        *,
        source_name: str = "",
        default: Any = None,
        transform: Callable[[str], Any] | None = None,
    ) -> None:
        self.name = name
        self.source_name = source_name or name
        self.default = default
        self.transform = transform

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def set_config(self, config: SupportsOptions, value: str | None) -> None:
        """Write ``value`` (transformed or defaulted) into ``config.options``.

        An empty value is replaced by ``default`` when one is set; a
        ``None`` value with no default leaves the option unset.
        """
        if not value:
            if self.default is not None:
                config.options[self.name] = self.default
            elif value is not None:
                config.options[self.name] = value
            return
        config.options[self.name] = self.transform(value) if self.transform else value

    def set_config_xml(self, config: SupportsOptions, node: _Element) -> None:
        """Set the option from the text of ``node``'s ``source_name`` child.

        An absent child leaves the option unset unless a default exists.
        """
        child = find_child(node, self.source_name)
        if child is None:
            if self.default is not None:
                config.options[self.name] = self.default
            return
        self.set_config(config, element_text(child))
