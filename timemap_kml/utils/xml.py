"""lxml tree parsing and query helpers.

Tags are matched by local name, ignoring namespace, so the same code
handles ``http://www.opengis.net/kml/2.2``, ``http://earth.google.com/kml/2.1``
and un-namespaced KML.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree  # type: ignore[attr-defined]

from timemap_kml.core.exceptions import KmlParseError

if TYPE_CHECKING:
    from lxml.etree import _Element


def parse_to_tree(content: str | bytes, *, source: str = "") -> _Element:
    """Parse raw KML text into an lxml element tree and return its root.

    Raises:
        KmlParseError: If the content is empty or not well-formed XML.
    """
    encoding = None
    if isinstance(content, str):
        # already decoded: the declared encoding no longer applies
        content = content.encode("utf-8")
        encoding = "utf-8"

    if not content.strip():
        msg = "KML document is empty"
        raise KmlParseError(msg, source=source)

    parser = etree.XMLParser(
        encoding=encoding, resolve_entities=False, no_network=True, huge_tree=False
    )
    try:
        return etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise KmlParseError(msg, source=source) from exc


def local_name(node: _Element) -> str:
    """Return the namespace-free tag name, or ``""`` for comments and PIs."""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def get_node_list(node: _Element, tag: str, *, include_self: bool = False) -> list[_Element]:
    """Return all descendants of ``node`` named ``tag``, in document order.

    With ``include_self``, ``node`` itself is also a candidate.
    """
    nodes = node.iter() if include_self else node.iterdescendants()
    return [el for el in nodes if local_name(el) == tag]


def find_child(node: _Element, tag: str) -> _Element | None:
    """Return the first direct child of ``node`` named ``tag``."""
    for child in node:
        if local_name(child) == tag:
            return child
    return None


def element_text(node: _Element) -> str:
    """Return the stripped text content of ``node`` (CDATA included)."""
    return "".join(node.itertext()).strip()


def get_tag_value(node: _Element | None, tag: str) -> str | None:
    """Return the text of the first descendant named ``tag``.

    ``None`` when ``node`` is ``None`` or has no such descendant.
    """
    if node is None:
        return None
    nodes = get_node_list(node, tag)
    if not nodes:
        return None
    return element_text(nodes[0])


def child_text(node: _Element, tag: str) -> str | None:
    """Return the text of the first direct child named ``tag``, or ``None``."""
    child = find_child(node, tag)
    if child is None:
        return None
    return element_text(child)
