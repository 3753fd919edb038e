"""XML response parsing into nested field mappings.

A parsed document is ``{root_tag: node}``. Each node is a dict holding:

- ``"$"``: element attributes (only when the element has any)
- ``"_"``: stripped element text (only when non-empty)
- ``<child_tag>``: list of child nodes, in document order
"""

import xml.etree.ElementTree as ET
from typing import Any

import defusedxml.ElementTree as SafeET
from defusedxml import DefusedXmlException

from .exceptions import ResponseParseError

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"

XmlNode = dict[str, Any]


def _local_name(tag: str) -> str:
    """Strip an XML namespace ('{uri}Tag' -> 'Tag')."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_to_node(element: ET.Element) -> XmlNode:
    node: XmlNode = {}
    if element.attrib:
        node[ATTRIBUTES_KEY] = {_local_name(k): v for k, v in element.attrib.items()}

    text = (element.text or "").strip()
    if text:
        node[TEXT_KEY] = text

    for child in element:
        node.setdefault(_local_name(child.tag), []).append(_element_to_node(child))

    return node


def parse_xml(text: str) -> dict[str, XmlNode]:
    """Parse raw XML text into a nested mapping.

    Args:
        text: XML document

    Returns:
        Single-key dict mapping the root tag to its node

    Raises:
        ResponseParseError: If the document is empty, malformed, or declares
            entities (rejected by defusedxml)
    """
    if not text or not text.strip():
        raise ResponseParseError("empty XML document")
    try:
        root = SafeET.fromstring(text)
    except ET.ParseError as e:
        raise ResponseParseError(f"malformed XML: {e}") from e
    except DefusedXmlException as e:
        raise ResponseParseError(f"unsafe XML rejected: {e!r}") from e
    return {_local_name(root.tag): _element_to_node(root)}


def first_child(node: XmlNode | None, tag: str) -> XmlNode | None:
    """Return the first child node with the given tag, or None."""
    if not node:
        return None
    children = node.get(tag)
    if not children:
        return None
    return children[0]


def find_path(node: XmlNode | None, *tags: str) -> XmlNode | None:
    """Follow first children along tags; None as soon as one is missing."""
    for tag in tags:
        node = first_child(node, tag)
        if node is None:
            return None
    return node


def attribute(node: XmlNode | None, name: str, default: str | None = None) -> str | None:
    if not node:
        return default
    return node.get(ATTRIBUTES_KEY, {}).get(name, default)


def element_text(node: XmlNode | None) -> str | None:
    if not node:
        return None
    return node.get(TEXT_KEY)
