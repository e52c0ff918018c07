"""Helpers shared by the XML document parsers."""

import posixpath
from collections.abc import Iterator
from urllib.parse import unquote, urlsplit

from lxml import etree


def parse_xml(data: bytes, error_cls: type[Exception], what: str) -> etree._Element:
    """Parse an XML document, raising error_cls on malformed input.

    Entities are not resolved and the network is never accessed.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise error_cls(f"Could not parse {what}: {e}") from e
    if root is None:
        raise error_cls(f"Could not parse {what}: empty document")
    return root


def local_name(name: str) -> str:
    """Strip the namespace from a Clark or prefixed name."""
    if name.startswith("{"):
        return name.rpartition("}")[2]
    return name.rpartition(":")[2]


def child_elements(element: etree._Element, name: str | None = None) -> Iterator[etree._Element]:
    """Yield child elements in document order, optionally filtered by local name."""
    for child in element:
        # comments and processing instructions
        if not isinstance(child.tag, str):
            continue
        if name is None or local_name(child.tag) == name:
            yield child


def first_child(element: etree._Element, name: str) -> etree._Element | None:
    return next(child_elements(element, name), None)


def first_descendant(element: etree._Element, name: str) -> etree._Element | None:
    for descendant in element.iter():
        if isinstance(descendant.tag, str) and local_name(descendant.tag) == name:
            return descendant
    return None


def element_text(element: etree._Element | None) -> str:
    """Concatenated, stripped text content of an element."""
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def local_attributes(element: etree._Element) -> dict[str, str]:
    """Attributes keyed by local name (opf:role becomes role)."""
    return {local_name(key): value for key, value in element.attrib.items()}


# =============================================================================
# Href resolution
# =============================================================================


def split_fragment(href: str) -> tuple[str, str]:
    """Split an href into its path and fragment ("" when absent)."""
    path, _, fragment = href.partition("#")
    return path, fragment


def normalize_path(path: str) -> str:
    """Normalise a relative archive path ("a/../b" becomes "b")."""
    if not path:
        return ""
    normalized = posixpath.normpath(path)
    return "" if normalized == "." else normalized.lstrip("/")


def resolve_href(base_dir: str, href: str) -> str:
    """Resolve href against base_dir, keeping its fragment.

    Hrefs with a URL scheme are returned unchanged.
    """
    href = href.strip()
    if not href or urlsplit(href).scheme:
        return href
    path, fragment = split_fragment(href)
    resolved = normalize_path(posixpath.join(base_dir, unquote(path))) if path else ""
    if fragment:
        return f"{resolved}#{fragment}"
    return resolved


def dirname(path: str) -> str:
    """Directory part of an archive path, including the trailing separator."""
    index = path.rfind("/")
    return path[: index + 1]
