"""Parse navigation documents (NCX and EPUB 3 XHTML nav) into NavPoint trees."""

import logging
import warnings
from collections.abc import Callable, Iterable
from typing import TypeVar

from bs4 import BeautifulSoup, Tag, XMLParsedAsHTMLWarning
from lxml import etree

from epub_decoder.core.xml_utils import (
    child_elements,
    element_text,
    first_child,
    first_descendant,
    local_name,
    parse_xml,
    resolve_href,
)
from epub_decoder.exceptions import InvalidNavigationDocument
from epub_decoder.models.navigation import NavPoint

log = logging.getLogger(__name__)

NodeT = TypeVar("NodeT")

XHTML_NAV_MEDIA_TYPE = "application/xhtml+xml"


def build_forest(
    roots: Iterable[NodeT],
    children_of: Callable[[NodeT], Iterable[NodeT]],
    make_point: Callable[[NodeT, tuple[NavPoint, ...]], NavPoint],
) -> tuple[NavPoint, ...]:
    """Fold a tree of source nodes into NavPoints, children first.

    Iterative, so nesting depth is not limited by the recursion limit.
    Document order is kept at every level.
    """
    top: list[NavPoint] = []
    # (source node, pending children, converted children)
    stack: list[tuple[NodeT | None, Iterable[NodeT], list[NavPoint]]] = [
        (None, iter(roots), top)
    ]

    while stack:
        node, pending, converted = stack[-1]
        child = next(pending, None)
        if child is not None:
            stack.append((child, iter(children_of(child)), []))
            continue

        stack.pop()
        if node is not None:
            stack[-1][2].append(make_point(node, tuple(converted)))

    return tuple(top)


# =============================================================================
# NCX
# =============================================================================


def parse_ncx(data: bytes, base_dir: str = "") -> tuple[NavPoint, ...]:
    """Parse an NCX document into its navMap forest.

    Args:
        data: NCX document bytes
        base_dir: Directory of the NCX relative to the package root; content
            references are resolved against it

    Raises:
        InvalidNavigationDocument: If the XML is unparsable
    """
    root = parse_xml(data, InvalidNavigationDocument, "NCX document")

    nav_map = first_descendant(root, "navMap")
    if nav_map is None:
        log.warning("NCX document has no navMap")
        return ()

    def make_point(element: etree._Element, children: tuple[NavPoint, ...]) -> NavPoint:
        label = first_child(element, "navLabel")
        text = first_child(label, "text") if label is not None else None
        content = first_child(element, "content")
        src = content.get("src", "") if content is not None else ""
        return NavPoint(
            title=element_text(text if text is not None else label),
            target=resolve_href(base_dir, src),
            children=children,
        )

    return build_forest(
        child_elements(nav_map, "navPoint"),
        lambda element: child_elements(element, "navPoint"),
        make_point,
    )


# =============================================================================
# EPUB 3 navigation document
# =============================================================================


def _is_toc_nav(tag: Tag) -> bool:
    """Is this a <nav epub:type="toc">? The prefix may or may not survive parsing."""
    if tag.name != "nav":
        return False
    for name, value in tag.attrs.items():
        if local_name(name) != "type":
            continue
        if isinstance(value, list):
            value = " ".join(value)
        if "toc" in value.split():
            return True
    return False


def _list_items(tag: Tag | None) -> list[Tag]:
    if tag is None:
        return []
    return tag.find_all("li", recursive=False)


def parse_nav_document(data: bytes, base_dir: str = "") -> tuple[NavPoint, ...]:
    """Parse the toc nav of an EPUB 3 XHTML navigation document.

    Raises:
        InvalidNavigationDocument: If the document holds no nav list
    """
    # Navigation documents are XHTML, parsed leniently as HTML
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(data, "lxml")

    nav = soup.find(_is_toc_nav) or soup.find("nav")
    if nav is None:
        raise InvalidNavigationDocument("Navigation document has no nav element")
    top_list = nav.find("ol")
    if top_list is None:
        raise InvalidNavigationDocument("Navigation document has no ol list")

    def make_point(item: Tag, children: tuple[NavPoint, ...]) -> NavPoint:
        label = item.find(["a", "span"], recursive=False)
        title = " ".join(label.get_text().split()) if label is not None else ""
        href = label.get("href", "") if label is not None and label.name == "a" else ""
        return NavPoint(title=title, target=resolve_href(base_dir, href), children=children)

    return build_forest(
        _list_items(top_list),
        lambda item: _list_items(item.find("ol", recursive=False)),
        make_point,
    )


def parse_navigation(
    data: bytes, media_type: str, base_dir: str = ""
) -> tuple[NavPoint, ...]:
    """Dispatch to the NCX or XHTML parser according to the media type."""
    if media_type == XHTML_NAV_MEDIA_TYPE:
        return parse_nav_document(data, base_dir)
    return parse_ncx(data, base_dir)
