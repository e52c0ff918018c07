"""Parse the OPF package document into metadata, manifest and spine."""

import logging
from urllib.parse import unquote

from lxml import etree

from epub_decoder.core.xml_utils import (
    child_elements,
    element_text,
    first_child,
    local_attributes,
    local_name,
    normalize_path,
    parse_xml,
    split_fragment,
)
from epub_decoder.exceptions import InvalidPackageDocument
from epub_decoder.models.metadata import Metadata, MetadataElement
from epub_decoder.models.package import (
    NCX_MEDIA_TYPE,
    ManifestItem,
    PackageDocument,
    SpineEntry,
)

log = logging.getLogger(__name__)

# OPF 1.x / 2.0 legacy wrappers whose children are metadata fields
LEGACY_METADATA_WRAPPERS = ("dc-metadata", "x-metadata")


def parse_package(data: bytes) -> PackageDocument:
    """Parse package document bytes.

    Spine entries are not checked against the manifest; an unknown id only
    fails when it is opened.

    Raises:
        InvalidPackageDocument: If the XML is unparsable or the manifest or
            spine section is missing
    """
    root = parse_xml(data, InvalidPackageDocument, "package document")

    manifest_element = first_child(root, "manifest")
    if manifest_element is None:
        raise InvalidPackageDocument("Package document has no manifest")
    spine_element = first_child(root, "spine")
    if spine_element is None:
        raise InvalidPackageDocument("Package document has no spine")

    metadata_element = first_child(root, "metadata")
    metadata = _parse_metadata(metadata_element) if metadata_element is not None else Metadata()
    manifest = _parse_manifest(manifest_element)
    spine = _parse_spine(spine_element)

    package = PackageDocument(
        version=root.get("version"),
        unique_identifier=root.get("unique-identifier"),
        metadata=metadata,
        manifest=manifest,
        spine=spine,
        ncx_id=_find_ncx_id(spine_element, manifest),
        nav_id=_find_nav_id(manifest),
    )
    log.debug(
        f"Parsed package: {len(metadata.entries)} metadata fields, "
        f"{len(manifest)} manifest items, {len(spine)} spine entries"
    )
    return package


def _metadata_children(metadata_element: etree._Element):
    """Yield metadata field elements, flattening legacy wrappers."""
    for child in child_elements(metadata_element):
        if local_name(child.tag) in LEGACY_METADATA_WRAPPERS:
            yield from child_elements(child)
        else:
            yield child


def _parse_metadata(metadata_element: etree._Element) -> Metadata:
    """Collect every metadata child, keyed by local name, in document order."""
    fields: dict[str, list[MetadataElement]] = {}

    for child in _metadata_children(metadata_element):
        element = MetadataElement(
            content=element_text(child),
            attributes=local_attributes(child),
        )
        # Duplicate fields accumulate
        fields.setdefault(local_name(child.tag), []).append(element)

    return Metadata(entries={name: tuple(elements) for name, elements in fields.items()})


def _parse_manifest(manifest_element: etree._Element) -> dict[str, ManifestItem]:
    """Build the id -> item mapping. The first item wins on duplicate ids."""
    manifest: dict[str, ManifestItem] = {}

    for item in child_elements(manifest_element, "item"):
        item_id = item.get("id")
        href = item.get("href")
        if not item_id or href is None:
            log.warning(f"Skipping manifest item without id or href: {dict(item.attrib)}")
            continue
        if item_id in manifest:
            log.warning(f"Duplicate manifest id {item_id!r}, keeping the first item")
            continue

        path, _ = split_fragment(href.strip())
        manifest[item_id] = ManifestItem(
            id=item_id,
            path=normalize_path(unquote(path)),
            media_type=item.get("media-type", ""),
            properties=tuple((item.get("properties") or "").split()),
            fallback=item.get("fallback"),
        )

    return manifest


def _parse_spine(spine_element: etree._Element) -> tuple[SpineEntry, ...]:
    entries = []
    for itemref in child_elements(spine_element, "itemref"):
        idref = itemref.get("idref")
        if not idref:
            log.warning("Skipping spine itemref without idref")
            continue
        linear = (itemref.get("linear") or "yes").strip().lower() != "no"
        entries.append(SpineEntry(idref=idref, linear=linear))
    return tuple(entries)


def _find_ncx_id(spine_element: etree._Element, manifest: dict[str, ManifestItem]) -> str | None:
    """NCX id from the spine toc attribute, else the first NCX manifest item."""
    toc = (spine_element.get("toc") or "").strip()
    if toc in manifest:
        return toc
    if toc:
        log.warning(f"Spine toc {toc!r} is not in the manifest")

    for item in manifest.values():
        if item.media_type == NCX_MEDIA_TYPE:
            return item.id
    return None


def _find_nav_id(manifest: dict[str, ManifestItem]) -> str | None:
    """Id of the EPUB 3 navigation document (properties contains "nav")."""
    for item in manifest.values():
        if "nav" in item.properties:
            return item.id
    return None
