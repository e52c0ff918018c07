"""Locate the root package document through the container descriptor."""

import logging
import zipfile
from dataclasses import dataclass

from epub_decoder.config import DEFAULT_CONTAINER_PATH
from epub_decoder.core.archive import READ_ERRORS
from epub_decoder.core.xml_utils import dirname, local_name, parse_xml
from epub_decoder.exceptions import MalformedContainer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageLocation:
    """Where the package document lives inside the archive."""

    package_path: str
    # Everything up to and including the last "/" of package_path
    root_path: str


def parse_container(data: bytes) -> PackageLocation:
    """Parse container descriptor bytes and select the first rootfile.

    Raises:
        MalformedContainer: If the descriptor is unparsable or lists no roots
    """
    root = parse_xml(data, MalformedContainer, "container descriptor")

    for element in root.iter():
        if not isinstance(element.tag, str) or local_name(element.tag) != "rootfile":
            continue
        full_path = (element.get("full-path") or "").strip().lstrip("/")
        if full_path:
            return PackageLocation(package_path=full_path, root_path=dirname(full_path))
        log.warning("Skipping rootfile without full-path attribute")

    raise MalformedContainer("Container descriptor lists no root package document")


def find_descriptor(names: list[str], container_path: str = DEFAULT_CONTAINER_PATH) -> str:
    """Find the descriptor entry name, falling back to a case-insensitive match.

    Raises:
        MalformedContainer: If no entry matches
    """
    if container_path in names:
        return container_path

    wanted = container_path.lower()
    for name in names:
        if name.lower() == wanted:
            log.debug(f"Using descriptor entry {name!r} for {container_path!r}")
            return name

    raise MalformedContainer(f"Container descriptor {container_path} not found")


def locate_package(
    archive: zipfile.ZipFile, container_path: str = DEFAULT_CONTAINER_PATH
) -> PackageLocation:
    """Read the descriptor from an open archive and locate the package document."""
    name = find_descriptor(archive.namelist(), container_path)
    try:
        data = archive.read(name)
    except READ_ERRORS as e:
        raise MalformedContainer(f"Could not read container descriptor: {e}") from e

    location = parse_container(data)
    log.debug(f"Package document at {location.package_path!r}")
    return location
