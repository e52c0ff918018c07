"""EPUB container facade: load, query metadata, open files, walk navigation."""

import io
import logging
import os
import zipfile
from collections.abc import Mapping
from types import MappingProxyType
from typing import BinaryIO

from epub_decoder.config import EpubConfig
from epub_decoder.core.archive import open_entry
from epub_decoder.core.container_parser import PackageLocation, locate_package
from epub_decoder.core.nav_parser import parse_navigation
from epub_decoder.core.navigation import NavigationCursor
from epub_decoder.core.opf_parser import parse_package
from epub_decoder.core.spine import SpineCursor
from epub_decoder.core.xml_utils import dirname, normalize_path, split_fragment
from epub_decoder.exceptions import (
    ArchiveReadError,
    FileNotFound,
    InvalidNavigationDocument,
    MalformedContainer,
    MissingNavigation,
    NoNavigationAvailable,
    UnknownManifestId,
)
from epub_decoder.models.metadata import MetadataElement
from epub_decoder.models.navigation import NavPoint
from epub_decoder.models.package import ManifestItem, PackageDocument

log = logging.getLogger(__name__)

EpubSource = str | os.PathLike | BinaryIO | bytes | bytearray


class Epub:
    """A loaded EPUB book.

    Everything except file content is parsed eagerly at load time and is
    immutable afterwards. File content is streamed from the archive on
    demand.

    The archive handle is stateful: use an Epub from one thread at a time, or
    synchronize access externally. Cursors returned by navigation() and
    spine() borrow data from the Epub; spine cursors open files through it,
    so they are only usable until close().
    """

    def __init__(
        self,
        archive: zipfile.ZipFile,
        location: PackageLocation,
        package: PackageDocument,
        toc: tuple[NavPoint, ...] | None,
    ):
        self._archive = archive
        self._location = location
        self._package = package
        self._toc = toc

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def open(cls, path: str | os.PathLike, config: EpubConfig | None = None) -> "Epub":
        """Open an EPUB file from the filesystem. The Epub owns the file handle."""
        try:
            archive = zipfile.ZipFile(path)
        except zipfile.BadZipFile as e:
            raise MalformedContainer(f"{path} is not a ZIP archive: {e}") from e
        log.debug(f"Opened {path}")
        return cls._from_archive(archive, config or EpubConfig())

    @classmethod
    def load(cls, source: BinaryIO | bytes | bytearray, config: EpubConfig | None = None) -> "Epub":
        """Load an EPUB from a seekable binary file object or an in-memory buffer.

        File objects are borrowed: close() never closes them.
        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        try:
            archive = zipfile.ZipFile(source)
        except zipfile.BadZipFile as e:
            raise MalformedContainer(f"Source is not a ZIP archive: {e}") from e
        return cls._from_archive(archive, config or EpubConfig())

    @classmethod
    def _from_archive(cls, archive: zipfile.ZipFile, config: EpubConfig) -> "Epub":
        # No partially loaded Epub escapes; close what was opened for it.
        try:
            location = locate_package(archive, config.container_path)
            package = cls._read_package(archive, location)
            book = cls(archive, location, package, toc=None)
            book._toc = book._load_navigation(config)
        except BaseException:
            archive.close()
            raise
        return book

    @staticmethod
    def _read_package(archive: zipfile.ZipFile, location: PackageLocation) -> PackageDocument:
        try:
            with open_entry(archive, location.package_path) as stream:
                data = stream.read()
        except FileNotFound as e:
            raise MalformedContainer(
                f"Package document {location.package_path} is missing from the archive"
            ) from e
        return parse_package(data)

    def _load_navigation(self, config: EpubConfig) -> tuple[NavPoint, ...] | None:
        """Parse the declared navigation document, if any.

        A declared document that cannot be opened or parsed is tolerated
        unless config.strict_navigation is set; the book then has no
        navigation tree.
        """
        nav_id = self._package.navigation_id(config.prefer_nav_document)
        if nav_id is None:
            log.debug("No navigation document declared")
            return None

        try:
            item = self._manifest_item(nav_id)
            with self._open_resolved(item.path) as stream:
                data = stream.read()
        except (UnknownManifestId, FileNotFound, ArchiveReadError) as e:
            if config.strict_navigation:
                raise MissingNavigation(f"Could not open the navigation document: {e}") from e
            log.warning(f"Could not open the navigation document {nav_id!r}: {e}")
            return None

        log.debug(f"Navigation document {item.path!r} ({item.media_type})")
        try:
            toc = parse_navigation(data, item.media_type, dirname(item.path))
        except InvalidNavigationDocument as e:
            if config.strict_navigation:
                raise
            log.warning(f"Ignoring unparsable navigation document {item.path!r}: {e}")
            return None

        if not toc:
            log.warning(f"Navigation document {item.path!r} has no entries")
            return None
        return toc

    # -------------------------------------------------------------------------
    # Lifetime
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the archive. Parsed data stays readable."""
        self._archive.close()

    def __enter__(self) -> "Epub":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Epub(package_path={self.package_path!r})"

    # -------------------------------------------------------------------------
    # Package access
    # -------------------------------------------------------------------------

    @property
    def package(self) -> PackageDocument:
        return self._package

    @property
    def package_path(self) -> str:
        return self._location.package_path

    @property
    def root_path(self) -> str:
        """Directory holding the package document; manifest paths are relative to it."""
        return self._location.root_path

    @property
    def manifest(self) -> Mapping[str, ManifestItem]:
        return MappingProxyType(self._package.manifest)

    @property
    def toc(self) -> tuple[NavPoint, ...] | None:
        """Top level navigation entries, or None without a navigation tree."""
        return self._toc

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def _manifest_item(self, manifest_id: str) -> ManifestItem:
        try:
            return self._package.manifest[manifest_id]
        except KeyError:
            raise UnknownManifestId(manifest_id) from None

    def _open_resolved(self, path: str) -> BinaryIO:
        return open_entry(self._archive, self.root_path + path)

    def open_file(self, path: str) -> BinaryIO:
        """Open a file by its path relative to the package root.

        A "#fragment" is ignored, so navigation urls can be passed directly.

        Raises:
            FileNotFound: If the archive has no such entry
            ArchiveReadError: If the entry cannot be read
        """
        file_path, _ = split_fragment(path)
        return self._open_resolved(normalize_path(file_path))

    def open_file_by_id(self, manifest_id: str) -> BinaryIO:
        """Open a file from its manifest id.

        Raises:
            UnknownManifestId: If the manifest has no such id
            FileNotFound: If the manifest path has no archive entry
        """
        return self._open_resolved(self._manifest_item(manifest_id).path)

    def read_file(self, path: str) -> bytes:
        """Read a whole file by its path relative to the package root."""
        with self.open_file(path) as stream:
            return stream.read()

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def metadata(self, field: str) -> list[str]:
        """Return the values of a metadata field.

        Typical fields: title, language, identifier, creator, subject,
        description, publisher, contributor, date, type, format, source,
        relation, coverage, rights, meta.

        Raises:
            UnknownMetadataField: If the book has no such field
        """
        return self._package.metadata.values(field)

    def metadata_attributes(self, field: str) -> list[dict[str, str]]:
        """Return the attributes of each element of a field, aligned with metadata()."""
        return self._package.metadata.attributes(field)

    def metadata_elements(self, field: str) -> list[MetadataElement]:
        """Return the values and attributes of a metadata field."""
        return self._package.metadata.elements(field)

    def metadata_fields(self) -> set[str]:
        """Return the metadata fields present in this book."""
        return self._package.metadata.names()

    # -------------------------------------------------------------------------
    # Cursors
    # -------------------------------------------------------------------------

    def navigation(self) -> NavigationCursor:
        """Return a new cursor on the first top level navigation entry.

        Raises:
            NoNavigationAvailable: If the book has no navigation tree
        """
        if not self._toc:
            raise NoNavigationAvailable("Could not find any navigation document")
        return NavigationCursor(self._toc)

    def spine(self) -> SpineCursor:
        """Return a new cursor before the first entry of the reading order."""
        return SpineCursor(self, self._package.spine)


def open_epub(source: EpubSource, config: EpubConfig | None = None) -> Epub:
    """Open an EPUB from a path, a binary file object or bytes."""
    if isinstance(source, (str, os.PathLike)):
        return Epub.open(source, config)
    return Epub.load(source, config)
