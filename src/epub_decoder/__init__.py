"""Read-only decoding of EPUB containers: metadata, manifest, spine and navigation."""

from epub_decoder.config import EpubConfig
from epub_decoder.core.epub import Epub, open_epub
from epub_decoder.core.navigation import NavigationCursor
from epub_decoder.core.spine import SpineCursor, SpineItem
from epub_decoder.exceptions import (
    ArchiveReadError,
    EpubError,
    FileNotFound,
    InvalidNavigationDocument,
    InvalidPackageDocument,
    MalformedContainer,
    MissingNavigation,
    NavigationError,
    NoChildren,
    NoNavigationAvailable,
    NoNextSibling,
    NoParent,
    NoPreviousSibling,
    UnknownManifestId,
    UnknownMetadataField,
)
from epub_decoder.models import (
    ManifestItem,
    Metadata,
    MetadataElement,
    NavPoint,
    PackageDocument,
    SpineEntry,
)

__all__ = [
    # Entry points
    "open_epub",
    "Epub",
    "EpubConfig",
    # Cursors
    "NavigationCursor",
    "SpineCursor",
    "SpineItem",
    # Models
    "MetadataElement",
    "Metadata",
    "ManifestItem",
    "SpineEntry",
    "PackageDocument",
    "NavPoint",
    # Errors
    "EpubError",
    "MalformedContainer",
    "InvalidPackageDocument",
    "InvalidNavigationDocument",
    "MissingNavigation",
    "NoNavigationAvailable",
    "FileNotFound",
    "UnknownManifestId",
    "UnknownMetadataField",
    "ArchiveReadError",
    "NavigationError",
    "NoNextSibling",
    "NoPreviousSibling",
    "NoChildren",
    "NoParent",
]
