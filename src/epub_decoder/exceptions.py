"""Exceptions raised while decoding EPUB containers."""


class EpubError(Exception):
    """Base class for every error raised by epub_decoder."""

    pass


# =============================================================================
# Load errors
# =============================================================================


class MalformedContainer(EpubError):
    """The archive or its container descriptor cannot be used.

    Raised when the file is not a ZIP archive, when the descriptor is
    missing or unparsable, or when it lists no root package document.
    """

    pass


class InvalidPackageDocument(EpubError):
    """The package document is unparsable or lacks a manifest or spine."""

    pass


class InvalidNavigationDocument(EpubError):
    """The navigation document is unparsable."""

    pass


class MissingNavigation(EpubError):
    """No usable navigation document was found."""

    pass


class NoNavigationAvailable(MissingNavigation):
    """Navigation was requested on a book without a navigation tree."""

    pass


# =============================================================================
# Lookup errors
# =============================================================================


class FileNotFound(EpubError, LookupError):
    """The requested path has no entry in the archive."""

    def __init__(self, path: str):
        super().__init__(f"File not found in archive: {path}")
        self.path = path


class UnknownManifestId(EpubError, LookupError):
    """The manifest has no item with the requested id."""

    def __init__(self, manifest_id: str):
        super().__init__(f"Unknown manifest id: {manifest_id}")
        self.manifest_id = manifest_id


class UnknownMetadataField(EpubError, LookupError):
    """The package metadata has no element of the requested field."""

    def __init__(self, field: str):
        super().__init__(f"Metadata field {field} does not exist")
        self.field = field


class ArchiveReadError(EpubError, OSError):
    """Reading an archive entry failed (truncated archive, bad CRC, ...)."""

    pass


# =============================================================================
# Navigation errors
# =============================================================================


class NavigationError(EpubError):
    """A navigation cursor move was not possible. Cursor state is unchanged."""

    pass


class NoNextSibling(NavigationError):
    pass


class NoPreviousSibling(NavigationError):
    pass


class NoChildren(NavigationError):
    pass


class NoParent(NavigationError):
    pass
