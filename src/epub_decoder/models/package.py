"""Data models for the OPF package document."""

from pydantic import BaseModel, ConfigDict, Field

from epub_decoder.models.metadata import Metadata

NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


class ManifestItem(BaseModel):
    """Single resource declared in the manifest."""

    model_config = ConfigDict(frozen=True)

    id: str
    path: str  # relative to the package root, percent-decoded
    media_type: str = ""
    properties: tuple[str, ...] = ()
    fallback: str | None = None


class SpineEntry(BaseModel):
    """Single itemref of the spine."""

    model_config = ConfigDict(frozen=True)

    idref: str
    linear: bool = True


class PackageDocument(BaseModel):
    """Parsed package document: metadata, manifest, spine and navigation ids."""

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    unique_identifier: str | None = None
    metadata: Metadata = Field(default_factory=Metadata)
    manifest: dict[str, ManifestItem] = Field(default_factory=dict)
    spine: tuple[SpineEntry, ...] = ()
    # Manifest id of the NCX (spine toc attribute or NCX media type)
    ncx_id: str | None = None
    # Manifest id of the EPUB 3 navigation document (properties="nav")
    nav_id: str | None = None

    @property
    def spine_ids(self) -> list[str]:
        """Manifest ids in reading order."""
        return [entry.idref for entry in self.spine]

    def navigation_id(self, prefer_nav_document: bool = False) -> str | None:
        """Pick the manifest id of the navigation document to load.

        Ids that are not in the manifest are skipped.
        """
        candidates = [self.ncx_id, self.nav_id]
        if prefer_nav_document:
            candidates.reverse()
        for candidate in candidates:
            if candidate is not None and candidate in self.manifest:
                return candidate
        return None
