"""Data models."""

from epub_decoder.models.metadata import Metadata, MetadataElement
from epub_decoder.models.navigation import NavPoint
from epub_decoder.models.package import (
    NCX_MEDIA_TYPE,
    ManifestItem,
    PackageDocument,
    SpineEntry,
)

__all__ = [
    # Metadata models
    "MetadataElement",
    "Metadata",
    # Package models
    "NCX_MEDIA_TYPE",
    "ManifestItem",
    "SpineEntry",
    "PackageDocument",
    # Navigation models
    "NavPoint",
]
