"""Data models for package metadata."""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from epub_decoder.exceptions import UnknownMetadataField


class MetadataElement(BaseModel):
    """One occurrence of a metadata field, e.g. one creator with its role."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    attributes: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("attributes", mode="after")
    @classmethod
    def _read_only_attributes(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))


class Metadata(BaseModel):
    """Metadata fields keyed by local element name, in document order.

    Fields without elements are absent keys, never empty sequences.
    """

    model_config = ConfigDict(frozen=True)

    entries: Mapping[str, tuple[MetadataElement, ...]] = Field(
        default_factory=lambda: MappingProxyType({})
    )

    @field_validator("entries", mode="after")
    @classmethod
    def _read_only_entries(
        cls, value: Mapping[str, tuple[MetadataElement, ...]]
    ) -> Mapping[str, tuple[MetadataElement, ...]]:
        return MappingProxyType(dict(value))

    def __contains__(self, field: object) -> bool:
        return field in self.entries

    def names(self) -> set[str]:
        """Return the names of the fields present."""
        return set(self.entries)

    def elements(self, field: str) -> list[MetadataElement]:
        """Return every element of a field.

        Elements and their attributes are read-only.

        Raises:
            UnknownMetadataField: If the field is not present
        """
        try:
            return list(self.entries[field])
        except KeyError:
            raise UnknownMetadataField(field) from None

    def values(self, field: str) -> list[str]:
        """Return the text content of every element of a field."""
        return [element.content for element in self.elements(field)]

    def attributes(self, field: str) -> list[dict[str, str]]:
        """Return the attributes of every element of a field.

        Index-aligned with values().
        """
        return [dict(element.attributes) for element in self.elements(field)]
