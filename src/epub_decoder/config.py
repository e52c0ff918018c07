"""Load-time configuration."""

from pydantic import BaseModel, ConfigDict

DEFAULT_CONTAINER_PATH = "META-INF/container.xml"


class EpubConfig(BaseModel):
    """Options controlling how an EPUB is loaded."""

    model_config = ConfigDict(frozen=True)

    # Raise MissingNavigation at load time when the declared navigation
    # document cannot be opened, instead of tolerating it.
    strict_navigation: bool = False
    # Use the EPUB 3 XHTML navigation document over the NCX when both exist.
    prefer_nav_document: bool = False
    container_path: str = DEFAULT_CONTAINER_PATH
