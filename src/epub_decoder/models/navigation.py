"""Data models for the navigation tree."""

from pydantic import BaseModel, ConfigDict


class NavPoint(BaseModel):
    """Single table of contents entry with its nested entries."""

    model_config = ConfigDict(frozen=True)

    title: str
    target: str  # path relative to the package root, plus optional fragment
    children: tuple["NavPoint", ...] = ()

    @property
    def path(self) -> str:
        """Target without its fragment."""
        return self.target.split("#", 1)[0]

    @property
    def fragment(self) -> str | None:
        """Fragment of the target, if any."""
        _, sep, fragment = self.target.partition("#")
        return fragment if sep else None
