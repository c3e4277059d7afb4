"""Data models for FlatWiki."""

from pydantic import BaseModel


class Page(BaseModel):
    """Represents a wiki page.

    ``body`` holds the stored bytes exactly as saved. ``display_body`` is the
    rendered HTML form and is only set while a page is being viewed.
    """

    title: str
    body: bytes = b""
    display_body: str | None = None

    @property
    def text(self) -> str:
        """Return the body decoded for display in templates."""
        return self.body.decode("utf-8", errors="replace")
