"""Storage abstraction for wiki pages."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from flatwiki.core.models import Page

logger = logging.getLogger(__name__)

# Owner read/write only
FILE_MODE = 0o600


class PageNotFoundError(LookupError):
    """Raised when no content has been stored for a title."""

    def __init__(self, title: str):
        super().__init__(f"page not found: {title}")
        self.title = title


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page:
        """Load a page by title.

        Raises PageNotFoundError if nothing is stored for the title and
        OSError for any other read failure.
        """
        ...

    @abstractmethod
    async def save(self, title: str, body: bytes) -> None:
        """Store a page body, replacing any previous content."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Pages are stored as raw bytes, one file per title.
    File naming: Title.txt (titles are used verbatim)
    """

    SUFFIX = ".txt"

    def __init__(self, base_path: Path):
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.SUFFIX

    def _get_path(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / self._title_to_filename(title)

    async def load(self, title: str) -> Page:
        """Load a page by title."""
        path = self._get_path(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError as e:
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body)

    async def save(self, title: str, body: bytes) -> None:
        """Save a page."""
        path = self._get_path(title)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            # An existing file keeps its old mode unless reset
            os.fchmod(f.fileno(), FILE_MODE)
            f.write(body)
        logger.debug("Saved page %s (%d bytes)", title, len(body))
