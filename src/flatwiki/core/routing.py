"""Request path validation and title-based handler dispatch."""

import re
from typing import Awaitable, Callable

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

# Pattern for page paths: /view/PageName, /edit/PageName, /save/PageName
VALID_PATH = re.compile(r"/(edit|save|view)/([a-zA-Z0-9]+)")

TitleHandler = Callable[[Request, str], Awaitable[Response]]
PathHandler = Callable[[Request], Awaitable[Response]]


class InvalidPathError(ValueError):
    """Raised when a request path does not name an operation and a title."""

    def __init__(self, path: str):
        super().__init__(f"invalid page path: {path!r}")
        self.path = path


def extract_title(path: str) -> tuple[str, str]:
    """Split a page path into its operation and title.

    Args:
        path: Request path, e.g. "/view/HomePage".

    Returns:
        Tuple of (operation, title).

    Raises:
        InvalidPathError: If the whole path is not a well-formed page path.
    """
    match = VALID_PATH.fullmatch(path)
    if match is None:
        raise InvalidPathError(path)
    return match.group(1), match.group(2)


def not_found() -> PlainTextResponse:
    """Plain 404 response shared by every unmatched path."""
    return PlainTextResponse("404 page not found", status_code=404)


def make_handler(fn: TitleHandler) -> PathHandler:
    """Wrap a title handler into an endpoint that validates the request path.

    Invalid paths get a 404 and ``fn`` is never called.
    """

    async def handler(request: Request) -> Response:
        try:
            _, title = extract_title(request.url.path)
        except InvalidPathError:
            return not_found()
        return await fn(request, title)

    # Not functools.wraps: FastAPI would read fn's signature and expect a title query param
    handler.__name__ = fn.__name__
    handler.__doc__ = fn.__doc__
    return handler
