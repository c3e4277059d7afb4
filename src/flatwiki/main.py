"""FlatWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError
from starlette.exceptions import HTTPException as StarletteHTTPException

from flatwiki.config import settings
from flatwiki.core.markup import filter_links
from flatwiki.core.models import Page
from flatwiki.core.routing import make_handler, not_found
from flatwiki.core.storage import FileStorage, PageNotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: report where pages are served from."""
    logger.info("Serving pages from %s", storage.base_path.resolve())
    yield


# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
    lifespan=lifespan,
    redirect_slashes=False,
)

# Setup templates
templates_path = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_path))

# Initialize storage
storage = FileStorage(settings.data_dir)


# Template context helper
def get_context(**kwargs) -> dict:
    """Create base context for templates."""
    return {
        "app_title": settings.app_title,
        **kwargs,
    }


def render(request: Request, name: str, page: Page) -> Response:
    """Render the named template with ``page`` as context.

    Template failures are reported to the client as a 500 with the error text.
    """
    try:
        return templates.TemplateResponse(request, name, get_context(page=page))
    except TemplateError as e:
        logger.error("Failed to render %s for %s: %s", name, page.title, e)
        return PlainTextResponse(str(e), status_code=500)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unrouted paths get the same plain 404 as malformed page paths."""
    if exc.status_code == 404:
        return not_found()
    return await http_exception_handler(request, exc)


@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: OSError):
    """Storage failures that escape a handler become a 500."""
    logger.exception("Storage error while handling %s", request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)


@app.get("/", response_class=PlainTextResponse)
async def index():
    """Home page - fixed greeting."""
    return settings.greeting


async def view_page(request: Request, title: str) -> Response:
    """View a wiki page."""
    try:
        page = await storage.load(title)
    except PageNotFoundError:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)

    page.display_body = filter_links(page.body, escape=settings.escape_body).decode(
        "utf-8", errors="replace"
    )
    return render(request, "view.html", page)


async def edit_page(request: Request, title: str) -> Response:
    """Edit page form.

    A page that cannot be loaded is edited as a new, blank page. With
    ``strict_edit_load`` only a missing page gets the blank form.
    """
    try:
        page = await storage.load(title)
    except PageNotFoundError:
        page = Page(title=title)
    except OSError as e:
        if settings.strict_edit_load:
            raise
        logger.warning("Could not load %s for editing, starting blank: %s", title, e)
        page = Page(title=title)

    return render(request, "edit.html", page)


async def save_page(request: Request, title: str) -> Response:
    """Save page content."""
    form = await request.form()
    body = form.get("body")
    # File parts count as a missing field
    if not isinstance(body, str):
        body = ""
    page = Page(title=title, body=body.encode("utf-8"))

    try:
        await storage.save(page.title, page.body)
    except OSError as e:
        logger.error("Failed to save %s: %s", title, e)
        return PlainTextResponse(str(e), status_code=500)

    return RedirectResponse(url=f"/view/{title}", status_code=302)


app.add_api_route("/view/{rest:path}", make_handler(view_page), methods=["GET", "POST"])
app.add_api_route("/edit/{rest:path}", make_handler(edit_page), methods=["GET", "POST"])
app.add_api_route("/save/{rest:path}", make_handler(save_page), methods=["POST"])


def run() -> None:
    """Serve the wiki with uvicorn."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
