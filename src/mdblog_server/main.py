"""
Application Entry Point

This module defines the FastAPI application factory: it wires the content
index, the change watcher, templates, routers and exception handlers.

Startup order
-------------
1. First reload of the posts directory. Failure aborts startup.
2. Change watcher start (if enabled).
3. Requests are served.
On shutdown the watcher is stopped.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings as default_settings
from .content import ContentIndex, ContentNotFoundError, ContentWatcher, PostSourceError
from .core.errors import (
    content_not_found_handler,
    http_exception_handler,
    markdown_error_handler,
    post_source_error_handler,
    unhandled_exception_handler,
)
from .rendering.markup import MarkdownRenderError

from .api import (
    feed_routes,
    health_routes,
    post_routes,
    search_routes,
)


logger = logging.getLogger("mdblog.app")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


# ---------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg: Settings = app.state.settings
    content_index: ContentIndex = app.state.content_index

    logger.info("Starting mdblog-server (posts: %s)", content_index.posts_dir)

    # DirectoryLoadError propagates and aborts startup.
    content_index.reload()

    watcher: Optional[ContentWatcher] = None
    if cfg.watch_enabled:
        watcher = ContentWatcher(
            content_index,
            debounce_seconds=cfg.reload_debounce_seconds,
        )
        watcher.start()
    app.state.watcher = watcher

    try:
        yield
    finally:
        if watcher is not None:
            watcher.stop()
        logger.info("Shutting down mdblog-server")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    content_index: Optional[ContentIndex] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Defaults to the environment-derived settings.

    content_index : Optional[ContentIndex]
        Index handle to serve. Built from ``settings`` when omitted.

    Returns
    -------
    FastAPI
        Fully configured application.
    """
    cfg = settings or default_settings

    app = FastAPI(
        title="mdblog-server",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.content_index = content_index or ContentIndex(
        cfg.posts_dir,
        per_page=cfg.per_page,
    )
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.watcher = None

    # --------------------------------------------------------------
    # Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(ContentNotFoundError, content_not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(PostSourceError, post_source_error_handler)
    app.add_exception_handler(MarkdownRenderError, markdown_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(post_routes.router)
    app.include_router(search_routes.router)
    app.include_router(feed_routes.router)

    static_dir = Path(cfg.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn)
# ---------------------------------------------------------------------

app = create_app()
