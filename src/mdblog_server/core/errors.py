"""
Global Error Handling

Application-wide exception handlers.

Mapping
-------
- ``ContentNotFoundError`` and unknown routes -> rendered 404 page.
- ``PostSourceError`` / ``MarkdownRenderError`` -> 500 for that request only.
- Anything else -> generic 500, full traceback logged, no details returned.
"""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..content import ContentNotFoundError, PostSourceError
from ..rendering.markup import MarkdownRenderError

logger = logging.getLogger("mdblog.errors")


def render_not_found(request: Request) -> Response:
    templates = request.app.state.templates
    site_title = request.app.state.settings.site_title
    return templates.TemplateResponse(
        request,
        "404.html",
        {
            "title": f"Page Not Found · {site_title}",
            "site_title": site_title,
        },
        status_code=status.HTTP_404_NOT_FOUND,
    )


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def content_not_found_handler(
    request: Request,
    exc: ContentNotFoundError,
) -> Response:
    logger.info("Not found: %s (%s)", request.url.path, exc)
    return render_not_found(request)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Response:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return render_not_found(request)

    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def post_source_error_handler(
    request: Request,
    exc: PostSourceError,
) -> Response:
    logger.error("Post read error on %s: %s", request.url.path, exc)
    return PlainTextResponse(
        "cannot read post",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def markdown_error_handler(
    request: Request,
    exc: MarkdownRenderError,
) -> Response:
    logger.error("Markdown error on %s: %s", request.url.path, exc)
    return PlainTextResponse(
        "markdown error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> Response:
    """
    Catch-all handler for uncaught exceptions.

    Logs the full stack trace internally and returns a generic 500 with no
    internal details.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    return HTMLResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
