"""
Search Routes

Substring search over post titles and tags.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from .dependencies import get_content_index, get_settings, get_templates
from ..config import Settings
from ..content import ContentIndex

logger = logging.getLogger("mdblog.routes")

router = APIRouter(tags=["search"])


@router.get("/search", response_class=HTMLResponse, summary="Search posts")
def search(
    request: Request,
    content_index: Annotated[ContentIndex, Depends(get_content_index)],
    settings: Annotated[Settings, Depends(get_settings)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
    q: Optional[str] = None,
) -> Response:
    """
    Render matches for ``q``. A missing or blank query redirects home.
    """
    query = (q or "").strip().lower()
    if not query:
        logger.info("Empty search query")
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    results = content_index.search(query)
    if not results:
        logger.info("No results for query: %s", query)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": f"Search: {query}",
            "site_title": settings.site_title,
            "posts": results,
            "query": query,
        },
    )
