import logging
from typing import Annotated, Dict

from fastapi import APIRouter, Depends, Request, Response

from .dependencies import get_content_index, get_settings
from ..config import Settings
from ..content import ContentIndex, PostSourceError
from ..rendering.feed import build_rss, plain_text_excerpt

logger = logging.getLogger("mdblog.routes")

router = APIRouter(tags=["feed"])

RSS_MEDIA_TYPE = "application/rss+xml; charset=utf-8"


@router.get("/rss", summary="RSS 2.0 feed of recent posts")
def rss(
    request: Request,
    content_index: Annotated[ContentIndex, Depends(get_content_index)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    posts = content_index.recent(settings.rss_limit)

    descriptions: Dict[str, str] = {}
    for post in posts:
        try:
            body = content_index.read_body(post)
        except PostSourceError as exc:
            # Fall back to the title for this item only
            logger.warning("Feed excerpt unavailable for %s: %s", post.slug, exc)
            continue
        descriptions[post.slug] = plain_text_excerpt(body, settings.excerpt_length)

    xml = build_rss(
        posts,
        site_title=settings.site_title,
        base_url=str(request.base_url),
        descriptions=descriptions,
    )
    return Response(content=xml, media_type=RSS_MEDIA_TYPE)
