"""
Post Routes

HTML pages for the paginated index, single posts and tag listings. Lookup
misses raise ``ContentNotFoundError`` subclasses, which the global handlers
turn into the rendered 404 page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .dependencies import get_content_index, get_settings, get_templates
from ..config import Settings
from ..content import ContentIndex, PageNotFoundError
from ..rendering.markup import render_markdown


router = APIRouter(tags=["posts"])

ContentIndexDep = Annotated[ContentIndex, Depends(get_content_index)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
TemplatesDep = Annotated[Jinja2Templates, Depends(get_templates)]


def _render_index(
    request: Request,
    number: int,
    content_index: ContentIndex,
    settings: Settings,
    templates: Jinja2Templates,
) -> HTMLResponse:
    page = content_index.page(number)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.site_title,
            "site_title": settings.site_title,
            "posts": page.posts,
            "page": page,
        },
    )


@router.get("/", response_class=HTMLResponse, summary="First page of posts")
def index(
    request: Request,
    content_index: ContentIndexDep,
    settings: SettingsDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    return _render_index(request, 1, content_index, settings, templates)


@router.get("/page/{n}", response_class=HTMLResponse, summary="Page n of posts")
def index_page(
    n: str,
    request: Request,
    content_index: ContentIndexDep,
    settings: SettingsDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    # Non-numeric page numbers are a 404, not a validation error.
    try:
        number = int(n)
    except ValueError:
        raise PageNotFoundError(f"Invalid page parameter: {n}") from None

    return _render_index(request, number, content_index, settings, templates)


@router.get("/post/{slug}", response_class=HTMLResponse, summary="Single post")
def post(
    slug: str,
    request: Request,
    content_index: ContentIndexDep,
    settings: SettingsDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    record = content_index.by_slug(slug)
    body = content_index.read_body(record)
    html = render_markdown(body)

    return templates.TemplateResponse(
        request,
        "post.html",
        {
            "title": f"{settings.site_title} · {record.title}",
            "site_title": settings.site_title,
            "post": record,
            "content": html,
        },
    )


@router.get("/tag/{tag}", response_class=HTMLResponse, summary="Posts by tag")
def tag(
    tag: str,
    request: Request,
    content_index: ContentIndexDep,
    settings: SettingsDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    posts = content_index.by_tag(tag)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": f"Tag: {tag} · {settings.site_title}",
            "site_title": settings.site_title,
            "posts": posts,
            "tag": tag,
        },
    )
