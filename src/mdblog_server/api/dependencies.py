from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..config import Settings
from ..content import ContentIndex


# The index handle lives on app.state so separate app instances (tests)
# never share a store.

def get_content_index(request: Request) -> ContentIndex:
    return request.app.state.content_index


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
