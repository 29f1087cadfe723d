"""
Markdown to HTML conversion for post bodies.
"""

from __future__ import annotations

import markdown

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


class MarkdownRenderError(RuntimeError):
    """Raised when a post body cannot be converted to HTML."""


def render_markdown(text: str) -> str:
    """Convert Markdown ``text`` to an HTML fragment."""
    try:
        return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    except Exception as exc:
        raise MarkdownRenderError(
            f"Failed to render markdown: {type(exc).__name__}"
        ) from exc
