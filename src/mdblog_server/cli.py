"""
Command-line entry point: ``mdblog serve`` and ``mdblog new``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click

from .config import settings
from .content.parser import DATETIME_FORMAT
from .logging_config import configure_logging

logger = logging.getLogger("mdblog.cli")

_SLUG_DROP = re.compile(r"[^a-z0-9-]")
_SLUG_DASHES = re.compile(r"-{2,}")


def generate_slug(title: str) -> str:
    """Lowercase, spaces to hyphens, ASCII alphanumerics only."""
    slug = title.lower().replace(" ", "-")
    slug = _SLUG_DROP.sub("", slug)
    slug = _SLUG_DASHES.sub("-", slug)
    return slug.strip("-")


def create_post_file(
    posts_dir: Path,
    title: str,
    tags: str = "",
    now: Optional[datetime] = None,
) -> Path:
    """
    Write a new, empty post with front matter.

    Raises
    ------
    click.ClickException
        If the title yields an empty slug or the file already exists.
    """
    slug = generate_slug(title)
    if not slug:
        raise click.ClickException(f"Title {title!r} produces an empty slug")

    timestamp = (now or datetime.now()).strftime(DATETIME_FORMAT)
    path = posts_dir / f"{timestamp}-{slug}.md"
    content = f"title: {title}\ntag: {tags}\n\n"

    try:
        with path.open("x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError:
        raise click.ClickException(f"{path} already exists") from None
    except OSError as exc:
        raise click.ClickException(f"Error creating file: {exc}") from exc

    return path


class DefaultServeGroup(click.Group):
    """Group that runs ``serve`` when the arguments name no command."""

    default_command = "serve"

    def parse_args(self, ctx: click.Context, args: list) -> list:
        group_opts = {opt for param in self.get_params(ctx) for opt in param.opts}

        # Skip leading group options (and their values) to find the first word
        i = 0
        while i < len(args) and args[i].split("=", 1)[0] in group_opts:
            i += 1 if "=" in args[i] or args[i] == "--help" else 2

        if i < len(args) and args[i] not in self.commands:
            args = args[:i] + [self.default_command] + args[i:]
        return super().parse_args(ctx, args)


@click.group(cls=DefaultServeGroup, invoke_without_command=True)
@click.option("--log-level", default=settings.log_level, show_default=True)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Markdown blog server. Runs `serve` when no command is given."""
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve_command)


@cli.command("serve")
@click.option("--posts", "posts_dir", default=settings.posts_dir, show_default=True,
              help="Directory containing posts")
@click.option("--host", default=settings.host, show_default=True)
@click.option("--port", default=settings.port, type=int, show_default=True)
@click.option("--per-page", default=settings.per_page, type=click.IntRange(min=1),
              show_default=True, help="Posts per page")
@click.option("--title", "site_title", default=settings.site_title, show_default=True,
              help="Site title")
@click.option("--no-watch", is_flag=True, help="Disable hot reload")
def serve_command(
    posts_dir: str,
    host: str,
    port: int,
    per_page: int,
    site_title: str,
    no_watch: bool,
) -> None:
    """Serve the posts directory over HTTP."""
    import uvicorn

    from .main import create_app

    cfg = settings.model_copy(
        update={
            "posts_dir": posts_dir,
            "host": host,
            "port": port,
            "per_page": per_page,
            "site_title": site_title,
            "watch_enabled": settings.watch_enabled and not no_watch,
        }
    )

    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(create_app(cfg), host=host, port=port, log_config=None)


@cli.command("new")
@click.option("--posts", "posts_dir", default=settings.posts_dir, show_default=True,
              type=click.Path(file_okay=False, path_type=Path))
@click.option("--tags", default="", help="Comma-separated tags")
@click.argument("title", nargs=-1, required=True)
def new_command(posts_dir: Path, tags: str, title: Tuple[str, ...]) -> None:
    """Create a new post file named after TITLE."""
    path = create_post_file(posts_dir, " ".join(title), tags)
    click.echo(f"Created: {path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
