"""Site builder: fetch entries, then render and write every page."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from ..config import CONTENT_TYPE, HOMEPAGE_LIMIT, ORDER
from ..source.entries import ContentSource, Entry
from .render import generate_article_pages, update_homepage, update_news_list

logger = logging.getLogger(__name__)


class BuildResult(BaseModel):
    """Result of building the site."""

    out_dir: Path
    entries: int
    pages: list[str]
    total_bytes: int


async def build_site(
    source: ContentSource,
    templates_dir: Path,
    out_dir: Path,
    content_type: str = CONTENT_TYPE,
    order: str = ORDER,
) -> BuildResult:
    """Build the homepage, news list and article pages.

    The fetch runs before anything touches the output directory, so a failed
    fetch leaves existing files alone. Later failures abort the remaining
    stages; pages already written stay on disk.

    Args:
        source: Where entries come from
        templates_dir: Directory holding home.html, news-list.html, article.html
        out_dir: Output root
        content_type: Content type to query
        order: Sort specification passed to the source

    Returns:
        BuildResult with the pages written
    """
    entries: list[Entry] = await source.get_entries(content_type, order)
    logger.info("Building site from %d entries", len(entries))

    pages: list[str] = []
    pages += await update_homepage(entries[:HOMEPAGE_LIMIT], templates_dir, out_dir)
    pages += await update_news_list(entries, templates_dir, out_dir)
    pages += await generate_article_pages(entries, templates_dir, out_dir)

    pages = sorted(pages)
    total_bytes = sum((out_dir / p).stat().st_size for p in pages)
    return BuildResult(
        out_dir=out_dir.resolve(),
        entries=len(entries),
        pages=pages,
        total_bytes=total_bytes,
    )
