"""Page renderers for the homepage, the news list and the article pages."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from html import escape
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from ..config import (
    ARTICLE_TEMPLATE,
    ARTICLES_DIR,
    BODY_TOKEN,
    CATEGORY_TOKEN,
    DATE_TOKEN,
    HOME_PAGE,
    HOME_TEMPLATE,
    HOMEPAGE_LIMIT,
    IMAGE_URL_TOKEN,
    NEWS_LIST_PAGE,
    NEWS_LIST_TEMPLATE,
    NEWS_PLACEHOLDER,
    TITLE_TOKEN,
)
from ..source.entries import Entry
from .fragments import card, excerpt, h2, image, para
from .templates import TemplateShapeError, load_template, substitute, write_page

logger = logging.getLogger(__name__)

_ARTICLE_TOKENS = re.compile(
    "|".join(re.escape(t) for t in (TITLE_TOKEN, DATE_TOKEN, CATEGORY_TOKEN, IMAGE_URL_TOKEN, BODY_TOKEN))
)


class UnsafePathError(ValueError):
    """Raised when an entry's category or id cannot be used as a path segment."""


def _check_segment(value: str, what: str, entry_id: str) -> str:
    if value in ("", ".", "..") or "/" in value or "\\" in value or "\x00" in value:
        raise UnsafePathError(f"Entry {entry_id} has unusable {what} {value!r} for an output path")
    return value


def article_path(entry: Entry) -> PurePosixPath:
    """Output path of an entry's page, relative to the output root."""
    category = _check_segment(entry.category, "category", entry.id)
    entry_id = _check_segment(entry.id, "id", entry.id)
    return PurePosixPath(ARTICLES_DIR) / category / f"{entry_id}.html"


def article_href(entry: Entry) -> str:
    """Site-absolute link to an entry's page. Always agrees with article_path()."""
    return "/" + quote(str(article_path(entry)))


def render_homepage(entries: Sequence[Entry], template: str) -> str:
    fragments = [
        card(article_href(entry), [h2(entry.title), para(entry.date)])
        for entry in entries[:HOMEPAGE_LIMIT]
    ]
    return substitute(template, NEWS_PLACEHOLDER, "".join(fragments), HOME_TEMPLATE)


def render_news_list(entries: Sequence[Entry], template: str) -> str:
    fragments = [
        card(
            article_href(entry),
            [
                h2(entry.title),
                para(entry.date),
                para(entry.category),
                image(entry.image_url, entry.title),
                para(excerpt(entry.body)),
            ],
        )
        for entry in entries
    ]
    date_list = ", ".join(entry.date for entry in entries)
    section = "".join(fragments) + f'<p class="date-list">{escape(date_list)}</p>\n'
    return substitute(template, NEWS_PLACEHOLDER, section, NEWS_LIST_TEMPLATE)


def render_article(entry: Entry, template: str) -> str:
    values = {
        TITLE_TOKEN: escape(entry.title),
        DATE_TOKEN: escape(entry.date),
        CATEGORY_TOKEN: escape(entry.category),
        IMAGE_URL_TOKEN: escape(entry.image_url, quote=True),
        BODY_TOKEN: escape(entry.body),
    }
    for token in values:
        if token not in template:
            raise TemplateShapeError(ARTICLE_TEMPLATE, token)

    # One pass over the template only, so tokens inside entry text stay literal.
    return _ARTICLE_TOKENS.sub(lambda m: values[m.group(0)], template)


async def update_homepage(entries: Sequence[Entry], templates_dir: Path, out_dir: Path) -> list[str]:
    """Render the latest entries into the homepage. Returns pages written."""
    template = await load_template(templates_dir / HOME_TEMPLATE)
    await write_page(out_dir / HOME_PAGE, render_homepage(entries, template))
    logger.info("Homepage written with %d entries", min(len(entries), HOMEPAGE_LIMIT))
    return [HOME_PAGE]


async def update_news_list(entries: Sequence[Entry], templates_dir: Path, out_dir: Path) -> list[str]:
    template = await load_template(templates_dir / NEWS_LIST_TEMPLATE)
    await write_page(out_dir / NEWS_LIST_PAGE, render_news_list(entries, template))
    logger.info("News list written with %d entries", len(entries))
    return [NEWS_LIST_PAGE]


async def generate_article_pages(
    entries: Sequence[Entry], templates_dir: Path, out_dir: Path
) -> list[str]:
    """Write one page per entry, in input order, overwriting earlier runs."""
    template = await load_template(templates_dir / ARTICLE_TEMPLATE)

    written: list[str] = []
    for entry in entries:
        rel = article_path(entry)
        await write_page(out_dir / rel, render_article(entry, template))
        written.append(str(rel))

    logger.info("Wrote %d article pages", len(written))
    return written
