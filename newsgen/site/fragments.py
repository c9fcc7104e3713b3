"""HTML fragments for the news pages. All text is escaped."""

from __future__ import annotations

from html import escape

from ..config import EXCERPT_CHARS


def link_open(href: str) -> str:
    return f'<a href="{escape(href, quote=True)}">'


def h2(text: str) -> str:
    return f"<h2>{escape(text)}</h2>"


def para(text: str) -> str:
    return f"<p>{escape(text)}</p>"


def image(src: str, alt: str) -> str:
    return f'<img src="{escape(src, quote=True)}" alt="{escape(alt, quote=True)}">'


def excerpt(text: str, limit: int = EXCERPT_CHARS) -> str:
    """Shorten body text to ``limit`` characters, marking the cut with an ellipsis."""
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "…"


def card(href: str, parts: list[str]) -> str:
    lines = ["<article>", link_open(href)]
    lines.extend(parts)
    lines.extend(["</a>", "</article>"])
    return "\n".join(lines) + "\n"
