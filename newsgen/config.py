"""Configuration constants and settings for newsgen."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel

# Environment variables holding the Contentful credentials
SPACE_ID_ENV = "CONTENTFUL_SPACE_ID"
ACCESS_TOKEN_ENV = "CONTENTFUL_ACCESS_TOKEN"
ENVIRONMENT_ENV = "CONTENTFUL_ENVIRONMENT"
HOST_ENV = "CONTENTFUL_HOST"

DEFAULT_ENVIRONMENT = "master"
DEFAULT_HOST = "cdn.contentful.com"

# Default query: articles, newest first
CONTENT_TYPE = "記事"
ORDER = "-fields.日時"

# Delivery API paging. The API refuses limits above 1000.
PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

# HTTP client settings
REQUEST_TIMEOUT = 30.0

# Rendering
HOMEPAGE_LIMIT = 3
EXCERPT_CHARS = 120

# Paths, relative to the working directory
TEMPLATES_DIR = Path("templates")
OUTPUT_DIR = Path("public")

HOME_TEMPLATE = "home.html"
NEWS_LIST_TEMPLATE = "news-list.html"
ARTICLE_TEMPLATE = "article.html"

HOME_PAGE = "index.html"
NEWS_LIST_PAGE = "news.html"
ARTICLES_DIR = "news"

# Template placeholders
NEWS_PLACEHOLDER = "<!-- NEWS_PLACEHOLDER -->"
TITLE_TOKEN = "{{TITLE}}"
DATE_TOKEN = "{{DATE}}"
CATEGORY_TOKEN = "{{CATEGORY}}"
IMAGE_URL_TOKEN = "{{IMAGE_URL}}"
BODY_TOKEN = "{{BODY}}"


class ContentfulSettings(BaseModel):
    """Connection settings for the Content Delivery API."""

    model_config = {"frozen": True}

    space_id: str
    access_token: str
    environment: str = DEFAULT_ENVIRONMENT
    host: str = DEFAULT_HOST
    timeout: float = REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ContentfulSettings:
        """Build settings from environment variables.

        Raises:
            ValueError: If the space id or access token is missing
        """
        env = os.environ if environ is None else environ

        missing = [name for name in (SPACE_ID_ENV, ACCESS_TOKEN_ENV) if not env.get(name)]
        if missing:
            raise ValueError(f"Missing required environment variable(s): {', '.join(missing)}")

        return cls(
            space_id=env[SPACE_ID_ENV],
            access_token=env[ACCESS_TOKEN_ENV],
            environment=env.get(ENVIRONMENT_ENV) or DEFAULT_ENVIRONMENT,
            host=env.get(HOST_ENV) or DEFAULT_HOST,
        )


class FieldMap(BaseModel):
    """Contentful field ids for each entry attribute."""

    model_config = {"frozen": True}

    title: str = "タイトル"
    date: str = "日時"
    category: str = "カテゴリー"
    body: str = "本文"
    image: str = "画像"
