"""Entry query, pagination and asset link resolution."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import BaseModel

from ..config import MAX_PAGE_SIZE, PAGE_SIZE, FieldMap
from .client import ContentfulClient, RemoteFetchError

logger = logging.getLogger(__name__)


class Image(BaseModel):
    """A resolved image asset."""

    model_config = {"frozen": True}

    url: str
    title: str = ""
    content_type: str = ""


class Entry(BaseModel):
    """A single article entry as fetched from the content source."""

    model_config = {"frozen": True}

    id: str
    title: str
    date: str
    category: str
    body: str = ""
    image: Image | None = None

    @property
    def image_url(self) -> str:
        return self.image.url if self.image is not None else ""


class ContentSource(Protocol):
    async def get_entries(self, content_type: str, order: str) -> list[Entry]: ...


class ContentfulSource:
    """ContentSource backed by the Content Delivery API."""

    def __init__(
        self,
        client: ContentfulClient,
        fields: FieldMap | None = None,
        page_size: int = PAGE_SIZE,
    ):
        self.client = client
        self.fields = fields or FieldMap()
        self.page_size = page_size

    async def get_entries(self, content_type: str, order: str) -> list[Entry]:
        return await get_entries(
            self.client,
            content_type,
            order,
            fields=self.fields,
            page_size=self.page_size,
        )


async def get_entries(
    client: ContentfulClient,
    content_type: str,
    order: str,
    fields: FieldMap | None = None,
    page_size: int = PAGE_SIZE,
) -> list[Entry]:
    """Fetch every entry of a content type in the given order.

    Pages through the collection with skip/limit until ``total`` is reached.

    Args:
        client: Delivery API client
        content_type: Content type id (e.g. "記事")
        order: Contentful order spec (e.g. "-fields.日時")
        fields: Field id mapping
        page_size: Entries per request, clamped to the API ceiling

    Returns:
        Entries in the order returned by the API

    Raises:
        RemoteFetchError: On transport failures or malformed entries
    """
    fields = fields or FieldMap()
    limit = max(1, min(int(page_size), MAX_PAGE_SIZE))

    entries: list[Entry] = []
    skip = 0
    while True:
        page = await client.fetch_json(
            "entries",
            {"content_type": content_type, "order": order, "skip": skip, "limit": limit},
        )
        items = page.get("items") or []
        assets = _index_assets(page)
        for item in items:
            entries.append(parse_entry(item, fields, assets))

        total = int(page.get("total") or 0)
        skip += len(items)
        logger.debug("Fetched %d/%d entries", skip, total)
        if not items or skip >= total:
            break

    logger.info("Fetched %d %s entries", len(entries), content_type)
    return entries


def parse_entry(item: dict[str, Any], fields: FieldMap, assets: dict[str, dict[str, Any]]) -> Entry:
    """Convert a raw Delivery API item into an Entry."""
    sys = item.get("sys") or {}
    entry_id = str(sys.get("id") or "")
    data = item.get("fields") or {}

    values: dict[str, str] = {}
    for attr in ("title", "date", "category"):
        field_id = getattr(fields, attr)
        value = data.get(field_id)
        if value is None or value == "":
            raise RemoteFetchError(f"Entry {entry_id or '?'} is missing field '{field_id}'")
        values[attr] = str(value)

    if not entry_id:
        raise RemoteFetchError("Entry without sys.id in content source response")

    body = data.get(fields.body)
    return Entry(
        id=entry_id,
        body="" if body is None else str(body),
        image=_resolve_image(data.get(fields.image), assets),
        **values,
    )


def _index_assets(page: dict[str, Any]) -> dict[str, dict[str, Any]]:
    includes = page.get("includes") or {}
    index: dict[str, dict[str, Any]] = {}
    for asset in includes.get("Asset") or []:
        asset_id = (asset.get("sys") or {}).get("id")
        if asset_id:
            index[asset_id] = asset
    return index


def _resolve_image(value: Any, assets: dict[str, dict[str, Any]]) -> Image | None:
    if not isinstance(value, dict):
        return None

    sys = value.get("sys") or {}
    if sys.get("type") == "Link":
        asset = assets.get(sys.get("id") or "")
        if asset is None:
            logger.warning("Unresolved image asset link %s", sys.get("id"))
            return None
    else:
        # Already-resolved asset
        asset = value

    asset_fields = asset.get("fields") or {}
    file = asset_fields.get("file") or {}
    url = file.get("url")
    if not url:
        return None
    return Image(
        url=str(url),
        title=str(asset_fields.get("title") or ""),
        content_type=str(file.get("contentType") or ""),
    )
