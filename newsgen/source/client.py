"""HTTP client for the Contentful Content Delivery API.

Requests go through the standard library in a worker thread so the build
pipeline suspends on the fetch without pulling in an HTTP client dependency.
Failures are not retried; re-running the build is the recovery path.
"""

from __future__ import annotations

import asyncio
import gzip
import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
import zlib
from typing import Any

from ..config import ContentfulSettings

logger = logging.getLogger(__name__)


class RemoteFetchError(Exception):
    """Raised when the content source cannot be reached or rejects the request."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code} for {self.url})"
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class ContentfulClient:
    """Async client for one Contentful space/environment."""

    def __init__(self, settings: ContentfulSettings):
        self.settings = settings

    @property
    def base_url(self) -> str:
        s = self.settings
        space = urllib.parse.quote(s.space_id, safe="")
        env = urllib.parse.quote(s.environment, safe="")
        return f"https://{s.host}/spaces/{space}/environments/{env}"

    def build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"
        return url

    async def fetch_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a Delivery API path and parse the JSON body.

        Raises:
            RemoteFetchError: On network errors, non-2xx responses or bad JSON
        """
        url = self.build_url(path, params)
        logger.debug("GET %s", url)

        content, status = await asyncio.to_thread(self._fetch_sync, url)
        if status >= 400:
            raise RemoteFetchError(_error_message(content), url=url, status_code=status)

        try:
            data = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RemoteFetchError(f"Invalid JSON from content source: {e}", url=url) from e
        if not isinstance(data, dict):
            raise RemoteFetchError("Unexpected response shape from content source", url=url)
        return data

    async def close(self) -> None:
        """Compatibility no-op (stdlib client has no persistent resources)."""
        return

    async def __aenter__(self) -> ContentfulClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _fetch_sync(self, url: str) -> tuple[bytes, int]:
        req = urllib.request.Request(
            url,
            headers={
                "Authorization": f"Bearer {self.settings.access_token}",
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
            },
            method="GET",
        )

        try:
            with urllib.request.urlopen(req, timeout=self.settings.timeout) as resp:
                status = int(getattr(resp, "status", 200))
                headers = {k: v for k, v in resp.headers.items()}
                content = resp.read() or b""
        except urllib.error.HTTPError as e:
            status = int(getattr(e, "code", 0) or 0)
            headers = {k: v for k, v in (e.headers.items() if e.headers else [])}
            content = e.read() or b""
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            reason = getattr(e, "reason", e)
            raise RemoteFetchError(f"Content source unreachable: {reason}", url=url) from e

        return _maybe_gunzip(content, headers), status


def _maybe_gunzip(content: bytes, headers: dict[str, str]) -> bytes:
    if (headers.get("Content-Encoding") or "").lower() != "gzip":
        return content
    try:
        return gzip.decompress(content)
    except (OSError, EOFError, zlib.error):
        # Left as-is; fetch_json then rejects it as undecodable
        return content


def _error_message(content: bytes) -> str:
    # Contentful error bodies look like {"sys": {"id": "AccessTokenInvalid"}, "message": "..."}
    try:
        body = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return "Content source request failed"
    if not isinstance(body, dict):
        return "Content source request failed"
    error_id = (body.get("sys") or {}).get("id")
    message = body.get("message") or "Content source request failed"
    return f"{error_id}: {message}" if error_id else str(message)
