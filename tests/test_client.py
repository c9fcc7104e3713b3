"""Tests for the Delivery API client and settings."""

from __future__ import annotations

import gzip
import http.client
import json
import unittest
import urllib.error
from unittest.mock import MagicMock, patch

from newsgen.config import ContentfulSettings
from newsgen.source.client import ContentfulClient, RemoteFetchError, _error_message, _maybe_gunzip


def _settings() -> ContentfulSettings:
    return ContentfulSettings(space_id="space1", access_token="token1")


class TestSettings(unittest.TestCase):
    def test_from_env(self) -> None:
        settings = ContentfulSettings.from_env(
            {"CONTENTFUL_SPACE_ID": "s", "CONTENTFUL_ACCESS_TOKEN": "t", "CONTENTFUL_ENVIRONMENT": "staging"}
        )
        self.assertEqual(settings.space_id, "s")
        self.assertEqual(settings.access_token, "t")
        self.assertEqual(settings.environment, "staging")
        self.assertEqual(settings.host, "cdn.contentful.com")

    def test_from_env_missing(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            ContentfulSettings.from_env({"CONTENTFUL_SPACE_ID": "s"})
        self.assertIn("CONTENTFUL_ACCESS_TOKEN", str(ctx.exception))


class TestContentfulClient(unittest.IsolatedAsyncioTestCase):
    def test_build_url(self) -> None:
        client = ContentfulClient(_settings())
        url = client.build_url("entries", {"content_type": "記事", "skip": 0})
        self.assertTrue(url.startswith("https://cdn.contentful.com/spaces/space1/environments/master/entries?"))
        self.assertIn("content_type=%E8%A8%98%E4%BA%8B", url)
        self.assertIn("skip=0", url)

    async def test_fetch_json_ok(self) -> None:
        client = ContentfulClient(_settings())
        body = json.dumps({"total": 0, "items": []}).encode()
        with patch.object(ContentfulClient, "_fetch_sync", return_value=(body, 200)):
            data = await client.fetch_json("entries")
        self.assertEqual(data, {"total": 0, "items": []})

    async def test_fetch_json_http_error(self) -> None:
        client = ContentfulClient(_settings())
        body = json.dumps({"sys": {"id": "AccessTokenInvalid"}, "message": "bad token"}).encode()
        with patch.object(ContentfulClient, "_fetch_sync", return_value=(body, 401)):
            with self.assertRaises(RemoteFetchError) as ctx:
                await client.fetch_json("entries")
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertIn("AccessTokenInvalid", str(ctx.exception))

    async def test_fetch_json_invalid_json(self) -> None:
        client = ContentfulClient(_settings())
        with patch.object(ContentfulClient, "_fetch_sync", return_value=(b"<html>", 200)):
            with self.assertRaises(RemoteFetchError):
                await client.fetch_json("entries")

    async def test_unreachable_host(self) -> None:
        client = ContentfulClient(_settings())
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            with self.assertRaises(RemoteFetchError) as ctx:
                await client.fetch_json("entries")
        self.assertIn("unreachable", str(ctx.exception))
        self.assertIsNone(ctx.exception.status_code)

    async def test_incomplete_read(self) -> None:
        client = ContentfulClient(_settings())
        with patch("urllib.request.urlopen", side_effect=http.client.IncompleteRead(b"")):
            with self.assertRaises(RemoteFetchError):
                await client.fetch_json("entries")

    async def test_truncated_gzip_body(self) -> None:
        client = ContentfulClient(_settings())
        resp = MagicMock()
        resp.status = 200
        resp.headers = {"Content-Encoding": "gzip"}
        resp.read.return_value = gzip.compress(b'{"total": 0, "items": []}')[:-6]
        resp.__enter__.return_value = resp
        with patch("urllib.request.urlopen", return_value=resp):
            with self.assertRaises(RemoteFetchError) as ctx:
                await client.fetch_json("entries")
        self.assertIn("Invalid JSON", str(ctx.exception))


class TestHelpers(unittest.TestCase):
    def test_gunzip(self) -> None:
        raw = b'{"a": 1}'
        self.assertEqual(_maybe_gunzip(gzip.compress(raw), {"Content-Encoding": "gzip"}), raw)
        self.assertEqual(_maybe_gunzip(raw, {}), raw)

    def test_gunzip_truncated_stream_left_as_is(self) -> None:
        broken = gzip.compress(b"{\"a\": 1}")[:-6]
        self.assertEqual(_maybe_gunzip(broken, {"Content-Encoding": "gzip"}), broken)

    def test_error_message_fallback(self) -> None:
        self.assertEqual(_error_message(b"not json"), "Content source request failed")


if __name__ == "__main__":
    unittest.main()
