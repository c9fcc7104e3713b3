"""Tests for the command line interface."""

from __future__ import annotations

import contextlib
import io
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from newsgen.cli import main
from newsgen.source.client import RemoteFetchError
from newsgen.source.entries import ContentfulSource, Entry

TEMPLATES = Path(__file__).resolve().parent.parent / "templates"
ENV = {"CONTENTFUL_SPACE_ID": "space1", "CONTENTFUL_ACCESS_TOKEN": "token1"}


class TestCli(unittest.TestCase):
    def test_missing_credentials(self) -> None:
        err = io.StringIO()
        with patch.dict(os.environ, {}, clear=True), contextlib.redirect_stderr(err):
            code = main(["build"])
        self.assertEqual(code, 2)
        self.assertIn("CONTENTFUL_SPACE_ID", err.getvalue())

    def test_build(self) -> None:
        entries = [Entry(id="a1", title="Launch", date="2024-01-01", category="press")]
        with tempfile.TemporaryDirectory() as td:
            templates = Path(td) / "templates"
            shutil.copytree(TEMPLATES, templates)
            out = Path(td) / "public"

            stdout = io.StringIO()
            with (
                patch.dict(os.environ, ENV, clear=True),
                patch.object(ContentfulSource, "get_entries", new=AsyncMock(return_value=entries)),
                contextlib.redirect_stdout(stdout),
            ):
                code = main(["build", "--templates", str(templates), "--out", str(out)])

            self.assertEqual(code, 0)
            self.assertIn("Site built", stdout.getvalue())
            self.assertTrue((out / "news" / "press" / "a1.html").exists())

    def test_build_reports_fetch_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "public"
            err = io.StringIO()
            with (
                patch.dict(os.environ, ENV, clear=True),
                patch.object(
                    ContentfulSource,
                    "get_entries",
                    new=AsyncMock(side_effect=RemoteFetchError("AccessTokenInvalid: bad token")),
                ),
                contextlib.redirect_stderr(err),
            ):
                code = main(["build", "--out", str(out)])

            self.assertEqual(code, 1)
            self.assertEqual(err.getvalue().count("Error:"), 1)
            self.assertIn("AccessTokenInvalid", err.getvalue())
            self.assertFalse(out.exists())

    def test_entries_listing(self) -> None:
        entries = [Entry(id="a2", title="Update", date="2024-02-01", category="press")]
        stdout = io.StringIO()
        with (
            patch.dict(os.environ, ENV, clear=True),
            patch("newsgen.source.entries.get_entries", new=AsyncMock(return_value=entries)),
            contextlib.redirect_stdout(stdout),
        ):
            code = main(["entries"])
        self.assertEqual(code, 0)
        self.assertIn("press/a2", stdout.getvalue())
        self.assertIn("Update", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
