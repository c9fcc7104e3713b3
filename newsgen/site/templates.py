"""Template store: read templates, substitute placeholders, write pages."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileAccessError(OSError):
    """Raised when a template cannot be read or a page cannot be written."""


class TemplateShapeError(ValueError):
    """Raised when a template lacks a placeholder the renderer needs."""

    def __init__(self, template: str, placeholder: str):
        super().__init__(f"Template {template} has no placeholder {placeholder}")
        self.template = template
        self.placeholder = placeholder


async def load_template(path: Path) -> str:
    """Read a template from disk. Every call goes back to the file.

    Raises:
        FileNotFoundError: If the template does not exist
        FileAccessError: If it exists but cannot be read
    """
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Cannot read template {path}: {e}") from e


def substitute(template: str, placeholder: str, value: str, name: str = "template") -> str:
    if placeholder not in template:
        raise TemplateShapeError(name, placeholder)
    return template.replace(placeholder, value)


async def write_page(path: Path, html: str) -> int:
    """Write a page, creating parent directories and overwriting any old file.

    Returns:
        Number of bytes written
    """
    data = html.encode("utf-8")
    try:
        await asyncio.to_thread(_write_bytes, path, data)
    except OSError as e:
        raise FileAccessError(f"Cannot write {path}: {e}") from e
    logger.debug("Wrote %s (%d bytes)", path, len(data))
    return len(data)


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
