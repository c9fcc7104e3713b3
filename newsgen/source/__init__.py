"""Content source access."""

from .client import ContentfulClient, RemoteFetchError
from .entries import ContentfulSource, ContentSource, Entry, Image, get_entries

__all__ = [
    "ContentfulClient",
    "RemoteFetchError",
    "ContentSource",
    "ContentfulSource",
    "Entry",
    "Image",
    "get_entries",
]
