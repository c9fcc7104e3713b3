"""Static site rendering."""

from .build import BuildResult, build_site
from .render import UnsafePathError, article_href, article_path
from .templates import FileAccessError, TemplateShapeError

__all__ = [
    "build_site",
    "BuildResult",
    "article_path",
    "article_href",
    "FileAccessError",
    "TemplateShapeError",
    "UnsafePathError",
]
