"""newsgen: build a static news site from Contentful entries."""

__version__ = "0.1.0"
