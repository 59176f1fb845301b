"""AfriWiki linker -- entity catalog, auto-linking and HTML sanitizing for AfriWiki content."""

__version__ = "0.1.0"
