"""Exception types raised by the AfriWiki linker."""

from __future__ import annotations


class AfriwikiError(Exception):
    """Base class for all AfriWiki linker errors."""


class DataUnavailable(AfriwikiError):
    """The profile listing could not be read (network error, timeout, bad payload).

    The catalog builder recovers from this by falling back to the static
    entities; it never reaches the reader of a page.
    """


class MalformedInput(AfriwikiError, TypeError):
    """A caller passed something that cannot be treated as text."""
