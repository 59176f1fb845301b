"""HTML sanitizer for user-submitted content.

Rebuilds the markup tag by tag with :class:`html.parser.HTMLParser`:

* ``script``, ``style``, ``iframe``, ``object``, ``embed`` and form controls
  are removed together with their content,
* ``meta``, ``link`` and ``base`` tags are removed,
* ``on*`` event-handler attributes are dropped,
* ``javascript:`` URLs are neutralised (``href="#"``, ``src=""``), as are
  ``data:`` sources that are not images,
* CSS ``expression(...)`` and ``javascript:`` are stripped from ``style``.

Text, entities and every other tag pass through unchanged.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from html.parser import HTMLParser

from afriwiki.errors import MalformedInput

logger = logging.getLogger(__name__)

_DROP_WITH_CONTENT = frozenset(
    {
        "script", "style", "iframe", "object", "embed", "form",
        "input", "button", "select", "textarea", "frameset", "frame",
    }
)  # fmt: skip
_DROP_TAG_ONLY = frozenset({"meta", "link", "base"})
_VOID_TAGS = frozenset({"embed", "input", "frame", "meta", "link", "base"})

_URL_ATTRS = frozenset({"href", "src", "action", "formaction", "xlink:href", "background"})
_JS_URL = re.compile(r"^\s*(?:javascript|vbscript)\s*:", re.IGNORECASE)
_DATA_URL = re.compile(r"^\s*data\s*:", re.IGNORECASE)
_DATA_IMAGE = re.compile(r"^\s*data\s*:\s*image/", re.IGNORECASE)
_EXPRESSION = re.compile(r"expression\s*\([^)]*\)", re.IGNORECASE)
_JS_SCHEME = re.compile(r"javascript\s*:", re.IGNORECASE)
# Browsers ignore control characters and whitespace inside URL schemes
_URL_NOISE = re.compile(r"[\x00-\x20]+")


def _clean_url(name: str, value: str) -> str | None:
    """Return a safe replacement for a URL attribute, or ``None`` to keep it."""
    compact = _URL_NOISE.sub("", html_lib.unescape(value))
    if _JS_URL.match(compact):
        return "#" if name == "href" else ""
    if name == "src" and _DATA_URL.match(compact) and not _DATA_IMAGE.match(compact):
        return ""
    return None


class _Sanitizer(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self._parts: list[str] = []
        self._skip: list[str] = []
        self.removed = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, closed=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, closed=True)

    def handle_endtag(self, tag: str) -> None:
        if self._skip:
            if tag == self._skip[-1]:
                self._skip.pop()
            return
        if tag in _DROP_WITH_CONTENT or tag in _DROP_TAG_ONLY:
            return
        self._parts.append(f"</{tag}>")

    def handle_data(self, data: str) -> None:
        if self._skip:
            return
        self._parts.append(data.replace("<", "&lt;").replace(">", "&gt;"))

    def handle_entityref(self, name: str) -> None:
        if not self._skip:
            self._parts.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if not self._skip:
            self._parts.append(f"&#{name};")

    def handle_comment(self, data: str) -> None:
        self.removed += 1

    def handle_decl(self, decl: str) -> None:
        self.removed += 1

    def handle_pi(self, data: str) -> None:
        self.removed += 1

    def unknown_decl(self, data: str) -> None:
        self.removed += 1

    def get_html(self) -> str:
        return "".join(self._parts)

    def _start(self, tag: str, attrs: list[tuple[str, str | None]], closed: bool) -> None:
        if self._skip:
            if tag == self._skip[-1] and not closed:
                self._skip.append(tag)
            return
        if tag in _DROP_WITH_CONTENT:
            self.removed += 1
            if not closed and tag not in _VOID_TAGS:
                self._skip.append(tag)
            return
        if tag in _DROP_TAG_ONLY:
            self.removed += 1
            return
        self._parts.append(self._rebuild_tag(tag, attrs, closed))

    def _rebuild_tag(self, tag: str, attrs: list[tuple[str, str | None]], closed: bool) -> str:
        parts = [tag]
        for key, value in attrs:
            if key.startswith("on"):
                self.removed += 1
                continue
            if value is None:
                parts.append(key)
                continue
            if key in _URL_ATTRS:
                replacement = _clean_url(key, value)
                if replacement is not None:
                    self.removed += 1
                    value = replacement
            elif key == "style":
                value = _JS_SCHEME.sub("", _EXPRESSION.sub("", value))
            parts.append(f'{key}="{html_lib.escape(value, quote=True)}"')
        return f"<{' '.join(parts)}{' /' if closed else ''}>"


def truncate(text: str, max_length: int | None) -> str:
    """Cut *text* to *max_length* characters, appending ``...`` when cut."""
    if max_length is not None and len(text) > max_length:
        return text[:max_length] + "..."
    return text


def sanitize_html(html: str | None, max_length: int | None = None) -> str:
    """Return *html* with dangerous markup removed.

    ``None`` and ``""`` yield ``""``.  With *max_length* the input is cut
    first (``...`` appended), then sanitized, so a tag split by the cut is
    rendered as text instead of markup.
    """
    if html is None:
        return ""
    if not isinstance(html, str):
        raise MalformedInput(f"Expected str to sanitize, got {type(html).__name__}")
    if not html:
        return ""

    parser = _Sanitizer()
    parser.feed(truncate(html, max_length))
    parser.close()
    if parser.removed:
        logger.debug("Sanitizer removed %d unsafe constructs", parser.removed)
    return parser.get_html()


def escape_html(text: str | None) -> str:
    """Escape ``& < > " '`` for display as plain text."""
    if not text:
        return ""
    return html_lib.escape(text, quote=True)


def sanitize_input(text: str | None, max_length: int = 500) -> str:
    """Trim, cut to *max_length* and drop angle brackets from a form field."""
    if not text:
        return ""
    return text.strip()[:max_length].replace("<", "").replace(">", "")
