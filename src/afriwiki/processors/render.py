"""Render profile content: Markdown or HTML in, sanitized and auto-linked HTML out.

Profile bodies come either from the rich-text editor (HTML) or from older
Markdown imports.  :func:`render_content` detects which, converts Markdown
with Python-Markdown, sanitizes, then auto-links.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as etree
from collections.abc import Iterable

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from afriwiki.models.entity import LinkableEntity
from afriwiki.processors.autolink import apply_auto_links, apply_static_auto_links
from afriwiki.processors.sanitizer import sanitize_html

_HTML_TAG = re.compile(r"<[a-z][\s\S]*>", re.IGNORECASE)
_EXTERNAL_URL = re.compile(r"^https?://", re.IGNORECASE)
_HEADINGS = ("h1", "h2", "h3", "h4", "h5", "h6")

MARKDOWN_EXTENSIONS = ["fenced_code", "sane_lists", "tables", "nl2br"]


def is_html(text: str) -> bool:
    """True when *text* contains at least one HTML tag."""
    return bool(_HTML_TAG.search(text))


def _unwrap(parent: etree.Element, child: etree.Element) -> None:
    """Replace *child* with its text content."""
    text = "".join(child.itertext()) + (child.tail or "")
    index = list(parent).index(child)
    if index == 0:
        parent.text = (parent.text or "") + text
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + text
    parent.remove(child)


class WikiTreeprocessor(Treeprocessor):
    """Give the rendered tree the wiki's look.

    * headings move down one level (the page title is the ``h1``) and get
      a ``wiki-hN`` class; links inside them become plain text,
    * paragraphs and lists get ``wiki-paragraph`` / ``wiki-list``,
    * external links open in a new tab, links to anything other than an
      http(s) URL or a site path degrade to bold text.
    """

    def run(self, root: etree.Element) -> None:
        parents = {child: parent for parent in root.iter() for child in parent}

        for elem in list(root.iter()):
            if elem.tag in _HEADINGS:
                level = min(int(elem.tag[1]) + 1, 6)
                elem.tag = f"h{level}"
                elem.set("class", f"wiki-h{level}")
                for link in list(elem.iter("a")):
                    _unwrap(parents[link], link)
            elif elem.tag == "p":
                if not HTML_PLACEHOLDER_RE.fullmatch((elem.text or "").strip()):
                    elem.set("class", "wiki-paragraph")
            elif elem.tag in ("ul", "ol"):
                elem.set("class", "wiki-list")

        for link in list(root.iter("a")):
            href = link.get("href", "")
            if _EXTERNAL_URL.match(href):
                link.set("target", "_blank")
                link.set("rel", "noopener noreferrer")
            elif not href.startswith("/"):
                link.attrib.clear()
                link.tag = "strong"


class WikiExtension(Extension):
    """Escape raw HTML and apply :class:`WikiTreeprocessor`."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # Raw HTML in Markdown bodies is shown as text
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # After inline parsing (20), before prettify (10)
        md.treeprocessors.register(WikiTreeprocessor(md), "wiki", 15)


def markdown_to_html(text: str) -> str:
    """Convert a Markdown profile body to HTML.

    ``#``/``##``/``###`` headings map to ``h2``/``h3``/``h4``, single
    newlines inside a paragraph become ``<br>``, and raw HTML is escaped.
    """
    if not text:
        return ""
    return markdown.markdown(
        text,
        extensions=[*MARKDOWN_EXTENSIONS, WikiExtension()],
        output_format="html",
    )


def render_content(
    text: str | None,
    entities: Iterable[LinkableEntity] | None = None,
) -> str:
    """Render profile content for display.

    HTML is used as-is, anything else goes through :func:`markdown_to_html`.
    The result is sanitized, then auto-linked against *entities* (the
    static catalog when ``None``).
    """
    if not text:
        return ""

    body = text if is_html(text) else markdown_to_html(text)
    body = sanitize_html(body)
    if entities is None:
        return apply_static_auto_links(body)
    return apply_auto_links(body, entities)
