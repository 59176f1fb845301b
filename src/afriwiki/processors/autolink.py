"""Auto-linking -- wrap the first mention of each catalog entity in an anchor.

The input is split with :class:`html.parser.HTMLParser` into tag runs and
text runs.  Tag runs are copied through verbatim, so attribute values
(``href``, ``title``, ...) can never be rewritten.  Text runs inside
``<a>``, ``<script>``, ``<style>``, ``<code>``, ``<pre>`` and ``<textarea>``
are never matched either.

Entities are applied one after another, longest name first, each one
scanning the output of the previous one.  Only the first occurrence of an
entity gets a link; later occurrences stay plain text.
"""

from __future__ import annotations

import functools
import html as html_lib
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from html.parser import HTMLParser

from afriwiki.config import Settings
from afriwiki.errors import MalformedInput
from afriwiki.models.catalog import EntityCatalog
from afriwiki.models.entity import LinkableEntity

logger = logging.getLogger(__name__)

DEFAULT_CSS_CLASS = "wiki-autolink"
DEFAULT_TITLE = "Voir la page {name}"

# Text under these elements is never linked
_SKIP_TAGS = frozenset({"a", "script", "style", "code", "pre", "textarea"})

_VOID_TAGS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)  # fmt: skip

_APOSTROPHE = r"(?:'|’|&#39;|&#039;|&#x27;|&apos;|&rsquo;)"
_SPACE = r"(?:\s|&nbsp;|&#160;)+"


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass
class _Token:
    text: str
    is_text: bool
    linkable: bool = False


class _HtmlTokenizer(HTMLParser):
    """Split HTML into tag and text tokens, preserving the source text.

    Also records the visible text and ``href`` of every anchor already in
    the document.  Comments, declarations, CDATA sections and entity
    references are copied from *source* as written.
    """

    def __init__(self, source: str) -> None:
        super().__init__(convert_charrefs=False)
        self.source = source
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]
        self.tokens: list[_Token] = []
        self.anchor_texts: list[str] = []
        self.anchor_hrefs: set[str] = set()
        self._stack: list[str] = []
        self._anchor_parts: list[str] | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._add_tag(self.get_starttag_text() or f"<{tag}>")
        if tag in _VOID_TAGS:
            return
        self._stack.append(tag)
        if tag == "a":
            href = dict(attrs).get("href")
            if href:
                self.anchor_hrefs.add(href.strip())
            self._anchor_parts = []

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._add_tag(self.get_starttag_text() or f"<{tag} />")

    def handle_endtag(self, tag: str) -> None:
        self._add_tag(f"</{tag}>")
        if tag not in self._stack:
            return
        while self._stack:
            if self._stack.pop() == tag:
                break
        if tag == "a" and self._anchor_parts is not None:
            self.anchor_texts.append(html_lib.unescape("".join(self._anchor_parts)))
            self._anchor_parts = None if "a" not in self._stack else []

    def handle_data(self, data: str) -> None:
        self._add_text(data)

    def handle_entityref(self, name: str) -> None:
        self._add_text(self._reference_source(len(name) + 1))

    def handle_charref(self, name: str) -> None:
        self._add_text(self._reference_source(len(name) + 2))

    def handle_comment(self, data: str) -> None:
        self._add_tag(f"<!--{data}-->")

    def handle_decl(self, decl: str) -> None:
        self._add_tag(f"<!{decl}>")

    def handle_pi(self, data: str) -> None:
        self._add_tag(f"<?{data}>")

    def unknown_decl(self, data: str) -> None:
        self._add_tag(f"<![{data}]>")

    # The parse_* hooks below replace whatever the handlers above emitted
    # with the exact source span.

    def parse_comment(self, i: int, *args, **kwargs) -> int:
        return self._keep_source(super().parse_comment, i, *args, **kwargs)

    def parse_bogus_comment(self, i: int, *args, **kwargs) -> int:
        return self._keep_source(super().parse_bogus_comment, i, *args, **kwargs)

    def parse_html_declaration(self, i: int) -> int:
        return self._keep_source(super().parse_html_declaration, i)

    def parse_pi(self, i: int) -> int:
        return self._keep_source(super().parse_pi, i)

    def _keep_source(self, parse, i: int, *args, **kwargs) -> int:
        mark = len(self.tokens)
        j = parse(i, *args, **kwargs)
        if j > i:
            del self.tokens[mark:]
            self._add_tag(self.rawdata[i:j])
        return j

    def _reference_source(self, length: int) -> str:
        """Source text of the entity or character reference starting here."""
        lineno, offset = self.getpos()
        start = self._line_starts[lineno - 1] + offset
        end = start + length
        if self.source.startswith(";", end):
            end += 1
        return self.source[start:end]

    def _add_tag(self, raw: str) -> None:
        self.tokens.append(_Token(raw, is_text=False))

    def _add_text(self, raw: str) -> None:
        linkable = not any(tag in _SKIP_TAGS for tag in self._stack)
        if self._anchor_parts is not None:
            self._anchor_parts.append(raw)
        last = self.tokens[-1] if self.tokens else None
        if last is not None and last.is_text and last.linkable == linkable:
            last.text += raw
        else:
            self.tokens.append(_Token(raw, is_text=True, linkable=linkable))


def _tokenize(html: str) -> _HtmlTokenizer:
    parser = _HtmlTokenizer(html)
    parser.feed(html)
    parser.close()
    return parser


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def _normalise(text: str) -> str:
    return " ".join(text.lower().split())


def _word_pattern(word: str) -> str:
    return "".join(_APOSTROPHE if ch in "'’" else re.escape(ch) for ch in word)


@functools.lru_cache(maxsize=2048)
def name_pattern(name: str) -> re.Pattern[str]:
    """Whole-word, case-insensitive pattern for *name* inside raw HTML text.

    Words may be separated by any run of whitespace or ``&nbsp;``, and an
    apostrophe in the name also matches ’ and its entity forms.  The
    lookbehinds keep the match out of character references like ``&amp;``.
    """
    body = _SPACE.join(_word_pattern(word) for word in name.split())
    return re.compile(rf"(?<!\w)(?<!&)(?<!&#)({body})(?!\w)", re.IGNORECASE)


def _attr(value: str) -> str:
    return html_lib.escape(value, quote=False).replace('"', "&quot;")


class AutoLinker:
    """Insert links to catalog entities into HTML.

    The linker holds no per-document state; each :meth:`link` call starts
    with an empty set of linked names, seeded with the anchors the input
    already contains:

    * the text of an existing anchor counts as linked, and
    * an entity whose target path an existing anchor already points at is
      not linked again.

    Together these make ``link(link(x)) == link(x)``.
    """

    def __init__(
        self,
        entities: Iterable[LinkableEntity],
        *,
        css_class: str | None = DEFAULT_CSS_CLASS,
        title_template: str = DEFAULT_TITLE,
    ) -> None:
        self.catalog = entities if isinstance(entities, EntityCatalog) else EntityCatalog(entities)
        self.css_class = css_class
        self.title_template = title_template

    @classmethod
    def from_settings(cls, settings: Settings, entities: Iterable[LinkableEntity]) -> AutoLinker:
        return cls(
            entities,
            css_class=settings.autolink_class,
            title_template=settings.autolink_title,
        )

    def link(self, html: str) -> str:
        """Return *html* with the first mention of each entity wrapped in a link."""
        return self.link_counted(html)[0]

    def link_counted(self, html: str) -> tuple[str, int]:
        """Like :meth:`link`, also returning the number of links inserted."""
        if not isinstance(html, str):
            raise MalformedInput(f"Expected str to auto-link, got {type(html).__name__}")
        if not html:
            return html, 0

        parser = _tokenize(html)
        tokens = parser.tokens
        already_linked = {_normalise(text) for text in parser.anchor_texts}
        linked_targets = set(parser.anchor_hrefs)

        count = 0
        for entity in self.catalog:
            key = entity.key
            if key in already_linked or entity.target_path in linked_targets:
                continue
            if self._link_first(tokens, entity):
                already_linked.add(key)
                count += 1

        logger.debug("Inserted %d auto-links", count)
        return "".join(token.text for token in tokens), count

    def link_batch(self, texts: list[str]) -> list[str]:
        """Link each text independently."""
        return [self.link(text) for text in texts]

    def anchor(self, entity: LinkableEntity) -> str:
        """Opening ``<a>`` tag for *entity*."""
        attrs = [
            f'href="{_attr(entity.target_path)}"',
            f'title="{_attr(self.title_template.format(name=entity.name))}"',
        ]
        if self.css_class:
            attrs.append(f'class="{_attr(self.css_class)}"')
        return f"<a {' '.join(attrs)}>"

    def _link_first(self, tokens: list[_Token], entity: LinkableEntity) -> bool:
        pattern = name_pattern(entity.name)
        for i, token in enumerate(tokens):
            if not (token.is_text and token.linkable):
                continue
            match = pattern.search(token.text)
            if match is None:
                continue
            start, end = match.span()
            tokens[i : i + 1] = [
                _Token(token.text[:start], is_text=True, linkable=True),
                _Token(self.anchor(entity), is_text=False),
                _Token(match.group(), is_text=True, linkable=False),
                _Token("</a>", is_text=False),
                _Token(token.text[end:], is_text=True, linkable=True),
            ]
            return True
        return False


def apply_auto_links(
    html: str,
    entities: Iterable[LinkableEntity],
    *,
    css_class: str | None = DEFAULT_CSS_CLASS,
    title_template: str = DEFAULT_TITLE,
) -> str:
    """Link the first mention of each entity in *html*.

    *entities* may be an :class:`EntityCatalog` or any iterable; plain
    iterables are sorted longest-name-first and deduplicated first.
    """
    linker = AutoLinker(entities, css_class=css_class, title_template=title_template)
    return linker.link(html)


@functools.lru_cache(maxsize=1)
def _static_catalog() -> EntityCatalog:
    from afriwiki.catalog.builder import build_static_catalog

    return build_static_catalog()


def apply_static_auto_links(html: str) -> str:
    """Auto-link against the static countries, sectors and terms only."""
    return apply_auto_links(html, _static_catalog())
