"""Link entrepreneur names inside Markdown bodies.

Works on a caller-supplied list of ``{slug, name}`` pairs rather than the
full catalog.  Same policy as the HTML auto-linker: longest name first,
first occurrence only, one link per lowercased name.  Existing Markdown
links, images and inline code spans are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from afriwiki.errors import MalformedInput
from afriwiki.models.entity import NameLink

# Inline code, images, links and autolinks -- split out and never rewritten.
_PROTECTED = re.compile(
    r"(`+[^`]*?`+"  # inline code
    r"|!?\[[^\]]*\]\([^)]*\)"  # [text](url) and ![alt](src)
    r"|!?\[[^\]]*\]\[[^\]]*\]"  # [text][ref]
    r"|<https?://[^>]+>)"  # <https://...>
)

_LINK_TEXT = re.compile(r"!?\[([^\]]*)\]")


def _normalise(name: str) -> str:
    return " ".join(name.lower().split())


def _pattern(name: str) -> re.Pattern[str]:
    body = r"\s+".join(re.escape(word) for word in name.split())
    return re.compile(rf"(?<![\w\[])({body})(?![\w\]])", re.IGNORECASE)


def link_names_in_markdown(
    text: str,
    links: Iterable[NameLink | dict],
    prefix: str = "/e",
) -> str:
    """Rewrite the first mention of each name as ``[Name](<prefix>/<slug>)``.

    The visible text keeps the casing found in *text*.
    """
    if not isinstance(text, str):
        raise MalformedInput(f"Expected str to link, got {type(text).__name__}")
    if not text:
        return text

    parsed = [
        link if isinstance(link, NameLink) else NameLink.model_validate(link) for link in links
    ]
    ordered = sorted(
        (link for link in parsed if link.name.strip()),
        key=lambda link: len(link.name),
        reverse=True,
    )
    base = prefix.rstrip("/")

    parts = _PROTECTED.split(text)
    # Names already shown as link text count as linked
    linked = {_normalise(m.group(1)) for m in map(_LINK_TEXT.match, parts[1::2]) if m}

    for link in ordered:
        key = _normalise(link.name)
        if key in linked:
            continue
        pattern = _pattern(link.name)
        # Even indices are plain text, odd indices are protected spans
        for i in range(0, len(parts), 2):
            match = pattern.search(parts[i])
            if match is None:
                continue
            before, after = parts[i][: match.start()], parts[i][match.end() :]
            parts[i : i + 1] = [before, f"[{match.group()}]({base}/{link.slug})", after]
            linked.add(key)
            break

    return "".join(parts)
