"""Markdown parsing into document events.

Uses mistune's AST renderer with the math and strikethrough plugins and
walks the token tree lazily, yielding one event at a time.
"""

import re
from collections.abc import Iterator
from typing import Any

import mistune

from scribe.core.events import (
    BlockQuote,
    CodeBlock,
    Container,
    Delete,
    Emphasis,
    End,
    Event,
    Hardbreak,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Math,
    Paragraph,
    RawBlock,
    RawInline,
    Softbreak,
    Start,
    Str,
    Strong,
    ThematicBreak,
    Verbatim,
)

Token = dict[str, Any]

_markdown = mistune.create_markdown(renderer=None, plugins=["math", "strikethrough"])

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"[\s_-]+")

_SIMPLE_CONTAINERS: dict[str, type] = {
    "paragraph": Paragraph,
    "block_quote": BlockQuote,
    "list_item": ListItem,
    "emphasis": Emphasis,
    "strong": Strong,
    "strikethrough": Delete,
}


def parse(source: str) -> Iterator[Event]:
    """Parse Markdown source into a stream of events.

    Args:
        source: Markdown body text (without front matter)

    Returns:
        Iterator over the document's events
    """
    tokens: list[Token] = _markdown(source)
    return _Walker().walk(tokens)


def slugify(text: str) -> str:
    """Turn heading text into an id fragment."""
    slug = _SLUG_STRIP_RE.sub("", text.lower()).strip()
    return _SLUG_SPACE_RE.sub("-", slug).strip("-")


class _Walker:
    """Walks mistune tokens depth-first, keeping heading ids unique."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def walk(self, tokens: list[Token]) -> Iterator[Event]:
        for token in tokens:
            yield from self._token(token)

    def _token(self, token: Token) -> Iterator[Event]:
        kind = token["type"]
        attrs = token.get("attrs", {})

        if kind in _SIMPLE_CONTAINERS:
            yield from self._span(_SIMPLE_CONTAINERS[kind](), token)
        elif kind == "heading":
            heading_id = self._unique_id(_plain_text(token.get("children", [])))
            yield from self._span(Heading(level=attrs["level"], id=heading_id), token)
        elif kind == "list":
            container = List(ordered=attrs.get("ordered", False), start=attrs.get("start", 1))
            yield from self._span(container, token)
        elif kind == "block_text":
            # Tight list items hold inline content directly.
            yield from self.walk(token.get("children", []))
        elif kind == "link":
            yield from self._span(Link(url=attrs["url"], title=attrs.get("title")), token)
        elif kind == "image":
            yield from self._span(Image(src=attrs["url"], title=attrs.get("title")), token)
        elif kind == "block_code":
            info = (attrs.get("info") or "").split()
            language = info[0] if info else ""
            yield from _leaf(CodeBlock(language), token["raw"])
        elif kind == "codespan":
            yield from _leaf(Verbatim(), token["raw"])
        elif kind == "block_math":
            yield from _leaf(Math(display=True), token["raw"])
        elif kind == "inline_math":
            yield from _leaf(Math(display=False), token["raw"])
        elif kind == "block_html":
            yield from _leaf(RawBlock("html"), token["raw"])
        elif kind == "inline_html":
            yield from _leaf(RawInline("html"), token["raw"])
        elif kind == "text":
            yield Str(token["raw"])
        elif kind == "softbreak":
            yield Softbreak()
        elif kind == "linebreak":
            yield Hardbreak()
        elif kind == "thematic_break":
            yield ThematicBreak()
        elif kind == "blank_line":
            return
        elif "children" in token:
            yield from self.walk(token["children"])
        elif "raw" in token:
            yield Str(token["raw"])

    def _span(self, container: Container, token: Token) -> Iterator[Event]:
        yield Start(container)
        yield from self.walk(token.get("children", []))
        yield End(container)

    def _unique_id(self, text: str) -> str:
        base = slugify(text) or "section"
        count = self._ids.get(base, 0)
        self._ids[base] = count + 1
        return base if count == 0 else f"{base}-{count}"


def _leaf(container: Container, text: str) -> Iterator[Event]:
    yield Start(container)
    if text:
        yield Str(text)
    yield End(container)


def _plain_text(tokens: list[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        if "children" in token:
            parts.append(_plain_text(token["children"]))
        elif "raw" in token:
            parts.append(token["raw"])
    return "".join(parts)
