"""HTML serialization of plain document events."""

from collections.abc import Iterable

from mistune.util import escape, escape_url

from scribe.core.events import (
    BlockQuote,
    CodeBlock,
    Container,
    Delete,
    Div,
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

_MAX_HTML_HEADING = 6

_SIMPLE_TAGS: dict[type, str] = {
    Paragraph: "p",
    BlockQuote: "blockquote",
    ListItem: "li",
    Emphasis: "em",
    Strong: "strong",
    Delete: "del",
    Verbatim: "code",
}

_BLOCK_TAGS = {"p", "blockquote", "li", "ul", "ol", "div", "pre"}


def render_to_string(events: Iterable[Event]) -> str:
    """Serialize a plain event stream to an HTML string.

    Args:
        events: Events without span errors (see ``ShowErrors``)

    Returns:
        HTML markup
    """
    writer = HtmlWriter()
    for event in events:
        writer.write(event)
    return writer.finish()


class HtmlWriter:
    """Incremental HTML writer.

    Raw spans in formats other than html are dropped. Text inside an image
    becomes its alt attribute.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._raw_format: str | None = None
        self._alt: list[str] | None = None

    def write(self, event: Event) -> None:
        if isinstance(event, Start):
            self._start(event.container, event.attributes)
        elif isinstance(event, End):
            self._end(event.container)
        elif isinstance(event, Str):
            self._text(event.text)
        elif isinstance(event, Softbreak):
            self._parts.append("\n")
        elif isinstance(event, Hardbreak):
            self._parts.append("<br>\n")
        elif isinstance(event, ThematicBreak):
            self._parts.append(f"<hr{_attributes(event.attributes)}>\n")

    def finish(self) -> str:
        return "".join(self._parts)

    def _text(self, text: str) -> None:
        if self._alt is not None:
            self._alt.append(text)
        elif self._raw_format == "html":
            self._parts.append(text)
        elif self._raw_format is None:
            self._parts.append(escape(text, quote=False))

    def _start(self, container: Container, attributes: dict[str, str]) -> None:
        attrs = _attributes(attributes)
        tag = _SIMPLE_TAGS.get(type(container))
        if tag is not None:
            self._parts.append(f"<{tag}{attrs}>")
        elif isinstance(container, Heading):
            level = min(container.level, _MAX_HTML_HEADING)
            id_attr = f' id="{escape(container.id)}"' if container.id else ""
            self._parts.append(f"<h{level}{id_attr}{attrs}>")
        elif isinstance(container, List):
            if not container.ordered:
                self._parts.append(f"<ul{attrs}>\n")
            elif container.start != 1:
                self._parts.append(f'<ol start="{container.start}"{attrs}>\n')
            else:
                self._parts.append(f"<ol{attrs}>\n")
        elif isinstance(container, CodeBlock):
            class_attr = (
                f' class="language-{escape(container.language)}"' if container.language else ""
            )
            self._parts.append(f"<pre{attrs}><code{class_attr}>")
        elif isinstance(container, Math):
            kind = "display" if container.display else "inline"
            opener = r"\[" if container.display else r"\("
            self._parts.append(f'<span class="math {kind}"{attrs}>{opener}')
        elif isinstance(container, Div):
            class_attr = f' class="{escape(container.class_name)}"' if container.class_name else ""
            self._parts.append(f"<div{class_attr}{attrs}>")
        elif isinstance(container, RawBlock | RawInline):
            self._raw_format = container.format
        elif isinstance(container, Link):
            title = f' title="{escape(container.title)}"' if container.title else ""
            self._parts.append(f'<a href="{escape_url(container.url)}"{title}{attrs}>')
        elif isinstance(container, Image):
            self._alt = []

    def _end(self, container: Container) -> None:
        tag = _SIMPLE_TAGS.get(type(container))
        if tag is not None:
            self._parts.append(f"</{tag}>")
            if tag in _BLOCK_TAGS:
                self._parts.append("\n")
        elif isinstance(container, Heading):
            self._parts.append(f"</h{min(container.level, _MAX_HTML_HEADING)}>\n")
        elif isinstance(container, List):
            self._parts.append("</ol>\n" if container.ordered else "</ul>\n")
        elif isinstance(container, CodeBlock):
            self._parts.append("</code></pre>\n")
        elif isinstance(container, Math):
            closer = r"\]" if container.display else r"\)"
            self._parts.append(f"{closer}</span>")
        elif isinstance(container, Div):
            self._parts.append("</div>\n")
        elif isinstance(container, RawBlock | RawInline):
            self._raw_format = None
        elif isinstance(container, Link):
            self._parts.append("</a>")
        elif isinstance(container, Image):
            alt = "".join(self._alt or [])
            self._alt = None
            title = f' title="{escape(container.title)}"' if container.title else ""
            self._parts.append(
                f'<img src="{escape_url(container.src)}" alt="{escape(alt)}"{title}>'
            )


def _attributes(attributes: dict[str, str]) -> str:
    return "".join(f' {key}="{escape(value)}"' for key, value in sorted(attributes.items()))
