"""Code highlighting stage.

Code blocks in languages the highlighter does not know are left unmodified.
"""

import logging
from collections.abc import Iterator
from typing import Any, Protocol

from mistune.util import escape

from scribe.core.events import CodeBlock, End, Event, RawBlock, Start, Str
from scribe.errors import CodeError, HighlightingFailed, MalformedCodeSpan
from scribe.passes.base import SpanStage, UnexpectedEvent

logger = logging.getLogger(__name__)


class Highlighter(Protocol):
    """Highlighting engine keyed by language token."""

    def find_language(self, token: str) -> Any | None: ...

    def highlight(self, language: Any, code: str) -> str: ...


class HighlightCode(SpanStage[Event | CodeError]):
    """Render code blocks to highlighted HTML."""

    def __init__(self, inner: Iterator[Event], highlighter: Highlighter) -> None:
        super().__init__(inner)
        self._highlighter = highlighter

    def _pull(self) -> Event | CodeError:
        event = next(self._inner)
        if not (isinstance(event, Start) and isinstance(event.container, CodeBlock)):
            return event

        token = event.container.language
        logger.debug(f"code block with language `{token}`")

        try:
            code = self._read_text(CodeBlock)
        except UnexpectedEvent:
            return MalformedCodeSpan()

        language = self._highlighter.find_language(token)
        if language is None:
            logger.debug(f"language `{token}` not supported by the highlighter")
            return self._emit(
                Start(event.container, event.attributes),
                Str(code),
                End(event.container),
            )

        try:
            highlighted = self._highlighter.highlight(language, code)
        except Exception as e:
            return HighlightingFailed(str(e))

        html = (
            f'<pre><code class="highlight language-{escape(token)}">'
            f"{highlighted}</code></pre>"
        )
        return self._emit(
            Start(RawBlock("html"), event.attributes),
            Str(html),
            End(RawBlock("html")),
        )
