"""Math rendering stage.

Replaces every math span with the markup produced by a math engine. The
engine defaults to ``scribe.core.mathml.render_mathml``.
"""

import logging
from collections.abc import Callable, Iterator, Mapping

from scribe.core.events import End, Event, Math, RawBlock, Start, Str
from scribe.core.mathml import render_mathml
from scribe.errors import MalformedMathSpan, MathError, MathRenderingFailed
from scribe.passes.base import SpanStage, UnexpectedEvent

logger = logging.getLogger(__name__)

MathEngine = Callable[[str, bool, Mapping[str, str]], str]


class RenderMath(SpanStage[Event | MathError]):
    """Render math spans to HTML.

    Each ``Math`` span becomes a ``RawBlock("html")`` span holding the
    rendered markup. A span the engine rejects, or one holding anything but
    text, is replaced by a single ``MathError`` item.
    """

    def __init__(
        self,
        inner: Iterator[Event],
        macros: Mapping[str, str] | None = None,
        render: MathEngine = render_mathml,
    ) -> None:
        """Initialize the stage.

        Args:
            inner: Upstream event stream
            macros: Macro definitions passed to every engine call
            render: Engine called as ``render(source, display, macros)``
        """
        super().__init__(inner)
        self._macros = dict(macros or {})
        self._render = render

    def _pull(self) -> Event | MathError:
        event = next(self._inner)
        if not (isinstance(event, Start) and isinstance(event.container, Math)):
            return event

        display = event.container.display
        logger.debug(f"found {'display' if display else 'inline'} math")

        try:
            source = self._read_text(Math)
        except UnexpectedEvent:
            return MalformedMathSpan()

        try:
            rendered = self._render(source, display, self._macros)
        except Exception as e:
            return MathRenderingFailed(str(e))

        return self._emit(
            Start(RawBlock("html"), event.attributes),
            Str(rendered),
            End(RawBlock("html")),
        )
