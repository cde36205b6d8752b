"""Document rendering.

Splits the header, parses the body and runs the event pipeline into HTML.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from scribe.core.document import Document, Header
from scribe.core.highlight import PygmentsHighlighter
from scribe.core.html import render_to_string
from scribe.core.mathml import render_mathml
from scribe.core.parser import parse
from scribe.passes import Highlighter, MathEngine, render_events

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Result of rendering a document."""

    html: str
    header: Header
    warnings: list[str]

    @property
    def title(self) -> str:
        return self.header.title


class DocumentRenderer:
    """Renders Markdown documents to HTML bodies.

    Math spans are rendered to MathML and fenced code blocks highlighted
    with Pygments. A span that fails to render becomes an inline error
    block and is reported in ``RenderResult.warnings``.
    """

    def __init__(
        self,
        *,
        heading_offset: int = 1,
        highlighter: Highlighter | None = None,
        render_math: MathEngine = render_mathml,
    ) -> None:
        """Initialize renderer.

        Args:
            heading_offset: Levels added to every heading, so a document's
                headings nest under the page title
            highlighter: Highlighting engine (default: Pygments)
            render_math: Math engine (default: MathML)
        """
        if heading_offset < 0:
            raise ValueError(f"heading offset must be non-negative, got {heading_offset}")
        self._heading_offset = heading_offset
        self._highlighter = highlighter or PygmentsHighlighter()
        self._render_math = render_math

    @property
    def heading_offset(self) -> int:
        return self._heading_offset

    def render(self, source: str) -> RenderResult:
        """Render a document.

        Args:
            source: Full document source, front matter included

        Returns:
            RenderResult with body HTML, header and warnings

        Raises:
            HeaderError: If the front matter cannot be deserialized
        """
        document = Document.parse(source)
        pipeline = render_events(
            parse(document.body),
            highlighter=self._highlighter,
            heading_offset=self._heading_offset,
            macros=document.header.math.macros,
            render_math=self._render_math,
        )
        html = render_to_string(pipeline)
        return RenderResult(html=html, header=document.header, warnings=pipeline.warnings)

    def render_file(self, path: Path) -> RenderResult:
        """Render a document file.

        Args:
            path: Path to the Markdown source

        Returns:
            RenderResult for the file

        Raises:
            FileNotFoundError: If the source file doesn't exist
            HeaderError: If the front matter cannot be deserialized
        """
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {path}")

        logger.info(f"Rendering {path}")
        result = self.render(path.read_text(encoding="utf-8"))
        if result.warnings:
            logger.info(f"{path}: {len(result.warnings)} span(s) failed to render")
        return result
