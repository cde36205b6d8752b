"""Tests for DocumentRenderer."""

from pathlib import Path

import pytest
from scribe.core.renderer import DocumentRenderer
from scribe.errors import HeaderError

from tests.fakes import FakeHighlighter, RecordingMath, failing_math


class TestDocumentRenderer:
    """Tests for DocumentRenderer."""

    def test__render__returns_body_html_and_header(self, highlighter: FakeHighlighter) -> None:
        """Rendering yields the body HTML and the parsed header."""
        renderer = DocumentRenderer(highlighter=highlighter, render_math=RecordingMath())

        result = renderer.render("---\ntitle: Notes\n---\n# Intro\n\nText.\n")

        assert result.title == "Notes"
        assert '<h2 id="intro">Intro</h2>' in result.html
        assert "<p>Text.</p>" in result.html
        assert result.warnings == []

    def test__render__header_macros_reach_math_engine(self, highlighter: FakeHighlighter) -> None:
        """Macros from the header are used for every math span."""
        engine = RecordingMath()
        renderer = DocumentRenderer(highlighter=highlighter, render_math=engine)

        renderer.render("---\nmath:\n  macros:\n    RR: '\\mathbb{R}'\n---\n$\\RR$\n")

        assert engine.calls[0][2] == {"RR": "\\mathbb{R}"}

    def test__render__failed_span_reported(self, highlighter: FakeHighlighter) -> None:
        """Failed spans are rendered as errors and listed as warnings."""
        renderer = DocumentRenderer(highlighter=highlighter, render_math=failing_math)

        result = renderer.render("$x^2$\n")

        assert '<div class="error">' in result.html
        assert len(result.warnings) == 1

    def test__render__heading_offset_applied(self, highlighter: FakeHighlighter) -> None:
        """The configured offset shifts headings."""
        renderer = DocumentRenderer(heading_offset=0, highlighter=highlighter)

        assert "<h1" in renderer.render("# A\n").html
        assert renderer.heading_offset == 0

    def test__render__invalid_header__raises(self, highlighter: FakeHighlighter) -> None:
        """Header errors abort rendering."""
        renderer = DocumentRenderer(highlighter=highlighter)

        with pytest.raises(HeaderError):
            renderer.render("---\ntitle: [oops\n---\nBody\n")

    def test__render__default_engines(self) -> None:
        """Default engines produce MathML and Pygments markup."""
        renderer = DocumentRenderer()

        result = renderer.render("$x$\n\n```python\ndef f(): pass\n```\n")

        assert "<math" in result.html
        assert '<code class="highlight language-python">' in result.html

    def test__render_file__reads_source(self, tmp_path: Path, highlighter: FakeHighlighter) -> None:
        """Files are read as UTF-8 and rendered."""
        source = tmp_path / "note.md"
        source.write_text("Grüße\n", encoding="utf-8")

        result = DocumentRenderer(highlighter=highlighter).render_file(source)

        assert "<p>Grüße</p>" in result.html

    def test__render_file__missing__raises(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Source file not found"):
            DocumentRenderer().render_file(tmp_path / "missing.md")

    def test__negative_offset__raises(self) -> None:
        """Negative heading offsets are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            DocumentRenderer(heading_offset=-1)
