"""Error types for Scribe.

Span errors are recoverable: fallible stages emit them as values in the
event stream and ``ShowErrors`` turns them into visible error blocks.
``HeaderError`` is raised before rendering starts and aborts the document.
"""


class ScribeError(Exception):
    """Base class for all Scribe errors."""


class SpanError(ScribeError):
    """A single span of the document could not be rendered."""


class MathError(SpanError):
    """Error produced by the math rendering stage."""


class MathRenderingFailed(MathError):
    """The math engine rejected the span's source."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to render math: {message}")
        self.message = message


class MalformedMathSpan(MathError):
    """Unexpected event inside a math span."""

    def __init__(self) -> None:
        super().__init__("unexpected event in math block")


class CodeError(SpanError):
    """Error produced by the code highlighting stage."""


class HighlightingFailed(CodeError):
    """The highlighter rejected the code block."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to highlight code block: {message}")
        self.message = message


class MalformedCodeSpan(CodeError):
    """Unexpected event inside a code span."""

    def __init__(self) -> None:
        super().__init__("unexpected event in code block")


class HeaderError(ScribeError):
    """The document header could not be deserialized."""

    def __init__(self, message: str) -> None:
        super().__init__(f"could not deserialize frontmatter: {message}")
        self.message = message
