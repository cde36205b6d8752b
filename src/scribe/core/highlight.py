"""Syntax highlighting with Pygments."""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


class PygmentsHighlighter:
    """Highlights code blocks to HTML spans with Pygments CSS classes.

    Output carries no wrapping element. Code blocks are wrapped in
    ``<code class="highlight">`` by the highlighting stage, which is the
    scope of ``stylesheet()``.
    """

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(nowrap=True)

    def find_language(self, token: str) -> Lexer | None:
        """Resolve a language token to a lexer.

        Args:
            token: Language token from the code block (e.g. "python", "rs")

        Returns:
            Lexer for the language, or None if the token is empty or unknown
        """
        if not token:
            return None
        try:
            return get_lexer_by_name(token, stripnl=False, ensurenl=False)
        except ClassNotFound:
            return None

    def highlight(self, language: Lexer, code: str) -> str:
        """Highlight code with a lexer from ``find_language``."""
        return highlight(code, language, self._formatter)

    def stylesheet(self, style: str = "default") -> str:
        """CSS rules for the highlighted markup."""
        return HtmlFormatter(style=style).get_style_defs(".highlight")
