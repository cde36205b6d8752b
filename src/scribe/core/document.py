"""Documents: YAML front matter plus Markdown body.

A document may start with a header block delimited by two lines holding
exactly ``---``::

    ---
    title: Fourier series
    date: 2024-03-01
    math:
      macros:
        '\\RR': '\\mathbb{R}'
    ---
    Body text.
"""

import datetime
from dataclasses import dataclass, field

import yaml

from scribe.errors import HeaderError

FRONTMATTER_DELIMITER = "---"


@dataclass(frozen=True)
class MathHeader:
    """Math settings from the document header."""

    macros: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Header:
    """Document header. Every field is optional."""

    title: str = ""
    date: str | None = None
    content_type: str | None = None
    math: MathHeader = field(default_factory=MathHeader)

    def to_dict(self) -> dict[str, object]:
        """Convert to a plain dict for templates."""
        return {
            "title": self.title,
            "date": self.date,
            "type": self.content_type,
            "math": {"macros": dict(self.math.macros)},
        }


@dataclass(frozen=True)
class Document:
    """A parsed header and the remaining body text."""

    header: Header
    body: str

    @classmethod
    def parse(cls, source: str) -> "Document":
        """Split and deserialize a document's front matter.

        Args:
            source: Full document source

        Returns:
            Document with default header when no front matter is present

        Raises:
            HeaderError: If the front matter is not valid YAML or has the
                wrong shape
        """
        frontmatter, body = split_frontmatter(source)
        if frontmatter is None:
            return cls(header=Header(), body=body)
        return cls(header=parse_header(frontmatter), body=body)


def split_frontmatter(source: str) -> tuple[str | None, str]:
    """Split a leading front matter block from the body.

    Args:
        source: Full document source

    Returns:
        Tuple of (front matter text or None, body text)
    """
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return None, source

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == FRONTMATTER_DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    return None, source


def parse_header(text: str) -> Header:
    """Deserialize front matter YAML into a Header.

    Args:
        text: YAML text between the delimiters

    Returns:
        Header with defaults for absent fields

    Raises:
        HeaderError: If the YAML is invalid or a field has the wrong type
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise HeaderError(str(e)) from e

    if data is None:
        return Header()

    if not isinstance(data, dict):
        raise HeaderError("front matter must be a mapping")

    title = data.get("title", "")
    if title is None:
        title = ""
    if not isinstance(title, str):
        raise HeaderError("title must be a string")

    date = data.get("date")
    if isinstance(date, datetime.date):
        date = date.isoformat()
    if date is not None and not isinstance(date, str):
        raise HeaderError("date must be a string or a date")

    content_type = data.get("type")
    if content_type is not None and not isinstance(content_type, str):
        raise HeaderError("type must be a string")

    return Header(
        title=title,
        date=date,
        content_type=content_type,
        math=_parse_math(data.get("math")),
    )


def _parse_math(data: object) -> MathHeader:
    if data is None:
        return MathHeader()

    if not isinstance(data, dict):
        raise HeaderError("math must be a mapping")

    macros_raw = data.get("macros", {})
    if macros_raw is None:
        return MathHeader()
    if not isinstance(macros_raw, dict):
        raise HeaderError("math.macros must be a mapping")

    macros: dict[str, str] = {}
    for name, body in macros_raw.items():
        if not isinstance(name, str) or not isinstance(body, str):
            raise HeaderError("math.macros entries must map strings to strings")
        macros[name] = body

    return MathHeader(macros=macros)
