"""Event model shared by the parser, the stages and the HTML serializer.

A document is a flat stream of events. ``Start`` and ``End`` bracket a span
and carry its container, ``Str`` carries literal text, and the remaining
leaf events stand on their own.
"""

from dataclasses import dataclass, field

Attributes = dict[str, str]


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Heading:
    level: int
    has_section: bool = False
    id: str = ""


@dataclass(frozen=True)
class BlockQuote:
    pass


@dataclass(frozen=True)
class List:
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True)
class ListItem:
    pass


@dataclass(frozen=True)
class CodeBlock:
    language: str = ""


@dataclass(frozen=True)
class Math:
    display: bool = False


@dataclass(frozen=True)
class Div:
    class_name: str = ""


@dataclass(frozen=True)
class RawBlock:
    format: str


@dataclass(frozen=True)
class RawInline:
    format: str


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Verbatim:
    pass


@dataclass(frozen=True)
class Link:
    url: str
    title: str | None = None


@dataclass(frozen=True)
class Image:
    src: str
    title: str | None = None


Container = (
    Paragraph
    | Heading
    | BlockQuote
    | List
    | ListItem
    | CodeBlock
    | Math
    | Div
    | RawBlock
    | RawInline
    | Emphasis
    | Strong
    | Delete
    | Verbatim
    | Link
    | Image
)


@dataclass(frozen=True)
class Start:
    """Opens a span."""

    container: Container
    attributes: Attributes = field(default_factory=dict)


@dataclass(frozen=True)
class End:
    """Closes the span opened by the most recent matching ``Start``."""

    container: Container


@dataclass(frozen=True)
class Str:
    """Literal text inside a span."""

    text: str


@dataclass(frozen=True)
class Softbreak:
    pass


@dataclass(frozen=True)
class Hardbreak:
    pass


@dataclass(frozen=True)
class ThematicBreak:
    attributes: Attributes = field(default_factory=dict)


Event = Start | End | Str | Softbreak | Hardbreak | ThematicBreak
