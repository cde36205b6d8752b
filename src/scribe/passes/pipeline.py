"""Pipeline composition.

Stages chain by wrapping one another. The rules are:

* ``DemoteHeadings`` and ``ShowErrors`` yield plain events. ``RenderMath``
  and ``HighlightCode`` may also yield span errors.
* Span-consuming stages take plain events, so every fallible stage is
  followed by ``ShowErrors`` before the next span-consuming stage and before
  serialization.
* Math and code stages work on disjoint containers and may be swapped, as
  long as each keeps its own ``ShowErrors``.

The canonical order is::

    demote headings -> render math -> show errors
                    -> highlight code -> show errors -> serialize
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from scribe.core.events import Event
from scribe.core.mathml import render_mathml
from scribe.passes.code import HighlightCode, Highlighter
from scribe.passes.errors import ShowErrors
from scribe.passes.headings import DemoteHeadings
from scribe.passes.math import MathEngine, RenderMath


@dataclass
class Pipeline:
    """The last stage of a composed pipeline plus the error stages inside it."""

    events: Iterator[Event]
    error_stages: list[ShowErrors]

    def __iter__(self) -> Iterator[Event]:
        return self.events

    @property
    def warnings(self) -> list[str]:
        """Messages of every error shown so far, grouped by stage."""
        return [warning for stage in self.error_stages for warning in stage.warnings]


def render_events(
    events: Iterator[Event],
    *,
    highlighter: Highlighter,
    heading_offset: int = 1,
    macros: Mapping[str, str] | None = None,
    render_math: MathEngine = render_mathml,
) -> Pipeline:
    """Wrap a raw event stream in the canonical stage order.

    Args:
        events: Raw events from the parser
        highlighter: Highlighting engine for code blocks
        heading_offset: Levels added to every heading
        macros: Math macro definitions from the document header
        render_math: Math engine

    Returns:
        Pipeline yielding plain events ready for serialization
    """
    demoted = DemoteHeadings(events, heading_offset)
    math_errors = ShowErrors(RenderMath(demoted, macros, render_math))
    code_errors = ShowErrors(HighlightCode(math_errors, highlighter))
    return Pipeline(events=code_errors, error_stages=[math_errors, code_errors])
