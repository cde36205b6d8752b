"""Stream stages that rewrite document events."""

from scribe.passes.code import Highlighter, HighlightCode
from scribe.passes.errors import ShowErrors
from scribe.passes.headings import MAX_HEADING_LEVEL, DemoteHeadings
from scribe.passes.math import MathEngine, RenderMath
from scribe.passes.pipeline import Pipeline, render_events

__all__ = [
    "MAX_HEADING_LEVEL",
    "DemoteHeadings",
    "HighlightCode",
    "Highlighter",
    "MathEngine",
    "Pipeline",
    "RenderMath",
    "ShowErrors",
    "render_events",
]
