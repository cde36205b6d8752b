"""Heading demotion stage."""

from collections.abc import Iterator
from dataclasses import replace

from scribe.core.events import End, Event, Heading, Start

MAX_HEADING_LEVEL = 0xFFFF


class DemoteHeadings:
    """Demote the headings in the document by a fixed offset.

    Levels saturate at ``MAX_HEADING_LEVEL`` instead of overflowing.
    """

    def __init__(self, inner: Iterator[Event], offset: int) -> None:
        if offset < 0:
            raise ValueError(f"heading offset must be non-negative, got {offset}")
        self._inner = inner
        self._offset = offset

    def __iter__(self) -> "DemoteHeadings":
        return self

    def __next__(self) -> Event:
        event = next(self._inner)
        if isinstance(event, Start) and isinstance(event.container, Heading):
            return Start(self._demote(event.container), event.attributes)
        if isinstance(event, End) and isinstance(event.container, Heading):
            return End(self._demote(event.container))
        return event

    def _demote(self, heading: Heading) -> Heading:
        level = min(heading.level + self._offset, MAX_HEADING_LEVEL)
        return replace(heading, level=level)
