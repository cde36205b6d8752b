"""Shared mechanics for event stream stages.

Every stage is a single-pass iterator that pulls from one upstream
iterator. Stages that replace one pulled event with several keep a small
LIFO buffer: the first replacement event is returned right away and the
rest are pushed in reverse so later pulls drain them in order before the
stage reads upstream again.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from scribe.core.events import End, Event, Start, Str

T = TypeVar("T")


class UnexpectedEvent(Exception):
    """Raised by ``SpanStage._read_text`` when a span holds more than text."""


class EventStage(Generic[T]):
    """Base class for pull-based stages.

    ``T`` is the type of the items the stage yields. Subclasses implement
    ``_pull`` to produce the next item once the lookahead buffer is empty.
    """

    def __init__(self, inner: Iterator) -> None:
        self._inner = inner
        self._buffer: list[Event] = []

    def __iter__(self) -> "EventStage[T]":
        return self

    def __next__(self) -> T:
        if self._buffer:
            return self._buffer.pop()
        return self._pull()

    def _pull(self) -> T:
        raise NotImplementedError

    def _emit(self, first: Event, *rest: Event) -> Event:
        """Return ``first`` and queue ``rest`` for the following pulls."""
        self._buffer.extend(reversed(rest))
        return first


class SpanStage(EventStage[T]):
    """Stage that consumes whole spans of one container type."""

    def _read_text(self, container_type: type) -> str:
        """Collect the text of the span whose ``Start`` was just pulled.

        Args:
            container_type: Container type of the open span

        Returns:
            Concatenated ``Str`` contents up to the matching ``End``

        Raises:
            UnexpectedEvent: If the span holds anything but text, or the
                stream ends inside it. The rest of the span is consumed
                before raising so the output stays balanced.
        """
        parts: list[str] = []
        while True:
            event = next(self._inner, None)
            if event is None:
                raise UnexpectedEvent("stream ended inside span")
            if isinstance(event, Str):
                parts.append(event.text)
            elif isinstance(event, End) and isinstance(event.container, container_type):
                return "".join(parts)
            else:
                self._skip_span(event)
                raise UnexpectedEvent(repr(event))

    def _skip_span(self, event: Event) -> None:
        """Discard events until the span enclosing ``event`` is closed."""
        depth = 1
        while True:
            if isinstance(event, Start):
                depth += 1
            elif isinstance(event, End):
                depth -= 1
            if depth == 0:
                return
            next_event = next(self._inner, None)
            if next_event is None:
                return
            event = next_event
