"""Display errors in the document.

Errors are translated into a div with the ``error`` class. The message is
the error's ``str()``.
"""

import logging
from collections.abc import Iterator

from scribe.core.events import Div, End, Event, Start, Str
from scribe.errors import SpanError
from scribe.passes.base import EventStage

logger = logging.getLogger(__name__)


class ShowErrors(EventStage[Event]):
    """Turn a stream of events and span errors into plain events.

    Messages of the errors shown are kept in ``warnings`` in document order.
    """

    def __init__(self, inner: Iterator[Event | SpanError]) -> None:
        super().__init__(inner)
        self.warnings: list[str] = []

    def _pull(self) -> Event:
        item = next(self._inner)
        if not isinstance(item, SpanError):
            return item

        message = str(item)
        logger.warning(message)
        self.warnings.append(message)

        return self._emit(
            Start(Div("error")),
            Str(message),
            End(Div("error")),
        )
