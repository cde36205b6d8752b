"""Live reload for the development server."""

from scribe.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
