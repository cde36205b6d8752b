"""WebSocket-based live reload for development mode.

Monitors notes, templates and assets for changes, rebuilds the site and
notifies connected clients via WebSocket to trigger page reloads.
"""

import asyncio
import json
import logging
import weakref
from collections.abc import Callable
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from scribe.core.site import NOTES_URL_PREFIX, NOTE_SUFFIX

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher, site rebuilds and connected
    WebSocket clients to provide automatic page refresh on source changes.
    """

    def __init__(
        self,
        source_dir: Path,
        rebuild: Callable[[], object],
        *,
        extra_dirs: list[Path] | None = None,
        watch_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            source_dir: Notes directory to watch
            rebuild: Called (in a worker thread) before clients are notified
            extra_dirs: Further directories to watch (templates, assets)
            watch_patterns: Glob patterns for notes (default: ["*.md"])
        """
        self._source_dir = source_dir
        self._rebuild = rebuild
        self._extra_dirs = extra_dirs or []
        self._watch_patterns = watch_patterns or [f"*{NOTE_SUFFIX}"]
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    def watched_dirs(self) -> list[Path]:
        """Existing directories the watcher observes."""
        return [d for d in [self._source_dir, *self._extra_dirs] if d.is_dir()]

    async def _watch_files(self) -> None:
        """Watch for file changes, rebuild and broadcast reload events."""
        dirs = self.watched_dirs()
        if not dirs:
            logger.warning("Live reload: no directories to watch")
            return

        loop = asyncio.get_running_loop()
        async for changes in awatch(*dirs):
            paths = [Path(p) for change, p in changes if change != Change.deleted]
            relevant = [p for p in paths if self._is_relevant(p)]
            if not relevant:
                continue

            try:
                await loop.run_in_executor(None, self._rebuild)
            except Exception:
                logger.exception("Rebuild failed")
                continue

            await self._broadcast_reload(self._to_page_path(relevant[0]))

    def _is_relevant(self, path: Path) -> bool:
        """Notes must match a watch pattern; any file in the other dirs counts."""
        if self._matches_patterns(path):
            return True
        return any(path.is_relative_to(d) for d in self._extra_dirs)

    def _matches_patterns(self, path: Path) -> bool:
        """Check if a path matches any watch pattern.

        Args:
            path: Path to check

        Returns:
            True if path is inside the notes directory and matches a pattern
        """
        try:
            relative = path.relative_to(self._source_dir)
        except ValueError:
            return False

        return any(relative.match(pattern) for pattern in self._watch_patterns)

    def _to_page_path(self, file_path: Path) -> str:
        """Convert a changed file to the URL path of the page it affects.

        Args:
            file_path: Absolute file path

        Returns:
            Page URL (e.g., "/notes/2024-01-01-intro.html"), or "/" when the
            change is not a single note
        """
        if file_path.suffix == NOTE_SUFFIX and self._matches_patterns(file_path):
            return f"{NOTES_URL_PREFIX}/{file_path.stem}.html"
        return "/"

    async def _broadcast_reload(self, path: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            path: Page URL that changed
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "path": path})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
