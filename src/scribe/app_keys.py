"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web

from scribe.core.site import NotesSite
from scribe.live import LiveReloadManager

site_key = web.AppKey("site", NotesSite)
output_dir_key = web.AppKey("output_dir", Path)
live_reload_key = web.AppKey("live_reload_manager", LiveReloadManager)
