"""aiohttp server for Scribe.

Serves the built notes site and, in development, rebuilds it on change and
reloads connected browsers.
"""

from pathlib import Path

from aiohttp import web

from scribe.app_keys import live_reload_key, output_dir_key, site_key
from scribe.config import Config
from scribe.core.site import NotesSite


async def serve_file(request: web.Request) -> web.FileResponse:
    """Serve a file from the output directory.

    ``/`` and directories map to their ``index.html``; paths without a
    suffix fall back to ``<path>.html``.
    """
    root: Path = request.app[output_dir_key].resolve()
    target = _resolve_target(root, request.match_info["path"])
    if target is None:
        raise web.HTTPNotFound()
    return web.FileResponse(target)


def _resolve_target(root: Path, path: str) -> Path | None:
    """Map a URL path to an existing file below root.

    Args:
        root: Resolved output directory
        path: URL path without the leading slash

    Returns:
        File to serve, or None if nothing matches or the path leaves root
    """
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root):
        return None

    if candidate.is_dir():
        candidate = candidate / "index.html"
    elif not candidate.exists() and not candidate.suffix:
        candidate = candidate.with_suffix(".html")

    return candidate if candidate.is_file() else None


def create_app(config: Config, site: NotesSite) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        site: Notes site whose output directory is served

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[site_key] = site
    app[output_dir_key] = site.output_dir

    # Live reload WebSocket endpoint (registered before the catch-all route)
    if config.live_reload.enabled:
        from scribe.live import LiveReloadManager
        from scribe.live.reload import create_live_reload_routes

        extra_dirs = [config.notes.assets_dir]
        if config.notes.templates_dir is not None:
            extra_dirs.append(config.notes.templates_dir)

        manager = LiveReloadManager(
            config.notes.source_dir,
            site.build,
            extra_dirs=extra_dirs,
            watch_patterns=config.live_reload.watch_patterns,
        )
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    app.router.add_get("/{path:.*}", serve_file)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()


def run_server(config: Config, site: NotesSite) -> None:
    """Run the server.

    Args:
        config: Application configuration
        site: Notes site to serve (built before serving)
    """
    site.build()
    app = create_app(config, site)
    web.run_app(app, host=config.server.host, port=config.server.port)
