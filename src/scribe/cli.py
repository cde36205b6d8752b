"""CLI interface for Scribe.

Renders single documents and builds, watches and serves the notes site.
"""

import logging
import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import NoReturn, TextIO

import click

from scribe.config import Config
from scribe.core.renderer import DocumentRenderer
from scribe.core.site import BuildReport, NotesSite
from scribe.core.templates import Templates
from scribe.errors import ScribeError


@dataclass
class CliContext:
    """Options shared by all commands."""

    config_path: Path | None
    verbose: bool


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover scribe.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every rendered file and span)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Scribe - notes in Markdown with math and highlighted code."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliContext(config_path=config_path, verbose=verbose)


@click.group()
def note() -> None:
    """Note management commands."""


cli.add_command(note)


@cli.command()
@click.argument(
    "input_file",
    metavar="INPUT",
    type=click.File("r", encoding="utf-8"),
    default="-",
)
@click.option(
    "--to",
    "output_format",
    type=click.Choice(["html", "latex"], case_sensitive=False),
    required=True,
    help="The output format",
)
@click.option(
    "--heading-offset",
    type=click.IntRange(min=0),
    default=None,
    help="Levels added to every heading (overrides config, default: 1)",
)
@click.pass_obj
def render(
    obj: CliContext,
    input_file: TextIO,
    output_format: str,
    heading_offset: int | None,
) -> None:
    """Render a document (file path or - for stdin) to standard output."""
    if output_format.lower() == "latex":
        _fail("LaTeX output is not supported yet")

    config = _load_config(obj, heading_offset=heading_offset)
    renderer = DocumentRenderer(heading_offset=config.render.heading_offset)

    try:
        result = renderer.render(input_file.read())
    except ScribeError as e:
        _fail(str(e))

    click.echo(result.html, nl=False)
    if obj.verbose:
        for warning in result.warnings:
            click.echo(click.style(f"Warning: {warning}", fg="yellow"), err=True)


@cli.command()
@click.pass_obj
def build(obj: CliContext) -> None:
    """Build the notes."""
    config = _load_config(obj)
    site = _create_site(config)

    click.echo(f"Building notes from {config.notes.source_dir}")
    report = _build_or_fail(site)
    _print_report(report, config.notes.output_dir)


@cli.command()
@click.pass_obj
def watch(obj: CliContext) -> None:
    """Watch for changes and rebuild."""
    from watchfiles import watch as watch_changes

    config = _load_config(obj)
    site = _create_site(config)

    _print_report(_build_or_fail(site), config.notes.output_dir)

    watched = [
        d
        for d in (config.notes.source_dir, config.notes.assets_dir, config.notes.templates_dir)
        if d is not None and d.is_dir()
    ]
    if not watched:
        _fail(f"Nothing to watch: {config.notes.source_dir} does not exist")

    click.echo("Watching for changes (press Ctrl+C to stop)...")
    for _changes in watch_changes(*watched):
        click.echo("Change detected, rebuilding...")
        try:
            _print_report(site.build(), config.notes.output_dir)
        except ScribeError as e:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@click.pass_obj
def serve(
    obj: CliContext,
    host: str | None,
    port: int | None,
    live_reload: bool | None,
) -> None:
    """Watch and serve notes via http server."""
    from scribe.server import run_server

    config = _load_config(obj, host=host, port=port, live_reload_enabled=live_reload)
    site = _create_site(config, live_reload=config.live_reload.enabled)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Notes directory: {config.notes.source_dir}")
    click.echo(f"Output directory: {config.notes.output_dir}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    try:
        run_server(config, site)
    except ScribeError as e:
        _fail(str(e))


@cli.command()
@click.pass_obj
def clean(obj: CliContext) -> None:
    """Clean build artifacts."""
    config = _load_config(obj)
    site = _create_site(config)

    if site.clean():
        click.echo(f"Removed {config.notes.output_dir}")
    else:
        click.echo("Nothing to clean")


@note.command()
@click.argument("name")
@click.option(
    "--no-editor",
    "-n",
    is_flag=True,
    help="Do not open the note in $EDITOR",
)
@click.pass_obj
def new(obj: CliContext, name: str, no_editor: bool) -> None:
    """Create a new note."""
    config = _load_config(obj)
    site = _create_site(config)

    note_path, created = site.new_note(name, date.today().isoformat())
    if created:
        click.echo(click.style(f"Created note: {note_path}", fg="green"))
    else:
        click.echo(f"Note already exists: {note_path}")

    if not no_editor:
        _open_editor(note_path)


def _load_config(obj: CliContext, **overrides: object) -> Config:
    """Load config and apply CLI overrides or exit with error.

    Args:
        obj: Shared CLI options
        **overrides: Keyword arguments for Config.with_overrides

    Returns:
        Effective configuration
    """
    try:
        config = Config.load(obj.config_path)
    except (OSError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(**overrides)  # type: ignore[arg-type]


def _create_site(config: Config, *, live_reload: bool = False) -> NotesSite:
    templates = Templates(config.notes.templates_dir, live_reload=live_reload)
    renderer = DocumentRenderer(heading_offset=config.render.heading_offset)
    return NotesSite(config.notes, templates, renderer)


def _build_or_fail(site: NotesSite) -> BuildReport:
    try:
        return site.build()
    except (ScribeError, OSError) as e:
        _fail(str(e))


def _print_report(report: BuildReport, output_dir: Path) -> None:
    """Print build summary and per-note warnings.

    Args:
        report: Result of the build
        output_dir: Output directory the pages were written to
    """
    click.echo(click.style(f"Built {len(report.pages)} page(s) into {output_dir}", fg="green"))
    if not report.warnings:
        return

    click.echo(
        click.style(f"\nWarning: {report.warning_count} span(s) failed to render:", fg="yellow"),
    )
    for note_name, warnings in report.warnings.items():
        for warning in warnings:
            click.echo(f"  - {note_name}: {warning}")


def _open_editor(path: Path) -> None:
    """Open a file in $EDITOR, if set.

    Args:
        path: File to open
    """
    editor = os.environ.get("EDITOR")
    if not editor:
        click.echo("EDITOR environment variable not set")
        return

    click.echo(f"Opening note in editor: {editor}")
    status = subprocess.run([*shlex.split(editor), str(path)], check=False)
    if status.returncode != 0:
        _fail(f"editor exited with non-zero status: {status.returncode}")


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
