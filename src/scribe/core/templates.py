"""Page templates.

Templates are looked up in the user's templates directory first and then in
the templates bundled with the package.
"""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from scribe.core.document import Header

NOTE_TEMPLATE = "note.html"
INDEX_TEMPLATE = "index.html"
NEW_NOTE_TEMPLATE = "new-note.md"


@dataclass
class NoteLink:
    """A note as listed on the index page."""

    header: Header
    link: str

    def to_dict(self) -> dict[str, object]:
        return {**self.header.to_dict(), "link": self.link}


class Templates:
    """Renders note pages, the index page and new note skeletons."""

    def __init__(self, templates_dir: Path | None = None, *, live_reload: bool = False) -> None:
        """Initialize templates.

        Args:
            templates_dir: Directory whose templates override the bundled ones
            live_reload: Include the live reload client in rendered pages
        """
        loaders = []
        if templates_dir is not None:
            loaders.append(FileSystemLoader(templates_dir))
        loaders.append(PackageLoader("scribe", "templates"))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        self.live_reload = live_reload

    def render_note(self, header: Header, body: str) -> str:
        """Render a full note page around a rendered body."""
        template = self._env.get_template(NOTE_TEMPLATE)
        return template.render(
            meta=header.to_dict(),
            title=header.title,
            date=header.date,
            body=body,
            live_reload=self.live_reload,
        )

    def render_index(self, notes: list[NoteLink]) -> str:
        """Render the index page listing all notes."""
        template = self._env.get_template(INDEX_TEMPLATE)
        return template.render(
            notes=[note.to_dict() for note in notes],
            live_reload=self.live_reload,
        )

    def render_new_note(self, name: str, date: str) -> str:
        """Render the skeleton for a new note."""
        template = self._env.get_template(NEW_NOTE_TEMPLATE)
        return template.render(name=name, date=date)
