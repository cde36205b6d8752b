"""Notes site building.

Output structure:
    dist/
    ├── index.html            # List of all notes, newest first
    ├── highlight.css         # Pygments stylesheet
    ├── notes/
    │   └── <stem>.html       # One page per notes/<stem>.md
    └── ...                   # Files copied from the assets directory
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from scribe.config import NotesConfig
from scribe.core.document import Document
from scribe.core.highlight import PygmentsHighlighter
from scribe.core.renderer import DocumentRenderer
from scribe.core.templates import NoteLink, Templates

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"
NOTES_URL_PREFIX = "/notes"


@dataclass
class BuildReport:
    """Result of a site build."""

    pages: list[Path] = field(default_factory=list)
    warnings: dict[str, list[str]] = field(default_factory=dict)

    @property
    def warning_count(self) -> int:
        return sum(len(w) for w in self.warnings.values())


class NotesSite:
    """Builds the notes directory into a static HTML site."""

    def __init__(
        self,
        config: NotesConfig,
        templates: Templates,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        """Initialize site.

        Args:
            config: Notes directories
            templates: Page templates
            renderer: Document renderer (default: heading offset 1)
        """
        self._config = config
        self._templates = templates
        self._renderer = renderer or DocumentRenderer()

    @property
    def source_dir(self) -> Path:
        return self._config.source_dir

    @property
    def output_dir(self) -> Path:
        return self._config.output_dir

    @property
    def templates(self) -> Templates:
        return self._templates

    def note_files(self) -> list[Path]:
        """Markdown sources in the notes directory, sorted by name."""
        if not self._config.source_dir.is_dir():
            return []
        return sorted(self._config.source_dir.glob(f"*{NOTE_SUFFIX}"))

    def build(self) -> BuildReport:
        """Render every note, the index page and copy static assets.

        Returns:
            BuildReport with written pages and per-note warnings

        Raises:
            HeaderError: If a note's front matter cannot be deserialized
        """
        report = BuildReport()

        if not self._config.source_dir.is_dir():
            logger.info(f"Notes directory does not exist: {self._config.source_dir}")
            return report

        logger.info(f"Building notes from {self._config.source_dir}")
        notes_dir = self._config.output_dir / "notes"
        notes_dir.mkdir(parents=True, exist_ok=True)

        for source in self.note_files():
            output = notes_dir / f"{source.stem}.html"
            warnings = self.render_note_file(source, output)
            report.pages.append(output)
            if warnings:
                report.warnings[source.name] = warnings

        report.pages.append(self.render_index())
        self._write_stylesheet()
        self.copy_static_assets()
        return report

    def render_note_file(self, source: Path, output: Path) -> list[str]:
        """Render one note to a full HTML page.

        Args:
            source: Markdown source file
            output: HTML file to write

        Returns:
            Warnings for spans that failed to render
        """
        result = self._renderer.render_file(source)
        page = self._templates.render_note(result.header, result.html)
        output.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing rendered HTML to {output}")
        output.write_text(page, encoding="utf-8")
        return result.warnings

    def render_index(self) -> Path:
        """Write the index page listing all notes, newest first.

        Returns:
            Path of the written index page
        """
        notes: list[NoteLink] = []
        for source in self.note_files():
            document = Document.parse(source.read_text(encoding="utf-8"))
            link = f"{NOTES_URL_PREFIX}/{source.stem}.html"
            notes.append(NoteLink(header=document.header, link=link))

        notes.sort(key=lambda note: note.header.date or "", reverse=True)

        self._config.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self._config.output_dir / "index.html"
        index_path.write_text(self._templates.render_index(notes), encoding="utf-8")
        return index_path

    def copy_static_assets(self) -> list[Path]:
        """Copy the assets directory into the output directory.

        Returns:
            Relative paths of the copied files
        """
        assets_dir = self._config.assets_dir
        if not assets_dir.is_dir():
            return []

        copied: list[Path] = []
        for path in sorted(assets_dir.rglob("*")):
            if not path.is_file():
                continue
            rel_path = path.relative_to(assets_dir)
            dest_path = self._config.output_dir / rel_path
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, dest_path)
            logger.info(f"Copied asset: {rel_path}")
            copied.append(rel_path)
        return copied

    def clean(self) -> bool:
        """Remove the output directory.

        Returns:
            True if a directory was removed
        """
        if not self._config.output_dir.exists():
            return False
        shutil.rmtree(self._config.output_dir)
        return True

    def new_note(self, name: str, date: str) -> tuple[Path, bool]:
        """Create a note skeleton named ``<date>-<name>.md``.

        Args:
            name: Note name
            date: Date in ISO format

        Returns:
            Tuple of (note path, whether it was created)
        """
        self._config.source_dir.mkdir(parents=True, exist_ok=True)
        note_path = self._config.source_dir / f"{date}-{name}{NOTE_SUFFIX}"
        if note_path.exists():
            logger.info(f"Note already exists at {note_path}")
            return note_path, False

        logger.info(f"Creating note at {note_path}")
        note_path.write_text(self._templates.render_new_note(name, date), encoding="utf-8")
        return note_path, True

    def _write_stylesheet(self) -> None:
        highlighter = PygmentsHighlighter()
        (self._config.output_dir / "highlight.css").write_text(
            highlighter.stylesheet(), encoding="utf-8"
        )
