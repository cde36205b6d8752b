"""Tests for CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from scribe.cli import cli


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project directory with a config file, used as working directory."""
    (tmp_path / "scribe.toml").write_text("")
    (tmp_path / "notes").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestRenderCommand:
    """Tests for the render command."""

    def test__stdin__renders_html(self, project: Path) -> None:
        """Render standard input to HTML on standard output."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "--to", "html"], input="# Hello\n\nWorld.\n")

        assert result.exit_code == 0
        assert '<h2 id="hello">Hello</h2>' in result.output
        assert "<p>World.</p>" in result.output

    def test__file__renders_html(self, project: Path) -> None:
        """Render a file given as argument."""
        source = project / "doc.md"
        source.write_text("```foobar123\na+b\n```\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(source), "--to", "html"])

        assert result.exit_code == 0
        assert '<pre><code class="language-foobar123">a+b' in result.output

    def test__heading_offset__overrides_config(self, project: Path) -> None:
        """The offset option wins over the configured default."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", "--to", "html", "--heading-offset", "0"], input="# T\n"
        )

        assert result.exit_code == 0
        assert "<h1" in result.output

    def test__math__rendered_to_mathml(self, project: Path) -> None:
        """Math spans are rendered by the default engine."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "--to", "html"], input="$x^2$\n")

        assert result.exit_code == 0
        assert "<msup>" in result.output

    def test__latex__not_supported(self, project: Path) -> None:
        """LaTeX output fails with a clear error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "--to", "latex"], input="x\n")

        assert result.exit_code == 1
        assert "LaTeX output is not supported yet" in result.output

    def test__missing_format__fails(self, project: Path) -> None:
        """The output format is required."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render"], input="x\n")

        assert result.exit_code != 0

    def test__invalid_header__fails(self, project: Path) -> None:
        """Header errors are reported and exit with status 1."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "--to", "html"], input="---\ntitle: [x\n---\n")

        assert result.exit_code == 1
        assert "could not deserialize frontmatter" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        """Configuration errors are reported."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text("[server\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(config_file), "render", "--to", "html"], input="x\n")

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


class TestBuildCommand:
    """Tests for the build command."""

    def test__builds_notes(self, project: Path) -> None:
        """Build writes pages and reports them."""
        (project / "notes" / "one.md").write_text("---\ntitle: One\n---\nText\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build"])

        assert result.exit_code == 0
        assert "Built 2 page(s)" in result.output
        assert (project / "dist" / "notes" / "one.html").exists()
        assert (project / "dist" / "index.html").exists()

    def test__reports_failed_spans(self, project: Path) -> None:
        """Spans that failed to render are listed per note."""
        (project / "notes" / "bad.md").write_text(
            "---\nmath:\n  macros:\n    loop: '\\loop'\n---\n$\\loop$\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["build"])

        assert result.exit_code == 0
        assert "bad.md: failed to render math" in result.output

    def test__invalid_header__fails(self, project: Path) -> None:
        """A note with a broken header fails the build."""
        (project / "notes" / "bad.md").write_text("---\n: [\n---\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build"])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestCleanCommand:
    """Tests for the clean command."""

    def test__removes_output(self, project: Path) -> None:
        """Clean removes the output directory."""
        (project / "dist").mkdir()

        runner = CliRunner()
        result = runner.invoke(cli, ["clean"])

        assert result.exit_code == 0
        assert "Removed" in result.output
        assert not (project / "dist").exists()

    def test__nothing_to_clean(self, project: Path) -> None:
        """Clean without output says so."""
        runner = CliRunner()
        result = runner.invoke(cli, ["clean"])

        assert result.exit_code == 0
        assert "Nothing to clean" in result.output


class TestNoteNewCommand:
    """Tests for the note new command."""

    def test__no_editor__creates_note(self, project: Path) -> None:
        """Create a dated note without opening an editor."""
        runner = CliRunner()
        result = runner.invoke(cli, ["note", "new", "fourier", "-n"])

        assert result.exit_code == 0
        assert "Created note" in result.output
        created = list((project / "notes").glob("*-fourier.md"))
        assert len(created) == 1
        assert 'title: "fourier"' in created[0].read_text()

    def test__existing_note__reported(self, project: Path) -> None:
        """Creating the same note twice keeps the first one."""
        runner = CliRunner()
        runner.invoke(cli, ["note", "new", "fourier", "-n"])
        result = runner.invoke(cli, ["note", "new", "fourier", "-n"])

        assert result.exit_code == 0
        assert "Note already exists" in result.output

    def test__editor__opened_with_note(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """$EDITOR is run with the note path."""
        monkeypatch.setenv("EDITOR", "true --flag")
        calls: list[list[str]] = []

        def fake_run(args: list[str], check: bool) -> object:
            calls.append(args)
            return type("Completed", (), {"returncode": 0})()

        monkeypatch.setattr("scribe.cli.subprocess.run", fake_run)

        runner = CliRunner()
        result = runner.invoke(cli, ["note", "new", "fourier"])

        assert result.exit_code == 0
        assert calls[0][:2] == ["true", "--flag"]
        assert calls[0][2].endswith("-fourier.md")

    def test__editor_failure__fails(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A failing editor is reported."""
        monkeypatch.setenv("EDITOR", "false")
        monkeypatch.setattr(
            "scribe.cli.subprocess.run",
            lambda args, check: type("Completed", (), {"returncode": 3})(),
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["note", "new", "fourier"])

        assert result.exit_code == 1
        assert "non-zero status: 3" in result.output

    def test__no_editor_variable__skips_editor(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without $EDITOR the note is only created."""
        monkeypatch.delenv("EDITOR", raising=False)

        runner = CliRunner()
        result = runner.invoke(cli, ["note", "new", "fourier"])

        assert result.exit_code == 0
        assert "EDITOR environment variable not set" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    def test__passes_overrides_to_server(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """CLI options override the configured server settings."""
        captured = {}

        def fake_run_server(config: object, site: object) -> None:
            captured["config"] = config

        monkeypatch.setattr("scribe.server.run_server", fake_run_server)

        runner = CliRunner()
        result = runner.invoke(cli, ["serve", "--port", "9001", "--no-live-reload"])

        assert result.exit_code == 0
        assert "Starting server on 127.0.0.1:9001" in result.output
        assert "Live reload: disabled" in result.output
        assert captured["config"].server.port == 9001  # type: ignore[attr-defined]
        assert captured["config"].live_reload.enabled is False  # type: ignore[attr-defined]
