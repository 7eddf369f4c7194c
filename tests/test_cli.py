"""End-to-end tests for the notes2pdf command line."""
import fitz
from click.testing import CliRunner

from notes2pdf.cli import main

from tests.conftest import write


def run(*args):
    return CliRunner().invoke(main, list(args))


class TestNotesCommand:
    def test_builds_combined_markdown_and_pdf(self, notes_root, tmp_path, red_png):
        red_png(notes_root / "season-1" / "assets" / "red.png")
        write(notes_root / "season-1" / "03-img.md", "![red](/assets/red.png)")
        output = tmp_path / "dist" / "notes.pdf"

        result = run("notes", "--root", str(notes_root), "-o", str(output))

        assert result.exit_code == 0, result.output
        assert "PDF generated successfully" in result.output
        combined = (notes_root / "lectures.md").read_text(encoding="utf-8")
        assert combined == "# Intro\n\n# Next\n\n![red](season-1/assets/red.png)\n\n# Start"
        assert output.exists()
        assert (tmp_path / "dist" / "lectures.html").exists()
        with fitz.open(output) as doc:
            text = "".join(page.get_text() for page in doc)
        assert "Intro" in text and "Start" in text

    def test_no_rewrite_keeps_paths(self, notes_root, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr("notes2pdf.cli.render_pdf", lambda text, output, **kw: calls.append((text, kw)))
        write(notes_root / "season-2" / "02-img.md", "![x](/assets/missing.png)")
        combined = tmp_path / "combined.md"

        result = run("notes", "--root", str(notes_root), "--combined", str(combined),
                     "--no-rewrite", "--no-debug-html", "-o", str(tmp_path / "dist" / "out.pdf"))

        assert result.exit_code == 0, result.output
        assert combined.read_text(encoding="utf-8").endswith("![x](/assets/missing.png)")
        text, kwargs = calls[0]
        assert text.endswith("![x](/assets/missing.png)")
        assert kwargs["basedir"] == notes_root
        assert kwargs["html_path"] == tmp_path / "combined.html"

    def test_custom_group_order(self, notes_root, tmp_path):
        combined = tmp_path / "combined.md"
        result = run("notes", "--root", str(notes_root), "--group", "season-2", "--group", "season-1",
                     "--combined", str(combined), "-o", str(tmp_path / "out.pdf"))
        assert result.exit_code == 0, result.output
        assert combined.read_text(encoding="utf-8") == "# Start\n\n# Intro\n\n# Next"

    def test_missing_group_fails_without_pdf(self, notes_root, tmp_path):
        output = tmp_path / "dist" / "notes.pdf"
        result = run("notes", "--root", str(notes_root), "--group", "season-1",
                     "--group", "season-9", "-o", str(output))
        assert result.exit_code == 1
        assert not output.exists()
        assert not (notes_root / "lectures.md").exists()

    def test_bad_margin_fails(self, notes_root, tmp_path):
        output = tmp_path / "out.pdf"
        result = run("notes", "--root", str(notes_root), "--margin", "wide", "-o", str(output))
        assert result.exit_code == 1
        assert not output.exists()


class TestAssignmentCommand:
    def test_renders_with_header_and_footer(self, tmp_path):
        source = write(tmp_path / "assign.md", "# Assignment 2\n\nSome **bold** text.")
        output = tmp_path / "dist" / "assignment.pdf"

        result = run("assignment", "-i", str(source), "-o", str(output), "--title", "Workforce Design")

        assert result.exit_code == 0, result.output
        with fitz.open(output) as doc:
            text = doc[0].get_text()
        assert "Assignment 2" in text
        assert "Workforce Design" in text
        assert "Page 1 of 1" in text

    def test_missing_input_fails(self, tmp_path):
        output = tmp_path / "out.pdf"
        result = run("assignment", "-i", str(tmp_path / "nope.md"), "-o", str(output))
        assert result.exit_code == 1
        assert not output.exists()

    def test_css_override_page_size(self, tmp_path):
        source = write(tmp_path / "assign.md", "# Sized")
        css = write(tmp_path / "print.css", "@page { size: letter; }\nbody { color: #333; }")
        output = tmp_path / "out.pdf"

        result = run("assignment", "-i", str(source), "-o", str(output), "--css", str(css))

        assert result.exit_code == 0, result.output
        with fitz.open(output) as doc:
            assert doc[0].rect == fitz.paper_rect("letter")
