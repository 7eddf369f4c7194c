"""Tests for stylesheet loading."""
import pytest

from notes2pdf.errors import FileSystemError
from notes2pdf.styles import ASSIGNMENT_CSS, NOTES_CSS, load_stylesheet


class TestLoadStylesheet:
    def test_default_when_no_path(self):
        assert load_stylesheet(None, NOTES_CSS) is NOTES_CSS

    def test_reads_given_file(self, tmp_path):
        path = tmp_path / "custom.css"
        path.write_text("h1 { color: green; }", encoding="utf-8")
        assert load_stylesheet(path, ASSIGNMENT_CSS) == "h1 { color: green; }"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileSystemError):
            load_stylesheet(tmp_path / "missing.css", NOTES_CSS)
