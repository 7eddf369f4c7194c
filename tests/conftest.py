"""Shared fixtures: a small notes tree laid out like a real course folder."""
from pathlib import Path

import fitz
import pytest


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def notes_root(tmp_path):
    """notes/season-1 with two lectures, notes/season-2 with one."""
    root = tmp_path / "notes"
    write(root / "season-1" / "01-intro.md", "# Intro")
    write(root / "season-1" / "02-next.md", "# Next")
    write(root / "season-2" / "01-start.md", "# Start")
    return root


@pytest.fixture
def red_png():
    """Factory writing a tiny red PNG at the given path."""

    def make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 8, 8), False)
        pix.set_rect(pix.irect, (255, 0, 0))
        pix.save(str(path))
        return path

    return make
