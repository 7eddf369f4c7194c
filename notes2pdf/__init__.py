"""Concatenate Markdown notes and render them into a styled PDF."""
from notes2pdf.collector import (
    Document,
    build_combined_document,
    collect_documents,
    combine_documents,
)
from notes2pdf.errors import FileSystemError, Notes2PdfError, RenderError
from notes2pdf.render import PageOptions, render_pdf
from notes2pdf.rewriter import rewrite_asset_paths

__version__ = "0.1.0"

__all__ = [
    "Document",
    "FileSystemError",
    "Notes2PdfError",
    "PageOptions",
    "RenderError",
    "build_combined_document",
    "collect_documents",
    "combine_documents",
    "render_pdf",
    "rewrite_asset_paths",
]
