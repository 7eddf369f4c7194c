#!/usr/bin/env python3
"""
cli.py

Build styled PDFs from Markdown notes.

Usage:
    notes2pdf notes [--root notes] [--group season-1 --group season-2] [-o dist/lecture-notes.pdf]
    notes2pdf assignment [--input assign.md] [-o dist/assignment.pdf]

Dependencies:
    pip install click markdown PyMuPDF
"""
import logging
import shutil
import sys
from pathlib import Path

import click

from notes2pdf.collector import build_combined_document, read_document, write_combined_document
from notes2pdf.errors import FileSystemError, Notes2PdfError
from notes2pdf.render import PageOptions, parse_margins, render_pdf
from notes2pdf.styles import (
    ASSIGNMENT_CSS,
    FOOTER_TEMPLATE,
    HEADER_TEMPLATE,
    NOTES_CSS,
    load_stylesheet,
)

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_GROUPS = ("season-1", "season-2")
PAPER_FORMATS = ["Letter", "Legal", "Tabloid", "Ledger", "A0", "A1", "A2", "A3", "A4", "A5", "A6"]


def setup_logging(verbose: bool = False):
    """Configure logging level based on verbosity."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)


def page_options(func):
    """Attach the print settings shared by every command."""
    options = [
        click.option("--css", "css_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     default=None, help="Stylesheet replacing the built-in one."),
        click.option("--format", "paper_format", type=click.Choice(PAPER_FORMATS, case_sensitive=False),
                     default="A4", show_default=True, help="Paper format."),
        click.option("--margin", default="12mm", show_default=True,
                     help="Page margins, CSS shorthand with unit suffix (e.g. '12mm' or '1in 2cm')."),
        click.option("--scale", type=click.FloatRange(min=0.1, max=2.0), default=0.9, show_default=True,
                     help="Render scale factor."),
        click.option("--timeout", type=click.IntRange(min=1), default=60000, show_default=True,
                     help="Give up rendering after this many milliseconds."),
        click.option("--print-background/--no-print-background", default=True,
                     help="Print background colours."),
        click.option("--prefer-css-page-size/--no-prefer-css-page-size", default=True,
                     help="Use the @page size declared in the stylesheet when present."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_page_options(paper_format, margin, scale, timeout, print_background,
                       prefer_css_page_size, header_template="", footer_template="") -> PageOptions:
    return PageOptions(
        format=paper_format,
        margin=parse_margins(margin),
        print_background=print_background,
        display_header_footer=bool(header_template or footer_template),
        header_template=header_template,
        footer_template=footer_template,
        prefer_css_page_size=prefer_css_page_size,
        scale=scale,
        timeout=timeout,
    )


def copy_debug_html(html_path: Path, output: Path):
    """Copy the intermediate HTML next to the PDF for inspection."""
    debug_path = output.parent / html_path.name
    if not html_path.exists():
        logger.warning("PDF generated, but the intermediate HTML was not found")
        return
    if debug_path.resolve() == html_path.resolve():
        return
    try:
        shutil.copyfile(html_path, debug_path)
    except OSError as e:
        raise FileSystemError(f"Cannot copy {html_path} to {debug_path}: {e}", debug_path) from e
    logger.info(f"Intermediate HTML copied to {debug_path} for debugging")


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Enable verbose logging.")
def main(verbose):
    """Build styled PDFs from Markdown notes."""
    setup_logging(verbose)


@main.command()
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), default=Path("notes"),
              show_default=True, help="Directory holding one sub-directory per group.")
@click.option("--group", "groups", multiple=True, default=DEFAULT_GROUPS, show_default=True,
              help="Group sub-directory to include, in order. Repeat for several groups.")
@click.option("--combined", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Where to write the combined Markdown [default: <root>/lectures.md].")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              default=Path("dist/lecture-notes.pdf"), show_default=True, help="Output PDF file.")
@click.option("--rewrite/--no-rewrite", default=True,
              help="Rewrite /assets/ image paths relative to each group.")
@click.option("--debug-html/--no-debug-html", default=True,
              help="Copy the intermediate HTML next to the PDF.")
@click.option("--title", default=None, help="Document title used in metadata and headers.")
@page_options
def notes(root, groups, combined, output, rewrite, debug_html, title, css_path,
          paper_format, margin, scale, timeout, print_background, prefer_css_page_size):
    """Concatenate every group's notes and render them to a single PDF."""
    combined = combined or root / "lectures.md"
    logger.info(f"Collecting notes from {root}: {', '.join(groups)}")

    try:
        text = build_combined_document(root, groups, rewrite=rewrite)
        write_combined_document(text, combined)
        css = load_stylesheet(css_path, NOTES_CSS)
        options = build_page_options(paper_format, margin, scale, timeout,
                                     print_background, prefer_css_page_size)
        html_path = combined.with_suffix(".html")
        render_pdf(text, output, basedir=root, css=css, options=options,
                   title=title, html_path=html_path)
        if debug_html:
            copy_debug_html(html_path, output)
    except Notes2PdfError as e:
        logger.error(f"Error generating PDF: {e}")
        sys.exit(1)

    click.echo(f"PDF generated successfully at {output}")


@main.command()
@click.option("-i", "--input", "input_path", type=click.Path(dir_okay=False, path_type=Path),
              default=Path("assign.md"), show_default=True, help="Markdown file to render.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              default=Path("dist/assignment.pdf"), show_default=True, help="Output PDF file.")
@click.option("--title", default=None, help="Document title used in metadata and headers.")
@click.option("--header-template", default=HEADER_TEMPLATE,
              help="HTML printed in the top margin of every page.")
@click.option("--footer-template", default=FOOTER_TEMPLATE,
              help="HTML printed in the bottom margin; may use pageNumber/totalPages spans.")
@page_options
def assignment(input_path, output, title, header_template, footer_template, css_path,
               paper_format, margin, scale, timeout, print_background, prefer_css_page_size):
    """Render a single Markdown document with page header and footer."""
    try:
        text = read_document(input_path)
        css = load_stylesheet(css_path, ASSIGNMENT_CSS)
        options = build_page_options(paper_format, margin, scale, timeout,
                                     print_background, prefer_css_page_size,
                                     header_template, footer_template)
        render_pdf(text, output, basedir=input_path.resolve().parent, css=css,
                   options=options, title=title)
    except Notes2PdfError as e:
        logger.error(f"Error generating PDF: {e}")
        sys.exit(1)

    click.echo(f"Assignment PDF generated successfully at {output}")


if __name__ == '__main__':
    main()
