"""Turn Markdown into a paginated, styled PDF.

Markdown is converted to HTML with Python-Markdown, then laid out with the
PyMuPDF ``Story`` API. Page options follow the usual print settings of a
browser: paper format, per-side margins, background printing, header and
footer templates with ``pageNumber``/``totalPages`` placeholders, a scale
factor and a timeout.
"""
import html
import io
import logging
import re
import time
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import fitz  # PyMuPDF
import markdown

from notes2pdf.errors import FileSystemError, RenderError

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc"]

# points per unit
UNITS = {
    "pt": 1.0,
    "px": 0.75,
    "in": 72.0,
    "cm": 72.0 / 2.54,
    "mm": 72.0 / 25.4,
}

SIDES = ("top", "right", "bottom", "left")

LENGTH_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(pt|px|in|cm|mm)?\s*$", re.IGNORECASE)
PAGE_SIZE_PATTERN = re.compile(r"@page\s*\{[^}]*?(?<![\w-])size\s*:\s*([^;}]+)", re.IGNORECASE)
BACKGROUND_PATTERN = re.compile(r"background(?:-color)?\s*:[^;}]*;?", re.IGNORECASE)

# sizes in points for formats PyMuPDF does not name
EXTRA_PAPER_SIZES = {
    "tabloid": (792, 1224),
}
PLACEHOLDER_PATTERN = re.compile(
    r"""(<span\s+class=["'](pageNumber|totalPages|title|date)["'][^>]*>)\s*(</span>)"""
)


def _default_margin() -> Dict[str, str]:
    return {side: "12mm" for side in SIDES}


@dataclass
class PageOptions:
    """Print settings handed to the renderer."""

    format: str = "A4"
    margin: Dict[str, str] = field(default_factory=_default_margin)
    print_background: bool = True
    display_header_footer: bool = False
    header_template: str = ""
    footer_template: str = ""
    prefer_css_page_size: bool = True
    scale: float = 1.0
    timeout: int = 60000  # milliseconds


def parse_length(value: Union[str, float, int]) -> float:
    """Convert a CSS length such as ``12mm`` to points. Bare numbers are pixels."""
    if isinstance(value, (int, float)):
        return float(value) * UNITS["px"]
    match = LENGTH_PATTERN.match(value)
    if not match:
        raise RenderError(f"Invalid length: {value!r}")
    number, unit = match.groups()
    return float(number) * UNITS[(unit or "px").lower()]


def parse_margins(value: str) -> Dict[str, str]:
    """Expand a CSS margin shorthand (one to four lengths) into per-side values."""
    parts = value.split()
    if not 1 <= len(parts) <= 4:
        raise RenderError(f"Invalid margin: {value!r}")
    for part in parts:
        parse_length(part)
    if len(parts) == 1:
        parts = parts * 4
    elif len(parts) == 2:
        parts = [parts[0], parts[1], parts[0], parts[1]]
    elif len(parts) == 3:
        parts = [parts[0], parts[1], parts[2], parts[1]]
    return dict(zip(SIDES, parts))


def _named_paper_rect(name: str, landscape: bool = False) -> fitz.Rect:
    name = name.lower()
    if name in EXTRA_PAPER_SIZES:
        width, height = EXTRA_PAPER_SIZES[name]
        return fitz.Rect(0, 0, height, width) if landscape else fitz.Rect(0, 0, width, height)
    if fitz.paper_size(name) == (-1, -1):
        raise RenderError(f"Unknown paper format: {name!r}")
    return fitz.paper_rect(f"{name}-l" if landscape else name)


def css_page_size(css: str) -> Optional[fitz.Rect]:
    """Return the page size declared by ``@page { size: ... }`` in ``css``, if any."""
    match = PAGE_SIZE_PATTERN.search(css or "")
    if not match:
        return None
    tokens = match.group(1).split()
    landscape = "landscape" in (t.lower() for t in tokens)
    tokens = [t for t in tokens if t.lower() not in ("landscape", "portrait")]
    if not tokens or tokens[0].lower() == "auto":
        return None
    if len(tokens) == 1 and LENGTH_PATTERN.match(tokens[0]):
        side = parse_length(tokens[0])
        return fitz.Rect(0, 0, side, side)
    if len(tokens) == 2:
        width, height = parse_length(tokens[0]), parse_length(tokens[1])
        return fitz.Rect(0, 0, width, height)
    return _named_paper_rect(tokens[0], landscape)


def page_rect(options: PageOptions, css: str = "") -> fitz.Rect:
    if options.prefer_css_page_size:
        rect = css_page_size(css)
        if rect is not None:
            logger.debug(f"Using page size from stylesheet: {rect.width:.0f}x{rect.height:.0f}pt")
            return rect
    return _named_paper_rect(options.format)


def markdown_to_html(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def build_html_document(body: str, css: str, title: str) -> str:
    """Wrap an HTML fragment into a standalone page with the stylesheet inlined."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>\n{css}\n</style>\n"
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )


def fill_template(template: str, page_number: int, total_pages: int,
                  title: str = "", today: Optional[str] = None) -> str:
    """Fill the placeholder spans of a header or footer template."""
    values = {
        "pageNumber": str(page_number),
        "totalPages": str(total_pages),
        "title": title,
        "date": today if today is not None else date.today().isoformat(),
    }

    def replace(match: re.Match) -> str:
        return match.group(1) + html.escape(values[match.group(2)]) + match.group(3)

    return PLACEHOLDER_PATTERN.sub(replace, template)


def _check_deadline(deadline: float, timeout: int) -> None:
    if time.monotonic() > deadline:
        raise RenderError(f"Rendering timed out after {timeout} ms")


def _layout(body: str, css: str, basedir: Path, mediabox: fitz.Rect,
            where: fitz.Rect, deadline: float, timeout: int) -> fitz.Document:
    """Lay out the HTML body page by page and return the resulting document."""
    story = fitz.Story(html=body, user_css=css, archive=fitz.Archive(str(basedir)))
    buffer = io.BytesIO()
    writer = fitz.DocumentWriter(buffer)
    more = True
    pages = 0
    while more:
        _check_deadline(deadline, timeout)
        device = writer.begin_page(mediabox)
        more, _ = story.place(where)
        story.draw(device)
        writer.end_page()
        pages += 1
        logger.debug(f"Laid out page {pages}")
    writer.close()
    return fitz.open(stream=buffer.getvalue(), filetype="pdf")


def _stamp_header_footer(doc: fitz.Document, options: PageOptions,
                         margins: Dict[str, float], title: str,
                         deadline: float) -> None:
    total = doc.page_count
    for page in doc:
        _check_deadline(deadline, options.timeout)
        rect = page.rect
        number = page.number + 1
        if options.header_template:
            box = fitz.Rect(margins["left"], 0, rect.width - margins["right"], margins["top"])
            page.insert_htmlbox(box, fill_template(options.header_template, number, total, title))
        if options.footer_template:
            box = fitz.Rect(margins["left"], rect.height - margins["bottom"],
                            rect.width - margins["right"], rect.height)
            page.insert_htmlbox(box, fill_template(options.footer_template, number, total, title))


def _scaled_geometry(paper: fitz.Rect, margins: Dict[str, float],
                     scale: float) -> Tuple[fitz.Rect, fitz.Rect]:
    mediabox = fitz.Rect(0, 0, paper.width / scale, paper.height / scale)
    where = fitz.Rect(
        margins["left"] / scale,
        margins["top"] / scale,
        (paper.width - margins["right"]) / scale,
        (paper.height - margins["bottom"]) / scale,
    )
    if where.is_empty:
        raise RenderError("Margins leave no room for content")
    return mediabox, where


def render_pdf(text: str, output: Union[str, Path], basedir: Union[str, Path],
               css: str = "", options: Optional[PageOptions] = None,
               title: Optional[str] = None,
               html_path: Optional[Union[str, Path]] = None) -> int:
    """Render Markdown ``text`` to a PDF at ``output`` and return the page count.

    Relative image paths are resolved against ``basedir``. When ``html_path``
    is given, the intermediate HTML is also written there.
    """
    options = options or PageOptions()
    output = Path(output)
    title = title if title is not None else output.stem
    if options.scale <= 0:
        raise RenderError(f"Scale must be positive, got {options.scale}")
    if not options.print_background:
        css = BACKGROUND_PATTERN.sub("", css)

    deadline = time.monotonic() + options.timeout / 1000.0
    margins = {side: parse_length(options.margin.get(side, "0")) for side in SIDES}
    paper = page_rect(options, css)
    mediabox, where = _scaled_geometry(paper, margins, options.scale)

    body = markdown_to_html(text)
    if html_path is not None:
        html_path = Path(html_path)
        try:
            html_path.parent.mkdir(parents=True, exist_ok=True)
            html_path.write_text(build_html_document(body, css, title), encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Cannot write {html_path}: {e}", html_path) from e
        logger.debug(f"Intermediate HTML written to {html_path}")

    logger.info(f"Rendering {output} ({paper.width:.0f}x{paper.height:.0f}pt, scale {options.scale})")
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        laid_out = _layout(body, css, Path(basedir), mediabox, where, deadline, options.timeout)
        pdf = fitz.open()
        for page in laid_out:
            _check_deadline(deadline, options.timeout)
            target = pdf.new_page(width=paper.width, height=paper.height)
            target.show_pdf_page(target.rect, laid_out, page.number)
        laid_out.close()

        if options.display_header_footer:
            _stamp_header_footer(pdf, options, margins, title, deadline)

        pdf.set_metadata({"title": title, "creator": "notes2pdf"})
        page_count = pdf.page_count
        pdf.save(str(output))
        pdf.close()
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render {output}: {e}") from e

    logger.info(f"Wrote {page_count} page(s) to {output}")
    return page_count
