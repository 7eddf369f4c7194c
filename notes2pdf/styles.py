"""Default stylesheets and header/footer templates."""
from pathlib import Path
from typing import Optional

from notes2pdf.errors import FileSystemError

NOTES_CSS = """
body {
  font-family: Helvetica, Arial, sans-serif;
  font-size: 11pt;
  line-height: 1.5;
  color: #24292e;
}

h1, h2, h3, h4 {
  color: #1a202c;
  line-height: 1.25;
  page-break-after: avoid;
}

h1 { font-size: 2em; border-bottom: 1px solid #eaecef; padding-bottom: 0.3em; }
h2 { font-size: 1.5em; border-bottom: 1px solid #eaecef; padding-bottom: 0.3em; }
h3 { font-size: 1.25em; }

code {
  font-family: Courier, monospace;
  font-size: 0.9em;
  background-color: #f6f8fa;
}

pre {
  font-family: Courier, monospace;
  background-color: #f6f8fa;
  padding: 0.8em;
  font-size: 0.85em;
}

img { max-width: 100%; }

blockquote {
  color: #6a737d;
  border-left: 4px solid #dfe2e5;
  padding-left: 1em;
  margin-left: 0;
}

table { border-collapse: collapse; }
th, td { border: 1px solid #dfe2e5; padding: 0.4em 0.8em; }
"""

ASSIGNMENT_CSS = """
body {
  font-family: Helvetica, Arial, sans-serif;
  font-size: 16px;
  line-height: 1.6;
  color: #2d3748;
  background-color: #ffffff;
}

h1, h2, h3, h4, h5, h6 {
  font-weight: bold;
  line-height: 1.2;
  color: #1a202c;
  margin-top: 2em;
  margin-bottom: 0.8em;
  page-break-after: avoid;
  page-break-inside: avoid;
}

h1 {
  font-size: 2.4em;
  text-align: center;
  margin-top: 0.5em;
  padding-bottom: 0.5em;
  border-bottom: 3px solid #2b6cb0;
  color: #2b6cb0;
}

h2 {
  font-size: 1.8em;
  margin-top: 1.5em;
  margin-bottom: 0.6em;
  padding-bottom: 0.3em;
  border-bottom: 2px solid #4a5568;
  color: #2d3748;
}

h3 { font-size: 1.4em; margin-top: 1.2em; margin-bottom: 0.4em; color: #2d3748; }
h4 { font-size: 1.2em; margin-top: 1em; margin-bottom: 0.4em; color: #4a5568; }

p {
  margin: 0.8em 0;
  text-align: justify;
  orphans: 3;
  widows: 3;
}

strong { font-weight: bold; color: #2d3748; }

code {
  font-family: Courier, monospace;
  background-color: #f7fafc;
  font-size: 0.85em;
  color: #2d3748;
}

pre {
  background-color: #f7fafc;
  padding: 1.5em;
  border: 1px solid #e2e8f0;
  margin: 1.5em 0;
  font-size: 0.9em;
  line-height: 1.5;
}

pre code { background-color: transparent; font-size: 1em; }

img {
  max-width: 100%;
  margin: 0.5em auto 0.8em auto;
  display: block;
  border: 1px solid #e2e8f0;
  page-break-inside: avoid;
}

ul, ol { padding-left: 2em; margin: 1em 0; }
li { margin: 0.5em 0; }
li strong { color: #2b6cb0; }

blockquote {
  margin: 1.5em 0;
  padding: 1em 1.5em;
  border-left: 4px solid #4299e1;
  background-color: #ebf8ff;
  font-style: italic;
  color: #2b6cb0;
}

table { width: 100%; border-collapse: collapse; margin: 1.5em 0; font-size: 0.9em; }
th, td { padding: 0.8em; border: 1px solid #e2e8f0; text-align: left; }
th { background-color: #f7fafc; font-weight: bold; color: #2d3748; }

a { color: #4299e1; text-decoration: none; }
"""

HEADER_TEMPLATE = (
    '<div style="font-size: 9px; color: #718096; text-align: center;">'
    '<span class="title"></span></div>'
)

FOOTER_TEMPLATE = (
    '<div style="font-size: 9px; color: #718096; text-align: center;">'
    'Page <span class="pageNumber"></span> of <span class="totalPages"></span></div>'
)


def load_stylesheet(path: Optional[Path], default: str) -> str:
    """Return the stylesheet at ``path``, or ``default`` when no path is given."""
    if path is None:
        return default
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(f"Cannot read stylesheet {path}: {e}", path) from e
