"""Collect Markdown notes from ordered group folders and join them into one document."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from notes2pdf.errors import FileSystemError
from notes2pdf.rewriter import rewrite_asset_paths

logger = logging.getLogger(__name__)

SEPARATOR = "\n\n"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Document:
    """A single Markdown file and the group folder it was read from."""

    group: str
    path: Path
    text: str


def read_document(path: PathLike) -> str:
    """Read a Markdown file as UTF-8 text."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(f"Cannot read {path}: {e}", path) from e


def list_markdown_files(group_dir: PathLike) -> List[Path]:
    """Return the ``*.md`` files directly inside ``group_dir``, sorted by name."""
    group_dir = Path(group_dir)
    if not group_dir.is_dir():
        raise FileSystemError(f"Group directory not found: {group_dir}", group_dir)
    try:
        entries = list(group_dir.iterdir())
    except OSError as e:
        raise FileSystemError(f"Cannot list {group_dir}: {e}", group_dir) from e

    files = [p for p in entries if p.name.endswith(".md") and p.is_file()]
    return sorted(files, key=lambda p: p.name)


def collect_documents(root: PathLike, groups: Sequence[str]) -> List[Document]:
    """Read every Markdown file of every group, in group order then filename order."""
    root = Path(root)
    documents: List[Document] = []
    for group in groups:
        files = list_markdown_files(root / group)
        if not files:
            logger.warning(f"No Markdown files found in {root / group}")
        for path in files:
            logger.debug(f"Reading {path}")
            documents.append(Document(group, path, read_document(path)))
        logger.info(f"Collected {len(files)} file(s) from group {group}")
    return documents


def combine_documents(documents: Iterable[Document], rewrite: bool = True) -> str:
    """Join document texts with a blank line, rewriting asset paths per document.

    Rewriting has to happen before joining since the group a reference
    belongs to is only known per document.
    """
    texts = []
    for doc in documents:
        text = rewrite_asset_paths(doc.text, doc.group) if rewrite else doc.text
        texts.append(text)
    return SEPARATOR.join(texts)


def build_combined_document(root: PathLike, groups: Sequence[str], rewrite: bool = True) -> str:
    """Collect every group under ``root`` and return the combined Markdown."""
    return combine_documents(collect_documents(root, groups), rewrite=rewrite)


def write_combined_document(text: str, path: PathLike) -> Path:
    """Write the combined Markdown to ``path``, creating parent folders."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Cannot write {path}: {e}", path) from e
    logger.info(f"Combined Markdown written to {path}")
    return path
