"""Errors raised while collecting notes or rendering the PDF."""


class Notes2PdfError(Exception):
    """Base class for every failure that aborts a run."""


class FileSystemError(Notes2PdfError):
    """An input directory or file is missing or unreadable, or an output can't be written."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class RenderError(Notes2PdfError):
    """The Markdown could not be turned into a PDF."""
