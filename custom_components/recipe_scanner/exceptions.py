"""Recipe Scanner exceptions.

Extraction errors are raised by the extraction engine; fetch errors by the
page retrieval helpers. Both are caught by the service layer and turned into
error responses and failure events.
"""
from __future__ import annotations


class RecipeScannerError(Exception):
    """Base exception for Recipe Scanner errors."""


class ExtractionError(RecipeScannerError):
    """Raised when a recipe cannot be extracted from an HTML document.

    The message is human readable and is surfaced to the caller as is.
    """


class InputError(ExtractionError):
    """Raised when the extraction input is not an HTML string."""


class ParseError(ExtractionError):
    """Raised when parsing the document or running a strategy fails."""


class FetchError(RecipeScannerError):
    """Raised when a page or image cannot be retrieved after all retries."""
