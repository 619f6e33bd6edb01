"""Import pipeline exceptions.

These are raised by the import orchestrator and converted into an
``ImportResult`` (with a stable ``error_code``) at the outer boundary.
Parse problems inside individual extractors never surface here; an
extractor that cannot read a page simply reports no data.
"""

from typing import Optional


class RecipeImportError(Exception):
    """Base exception for recipe import failures."""

    error_code = "import_failed"
    default_message = "Recipe import failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidInputError(RecipeImportError):
    """Raised when the input string cannot be turned into an http(s) URL."""

    error_code = "invalid_url"
    default_message = "That doesn't look like a valid recipe URL."


class NetworkFailureError(RecipeImportError):
    """Raised when the page cannot be fetched.

    Covers transport errors, timeouts and non-2xx responses. The status
    code is kept when the server answered.
    """

    error_code = "fetch_failed"
    default_message = "Couldn't reach that page."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is None and status_code is not None:
            message = f"Couldn't reach that page (HTTP {status_code})."
        super().__init__(message)
        self.status_code = status_code


class NoDataFoundError(RecipeImportError):
    """Raised when the page was fetched but nothing importable was found."""

    error_code = "no_data_found"
    default_message = "No recipe data found on this page."
