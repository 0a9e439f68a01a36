"""Exception types raised by the record store, exports and form parsers."""

from __future__ import annotations


class AnglerFinanceError(Exception):
    """Base class for all errors raised by this package."""


class ExportError(AnglerFinanceError):
    """Base class for export failures shown to the user."""


class FetchFailedError(ExportError):
    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"Failed to fetch trips: {message}")


class NoDataError(ExportError):
    def __init__(self) -> None:
        super().__init__("No trips to export")


class WriteFailedError(ExportError):
    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"Failed to write export file: {message}")


class InvalidDataError(ExportError):
    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"Invalid data: {message}")


class SaveFailedError(AnglerFinanceError):
    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"Failed to save data: {message}")


class ValidationError(AnglerFinanceError, ValueError):
    """A form field failed validation; nothing was saved.

    ``field`` names the offending input so the caller can highlight it.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)
