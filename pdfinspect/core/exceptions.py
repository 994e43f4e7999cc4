"""Custom exceptions raised by :mod:`pdfinspect`."""

from __future__ import annotations


class PdfInspectError(Exception):
    """Base exception for all pdfinspect errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown pdfinspect error occurred."


class InvalidDocumentError(PdfInspectError):
    """Raised when a document cannot be opened as a PDF."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedDocumentError(InvalidDocumentError):
    """Raised when a document is encrypted and cannot be decrypted."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be read without a password."


class MalformedEntryError(PdfInspectError):
    """Raised when a cross-reference entry points to unreadable data."""

    def __init__(self, number: int, reason: str = "") -> None:
        self.number = number
        self.reason = reason
        message = f"Unable to read object {number}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LoadCancelledError(PdfInspectError):
    """Raised inside a load that was cancelled before the store was complete."""

    @property
    def default_message(self) -> str:
        return "Loading was cancelled."


__all__ = [
    "PdfInspectError",
    "InvalidDocumentError",
    "EncryptedDocumentError",
    "MalformedEntryError",
    "LoadCancelledError",
]
