"""Custom exception hierarchy for PDF generation."""

from __future__ import annotations

from collections.abc import Sequence


class PdfGeneratorError(RuntimeError):
    """Base exception for PDF generation failures."""


class GenerationFailed(PdfGeneratorError):
    """Raised when the conversion binary cannot produce a PDF."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        output: str = "",
        command: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output
        self.command = list(command)


class MissingInputError(GenerationFailed):
    """Raised when generation is attempted before any input was supplied."""


class TempFileError(PdfGeneratorError):
    """Raised when a temporary file cannot be created or removed."""


class ConfigError(PdfGeneratorError):
    """Raised when generator configuration cannot be loaded."""


__all__ = [
    "ConfigError",
    "GenerationFailed",
    "MissingInputError",
    "PdfGeneratorError",
    "TempFileError",
]
