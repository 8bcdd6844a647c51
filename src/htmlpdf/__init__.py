"""Primary public API for htmlpdf."""

from __future__ import annotations

from htmlpdf.version import get_version

from htmlpdf.adapters.wkhtmltopdf import ProcessOutcome, WkhtmltopdfRunner
from htmlpdf.core.config import GeneratorConfig, load_config
from htmlpdf.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from htmlpdf.core.exceptions import (
    ConfigError,
    GenerationFailed,
    MissingInputError,
    PdfGeneratorError,
    TempFileError,
)
from htmlpdf.core.generator import GenerationResult, OutputMode, PDFGenerator
from htmlpdf.core.headers import pdf_download_headers
from htmlpdf.core.options import (
    FLAG,
    OMITTED,
    Flag,
    Omitted,
    OptionSet,
    Value,
    build_option_arguments,
    format_command,
)
from htmlpdf.core.sink import BinaryStreamSink, ResponseSink


__version__ = get_version()


__all__ = [
    "FLAG",
    "OMITTED",
    "BinaryStreamSink",
    "ConfigError",
    "DiagnosticEmitter",
    "Flag",
    "GenerationFailed",
    "GenerationResult",
    "GeneratorConfig",
    "LoggingEmitter",
    "MissingInputError",
    "NullEmitter",
    "Omitted",
    "OptionSet",
    "OutputMode",
    "PDFGenerator",
    "PdfGeneratorError",
    "ProcessOutcome",
    "ResponseSink",
    "TempFileError",
    "Value",
    "WkhtmltopdfRunner",
    "__version__",
    "build_option_arguments",
    "format_command",
    "load_config",
    "pdf_download_headers",
]
