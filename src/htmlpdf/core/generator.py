"""Configure and invoke the HTML-to-PDF binary for a single document.

Example::

    with PDFGenerator() as pdf:
        pdf.set_input_html(content)
        pdf.set_page_size("57.15mm", "12.7mm")
        pdf.set_margins(0)
        pdf.stream_to_client(sink)

Every temporary file a generator creates is removed once generation returns,
whether the binary succeeded, failed, or never started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Any

from htmlpdf.adapters.wkhtmltopdf import ProcessOutcome, WkhtmltopdfRunner
from htmlpdf.core.config import GeneratorConfig
from htmlpdf.core.diagnostics import DiagnosticEmitter, NullEmitter
from htmlpdf.core.exceptions import GenerationFailed, MissingInputError, TempFileError
from htmlpdf.core.headers import pdf_download_headers
from htmlpdf.core.options import OMITTED, OptionSet, OptionValue, format_command
from htmlpdf.core.sink import ResponseSink
from htmlpdf.core.tempfiles import TempFileRegistry


logger = logging.getLogger(__name__)

STDOUT_TARGET = "-"


class OutputMode(Enum):
    """Destination of the binary's PDF output."""

    STREAM = "stream"
    TEMP_FILE = "temp_file"


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a successful conversion."""

    returncode: int
    command: list[str]
    mode: OutputMode
    output: str = ""
    pdf: bytes | None = field(default=None, repr=False)

    @property
    def success(self) -> bool:
        return self.returncode == 0


class PDFGenerator:
    """Translate options into a command line and manage one conversion run."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        runner: WkhtmltopdfRunner | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.runner = runner or WkhtmltopdfRunner(self.config.binary)
        self.emitter = emitter or NullEmitter()
        self._options = self.config.option_defaults()
        self._temp_files = TempFileRegistry(
            directory=self.config.temp_dir, prefix=self.config.temp_prefix
        )
        self._output_mode = OutputMode.STREAM
        self._output_path: Path | None = None
        self._input: str | None = None

    # Input -----------------------------------------------------------------

    def set_input_html(self, html: str | bytes) -> Path:
        """Write ``html`` to a temporary file used as the conversion input."""
        path = self._temp_files.create(".html", html)
        self._input = os.fspath(path)
        return path

    def set_input_source(self, source: str | os.PathLike[str]) -> None:
        """Use an existing file or URL as input; it is never deleted."""
        self._input = os.fspath(source)

    @property
    def input_path(self) -> str | None:
        return self._input

    # Options ---------------------------------------------------------------

    @property
    def options(self) -> OptionSet:
        return self._options

    def set_option(self, name: str, value: Any = True) -> None:
        """Set any command-line option; ``True`` renders the flag alone."""
        self._options.set(name, value)

    def option(self, name: str) -> OptionValue | None:
        return self._options.get(name)

    def set_page_size(self, width: str | float, height: str | float) -> None:
        """Set the page size exactly. The binary defaults to mm; be explicit."""
        self.set_option("page-width", width)
        self.set_option("page-height", height)

    def set_page_size_by_name(self, name: str) -> None:
        """Set the page size by standard name (Letter, A4, ...)."""
        self.set_option("page-width", OMITTED)
        self.set_option("page-height", OMITTED)
        self.set_option("page-size", name)

    def set_margins(
        self,
        top: str | float,
        right: str | float | None = None,
        bottom: str | float | None = None,
        left: str | float | None = None,
    ) -> None:
        """Set top, right, bottom and left margins.

        When only ``top`` is given, all four margins use it.
        """
        if right is None:
            right = bottom = left = top
        self.set_option("margin-top", top)
        self.set_option("margin-right", right)
        self.set_option("margin-bottom", bottom)
        self.set_option("margin-left", left)

    # Output ----------------------------------------------------------------

    @property
    def output_mode(self) -> OutputMode:
        return self._output_mode

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    def set_output_mode(self, mode: OutputMode | str) -> None:
        """Select the output mode; temp-file mode allocates its path immediately.

        Leaving temp-file mode removes the output file allocated for it.
        """
        resolved = OutputMode(mode)
        self._output_mode = resolved
        if resolved is OutputMode.TEMP_FILE:
            if self._output_path is None:
                self._output_path = self._temp_files.create(".pdf")
        elif self._output_path is not None:
            stale, self._output_path = self._output_path, None
            self._temp_files.discard(stale)

    def output_target(self) -> str:
        if self._output_mode is OutputMode.STREAM:
            return STDOUT_TARGET
        if self._output_path is None:
            self._output_path = self._temp_files.create(".pdf")
        return os.fspath(self._output_path)

    @property
    def temp_files(self) -> tuple[Path, ...]:
        return self._temp_files.paths

    # Command line ----------------------------------------------------------

    def build_arguments(self) -> list[str]:
        """Return the option flags followed by the input and output targets."""
        if self._input is None:
            raise MissingInputError("No HTML input was supplied to the PDF generator.")
        return [*self._options.to_arguments(), self._input, self.output_target()]

    def build_command(self) -> list[str]:
        return [self.runner.resolve_executable(), *self.build_arguments()]

    # Generation ------------------------------------------------------------

    def stream_to_client(self, sink: ResponseSink, *, buffered: bool = False) -> bool:
        """Generate the PDF and send it to ``sink`` as a download.

        Unbuffered streaming writes headers first and hands the sink to the
        binary; a failure at that point may leave a truncated body behind.
        With ``buffered`` the document is produced in a temporary file and
        only written once the binary succeeded.
        """
        if buffered:
            self.set_output_mode(OutputMode.TEMP_FILE)
            result = self.generate()
            payload = result.pdf or b""
            for name, value in pdf_download_headers(len(payload)):
                sink.add_header(name, value)
            sink.write(payload)
            return result.success

        self.set_output_mode(OutputMode.STREAM)
        result = self.generate(sink=sink)
        return result.success

    def to_bytes(self) -> bytes:
        """Generate through a temporary file and return the PDF bytes."""
        self.set_output_mode(OutputMode.TEMP_FILE)
        result = self.generate()
        return result.pdf or b""

    def write_pdf(self, destination: str | os.PathLike[str]) -> Path:
        """Generate the PDF and copy it to ``destination`` before cleanup."""
        target = Path(destination)
        payload = self.to_bytes()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
        return target

    def generate(self, sink: ResponseSink | None = None) -> GenerationResult:
        """Run the binary in the current output mode and clean up afterwards."""
        mode = self._output_mode
        try:
            if mode is OutputMode.STREAM and sink is None:
                raise ValueError("Stream mode requires a response sink.")
            try:
                command = self.build_command()
                printable = format_command(command)
                logger.debug("running %s", printable)
                self.emitter.event("pdf_generate", {"mode": mode.value, "command": printable})

                if mode is OutputMode.STREAM:
                    assert sink is not None
                    for name, value in pdf_download_headers():
                        sink.add_header(name, value)
                    outcome = self.runner.stream(
                        command,
                        sink,
                        timeout=self.config.timeout,
                        chunk_size=self.config.chunk_size,
                    )
                else:
                    outcome = self.runner.capture(command, timeout=self.config.timeout)
            except GenerationFailed as exc:
                logger.warning("PDF generation failed: %s", exc)
                self.emitter.error("PDF generation failed", exc)
                raise

            result = self._finish(outcome, command, mode)
        except BaseException:
            # A cleanup failure must not mask the error already propagating.
            try:
                self.cleanup()
            except TempFileError as cleanup_error:
                logger.warning("%s", cleanup_error)
                self.emitter.warning("Temporary files were left behind", cleanup_error)
            raise

        self.cleanup()
        return result

    def cleanup(self) -> list[Path]:
        """Remove any temporary file still registered on this generator."""
        registered = set(self._temp_files.paths)
        if self._output_path in registered:
            self._output_path = None
        if self._input is not None and Path(self._input) in registered:
            self._input = None
        removed = self._temp_files.cleanup()
        if removed:
            self.emitter.event("pdf_cleanup", {"count": len(removed)})
        return removed

    def _finish(
        self, outcome: ProcessOutcome, command: list[str], mode: OutputMode
    ) -> GenerationResult:
        if outcome.returncode != 0:
            message = f"PDF generation failed with exit code {outcome.returncode}"
            detail = outcome.output.strip()
            if detail:
                message = f"{message}: {detail.splitlines()[-1]}"
            logger.warning("%s (command: %s)", message, format_command(command))
            error = GenerationFailed(
                message,
                returncode=outcome.returncode,
                output=outcome.output,
                command=command,
            )
            self.emitter.error(message, error)
            raise error

        pdf: bytes | None = None
        if mode is OutputMode.TEMP_FILE and self._output_path is not None:
            try:
                pdf = self._output_path.read_bytes()
            except OSError as exc:
                raise TempFileError(
                    f"Unable to read generated PDF '{self._output_path}': {exc}"
                ) from exc
            self.emitter.event("pdf_generated", {"bytes": len(pdf)})

        return GenerationResult(
            returncode=outcome.returncode,
            command=command,
            mode=mode,
            output=outcome.output,
            pdf=pdf,
        )

    def __enter__(self) -> PDFGenerator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()


__all__ = [
    "GenerationResult",
    "OutputMode",
    "PDFGenerator",
    "STDOUT_TARGET",
]
