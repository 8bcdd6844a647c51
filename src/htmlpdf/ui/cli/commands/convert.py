"""Implementation of the `htmlpdf convert` command."""

from __future__ import annotations

from pathlib import Path
import sys

import typer

from htmlpdf.core.config import GeneratorConfig, load_config
from htmlpdf.core.exceptions import PdfGeneratorError
from htmlpdf.core.generator import PDFGenerator
from htmlpdf.core.sink import BinaryStreamSink

from .._options import (
    BinaryOption,
    BufferedOption,
    ConfigOption,
    DebugOption,
    InputArgument,
    MarginOption,
    OutputOption,
    PageHeightOption,
    PageSizeOption,
    PageWidthOption,
    RawOptionOption,
    TimeoutOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import configure_logging, debug_enabled, emit_error, render_message, set_cli_state
from ..utils import parse_margins, parse_option_assignments


STDIO_MARKER = "-"


def _resolve_config(
    config_path: Path | None, binary: str | None, timeout: float | None
) -> GeneratorConfig:
    config = load_config(config_path)
    updates: dict[str, object] = {}
    if binary:
        updates["binary"] = binary
    if timeout is not None:
        updates["timeout"] = timeout
    return config.model_copy(update=updates) if updates else config


def _apply_layout(
    generator: PDFGenerator,
    *,
    page_size: str | None,
    page_width: str | None,
    page_height: str | None,
    margin: str | None,
) -> None:
    if (page_width is None) != (page_height is None):
        raise typer.BadParameter("--page-width and --page-height must be given together.")
    if page_size and page_width:
        raise typer.BadParameter("--page-size cannot be combined with explicit dimensions.")

    if page_width and page_height:
        generator.set_page_size(page_width, page_height)
    elif page_size:
        generator.set_page_size_by_name(page_size)

    if margin:
        try:
            margins = parse_margins(margin)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--margin") from exc
        generator.set_margins(*margins)


def convert(
    source: InputArgument,
    output: OutputOption = None,
    page_size: PageSizeOption = None,
    page_width: PageWidthOption = None,
    page_height: PageHeightOption = None,
    margin: MarginOption = None,
    option: RawOptionOption = None,
    binary: BinaryOption = None,
    config: ConfigOption = None,
    timeout: TimeoutOption = None,
    buffered: BufferedOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Convert an HTML document to PDF using wkhtmltopdf."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    configure_logging(state.verbosity)

    try:
        extra_options = parse_option_assignments(option)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--option") from exc

    try:
        generator_config = _resolve_config(config, binary, timeout)
    except PdfGeneratorError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    with PDFGenerator(generator_config, emitter=CliEmitter(state)) as generator:
        _apply_layout(
            generator,
            page_size=page_size,
            page_width=page_width,
            page_height=page_height,
            margin=margin,
        )
        for name, value in extra_options:
            generator.set_option(name, value)

        try:
            if source == STDIO_MARKER:
                generator.set_input_html(sys.stdin.buffer.read())
            elif "://" in source:
                generator.set_input_source(source)
            else:
                input_path = Path(source)
                if not input_path.is_file():
                    raise typer.BadParameter(
                        f"Input file '{source}' does not exist.", param_hint="INPUT"
                    )
                generator.set_input_source(input_path.resolve())

            if output is None or str(output) == STDIO_MARKER:
                sink = BinaryStreamSink(sys.stdout.buffer)
                generator.stream_to_client(sink, buffered=buffered)
            else:
                written = generator.write_pdf(output)
                render_message("info", f"Wrote {written}")
        except PdfGeneratorError as exc:
            if debug_enabled():
                raise
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc


__all__ = ["convert"]
