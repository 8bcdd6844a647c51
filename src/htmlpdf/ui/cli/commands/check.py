"""Implementation of the `htmlpdf check` command."""

from __future__ import annotations

from pathlib import Path

import typer

from htmlpdf.adapters.wkhtmltopdf import WkhtmltopdfRunner
from htmlpdf.core.config import load_config
from htmlpdf.core.exceptions import PdfGeneratorError

from .._options import BinaryOption, ConfigOption, VerboseOption
from ..state import emit_error, get_cli_state, set_cli_state


def check(
    binary: BinaryOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
) -> None:
    """Report whether the conversion binary is usable."""
    set_cli_state(verbosity=verbose)
    try:
        generator_config = load_config(config)
        runner = WkhtmltopdfRunner(binary or generator_config.binary)
        executable = runner.resolve_executable()
        banner = runner.version()
    except PdfGeneratorError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    console = get_cli_state().console
    console.print(f"binary: {Path(executable)}")
    console.print(f"version: {banner or 'unknown'}")


__all__ = ["check"]
