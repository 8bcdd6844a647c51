"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


LAYOUT_PANEL = "Page Layout"
BINARY_PANEL = "Binary"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputArgument = Annotated[
    str,
    typer.Argument(
        metavar="INPUT",
        help="HTML file or URL to convert, or '-' to read HTML from standard input.",
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Destination PDF file. Omit or use '-' to stream the PDF to standard output.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

BufferedOption = Annotated[
    bool,
    typer.Option(
        "--buffered",
        help="Generate the whole PDF before writing anything to standard output.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

PageSizeOption = Annotated[
    str | None,
    typer.Option(
        "--page-size",
        help="Standard paper name such as A4 or Letter.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

PageWidthOption = Annotated[
    str | None,
    typer.Option(
        "--page-width",
        help="Explicit page width (e.g. '210mm'). Requires --page-height.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

PageHeightOption = Annotated[
    str | None,
    typer.Option(
        "--page-height",
        help="Explicit page height (e.g. '297mm'). Requires --page-width.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

MarginOption = Annotated[
    str | None,
    typer.Option(
        "--margin",
        help="One margin for all sides, or 'top,right,bottom,left'.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

RawOptionOption = Annotated[
    list[str] | None,
    typer.Option(
        "--option",
        "-O",
        help="Extra binary option as 'name' or 'name=value'. Repeat as needed.",
        rich_help_panel=BINARY_PANEL,
    ),
]

BinaryOption = Annotated[
    str | None,
    typer.Option(
        "--binary",
        help="Path to the wkhtmltopdf executable.",
        rich_help_panel=BINARY_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="YAML configuration file (defaults to $HTMLPDF_CONFIG).",
        rich_help_panel=BINARY_PANEL,
    ),
]

TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        min=0.001,
        help="Kill the binary after this many seconds.",
        rich_help_panel=BINARY_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
