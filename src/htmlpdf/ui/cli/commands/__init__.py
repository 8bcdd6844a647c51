"""CLI command implementations exposed via `htmlpdf.ui.cli`."""

from __future__ import annotations

from .check import check
from .convert import convert


__all__ = ["check", "convert"]
