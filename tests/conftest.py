from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
import sys

import pytest

from htmlpdf.core.config import GeneratorConfig


@dataclass(slots=True)
class StubBinary:
    path: Path
    args_log: Path
    html_copy: Path
    pdf: bytes = b"%PDF-1.4 stub"

    def recorded_args(self) -> list[str]:
        return self.args_log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def config_for(temp_dir: Path) -> Callable[..., GeneratorConfig]:
    def factory(binary: Path | str, **overrides: object) -> GeneratorConfig:
        return GeneratorConfig(binary=str(binary), temp_dir=temp_dir, **overrides)

    return factory


@pytest.fixture
def make_binary(tmp_path: Path) -> Callable[..., StubBinary]:
    """Write a shell script standing in for wkhtmltopdf.

    The script records its arguments, copies the input file, optionally
    prints ``message`` and writes a fake PDF to its last argument
    (``-`` meaning standard output).
    """
    if sys.platform == "win32":
        pytest.skip("stub binaries rely on a POSIX shell")

    counter = {"value": 0}

    def factory(
        *,
        exit_code: int = 0,
        message: str = "",
        sleep: float = 0,
        emit_pdf: bool = True,
    ) -> StubBinary:
        counter["value"] += 1
        root = tmp_path / f"stub-{counter['value']}"
        root.mkdir()
        stub = StubBinary(
            path=root / "wkhtmltopdf",
            args_log=root / "args.txt",
            html_copy=root / "input.html",
        )
        pdf_text = stub.pdf.decode("ascii")
        lines = [
            "#!/bin/sh",
            f': > "{stub.args_log}"',
            'prev=""',
            'last=""',
            'for arg in "$@"; do',
            f'  printf \'%s\\n\' "$arg" >> "{stub.args_log}"',
            '  prev="$last"',
            '  last="$arg"',
            "done",
            f'if [ -f "$prev" ]; then cat "$prev" > "{stub.html_copy}"; fi',
        ]
        if sleep:
            lines.append(f"exec sleep {sleep}")
        if message:
            lines.append(f"echo '{message}'")
        if emit_pdf and exit_code == 0:
            lines.extend(
                [
                    'if [ "$last" = "-" ]; then',
                    f"  printf '%s' '{pdf_text}'",
                    "else",
                    f"  printf '%s' '{pdf_text}' > \"$last\"",
                    "fi",
                ]
            )
        lines.append(f"exit {exit_code}")
        stub.path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        stub.path.chmod(0o755)
        return stub

    return factory
