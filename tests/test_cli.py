from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from htmlpdf.core import config as config_mod
from htmlpdf.ui.cli import app
from htmlpdf.ui.cli.utils import parse_margins, parse_option_assignments


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(config_mod.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(config_mod.BINARY_ENV_VAR, raising=False)


def _html(tmp_path: Path, content: str = "<p>hi</p>") -> Path:
    path = tmp_path / "page.html"
    path.write_text(content, encoding="utf-8")
    return path


def test_parse_option_assignments() -> None:
    assert parse_option_assignments(["grayscale", "dpi=300", "--title=a=b", " "]) == [
        ("grayscale", True),
        ("dpi", "300"),
        ("title", "a=b"),
    ]
    with pytest.raises(ValueError):
        parse_option_assignments(["=value"])


def test_parse_margins() -> None:
    assert parse_margins("10mm") == ["10mm"]
    assert parse_margins("1, 2,3 ,4") == ["1", "2", "3", "4"]
    for invalid in ("1,2", "1,,3,4", ""):
        with pytest.raises(ValueError):
            parse_margins(invalid)


def test_convert_writes_output_file(tmp_path: Path, make_binary: Callable[..., Any]) -> None:
    stub = make_binary()
    source = _html(tmp_path)
    output = tmp_path / "out.pdf"

    result = CliRunner().invoke(
        app,
        [
            "convert",
            str(source),
            "--output",
            str(output),
            "--binary",
            str(stub.path),
            "--page-size",
            "A4",
            "--margin",
            "10mm",
            "-O",
            "grayscale",
            "-O",
            "dpi=300",
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == stub.pdf
    args = stub.recorded_args()
    assert args[:4] == ["-q", "--page-size", "A4", "--margin-top"]
    assert args[-4:-1] == ["--dpi", "300", str(source.resolve())]
    assert "--grayscale" in args


def test_convert_streams_stdin_to_stdout(make_binary: Callable[..., Any]) -> None:
    stub = make_binary()

    result = CliRunner().invoke(
        app,
        ["convert", "-", "--binary", str(stub.path)],
        input="<p>from stdin</p>",
    )

    assert result.exit_code == 0
    assert result.stdout_bytes == stub.pdf
    assert stub.recorded_args()[-1] == "-"
    assert stub.html_copy.read_text(encoding="utf-8") == "<p>from stdin</p>"


def test_convert_reports_failures(tmp_path: Path, make_binary: Callable[..., Any]) -> None:
    stub = make_binary(exit_code=1, message="error: bad html")
    source = _html(tmp_path)

    result = CliRunner().invoke(
        app,
        [
            "convert",
            str(source),
            "-o",
            str(tmp_path / "out.pdf"),
            "--binary",
            str(stub.path),
            "-v",
        ],
    )

    assert result.exit_code == 1
    assert "error: bad html" in result.output
    assert not (tmp_path / "out.pdf").exists()


def test_convert_rejects_partial_dimensions(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["convert", str(_html(tmp_path)), "--page-width", "100mm", "--binary", "/opt/wk"],
    )

    assert result.exit_code == 2


def test_convert_rejects_missing_input(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app, ["convert", str(tmp_path / "absent.html"), "--binary", "/opt/wk"]
    )

    assert result.exit_code == 2


def test_check_reports_version(make_binary: Callable[..., Any]) -> None:
    stub = make_binary(message="wkhtmltopdf 0.12.6", emit_pdf=False)

    result = CliRunner().invoke(app, ["check", "--binary", str(stub.path)])

    assert result.exit_code == 0
    assert "wkhtmltopdf 0.12.6" in result.output


def test_check_fails_without_binary(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["check", "--binary", str(tmp_path / "missing")])

    assert result.exit_code == 1


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("htmlpdf ")


def test_convert_passes_stdin_bytes_through(make_binary: Callable[..., Any]) -> None:
    stub = make_binary()

    result = CliRunner().invoke(
        app,
        ["convert", "-", "--binary", str(stub.path)],
        input=b"<p>caf\xe9</p>",
    )

    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == stub.pdf
    assert stub.html_copy.read_bytes() == b"<p>caf\xe9</p>"
