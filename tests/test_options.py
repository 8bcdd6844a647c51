from __future__ import annotations

from pathlib import Path
import shlex

import pytest

from htmlpdf.core.options import (
    FLAG,
    OMITTED,
    OptionSet,
    Value,
    build_option_arguments,
    coerce_option_value,
    format_command,
    option_flag,
)


def test_single_character_names_use_one_dash() -> None:
    assert option_flag("q") == "-q"
    assert option_flag("grayscale") == "--grayscale"
    assert option_flag("dpi") == "--dpi"


def test_flags_render_without_value() -> None:
    options = OptionSet({"q": True, "grayscale": True})

    assert options.to_arguments() == ["-q", "--grayscale"]


def test_values_follow_their_flag() -> None:
    options = OptionSet()
    options.set("margin-top", "10mm")
    options.set("dpi", 300)
    options.set("T", 5.5)

    assert build_option_arguments(options) == [
        "--margin-top",
        "10mm",
        "--dpi",
        "300",
        "-T",
        "5.5",
    ]


@pytest.mark.parametrize("raw", [None, False, OMITTED])
def test_omitted_values_are_skipped(raw: object) -> None:
    options = OptionSet({"q": True})
    options.set("footer-center", raw)

    assert "footer-center" in options
    assert options.to_arguments() == ["-q"]


def test_overwrite_keeps_original_position() -> None:
    options = OptionSet({"page-width": "10mm", "page-height": "20mm", "q": True})
    options.set("page-width", "30mm")

    assert list(options) == ["page-width", "page-height", "q"]
    assert options.get("page-width") == Value("30mm")


@pytest.mark.parametrize(
    "value",
    [
        "plain",
        "with space",
        "quote's",
        'double "quotes"',
        "$(rm -rf /); `id`",
        "semi;colon && pipe | star *",
        "",
    ],
)
def test_formatted_command_round_trips_through_shell_parsing(value: str) -> None:
    options = OptionSet({"title": value})
    argv = ["wkhtmltopdf", *options.to_arguments(), "/tmp/in put.html", "-"]

    assert shlex.split(format_command(argv)) == argv
    assert argv[1:3] == ["--title", value]


def test_coerce_option_value_variants(tmp_path: Path) -> None:
    assert coerce_option_value(True) is FLAG
    assert coerce_option_value(False) is OMITTED
    assert coerce_option_value(None) is OMITTED
    assert coerce_option_value(12) == Value("12")
    assert coerce_option_value(tmp_path) == Value(str(tmp_path))
    assert coerce_option_value(Value("x")) == Value("x")


def test_coerce_option_value_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        coerce_option_value(["a", "b"])


def test_copy_is_independent() -> None:
    original = OptionSet({"q": True})
    clone = original.copy()
    clone.set("q", False)

    assert original.to_arguments() == ["-q"]
    assert clone.to_arguments() == []
    assert original != clone
