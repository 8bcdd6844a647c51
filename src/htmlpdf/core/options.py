"""Command-line option model for the conversion binary.

Options are kept in an ordered mapping because the binary is sensitive to the
order of some flags (``--page-size`` versus explicit ``--page-width`` and
``--page-height``). Each entry holds one of three tagged values:

`Flag`
: The option is present without a value (``--grayscale``).

`Value`
: The option is followed by a single value (``--margin-top 10mm``).

`Omitted`
: The option is explicitly left out of the command line. Unlike an option
  that was never set, an omitted entry keeps its key so a later default cannot
  resurface it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
import os
import shlex
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Flag:
    """Option rendered as a bare flag."""


@dataclass(frozen=True, slots=True)
class Value:
    """Option rendered as a flag followed by ``text``."""

    text: str


@dataclass(frozen=True, slots=True)
class Omitted:
    """Option excluded from the rendered arguments."""


OptionValue: TypeAlias = Flag | Value | Omitted

FLAG = Flag()
OMITTED = Omitted()


def coerce_option_value(raw: Any) -> OptionValue:
    """Translate a plain Python value into its tagged option variant."""
    if isinstance(raw, (Flag, Value, Omitted)):
        return raw
    if raw is True:
        return FLAG
    if raw is False or raw is None:
        return OMITTED
    if isinstance(raw, (str, int, float)):
        return Value(str(raw))
    if isinstance(raw, os.PathLike):
        return Value(os.fspath(raw))
    raise TypeError(f"Unsupported option value {raw!r} ({type(raw).__name__}).")


def option_flag(name: str) -> str:
    """Return ``name`` prefixed with one dash when it is a single character, two otherwise."""
    dash = "-" if len(name) == 1 else "--"
    return f"{dash}{name}"


class OptionSet:
    """Insertion-ordered mapping of option names to tagged values."""

    __slots__ = ("_entries",)

    def __init__(self, initial: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None):
        self._entries: dict[str, OptionValue] = {}
        if initial is None:
            return
        items = initial.items() if isinstance(initial, Mapping) else initial
        for name, value in items:
            self.set(name, value)

    def set(self, name: str, value: Any = True) -> None:
        """Insert or overwrite ``name``; overwriting keeps the original position."""
        self._entries[name] = coerce_option_value(value)

    def get(self, name: str) -> OptionValue | None:
        return self._entries.get(name)

    def items(self) -> Iterator[tuple[str, OptionValue]]:
        return iter(self._entries.items())

    def copy(self) -> OptionSet:
        clone = OptionSet()
        clone._entries = dict(self._entries)
        return clone

    def to_arguments(self) -> list[str]:
        return build_option_arguments(self)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionSet):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __repr__(self) -> str:
        return f"OptionSet({self._entries!r})"


def build_option_arguments(options: OptionSet) -> list[str]:
    """Render ``options`` as argv tokens in insertion order."""
    argv: list[str] = []
    for name, value in options.items():
        if isinstance(value, Omitted):
            continue
        flag = option_flag(name)
        if isinstance(value, Flag):
            argv.append(flag)
        else:
            argv.extend([flag, value.text])
    return argv


def format_command(argv: Sequence[str]) -> str:
    """Return a shell-escaped rendering of ``argv`` suitable for logs."""
    return shlex.join(str(token) for token in argv)


__all__ = [
    "FLAG",
    "OMITTED",
    "Flag",
    "Omitted",
    "OptionSet",
    "OptionValue",
    "Value",
    "build_option_arguments",
    "coerce_option_value",
    "format_command",
    "option_flag",
]
