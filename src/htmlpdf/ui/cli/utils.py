"""Auxiliary helpers used by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable


def parse_option_assignments(values: Iterable[str] | None) -> list[tuple[str, str | bool]]:
    """Parse ``name=value`` or bare ``name`` entries into option pairs."""
    parsed: list[tuple[str, str | bool]] = []
    if not values:
        return parsed

    for raw in values:
        entry = raw.strip()
        if not entry:
            continue
        if "=" in entry:
            name, value = entry.split("=", 1)
            name = name.strip().lstrip("-")
            if not name:
                raise ValueError(f"Invalid option '{raw}', expected 'name' or 'name=value'.")
            parsed.append((name, value))
        else:
            name = entry.lstrip("-")
            if not name:
                raise ValueError(f"Invalid option '{raw}', expected 'name' or 'name=value'.")
            parsed.append((name, True))
    return parsed


def parse_margins(value: str) -> list[str]:
    """Split a margin specification into one or four values."""
    parts = [part.strip() for part in value.split(",")]
    if any(not part for part in parts) or len(parts) not in {1, 4}:
        raise ValueError(
            f"Invalid margins '{value}', expected one value or four comma-separated values."
        )
    return parts


__all__ = ["parse_margins", "parse_option_assignments"]
