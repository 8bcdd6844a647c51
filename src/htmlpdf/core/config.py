"""Configuration model for the PDF generator.

GeneratorConfig

`binary` (`str | None`)
: Path or name of the conversion executable. When omitted the generator looks
  up `wkhtmltopdf` on `PATH`. The `HTMLPDF_BINARY` environment variable
  overrides the value loaded from a file.

`default_options` (`dict[str, bool | str | int | float | None]`)
: Options rendered before any option set on a generator instance. `true`
  renders a bare flag, `false`/`null` omits the option, any other value is
  passed after the flag. Defaults to `{q: true}` so the binary stays quiet.

`temp_dir` (`Path | None`)
: Directory receiving temporary input and output files. Falls back to the
  system temporary directory.

`temp_prefix` (`str`)
: Prefix applied to temporary file names so they remain recognisable.

`timeout` (`float | None`)
: Seconds to wait for the binary before killing it. `None` waits forever.

`chunk_size` (`int`)
: Size of the reads used when copying streamed output into a sink that has
  no file descriptor.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from htmlpdf.core.exceptions import ConfigError
from htmlpdf.core.options import OptionSet


CONFIG_ENV_VAR = "HTMLPDF_CONFIG"
BINARY_ENV_VAR = "HTMLPDF_BINARY"
DEFAULT_BINARY = "wkhtmltopdf"


class GeneratorConfig(BaseModel):
    """Settings shared by every generator built from the same configuration."""

    model_config = ConfigDict(extra="forbid")

    binary: str | None = None
    default_options: dict[str, bool | str | int | float | None] = Field(
        default_factory=lambda: {"q": True}
    )
    temp_dir: Path | None = None
    temp_prefix: str = "pdf"
    timeout: float | None = None
    chunk_size: int = 64 * 1024

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("chunk_size")
    @classmethod
    def _positive_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("chunk_size must be positive")
        return value

    def option_defaults(self) -> OptionSet:
        """Return the default options as a fresh ordered option set."""
        return OptionSet(self.default_options)


def load_config(path: str | Path | None = None) -> GeneratorConfig:
    """Load a YAML configuration, honouring environment overrides."""
    candidate = path or os.environ.get(CONFIG_ENV_VAR)
    data: dict[str, Any] = {}
    if candidate:
        config_path = Path(candidate).expanduser()
        try:
            raw = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration '{config_path}': {exc}") from exc
        try:
            payload = yaml.safe_load(raw) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in '{config_path}': {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Configuration '{config_path}' must contain a mapping.")
        data = payload

    binary_override = os.environ.get(BINARY_ENV_VAR)
    if binary_override:
        data = {**data, "binary": binary_override}

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generator configuration: {exc}") from exc


__all__ = [
    "BINARY_ENV_VAR",
    "CONFIG_ENV_VAR",
    "DEFAULT_BINARY",
    "GeneratorConfig",
    "load_config",
]
