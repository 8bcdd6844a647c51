"""Scoped temporary files owned by a single generator."""

from __future__ import annotations

from collections.abc import Iterator
import logging
import os
from pathlib import Path
import tempfile
from types import TracebackType

from htmlpdf.core.exceptions import TempFileError


logger = logging.getLogger(__name__)


class TempFileRegistry:
    """Create uniquely named temporary files and remove them all at once."""

    def __init__(self, *, directory: Path | None = None, prefix: str = "pdf") -> None:
        self.directory = directory
        self.prefix = prefix
        self._paths: list[Path] = []

    def create(self, suffix: str, content: str | bytes | None = None) -> Path:
        """Allocate a new file ending in ``suffix`` and register it for cleanup."""
        if suffix and not suffix.startswith("."):
            suffix = f".{suffix}"
        try:
            fd, raw_path = tempfile.mkstemp(
                suffix=suffix,
                prefix=self.prefix,
                dir=os.fspath(self.directory) if self.directory is not None else None,
            )
        except OSError as exc:
            raise TempFileError(f"Unable to create temporary '{suffix}' file: {exc}") from exc

        path = Path(raw_path)
        self._paths.append(path)
        try:
            with os.fdopen(fd, "wb") as handle:
                if content is not None:
                    payload = content.encode("utf-8") if isinstance(content, str) else content
                    handle.write(payload)
        except OSError as exc:
            raise TempFileError(f"Unable to write temporary file '{path}': {exc}") from exc

        logger.debug("created temporary file %s", path)
        return path

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def discard(self, path: Path) -> None:
        """Remove a single registered file ahead of the final cleanup."""
        if path not in self._paths:
            return
        self._paths.remove(path)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise TempFileError(f"Unable to remove temporary file '{path}': {exc}") from exc
        logger.debug("removed temporary file %s", path)

    def cleanup(self) -> list[Path]:
        """Remove every registered file once, returning the paths processed."""
        removed = list(self._paths)
        self._paths.clear()
        failures: list[tuple[Path, OSError]] = []
        for path in removed:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                failures.append((path, exc))
            else:
                logger.debug("removed temporary file %s", path)

        if failures:
            _, first = failures[0]
            detail = ", ".join(str(failed) for failed, _ in failures)
            raise TempFileError(f"Unable to remove temporary files: {detail}") from first
        return removed

    def __iter__(self) -> Iterator[Path]:
        return iter(tuple(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __enter__(self) -> TempFileRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()


__all__ = ["TempFileRegistry"]
