"""Process lifecycle for the wkhtmltopdf conversion binary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import shutil
import subprocess
import threading

from htmlpdf.core.config import DEFAULT_BINARY
from htmlpdf.core.exceptions import GenerationFailed
from htmlpdf.core.sink import ResponseSink, flush_sink, sink_fileno


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProcessOutcome:
    """Exit status of a conversion run plus any captured text."""

    returncode: int
    output: str = ""


class WkhtmltopdfRunner:
    """Utility class encapsulating invocations of the conversion binary."""

    def __init__(self, executable: str | None = None) -> None:
        self._explicit_executable = executable
        self._cached_executable: str | None = None

    def is_available(self) -> bool:
        """Return True when the binary can be located."""
        try:
            return self._resolve_executable(optional=True) is not None
        except GenerationFailed:
            return False

    def reset(self) -> None:
        """Clear cached executable lookup results."""
        self._cached_executable = None

    def resolve_executable(self) -> str:
        executable = self._resolve_executable(optional=False)
        assert executable is not None
        return executable

    def version(self) -> str:
        """Return the version banner printed by the binary."""
        argv = [self.resolve_executable(), "--version"]
        outcome = self.capture(argv)
        if outcome.returncode != 0:
            raise GenerationFailed(
                f"'{argv[0]} --version' exited with status {outcome.returncode}",
                returncode=outcome.returncode,
                output=outcome.output,
                command=argv,
            )
        return outcome.output.strip()

    def capture(self, argv: Sequence[str], *, timeout: float | None = None) -> ProcessOutcome:
        """Run ``argv`` collecting standard output and error into one buffer."""
        command = list(argv)
        try:
            result = subprocess.run(
                command,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise GenerationFailed(
                f"Conversion timed out after {timeout} seconds",
                output=_decode(exc.output),
                command=command,
            ) from exc
        except OSError as exc:
            raise self._launch_failure(command, exc) from exc

        return ProcessOutcome(returncode=result.returncode, output=result.stdout or "")

    def stream(
        self,
        argv: Sequence[str],
        sink: ResponseSink,
        *,
        timeout: float | None = None,
        chunk_size: int = 64 * 1024,
    ) -> ProcessOutcome:
        """Run ``argv`` with its standard output delivered to ``sink``."""
        command = list(argv)
        descriptor = sink_fileno(sink)
        flush_sink(sink)
        stdout = descriptor if descriptor is not None else subprocess.PIPE

        try:
            process = subprocess.Popen(command, stdout=stdout)
        except OSError as exc:
            raise self._launch_failure(command, exc) from exc

        timed_out = threading.Event()
        timer: threading.Timer | None = None
        if timeout is not None:

            def _expire() -> None:
                timed_out.set()
                process.kill()

            timer = threading.Timer(timeout, _expire)
            timer.daemon = True
            timer.start()

        try:
            with process:
                reader = process.stdout
                if reader is not None:
                    try:
                        for chunk in iter(lambda: reader.read(chunk_size), b""):
                            sink.write(chunk)
                    except BaseException:
                        process.kill()
                        raise
                returncode = process.wait()
        finally:
            if timer is not None:
                timer.cancel()

        if descriptor is None:
            flush_sink(sink)
        # The timer may fire after a clean exit; only a failed run timed out.
        if timed_out.is_set() and returncode != 0:
            raise GenerationFailed(
                f"Conversion timed out after {timeout} seconds",
                returncode=returncode,
                command=command,
            )
        return ProcessOutcome(returncode=returncode)

    def _launch_failure(self, command: list[str], exc: OSError) -> GenerationFailed:
        binary = command[0] if command else "<empty>"
        if isinstance(exc, FileNotFoundError):
            self._cached_executable = None
            message = f"Conversion binary '{binary}' could not be located."
        elif isinstance(exc, PermissionError):
            message = f"Conversion binary '{binary}' is not executable."
        else:
            message = f"Failed to invoke '{binary}': {exc}"
        logger.debug("launch of %s failed", binary, exc_info=exc)
        return GenerationFailed(message, output=str(exc), command=command)

    def _resolve_executable(self, *, optional: bool) -> str | None:
        if self._explicit_executable:
            return self._explicit_executable

        if self._cached_executable:
            return self._cached_executable

        try:
            executable = shutil.which(DEFAULT_BINARY)
        except (AssertionError, OSError, ValueError):
            executable = None

        if executable:
            self._cached_executable = executable
            return executable

        if optional:
            return None

        raise GenerationFailed(f"{DEFAULT_BINARY} is required but was not found on PATH.")


def _decode(payload: str | bytes | None) -> str:
    if payload is None:
        return ""
    if isinstance(payload, bytes):
        return payload.decode("utf-8", errors="replace")
    return payload


__all__ = ["ProcessOutcome", "WkhtmltopdfRunner"]
