"""CommandRunner — runs one external process and captures its result.

Both stdout and stderr are redirected and drained concurrently by
``Popen.communicate()`` (via ``subprocess.run``), so a child that fills
one pipe while the parent waits on the other cannot deadlock.

The runner never raises for process-level failures.  A child that cannot
be launched is reported with exit code 127, a child killed on timeout
with exit code 124 (the shell conventions for both).
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

LAUNCH_FAILED_EXIT_CODE = 127
TIMEOUT_EXIT_CODE = 124


class CommandResult(BaseModel):
    """Exit code and captured output of one process run."""

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def trim_trailing_newline(text: str) -> str:
    """Remove exactly one trailing line break (``\\r\\n``, ``\\n`` or ``\\r``)."""
    for ending in ("\r\n", "\n", "\r"):
        if text.endswith(ending):
            return text[: -len(ending)]
    return text


class CommandRunner:
    """Executes a single external command per call, with no retry.

    Parameters
    ----------
    timeout:
        Seconds to wait for the child before killing it.  ``None`` waits
        indefinitely.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def run(
        self,
        executable: str,
        arguments: Sequence[str],
        working_directory: Path | str,
    ) -> CommandResult:
        """Run *executable* with *arguments* inside *working_directory*.

        Returns the exit code and both output streams, each with one
        trailing newline trimmed.
        """
        argv = [executable, *arguments]
        logger.debug("Running %s in %s", argv, working_directory)

        try:
            completed = subprocess.run(
                argv,
                cwd=working_directory,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.debug("Command %s timed out after %s seconds", argv, self._timeout)
            return CommandResult(
                exit_code=TIMEOUT_EXIT_CODE,
                stderr=f"Command timed out after {self._timeout} seconds",
            )
        except OSError as exc:
            logger.debug("Could not launch %s: %s", argv, exc)
            return CommandResult(exit_code=LAUNCH_FAILED_EXIT_CODE, stderr=str(exc))

        return CommandResult(
            exit_code=completed.returncode,
            stdout=trim_trailing_newline(completed.stdout or ""),
            stderr=trim_trailing_newline(completed.stderr or ""),
        )
