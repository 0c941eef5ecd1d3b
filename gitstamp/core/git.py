"""GitClient — the two git queries gitstamp needs, run as an opaque oracle."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from gitstamp.core.command_runner import CommandRunner

logger = logging.getLogger(__name__)

REV_PARSE_HEAD = ("rev-parse", "HEAD")
STATUS_PORCELAIN = ("status", "--porcelain")


class GitCommandError(RuntimeError):
    """A git invocation exited non-zero.

    Carries the exit code and the captured stderr of the failed command.
    """

    def __init__(self, exit_code: int, errors: str) -> None:
        super().__init__(errors)
        self.exit_code = exit_code
        self.errors = errors


class GitClient:
    """Runs git commands against one checkout.

    Parameters
    ----------
    runner:
        Executes the git process.
    working_directory:
        The project root; git always runs there regardless of the
        process cwd.
    executable:
        Name or path of the git binary.
    strict:
        Default failure mode.  When ``True`` failed commands raise
        :class:`GitCommandError`; otherwise they are logged and ``None``
        is returned.
    """

    def __init__(
        self,
        runner: CommandRunner,
        working_directory: Path,
        *,
        executable: str = "git",
        strict: bool = False,
    ) -> None:
        self._runner = runner
        self._working_directory = Path(working_directory)
        self._executable = executable
        self._strict = strict

    @property
    def working_directory(self) -> Path:
        return self._working_directory

    def run(self, arguments: Sequence[str], *, strict: bool | None = None) -> str | None:
        """Run ``git <arguments>`` and return its stdout.

        On failure returns ``None``, or raises :class:`GitCommandError`
        if *strict* (falling back to the client default) is set.
        """
        result = self._runner.run(self._executable, arguments, self._working_directory)
        if result.ok:
            return result.stdout

        error = GitCommandError(result.exit_code, result.stderr)
        if strict is None:
            strict = self._strict
        if strict:
            raise error

        logger.error(
            "Unable to get info from repo, is git available on PATH and "
            "initialized for the project?\nCommand: %s %s\nError: %s",
            self._executable,
            " ".join(arguments),
            error,
        )
        return None

    def rev_parse_head(self, *, strict: bool | None = None) -> str | None:
        """Full identifier of the current commit."""
        return self.run(REV_PARSE_HEAD, strict=strict)

    def status_porcelain(self, *, strict: bool | None = None) -> str | None:
        """Changed and untracked paths in short form; ``""`` when clean."""
        return self.run(STATUS_PORCELAIN, strict=strict)
