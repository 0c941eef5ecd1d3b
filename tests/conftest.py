"""Shared test fixtures for gitstamp."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from gitstamp.config import StampConfig
from gitstamp.core.command_runner import CommandResult


# ---------------------------------------------------------------------------
# Fakes — shared across test modules
# ---------------------------------------------------------------------------


class FakeRunner:
    """A CommandRunner stand-in that returns scripted results.

    Results are keyed by the argument tuple; unknown commands exit 1.
    """

    def __init__(self, results: dict[tuple[str, ...], CommandResult] | None = None) -> None:
        self.results = dict(results or {})
        self.calls: list[tuple[str, tuple[str, ...], Path]] = []

    def run(
        self,
        executable: str,
        arguments: Sequence[str],
        working_directory: Path | str,
    ) -> CommandResult:
        args = tuple(arguments)
        self.calls.append((executable, args, Path(working_directory)))
        return self.results.get(
            args, CommandResult(exit_code=1, stderr=f"unexpected command: {args}")
        )


class CountingStore:
    """A dict-backed ResourceStore that counts reads per key."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self.entries = dict(entries or {})
        self.reads: list[str] = []

    def read_text(self, key: str) -> str | None:
        self.reads.append(key)
        return self.entries.get(key)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def counting_store() -> CountingStore:
    return CountingStore()


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GITSTAMP_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("GITSTAMP_"):
            monkeypatch.delenv(name)


@pytest.fixture
def stamp_config(tmp_path: Path) -> StampConfig:
    """A config rooted in a temp directory, ignoring any .env file."""
    return StampConfig(_env_file=None, project_root=tmp_path)


# ---------------------------------------------------------------------------
# Real git checkouts
# ---------------------------------------------------------------------------


def _git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def git() -> object:
    """Helper to run git in a repository: ``git(repo, "status")``."""
    return _git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A fresh repository with one commit and a clean working tree."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "builder@example.com")
    _git(repo, "config", "user.name", "Builder")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# sample\n", encoding="utf-8")
    (repo / ".gitignore").write_text(
        ".gitstamp/\n.gitstamp.meta\ndist/\n", encoding="utf-8"
    )
    _git(repo, "add", "README.md", ".gitignore")
    _git(repo, "commit", "-q", "-m", "initial")
    return repo


@pytest.fixture
def repo_config(git_repo: Path) -> StampConfig:
    """A config whose project root is the temp repository."""
    return StampConfig(_env_file=None, project_root=git_repo)
