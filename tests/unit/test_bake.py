"""Tests for ProvenanceBaker and the build hooks — warnings, dual write, cleanup."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gitstamp.core.bake import ProvenanceBaker
from gitstamp.core.build_hooks import post_build_success, pre_build, run_build
from gitstamp.core.command_runner import CommandResult, CommandRunner
from gitstamp.core.git import REV_PARSE_HEAD, STATUS_PORCELAIN, GitClient, GitCommandError
from gitstamp.core.provenance import BakedProvenance, LiveProvenance, ProvenanceContext
from gitstamp.core.resource_store import DirectoryResourceStore
from gitstamp.routing.dispatcher import ProvenancePublisher
from gitstamp.routing.sinks import ArtifactsNotFoundError
from gitstamp.routing.sinks.local_file import TextFileSink

FULL_HASH = "0123456789abcdef0123456789abcdef01234567"


def _clock() -> datetime:
    return datetime(2024, 3, 7, 9, 5, 1, tzinfo=timezone.utc)


@pytest.fixture
def sinks(tmp_path: Path) -> tuple[TextFileSink, TextFileSink]:
    resources = TextFileSink(
        tmp_path / ".gitstamp" / "resources",
        "resources",
        cleanup_root=tmp_path / ".gitstamp",
    )
    bundle = TextFileSink(tmp_path / "dist", "bundle")
    return resources, bundle


@pytest.fixture
def make_baker(fake_runner, sinks, tmp_path: Path):
    """Factory: a baker whose git reports *hash* and *status*."""

    def _factory(hash: str | None = FULL_HASH, status: str | None = "", strict: bool = False):
        if hash is not None:
            fake_runner.results[REV_PARSE_HEAD] = CommandResult(exit_code=0, stdout=hash)
        if status is not None:
            fake_runner.results[STATUS_PORCELAIN] = CommandResult(exit_code=0, stdout=status)
        live = LiveProvenance(GitClient(fake_runner, tmp_path, strict=strict), clock=_clock)
        return ProvenanceBaker(live, ProvenancePublisher(list(sinks)))

    return _factory


class TestGenerateProvenanceFiles:
    def test_writes_both_trees(self, make_baker, sinks):
        record = make_baker().generate_provenance_files()

        assert record.hash == FULL_HASH
        assert record.build_time == "2024/03/07 09:05:01"
        for sink in sinks:
            assert sink.read_entries() == {
                "buildTime.txt": "2024/03/07 09:05:01",
                "gitHash.txt": FULL_HASH,
                "gitStatus.txt": "",
            }

    def test_clean_build_has_no_warnings(self, make_baker, caplog):
        with caplog.at_level(logging.WARNING, logger="gitstamp.core.bake"):
            make_baker().generate_provenance_files()
        assert [r for r in caplog.records if r.name == "gitstamp.core.bake"] == []

    def test_dirty_tree_warns(self, make_baker, caplog):
        with caplog.at_level(logging.WARNING, logger="gitstamp.core.bake"):
            record = make_baker(status=" M src/app.py").generate_provenance_files()
        assert record.status == " M src/app.py"
        assert "uncommitted changes" in caplog.text

    def test_missing_git_bakes_empty_hash_and_warns(self, make_baker, sinks, caplog):
        with caplog.at_level(logging.WARNING):
            record = make_baker(hash=None, status=None).generate_provenance_files()
        assert record.hash == ""
        assert "No git hash included in build." in caplog.text
        assert sinks[0].read_entries()["gitHash.txt"] == ""

    def test_strict_git_aborts_before_writing(self, make_baker, sinks):
        baker = make_baker(hash=None, strict=True)
        with pytest.raises(GitCommandError):
            baker.generate_provenance_files()
        assert sinks[0].read_entries() == {}

    def test_round_trip_through_baked_path(self, make_baker, tmp_path: Path):
        written = make_baker(status=" M a.txt\n?? b.txt").generate_provenance_files()

        store = DirectoryResourceStore(tmp_path / ".gitstamp" / "resources")
        context = ProvenanceContext(BakedProvenance(store))

        assert context.record() == written
        assert context.hash_short == FULL_HASH[:8]


class TestDeleteTransientArtifacts:
    def test_removes_both_trees(self, make_baker, tmp_path: Path):
        baker = make_baker()
        baker.generate_provenance_files()

        assert baker.delete_transient_artifacts() == ["resources", "bundle"]
        assert not (tmp_path / ".gitstamp").exists()
        assert not (tmp_path / "dist" / "GitInfoInBuild").exists()
        assert (tmp_path / "dist").is_dir()

    def test_second_cleanup_fails_with_not_found(self, make_baker):
        baker = make_baker()
        baker.generate_provenance_files()
        baker.delete_transient_artifacts()

        with pytest.raises(ArtifactsNotFoundError) as excinfo:
            baker.delete_transient_artifacts()
        assert len(excinfo.value.missing) == 2

    def test_cleanup_without_bake_fails_with_not_found(self, make_baker):
        with pytest.raises(FileNotFoundError):
            make_baker().delete_transient_artifacts()

    def test_stale_artifacts_are_overwritten_by_next_bake(self, make_baker, sinks):
        make_baker(hash="stale").generate_provenance_files()
        make_baker(hash=FULL_HASH).generate_provenance_files()
        assert sinks[1].read_entries()["gitHash.txt"] == FULL_HASH


class TestBuildHooks:
    def test_pre_and_post(self, make_baker, tmp_path: Path):
        baker = make_baker()
        assert pre_build(baker).hash == FULL_HASH
        assert (tmp_path / "dist" / "GitInfoInBuild").is_dir()
        assert post_build_success(baker) == ["resources", "bundle"]

    def test_run_build_success_cleans_up(self, make_baker, tmp_path: Path):
        result = run_build(
            [sys.executable, "-c", "print('built')"],
            make_baker(),
            CommandRunner(),
            tmp_path,
        )
        assert result.ok
        assert result.stdout == "built"
        assert not (tmp_path / ".gitstamp").exists()

    def test_run_build_failure_leaves_artifacts(self, make_baker, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="gitstamp.core.build_hooks"):
            result = run_build(
                [sys.executable, "-c", "raise SystemExit(3)"],
                make_baker(),
                CommandRunner(),
                tmp_path,
            )
        assert result.exit_code == 3
        assert (tmp_path / ".gitstamp" / "resources" / "GitInfoInBuild" / "gitHash.txt").exists()
        assert "left in place" in caplog.text

    def test_run_build_bakes_before_running(self, make_baker, tmp_path: Path):
        hash_file = tmp_path / "dist" / "GitInfoInBuild" / "gitHash.txt"
        result = run_build(
            [sys.executable, "-c", f"print(open({str(hash_file)!r}).read())"],
            make_baker(),
            CommandRunner(),
            tmp_path,
        )
        assert result.stdout == FULL_HASH

    def test_run_build_keeps_result_when_build_removed_artifacts(
        self, make_baker, tmp_path: Path, caplog
    ):
        code = (
            "import shutil; shutil.rmtree('.gitstamp'); "
            "shutil.rmtree('dist/GitInfoInBuild'); print('built')"
        )
        with caplog.at_level(logging.WARNING, logger="gitstamp.core.build_hooks"):
            result = run_build(
                [sys.executable, "-c", code],
                make_baker(),
                CommandRunner(),
                tmp_path,
            )
        assert result.ok
        assert result.stdout == "built"
        assert "cleanup found nothing to remove" in caplog.text

    def test_run_build_requires_command(self, make_baker, tmp_path: Path):
        with pytest.raises(ValueError):
            run_build([], make_baker(), CommandRunner(), tmp_path)
