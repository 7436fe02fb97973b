"""Tests for ralph.workflow.archive module."""

import json
import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from conftest import make_prd, make_story
from ralph.prd.progress import progress_header
from ralph.workflow.archive import (
    archive_folder_name,
    archive_on_branch_change,
    read_last_branch,
    write_last_branch,
)

NOW = datetime(2026, 5, 2, 8, 0, 0)


@pytest.fixture
def project(tmp_path, config, write_prd):
    """PRD on ralph/b, progress log with history, marker saying ralph/a."""
    write_prd(make_prd([make_story("US-001", 1, passes=True)], branch="ralph/b"))
    config.progress_path.write_text("# Ralph Progress Log\nStarted: earlier\n---\nold learnings\n")
    write_last_branch(config.last_branch_path, "ralph/a")
    return config


class TestArchiveFolderName:

    def test_strips_prefix(self):
        assert archive_folder_name("ralph/a", "ralph/", NOW) == "2026-05-02-a"

    def test_no_prefix_present(self):
        assert archive_folder_name("login-flow", "ralph/", NOW) == "2026-05-02-login-flow"

    def test_other_namespace_flattened(self):
        assert archive_folder_name("feature/auth/v2", "ralph/", NOW) == "2026-05-02-feature-auth-v2"

    def test_custom_prefix(self):
        assert archive_folder_name("feature/auth", "feature/", NOW) == "2026-05-02-auth"


class TestMarker:

    def test_missing_marker(self, tmp_path):
        assert read_last_branch(tmp_path / ".last-branch") is None

    def test_round_trip(self, tmp_path):
        path = tmp_path / ".last-branch"
        write_last_branch(path, "ralph/x")
        assert path.read_text() == "ralph/x\n"
        assert read_last_branch(path) == "ralph/x"

    def test_surrounding_whitespace_kept(self, tmp_path):
        path = tmp_path / ".last-branch"
        write_last_branch(path, " ralph/x ")
        assert read_last_branch(path) == " ralph/x "


class TestArchiveOnBranchChange:
    """Tests for archive_on_branch_change."""

    def test_first_run_records_branch_only(self, config, write_prd):
        write_prd(make_prd([], branch="ralph/a"))

        result = archive_on_branch_change(config, "ralph/a", NOW)

        assert result.first_run is True
        assert result.archived is False
        assert read_last_branch(config.last_branch_path) == "ralph/a"
        assert not config.archive_dir.exists()

    def test_same_branch_is_noop(self, project):
        write_last_branch(project.last_branch_path, "ralph/b")
        progress_before = project.progress_path.read_text()

        result = archive_on_branch_change(project, "ralph/b", NOW)

        assert result.archived is False
        assert not project.archive_dir.exists()
        assert project.progress_path.read_text() == progress_before

    def test_branch_change_archives_and_resets(self, project):
        prd_before = project.prd_path.read_text()
        progress_before = project.progress_path.read_text()

        result = archive_on_branch_change(project, "ralph/b", NOW)

        folder = project.archive_dir / "2026-05-02-a"
        assert result.archived is True
        assert result.previous_branch == "ralph/a"
        assert result.archive_path == folder
        assert [p.name for p in project.archive_dir.iterdir()] == ["2026-05-02-a"]
        assert (folder / "prd.json").read_text() == prd_before
        assert (folder / "progress.txt").read_text() == progress_before
        assert project.progress_path.read_text() == progress_header(NOW)
        assert read_last_branch(project.last_branch_path) == "ralph/b"

    def test_second_call_does_nothing(self, project):
        archive_on_branch_change(project, "ralph/b", NOW)
        project.progress_path.write_text(progress_header(NOW) + "new work\n")

        result = archive_on_branch_change(project, "ralph/b", NOW)

        assert result.archived is False
        assert len(list(project.archive_dir.iterdir())) == 1
        assert project.progress_path.read_text().endswith("new work\n")

    def test_missing_progress_log_skipped(self, project):
        project.progress_path.unlink()

        result = archive_on_branch_change(project, "ralph/b", NOW)

        folder = project.archive_dir / "2026-05-02-a"
        assert result.archived is True
        assert (folder / "prd.json").exists()
        assert not (folder / "progress.txt").exists()
        assert any("progress.txt" in note for note in result.skipped)
        assert project.progress_path.read_text() == progress_header(NOW)

    def test_same_day_collision_overwrites(self, project):
        folder = project.archive_dir / "2026-05-02-a"
        folder.mkdir(parents=True)
        (folder / "prd.json").write_text("stale")

        archive_on_branch_change(project, "ralph/b", NOW)

        assert json.loads((folder / "prd.json").read_text())["branchName"] == "ralph/b"

    def test_copy_failure_is_not_fatal(self, project, caplog):
        caplog.set_level(logging.WARNING)

        with patch("ralph.workflow.archive.shutil.copy2", side_effect=PermissionError("denied")):
            result = archive_on_branch_change(project, "ralph/b", NOW)

        assert "Failed to archive" in caplog.text
        assert len(result.skipped) == 2
        assert result.copied == []
        assert project.progress_path.read_text() == progress_header(NOW)
        assert read_last_branch(project.last_branch_path) == "ralph/b"

    def test_empty_current_branch_never_archives(self, project):
        result = archive_on_branch_change(project, "", NOW)

        assert result.archived is False
        assert not project.archive_dir.exists()
        assert read_last_branch(project.last_branch_path) == "ralph/a"

    def test_empty_marker_never_archives(self, project):
        project.last_branch_path.write_text("\n")

        result = archive_on_branch_change(project, "ralph/b", NOW)

        assert result.archived is False
        assert read_last_branch(project.last_branch_path) == "ralph/b"

    def test_padded_branch_is_idempotent(self, project):
        write_last_branch(project.last_branch_path, "ralph/b ")
        progress_before = project.progress_path.read_text()

        result = archive_on_branch_change(project, "ralph/b ", NOW)

        assert result.archived is False
        assert not project.archive_dir.exists()
        assert project.progress_path.read_text() == progress_before
