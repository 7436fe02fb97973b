"""Tests for ralph.prd.progress module."""

from datetime import datetime

from ralph.prd.progress import (
    append_progress,
    ensure_progress_log,
    progress_header,
    reset_progress_log,
)

NOW = datetime(2026, 3, 14, 9, 30, 0)


class TestHeader:

    def test_header_lines(self):
        lines = progress_header(NOW).splitlines()
        assert lines == ["# Ralph Progress Log", "Started: 2026-03-14T09:30:00", "---"]


class TestEnsureProgressLog:

    def test_creates_when_missing(self, tmp_path):
        path = tmp_path / "progress.txt"
        assert ensure_progress_log(path, NOW) is True
        assert path.read_text() == progress_header(NOW)

    def test_existing_log_untouched(self, tmp_path):
        path = tmp_path / "progress.txt"
        path.write_text("# Ralph Progress Log\nold entries\n")
        assert ensure_progress_log(path, NOW) is False
        assert path.read_text() == "# Ralph Progress Log\nold entries\n"


class TestResetProgressLog:

    def test_truncates_to_header(self, tmp_path):
        path = tmp_path / "progress.txt"
        path.write_text("lots of history\n" * 20)
        reset_progress_log(path, NOW)
        assert path.read_text() == progress_header(NOW)


class TestAppendProgress:

    def test_appends_entry_after_header(self, tmp_path):
        path = tmp_path / "progress.txt"
        append_progress(path, "Learned the auth module uses JWT", NOW)

        content = path.read_text()
        assert content.startswith(progress_header(NOW))
        assert "## 2026-03-14T09:30:00\nLearned the auth module uses JWT\n---\n" in content

    def test_never_rewrites_old_entries(self, tmp_path):
        path = tmp_path / "progress.txt"
        append_progress(path, "first", NOW)
        before = path.read_text()

        append_progress(path, "second", datetime(2026, 3, 15))

        after = path.read_text()
        assert after.startswith(before)
        assert after.index("first") < after.index("second")
