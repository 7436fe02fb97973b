"""Tests for ralph.lib.envparse module."""

import pytest

from ralph.lib.envparse import EnvParseError, load_env, parse_env_text


class TestParseEnvText:
    """Tests for parse_env_text."""

    def test_basic_pairs(self):
        env = parse_env_text('PRD_FILE=docs/prd.json\nSTRICT_ORDER="true"\n')
        assert env == {"PRD_FILE": "docs/prd.json", "STRICT_ORDER": "true"}

    def test_skips_comments_and_blank_lines(self):
        env = parse_env_text("# settings\n\nMAX_ITERATIONS=5\n")
        assert env == {"MAX_ITERATIONS": "5"}

    def test_single_quotes_stripped(self):
        assert parse_env_text("BRANCH_PREFIX='feature/'")["BRANCH_PREFIX"] == "feature/"

    def test_export_prefix_tolerated(self):
        assert parse_env_text("export PRD_FILE=prd.json") == {"PRD_FILE": "prd.json"}

    def test_missing_equals_raises(self):
        with pytest.raises(EnvParseError) as exc_info:
            parse_env_text("PRD_FILE\n")
        assert exc_info.value.lineno == 1
        assert "no '='" in str(exc_info.value)

    def test_lowercase_key_rejected(self):
        with pytest.raises(EnvParseError, match="invalid key"):
            parse_env_text("prd_file=x")

    @pytest.mark.parametrize("value", ["$(whoami)", "`id`", "${HOME}", "a;b", "a && b", "a | b"])
    def test_forbidden_patterns_rejected(self, value):
        with pytest.raises(EnvParseError, match="forbidden pattern"):
            parse_env_text(f"PRD_FILE={value}")

    def test_reports_line_number(self):
        with pytest.raises(EnvParseError) as exc_info:
            parse_env_text("A=1\nB=2\nbad line\n")
        assert exc_info.value.lineno == 3


class TestLoadEnv:
    """Tests for load_env."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_env(tmp_path / "ralph.env")

    def test_reads_file(self, tmp_path):
        path = tmp_path / "ralph.env"
        path.write_text("ARCHIVE_DIR=old-runs\n")
        assert load_env(path) == {"ARCHIVE_DIR": "old-runs"}
