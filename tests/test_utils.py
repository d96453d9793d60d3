"""Tests for utility functions."""

from datetime import timedelta

from timed_operations import utils


class TestTotalMilliseconds:
    """Tests for total_milliseconds function."""

    def test_converts_seconds(self):
        """Test converting whole seconds."""
        assert utils.total_milliseconds(timedelta(seconds=2)) == 2000.0

    def test_keeps_fraction(self):
        """Test that sub-millisecond precision is kept."""
        assert utils.total_milliseconds(timedelta(microseconds=1500)) == 1.5

    def test_zero(self):
        """Test converting zero."""
        assert utils.total_milliseconds(timedelta(0)) == 0.0

    def test_returns_float(self):
        """Test that the result is a float."""
        assert isinstance(utils.total_milliseconds(timedelta(milliseconds=3)), float)


class TestGetEnvSetting:
    """Tests for get_env_setting function."""

    def test_reads_from_file(self, tmp_path, monkeypatch):
        """Test reading setting from file."""
        secrets_dir = tmp_path / "secrets"
        secrets_dir.mkdir()

        secret_file = secrets_dir / "TEST_SETTING"
        secret_file.write_text("my-value\n")

        monkeypatch.delenv("TEST_SETTING", raising=False)

        result = utils.get_env_setting("TEST_SETTING", path=secrets_dir)
        assert result == "my-value"

    def test_reads_from_environment(self, monkeypatch):
        """Test reading setting from environment variable."""
        monkeypatch.setenv("TEST_SETTING", "env-value")

        result = utils.get_env_setting("TEST_SETTING")
        assert result == "env-value"

    def test_environment_wins_over_file(self, tmp_path, monkeypatch):
        """Test that the environment is checked before the file."""
        (tmp_path / "TEST_SETTING").write_text("file-value")
        monkeypatch.setenv("TEST_SETTING", "env-value")

        assert utils.get_env_setting("TEST_SETTING", path=tmp_path) == "env-value"

    def test_defaults_to_secrets_in_working_directory(self, tmp_path, monkeypatch):
        """Test that the default path is ./secrets."""
        (tmp_path / "secrets").mkdir()
        (tmp_path / "secrets" / "TEST_SETTING").write_text("cwd-value")
        monkeypatch.delenv("TEST_SETTING", raising=False)
        monkeypatch.chdir(tmp_path)

        assert utils.get_env_setting("TEST_SETTING") == "cwd-value"

    def test_returns_none_when_not_found(self, tmp_path, monkeypatch):
        """Test that a missing setting returns None."""
        monkeypatch.delenv("MISSING_SETTING", raising=False)

        assert utils.get_env_setting("MISSING_SETTING", path=tmp_path) is None

    def test_empty_file_is_missing(self, tmp_path, monkeypatch):
        """Test that an empty file counts as not set."""
        (tmp_path / "EMPTY_SETTING").write_text("\n")
        monkeypatch.delenv("EMPTY_SETTING", raising=False)

        assert utils.get_env_setting("EMPTY_SETTING", path=tmp_path) is None
