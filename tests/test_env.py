"""
Tests for .env loading and settings.
"""

import os

import pytest
from pathlib import Path

from factorymatch.env import Settings, load_env, load_settings

ENV_VARS = (
    "FACTORYMATCH_DB_PATH",
    "FACTORYMATCH_PAGE_SIZE",
    "FACTORYMATCH_DEDUP_CHUNK",
    "FACTORYMATCH_LOG_LEVEL",
    "FACTORYMATCH_LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so values written by load_dotenv are undone after each test
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings() == Settings()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("FACTORYMATCH_DB_PATH", "/tmp/roster.db")
        monkeypatch.setenv("FACTORYMATCH_PAGE_SIZE", "2500")
        monkeypatch.setenv("FACTORYMATCH_DEDUP_CHUNK", "50")
        monkeypatch.setenv("FACTORYMATCH_LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.db_path == Path("/tmp/roster.db")
        assert settings.page_size == 2500
        assert settings.dedup_chunk_size == 50
        assert settings.log_level == "DEBUG"

    def test_blank_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("FACTORYMATCH_PAGE_SIZE", " ")
        assert load_settings().page_size == 1000

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_invalid_integer(self, monkeypatch, raw):
        monkeypatch.setenv("FACTORYMATCH_DEDUP_CHUNK", raw)
        with pytest.raises(ValueError):
            load_settings()

    def test_page_size_floor(self, monkeypatch):
        """Fetch pages hold at least 1000 rows."""
        monkeypatch.setenv("FACTORYMATCH_PAGE_SIZE", "999")
        with pytest.raises(ValueError, match="at least 1000"):
            load_settings()


class TestLoadEnv:
    def test_reads_dotenv_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("FACTORYMATCH_PAGE_SIZE=5000\n")
        monkeypatch.chdir(tmp_path)

        load_env()

        assert load_settings().page_size == 5000

    def test_existing_environment_wins(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("FACTORYMATCH_LOG_LEVEL=DEBUG\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FACTORYMATCH_LOG_LEVEL", "WARNING")

        load_env()

        assert os.environ["FACTORYMATCH_LOG_LEVEL"] == "WARNING"

    def test_missing_file_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        load_env()
        assert load_settings() == Settings()
