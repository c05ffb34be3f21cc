# ABOUTME: Unit tests for environment-driven settings.
# ABOUTME: Tests defaults, overrides, and rejection of bad timeout values.

from pathlib import Path

import pytest

from novelnoted.config import ConfigError, Settings, load_settings
from novelnoted.metadata.googlebooks import GOOGLE_BOOKS_URL
from novelnoted.store.connection import DEFAULT_DB_PATH


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings({})
        assert settings == Settings()
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.google_books_api_key is None
        assert settings.google_books_url == GOOGLE_BOOKS_URL
        assert settings.http_timeout == 30.0

    def test_overrides(self, tmp_path: Path) -> None:
        settings = load_settings(
            {
                "NOVELNOTED_DB": str(tmp_path / "books.db"),
                "NOVELNOTED_GOOGLE_BOOKS_API_KEY": " key-123 ",
                "NOVELNOTED_GOOGLE_BOOKS_URL": "http://localhost:8080/volumes",
                "NOVELNOTED_HTTP_TIMEOUT": "2.5",
            }
        )
        assert settings.db_path == tmp_path / "books.db"
        assert settings.google_books_api_key == "key-123"
        assert settings.google_books_url == "http://localhost:8080/volumes"
        assert settings.http_timeout == 2.5

    def test_blank_values_fall_back(self) -> None:
        settings = load_settings({"NOVELNOTED_DB": "  ", "NOVELNOTED_GOOGLE_BOOKS_API_KEY": ""})
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.google_books_api_key is None

    def test_db_path_expands_home(self) -> None:
        settings = load_settings({"NOVELNOTED_DB": "~/books.db"})
        assert settings.db_path == Path.home() / "books.db"

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_timeout(self, value: str) -> None:
        with pytest.raises(ConfigError, match="NOVELNOTED_HTTP_TIMEOUT"):
            load_settings({"NOVELNOTED_HTTP_TIMEOUT": value})

    def test_reads_process_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("NOVELNOTED_DB", str(tmp_path / "env.db"))
        assert load_settings().db_path == tmp_path / "env.db"
