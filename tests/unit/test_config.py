"""Tests for configuration loading."""

from pathlib import Path

import pytest

from pgschema_reader.config import CONFIG_FILENAME, Config
from pgschema_reader.core.reader import SchemaReader
from pgschema_reader.exceptions import ConfigFileNotFoundError


class TestConfigDefaults:
    """Tests for default configuration."""

    def test_defaults(self) -> None:
        """Test default schemas and excluded extensions."""
        config = Config()

        assert config.database.schemas == ["public"]
        assert config.reader.excluded_extensions == ["plpgsql"]

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test database URL from environment."""
        monkeypatch.setenv("PGSCHEMA_DATABASE_URL", "postgresql://db.example/app")

        assert Config().database.url == "postgresql://db.example/app"


class TestConfigToml:
    """Tests for TOML loading and writing."""

    def test_from_toml(self, tmp_path: Path) -> None:
        """Test loading sections from a TOML file."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text(
            '[database]\nurl = "postgresql://localhost/shop"\nschemas = ["shop", "billing"]\n'
            '\n[reader]\nexcluded_extensions = ["plpgsql", "pg_stat_statements"]\n'
        )

        config = Config.from_toml(path)

        assert config.database.url == "postgresql://localhost/shop"
        assert config.database.schemas == ["shop", "billing"]
        assert config.reader.excluded_extensions == ["plpgsql", "pg_stat_statements"]

    def test_round_trip(self, tmp_path: Path) -> None:
        """Test to_toml output loads back to the same values."""
        path = tmp_path / CONFIG_FILENAME
        config = Config()
        config.database.schemas = ["app"]

        config.to_toml(path)
        loaded = Config.from_toml(path)

        assert loaded.database.schemas == ["app"]
        assert loaded.database.url == config.database.url

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test missing file raises a helpful error."""
        with pytest.raises(ConfigFileNotFoundError):
            Config.from_toml(tmp_path / "missing.toml")

    def test_find_and_load_walks_up(self, tmp_path: Path) -> None:
        """Test config is found in a parent directory."""
        (tmp_path / CONFIG_FILENAME).write_text('[database]\nschemas = ["found"]\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert Config.find_and_load(nested).database.schemas == ["found"]

    def test_find_and_load_not_found(self, tmp_path: Path) -> None:
        """Test error is also a FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config.find_and_load(tmp_path)


def test_reader_from_config(fake_conn):
    """Should build a reader with the configured scope."""
    config = Config()
    config.database.schemas = ["app"]
    config.reader.excluded_extensions = []

    reader = SchemaReader.from_config(fake_conn, config)

    assert reader.schemas == ["app"]
    assert reader.excluded_extensions == []
