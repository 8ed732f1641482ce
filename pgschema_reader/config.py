"""
Configuration management for pgschema-reader.

Loads and validates configuration from pgschema-reader.toml files using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pgschema_reader.exceptions import ConfigFileNotFoundError

CONFIG_FILENAME = "pgschema-reader.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="PGSCHEMA_DATABASE_")

    url: str = Field(
        default="postgresql://localhost/postgres",
        description="PostgreSQL connection URL",
    )
    schemas: list[str] = Field(
        default=["public"],
        description="Schemas to read tables and enums from",
    )


class ReaderConfig(BaseSettings):
    """Catalog reading configuration."""

    model_config = SettingsConfigDict(env_prefix="PGSCHEMA_READER_")

    excluded_extensions: list[str] = Field(
        default=["plpgsql"],
        description="Extensions left out of the schema (installed implicitly)",
    )


class Config(BaseSettings):
    """Main configuration for pgschema-reader."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to pgschema-reader.toml file

        Returns:
            Config instance

        Raises:
            ConfigFileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigFileNotFoundError(str(config_path))

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from pgschema-reader.toml.

        Searches for pgschema-reader.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            ConfigFileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise ConfigFileNotFoundError(f"{start_dir} or parent directories")

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write pgschema-reader.toml
        """
        config_path = Path(path)

        # Build TOML content manually for better formatting
        toml_content = f"""# pgschema-reader configuration

[database]
url = "{self.database.url}"
schemas = {_toml_list(self.database.schemas)}

[reader]
excluded_extensions = {_toml_list(self.reader.excluded_extensions)}
"""

        config_path.write_text(toml_content)


def _toml_list(values: list[str]) -> str:
    return "[" + ", ".join(f'"{value}"' for value in values) + "]"
