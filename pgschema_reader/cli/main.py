"""CLI commands for pgschema-reader."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import psycopg

from pgschema_reader.config import CONFIG_FILENAME, Config
from pgschema_reader.core.models import Schema, schema_to_dict
from pgschema_reader.core.reader import SchemaReader
from pgschema_reader.exceptions import SchemaReaderError


@click.group()
@click.version_option(package_name="pgschema-reader")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """pgschema-reader - typed PostgreSQL schema from the system catalog."""
    logging.basicConfig(
        format="[%(levelname)s] %(asctime)s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


@cli.command()
@click.argument("path", type=click.Path(path_type=Path), default=CONFIG_FILENAME)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path, force: bool) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    Config().to_toml(path)
    click.echo(f"Wrote {path}")


@cli.command()
@click.option("--url", help="PostgreSQL connection URL (overrides config)")
@click.option("--schema", "schemas", multiple=True, help="Schema to read (repeatable)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help=f"Path to {CONFIG_FILENAME} (default: search from current directory)",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect(
    url: Optional[str],
    schemas: tuple[str, ...],
    config_path: Optional[Path],
    output_json: bool,
) -> None:
    """Read the database schema and print it."""
    try:
        config = _load_config(config_path, required=url is None)
        if url is not None:
            config.database.url = url
        if schemas:
            config.database.schemas = list(schemas)

        with psycopg.connect(config.database.url) as conn:
            schema = SchemaReader.from_config(conn, config).read_schema()

    except (SchemaReaderError, psycopg.Error) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(schema_to_dict(schema), indent=2))
    else:
        _print_summary(schema)


def _load_config(config_path: Optional[Path], required: bool) -> Config:
    if config_path is not None:
        return Config.from_toml(config_path)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        if required:
            raise
        return Config()


def _print_summary(schema: Schema) -> None:
    for table in schema.tables:
        click.echo(f"Table: {table.name}")
        for field in table.fields:
            flags = []
            if field.primary_key:
                flags.append("primary key")
            if not field.nullable:
                flags.append("not null")
            if field.default is not None:
                flags.append(f"default {field.default!r}")
            suffix = f" ({', '.join(flags)})" if flags else ""
            click.echo(f"  {field.name}: {_type_name(field.type)}{suffix}")
        for index in table.indexes:
            kind = "unique index" if index.unique else "index"
            click.echo(f"  {kind} {index.name} using {index.type}")
        for check in table.checks:
            click.echo(f"  check {check.name}: {check.condition}")
        for fkey in table.foreign_keys:
            keys = ", ".join(fkey.keys) if fkey.keys else "primary key"
            click.echo(
                f"  foreign key {fkey.name}: ({', '.join(fkey.fields)}) "
                f"-> {fkey.referenced_table} ({keys})"
            )

    for enum in schema.enums:
        click.echo(f"Enum: {enum.name} [{', '.join(enum.values)}]")
    for extension in schema.extensions:
        click.echo(f"Extension: {extension.name}")


def _type_name(field_type) -> str:
    return getattr(field_type, "value", field_type)


if __name__ == "__main__":
    cli()
