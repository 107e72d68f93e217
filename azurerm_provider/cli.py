"""
Command line interface for working with resource IDs.

Commands:
    shapes    List every registered resource ID shape
    parse     Parse an ID into its fields (JSON output)
    format    Build an ID from field values
    validate  Check an ID against a shape (exit code 1 when malformed)
"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import structlog
from rich.console import Console
from rich.table import Table

from .config import ConfigError, load_config
from .exceptions import MalformedResourceIdError
from .logging_config import configure_logging
from .resourceids import ShapeRegistry, build_default_registry

logger = structlog.get_logger(__name__)


def _registry(ctx: click.Context) -> ShapeRegistry:
    return ctx.obj["registry"]


def _id_type(ctx: click.Context, shape: str):
    try:
        return _registry(ctx).get(shape)
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="SHAPE") from e


@click.group()
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], config_path: Optional[Path]) -> None:
    """Parse, format and validate Azure resource IDs."""
    try:
        config = load_config(config_path, overrides={"logging.level": log_level})
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(config.logging.level.value, config.logging.json_output)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["registry"] = build_default_registry()


@cli.command()
@click.pass_context
def shapes(ctx: click.Context) -> None:
    """List every registered resource ID shape."""
    registry = _registry(ctx)

    table = Table(title="Resource ID Shapes", show_header=True, header_style="bold magenta")
    # Names stay whole so they can be pasted into `parse`/`format`
    names = registry.names()
    table.add_column("Shape", no_wrap=True, min_width=max(len(n) for n in names))
    table.add_column("Fields", overflow="fold")
    table.add_column("Template", overflow="fold")

    for name in names:
        shape = registry.get(name).shape()
        table.add_row(name, ", ".join(shape.field_names), shape.example())

    Console().print(table)


@cli.command()
@click.argument("shape")
@click.argument("resource_id")
@click.option(
    "--insensitive",
    is_flag=True,
    help="Match static segments case-insensitively",
)
@click.pass_context
def parse(ctx: click.Context, shape: str, resource_id: str, insensitive: bool) -> None:
    """Parse RESOURCE_ID as SHAPE and print its fields as JSON."""
    id_type = _id_type(ctx, shape)
    try:
        parsed = (
            id_type.parse_insensitively(resource_id)
            if insensitive
            else id_type.parse(resource_id)
        )
    except MalformedResourceIdError as e:
        logger.error("resource_id_malformed", **e.to_dict())
        raise click.ClickException(e.message) from e

    click.echo(json.dumps({"id": parsed.id(), **parsed.to_dict()}, indent=2))


@cli.command(name="format")
@click.argument("shape")
@click.argument("values", nargs=-1)
@click.pass_context
def format_id(ctx: click.Context, shape: str, values: Tuple[str, ...]) -> None:
    """Build a SHAPE ID from VALUES.

    VALUES are either positional (in declared order) or NAME=VALUE pairs.
    """
    registry = _registry(ctx)
    field_names = _id_type(ctx, shape).shape().field_names

    if values and all("=" in v for v in values):
        mapping = dict(v.split("=", 1) for v in values)
    elif len(values) == len(field_names):
        mapping = dict(zip(field_names, values))
    else:
        raise click.UsageError(
            f"{shape} expects {len(field_names)} values: {', '.join(field_names)}"
        )

    try:
        click.echo(registry.format(shape, mapping))
    except MalformedResourceIdError as e:
        raise click.ClickException(e.message) from e
    except ValueError as e:
        raise click.UsageError(str(e)) from e


@cli.command()
@click.argument("shape")
@click.argument("resource_id")
@click.pass_context
def validate(ctx: click.Context, shape: str, resource_id: str) -> None:
    """Exit with status 0 if RESOURCE_ID is a valid SHAPE ID, 1 otherwise."""
    id_type = _id_type(ctx, shape)
    try:
        id_type.parse(resource_id)
    except MalformedResourceIdError as e:
        click.echo(f"invalid: {e.message}", err=True)
        sys.exit(1)

    click.echo("valid")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
