"""CLI for smoke-checking a configured Redis endpoint."""

import sys
from pathlib import Path
from typing import Callable

import click

from redisconn.config.loader import load_config
from redisconn.config.logging import configure_logging
from redisconn.connector import RedisConnector, init_client
from redisconn.errors import RedisConnectorError


@click.group()
@click.option(
    "--config",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file (defaults to $REDISCONN_CONFIG or redisconn.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None) -> None:
    """Redis connector CLI."""
    ctx.obj = config


def _run(config_path: Path | None, action: Callable[[RedisConnector], None]) -> None:
    try:
        config = load_config(config_path)
    except (FileNotFoundError, RedisConnectorError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    configure_logging(config.logging)

    try:
        with init_client(config) as connector:
            action(connector)
    except RedisConnectorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_obj
def ping(config: Path | None) -> None:
    """Ping the endpoint."""
    _run(config, lambda redis: click.echo(redis.ping()))


@cli.command()
@click.argument("key")
@click.pass_obj
def get(config: Path | None, key: str) -> None:
    """Print the value of KEY."""

    def action(redis: RedisConnector) -> None:
        value = redis.get(key)
        if value is None:
            click.echo("(nil)")
        else:
            click.echo(value)

    _run(config, action)


@cli.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def set_(config: Path | None, key: str, value: str) -> None:
    """Set KEY to VALUE."""
    _run(config, lambda redis: click.echo(redis.set(key, value)))


@cli.command()
@click.argument("pattern", default="*")
@click.pass_obj
def keys(config: Path | None, pattern: str) -> None:
    """List keys matching PATTERN."""

    def action(redis: RedisConnector) -> None:
        found = redis.keys(pattern)
        if not found:
            click.echo("(empty)")
            return
        for key in sorted(found):
            click.echo(key)

    _run(config, action)


if __name__ == "__main__":
    cli()
