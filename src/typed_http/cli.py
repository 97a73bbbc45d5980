"""Command line interface: send one request and print the classified result.

Example:
    $ typed-http --base-url https://pokeapi.co/api/v2 get --path /pokemon/pikachu
    200 ok
    {
      "name": "pikachu",
      ...
    }
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import click

from .client import APIClient
from .errors import ConfigurationError
from .log import check_level, configure_logging
from .results import ClientError, Result, Unknown
from .settings import ClientSettings, parse_header, parse_query_item


def _parse_query(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> dict:
    try:
        return dict(parse_query_item(item) for item in value)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _parse_headers(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> list:
    try:
        return [parse_header(item) for item in value]
    except ConfigurationError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _parse_body(ctx: click.Context, param: click.Parameter, value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Body is not valid JSON: {e}", ctx=ctx, param=param) from e


def _parse_log_level(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return check_level(value)
    except ValueError as e:
        raise click.BadParameter(f"Unknown log level {value!r}", ctx=ctx, param=param) from e


def request_options(func: Callable) -> Callable:
    """Add the per-call options shared by every verb command."""
    options = [
        click.option("--path", default=None, help="Path appended to the base URL, e.g. /users"),
        click.option(
            "-q",
            "--query",
            multiple=True,
            callback=_parse_query,
            help="Query parameter as key=value (repeatable)",
        ),
        click.option(
            "-H",
            "--header",
            "headers",
            multiple=True,
            callback=_parse_headers,
            help="Header as Name:Value (repeatable)",
        ),
        click.option(
            "--credentials",
            type=click.Choice(["omit", "same-origin", "include"]),
            default=None,
            help="Credentials mode for this request",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


body_option = click.option(
    "--body", required=True, callback=_parse_body, help="JSON request body"
)


@click.group()
@click.option("--base-url", default=None, help="Base URL (default: $TYPED_HTTP_BASE_URL)")
@click.option(
    "--log-level",
    default=None,
    callback=_parse_log_level,
    help="Log level (default: $TYPED_HTTP_LOG_LEVEL)",
)
@click.pass_context
def main(ctx: click.Context, base_url: str | None, log_level: str | None) -> None:
    """Send HTTP requests and print typed results."""
    ctx.ensure_object(dict)

    try:
        settings = ClientSettings.from_env()
    except ConfigurationError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    if base_url is not None:
        settings = settings.model_copy(update={"base_url": base_url})

    configure_logging(log_level or settings.log_level)
    ctx.obj["settings"] = settings


async def _call(client: APIClient, method: str, **kwargs: Any) -> Result[Any]:
    async with client:
        return await getattr(client, method)(**kwargs)


def _run(ctx: click.Context, method: str, **kwargs: Any) -> None:
    settings: ClientSettings = ctx.obj["settings"]
    client = settings.create_client(transport=ctx.obj.get("transport"))

    result = asyncio.run(_call(client, method, **kwargs))

    click.echo(f"{result.code} {result.name}")
    if result.is_success:
        click.echo(json.dumps(result.data, indent=2))
    elif isinstance(result, Unknown):
        click.echo(f"status: {result.status_code}")
    elif isinstance(result, ClientError):
        click.echo(f"error: {result.err!r}")

    ctx.exit(0 if result.is_success else 1)


@main.command()
@request_options
@click.pass_context
def get(ctx: click.Context, **kwargs: Any) -> None:
    """Send a GET request."""
    _run(ctx, "get", **kwargs)


@main.command()
@request_options
@body_option
@click.pass_context
def post(ctx: click.Context, **kwargs: Any) -> None:
    """Send a POST request with a JSON body."""
    _run(ctx, "post", **kwargs)


@main.command()
@request_options
@body_option
@click.pass_context
def put(ctx: click.Context, **kwargs: Any) -> None:
    """Send a PUT request with a JSON body."""
    _run(ctx, "put", **kwargs)


@main.command()
@request_options
@click.pass_context
def delete(ctx: click.Context, **kwargs: Any) -> None:
    """Send a DELETE request."""
    _run(ctx, "delete", **kwargs)
