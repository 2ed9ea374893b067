"""
Command-line interface for NAVI SDK.

Every command runs the async API under the hood and prints JSON.

Available commands:
- config: Protocol configuration
- pools: All lending pools
- pool: One pool by coin type or id
- stats: Protocol statistics
- fees: Protocol fee breakdown
- flashloan-assets: Flash-loanable assets
- slippage-setting: Aggregator positive-slippage flag
"""

import asyncio
import json
import logging
import sys

import click
from pydantic import ValidationError

from navi_sdk import aggregator
from navi_sdk import lending
from navi_sdk.client import NaviClient
from navi_sdk.config import NaviSettings
from navi_sdk.exceptions import NaviAPIError
from navi_sdk.logging_middleware import LoggingMiddleware

logger = logging.getLogger("navi_sdk.cli")

env_option = click.option(
    "--env", type=click.Choice(["prod", "dev", "test"]), default=None, help="Protocol environment"
)


def _run(fetch, *, verbose: bool = False):
    """Run `fetch(client)` with a fresh client and print its result as JSON."""

    async def _main():
        middlewares = [LoggingMiddleware()] if verbose else []
        async with NaviClient(NaviSettings(), middlewares=middlewares) as client:
            return await fetch(client)

    try:
        result = asyncio.run(_main())
    except ValidationError as exc:
        logger.error(f"Invalid settings: {exc}")
        sys.exit(1)
    except NaviAPIError as exc:
        logger.error(f"Request failed: {exc}")
        sys.exit(1)
    click.echo(json.dumps(result, indent=2, sort_keys=True))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP traffic")
@click.pass_context
def cli(ctx, verbose):
    """NAVI SDK CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    ctx.obj = {"verbose": verbose}


@cli.command()
@env_option
@click.pass_obj
def config(obj, env):
    """Show the protocol configuration."""
    _run(lambda client: lending.get_config(env=env or client.settings.env, client=client), **obj)


@cli.command()
@env_option
@click.pass_obj
def pools(obj, env):
    """List all lending pools."""
    _run(lambda client: lending.get_pools(env=env or client.settings.env, client=client), **obj)


@cli.command()
@click.argument("identifier")
@env_option
@click.pass_obj
def pool(obj, identifier, env):
    """Show one pool by coin type or numeric id."""
    key = int(identifier) if identifier.isdigit() else identifier
    _run(lambda client: client.get_pool(key, env=env), **obj)


@cli.command()
@click.pass_obj
def stats(obj):
    """Show protocol statistics."""
    _run(lambda client: lending.get_stats(client=client), **obj)


@cli.command()
@click.pass_obj
def fees(obj):
    """Show the protocol fee breakdown."""
    _run(lambda client: lending.get_fees(client=client), **obj)


@cli.command(name="flashloan-assets")
@env_option
@click.pass_obj
def flashloan_assets(obj, env):
    """List flash-loanable assets."""
    _run(
        lambda client: lending.get_flashloan_assets(env=env or client.settings.env, client=client),
        **obj,
    )


@cli.command(name="slippage-setting")
@click.pass_obj
def slippage_setting(obj):
    """Show whether the aggregator keeps positive slippage."""
    _run(lambda client: aggregator.get_positive_slippage_setting(client=client), **obj)


if __name__ == "__main__":
    cli()
