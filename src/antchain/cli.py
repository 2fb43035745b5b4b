"""
AntChain CLI

Command-line interface for the AntChain BaaS REST gateway.

Every chain command performs its own handshake with the configured access
key, then prints the raw gateway payload.

Commands:
  shakehand       - Check credentials and print a session token
  create-account  - Create a chain account
  deposit         - Notarize content
  deploy          - Deploy a Solidity contract
  call            - Invoke a Solidity contract asynchronously
  query           - Query transactions, receipts, blocks and accounts
  identity        - Derive an account Identity (offline)
  token-id        - Convert a hex hash to a token ID (offline)
  parse-output    - Decode contract output to hex (offline)
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from .utils import identity_by_name, parse_output, token_id

# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="antchain")
@click.option(
    "--config",
    "config_path",
    envvar="ANTCHAIN_CONFIG",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON config file (default: ANTCHAIN_* environment / ~/.antchain/.env)",
)
@click.option(
    "--insecure",
    is_flag=True,
    default=False,
    help="Skip TLS certificate verification (unsafe)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], insecure: bool, verbose: bool) -> None:
    """AntChain: signed-request client for the BaaS REST gateway."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config_path": config_path, "insecure": insecure}


# ============ Chain Commands ============

from .theurgy.business import create_account, deposit
from .theurgy.contract import call, deploy
from .theurgy.query import query
from .theurgy._common import run_operation

cli.add_command(create_account)
cli.add_command(deposit)
cli.add_command(deploy)
cli.add_command(call)
cli.add_command(query)


@cli.command()
@click.pass_obj
def shakehand(obj: dict) -> None:
    """Check credentials and print a fresh session token."""
    run_operation(obj, lambda client: client.handshake())


# ============ Offline Helpers ============


@cli.command()
@click.argument("name")
def identity(name: str) -> None:
    """Show the Identity of chain account NAME."""
    click.echo(json.dumps(identity_by_name(name).to_dict()))


@cli.command("token-id")
@click.argument("hash_hex")
def token_id_cmd(hash_hex: str) -> None:
    """Show the uint256 token ID for a hex hash."""
    value = token_id(hash_hex)
    if value is None:
        click.secho(f"ERROR: not a hex value: {hash_hex}", fg="red", err=True)
        sys.exit(1)
    click.echo(str(value))


@cli.command("parse-output")
@click.argument("data")
def parse_output_cmd(data: str) -> None:
    """Decode base64 contract output DATA to hex."""
    try:
        click.echo(parse_output(data))
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)


# ============ Entry Points ============


def main() -> None:
    """AntChain CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
