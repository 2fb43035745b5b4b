"""
Theurgy Business - chainCallForBiz commands.

Account creation and content deposit on behalf of the configured
business account.
"""

from __future__ import annotations

import click

from ._common import run_operation


@click.command("create-account")
@click.argument("account")
@click.argument("kms_id")
@click.option("--gas", default=0, show_default=True, type=click.IntRange(min=0), help="Gas limit")
@click.pass_obj
def create_account(obj: dict, account: str, kms_id: str, gas: int) -> None:
    """Create chain account ACCOUNT with managed key KMS_ID."""
    run_operation(obj, lambda client: client.create_account(account, kms_id, gas))


@click.command()
@click.argument("content")
@click.option("--gas", default=0, show_default=True, type=click.IntRange(min=0), help="Gas limit")
@click.pass_obj
def deposit(obj: dict, content: str, gas: int) -> None:
    """
    Notarize CONTENT on chain.

    Prints the transaction hash.
    """
    run_operation(obj, lambda client: client.deposit(content, gas))
