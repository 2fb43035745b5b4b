"""
Theurgy Query - read-only chainCall commands.

Transactions, receipts, blocks and accounts. Output is the raw gateway
payload (usually JSON text).
"""

from __future__ import annotations

import click

from ._common import run_operation


@click.group()
def query() -> None:
    """Query chain state."""
    pass


@query.command("tx")
@click.argument("tx_hash")
@click.pass_obj
def query_tx(obj: dict, tx_hash: str) -> None:
    """Show transaction TX_HASH."""
    run_operation(obj, lambda client: client.query_transaction(tx_hash))


@query.command("receipt")
@click.argument("tx_hash")
@click.pass_obj
def query_receipt(obj: dict, tx_hash: str) -> None:
    """Show the receipt of TX_HASH."""
    run_operation(obj, lambda client: client.query_receipt(tx_hash))


@query.command("block-header")
@click.argument("number", type=click.IntRange(min=0))
@click.pass_obj
def query_block_header(obj: dict, number: int) -> None:
    run_operation(obj, lambda client: client.query_block_header(number))


@query.command("block-body")
@click.argument("number", type=click.IntRange(min=0))
@click.pass_obj
def query_block_body(obj: dict, number: int) -> None:
    run_operation(obj, lambda client: client.query_block_body(number))


@query.command("last-block")
@click.pass_obj
def query_last_block(obj: dict) -> None:
    """Show the latest block."""
    run_operation(obj, lambda client: client.query_last_block())


@query.command("account")
@click.argument("account")
@click.pass_obj
def query_account(obj: dict, account: str) -> None:
    run_operation(obj, lambda client: client.query_account(account))
