"""
Theurgy Contract - deploy and invoke Solidity contracts.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from ._common import run_operation


def _json_array(label: str, value: str) -> str:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        click.secho(f"ERROR: Invalid {label}: {exc}", fg="red", err=True)
        sys.exit(1)
    if not isinstance(parsed, list):
        click.secho(f"ERROR: {label} must be a JSON array", fg="red", err=True)
        sys.exit(1)
    return value


@click.command()
@click.argument("name")
@click.option(
    "--code",
    "code_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File holding the compiled contract bytecode (hex)",
)
@click.option("--gas", default=0, show_default=True, type=click.IntRange(min=0), help="Gas limit")
@click.pass_obj
def deploy(obj: dict, name: str, code_file: Path, gas: int) -> None:
    """Deploy a Solidity contract as NAME."""
    code = code_file.read_text(encoding="utf-8").strip()
    run_operation(obj, lambda client: client.deploy_solidity(name, code, gas))


@click.command()
@click.argument("contract")
@click.argument("method_sign")
@click.option("--params", "params_json", default="[]", help="Method arguments as JSON array")
@click.option("--out-types", default="[]", help="Output types as JSON array")
@click.option("--gas", default=0, show_default=True, type=click.IntRange(min=0), help="Gas limit")
@click.pass_obj
def call(obj: dict, contract: str, method_sign: str, params_json: str, out_types: str, gas: int) -> None:
    """
    Call METHOD_SIGN on CONTRACT asynchronously.

    Prints the transaction hash; fetch the result with 'antchain query receipt'.
    """
    params_json = _json_array("params", params_json)
    out_types = _json_array("out-types", out_types)
    run_operation(
        obj,
        lambda client: client.async_call_solidity(contract, method_sign, params_json, out_types, gas),
    )
