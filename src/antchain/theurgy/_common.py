from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click

from ..client import AntChainClient
from ..config import Config, ConfigError
from ..pneuma.errors import ChainCallError
from ..sigil.rsa import CryptoError

Operation = Callable[[AntChainClient], Awaitable[str]]


def load_config(obj: dict[str, Any]) -> Config:
    config_path: Optional[str] = obj.get("config_path")
    return Config.load(Path(config_path) if config_path else None)


async def _run(config: Config, operation: Operation, insecure: bool) -> str:
    async with AntChainClient(config, insecure=insecure) as client:
        return await operation(client)


def run_operation(obj: dict[str, Any], operation: Operation) -> None:
    """Run one client operation and print its payload, or fail with its exit code."""
    try:
        config = load_config(obj)
        result = asyncio.run(_run(config, operation, obj.get("insecure", False)))
    except (ConfigError, CryptoError, ChainCallError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(getattr(exc, "exit_code", 1))

    click.echo(result)
