"""
Request executors - the transport capability behind every gateway call.

The protocol layer only needs ``Executor.do``; connection pooling, TLS and
timeouts belong to the executor. ``HttpxExecutor`` is the default and wraps
a shared ``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=30.0)
DEFAULT_LIMITS = httpx.Limits(
    max_connections=1000,
    max_keepalive_connections=1000,
    keepalive_expiry=60.0,
)


class Executor(Protocol):
    async def do(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
    ) -> tuple[int, bytes]:
        ...


class HttpxExecutor:
    """
    Executor backed by ``httpx.AsyncClient``.

    Attributes:
        client: Pre-built client to use; when omitted one is created and
            owned (closed by ``aclose``)
        timeout: Per-request timeout for an owned client
        insecure: Disable TLS certificate verification for an owned client.
            Opt-in only; every round trip loses server authentication.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
        insecure: bool = False,
    ) -> None:
        if client is not None:
            self._client = client
            self._owns_client = False
            return

        if insecure:
            logger.warning(
                "TLS certificate verification is DISABLED; gateway identity is not checked"
            )
        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=DEFAULT_LIMITS,
            verify=not insecure,
            trust_env=True,
        )
        self._owns_client = True

    async def do(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
    ) -> tuple[int, bytes]:
        try:
            response = await self._client.request(
                method, url, content=body, headers=dict(headers)
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> HTTP %d (%d bytes)", method, url, response.status_code, len(response.content))
        return response.status_code, response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxExecutor":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
