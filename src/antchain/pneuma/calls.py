"""
Call assembly for ``chainCall`` and ``chainCallForBiz``.

Both shapes share one path: handshake, apply caller options in order,
inject the protocol fields, POST, unwrap the envelope. Protocol fields are
written last and win over caller options with the same name.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import Config
from ..sigil.rsa import PrivateKey
from ..utils import new_order_id
from .executor import Executor
from .handshake import handshake, post_envelope
from .params import CallParams, ChainCallOption
from .routes import Method, Route

logger = logging.getLogger(__name__)


class CallAssembler:
    def __init__(self, config: Config, signer: PrivateKey, executor: Executor) -> None:
        self.config = config
        self.signer = signer
        self.executor = executor

    async def handshake(self) -> str:
        return await handshake(self.config, self.signer, self.executor)

    def generic_fields(self, method: str, token: str) -> dict[str, Any]:
        return {
            "bizid": self.config.biz_id,
            "accessId": self.config.access_id,
            "method": method,
            "token": token,
        }

    def biz_fields(self, method: str, token: str) -> dict[str, Any]:
        return {
            "orderId": new_order_id(),
            "bizid": self.config.biz_id,
            "account": self.config.account,
            "mykmsKeyId": self.config.mykmskey_id,
            "method": method,
            "accessId": self.config.access_id,
            "tenantid": self.config.tenant_id,
            "token": token,
        }

    async def _call(
        self,
        route: Route,
        method: str | Method,
        options: tuple[ChainCallOption, ...],
    ) -> str:
        method_name = method.value if isinstance(method, Method) else method

        # Fresh token per call; the gateway expires them quickly.
        token = await self.handshake()

        params = CallParams().apply(options)
        fields = (
            self.biz_fields(method_name, token)
            if route is Route.CHAIN_CALL_FOR_BIZ
            else self.generic_fields(method_name, token)
        )
        for key, value in fields.items():
            params.set(key, value)

        logger.debug(
            "%s method=%s orderId=%s",
            route.name,
            method_name,
            params.get("orderId", "-"),
        )
        envelope = await post_envelope(self.executor, route.url(self.config.endpoint), params)
        return envelope.unwrap()

    async def chain_call(self, method: str | Method, *options: ChainCallOption) -> str:
        """Generic authenticated call (``/api/contract/chainCall``)."""
        return await self._call(Route.CHAIN_CALL, method, options)

    async def chain_call_for_biz(self, method: str | Method, *options: ChainCallOption) -> str:
        """Business-scoped call (``/api/contract/chainCallForBiz``) with a fresh ``orderId``."""
        return await self._call(Route.CHAIN_CALL_FOR_BIZ, method, options)
