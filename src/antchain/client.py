"""
AntChainClient - one coroutine per gateway operation.

Every operation runs its own handshake and returns the envelope's ``data``
string untouched; contract output can be decoded with
``antchain.utils.parse_output``.

Usage::

    async with AntChainClient(Config.load()) as client:
        tx_hash = await client.deposit("hello", gas=100000)
        receipt = await client.query_receipt(tx_hash)
"""

from __future__ import annotations

import json
from typing import Optional

from .config import Config
from .pneuma.calls import CallAssembler
from .pneuma.errors import ParameterError
from .pneuma.executor import Executor, HttpxExecutor
from .pneuma.params import ChainCallOption, with_param
from .pneuma.routes import Method
from .sigil.rsa import PrivateKey, load_private_key

VM_TYPE_EVM = "EVM"


def _decimal(name: str, value: int) -> str:
    """Coerce a non-negative integer argument to its decimal string."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParameterError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ParameterError(f"{name} must not be negative, got {value}")
    return str(value)


class AntChainClient:
    """
    Client for the AntChain BaaS REST gateway.

    Attributes:
        config: Immutable client configuration
        signer: Access key; loaded from ``config.access_key`` when omitted
        executor: Transport; an owned ``HttpxExecutor`` when omitted
    """

    def __init__(
        self,
        config: Config,
        *,
        signer: Optional[PrivateKey] = None,
        executor: Optional[Executor] = None,
        insecure: bool = False,
    ) -> None:
        self.config = config
        self.signer = signer or load_private_key(config.access_key)
        self._owned_executor: Optional[HttpxExecutor] = None
        if executor is None:
            self._owned_executor = HttpxExecutor(insecure=insecure)
            executor = self._owned_executor
        self.executor = executor
        self._calls = CallAssembler(config, self.signer, executor)

    async def aclose(self) -> None:
        if self._owned_executor is not None:
            await self._owned_executor.aclose()

    async def __aenter__(self) -> "AntChainClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ============ Protocol ============

    async def handshake(self) -> str:
        """Fetch a session token; useful to check credentials."""
        return await self._calls.handshake()

    async def chain_call(self, method: str | Method, *options: ChainCallOption) -> str:
        return await self._calls.chain_call(method, *options)

    async def chain_call_for_biz(self, method: str | Method, *options: ChainCallOption) -> str:
        return await self._calls.chain_call_for_biz(method, *options)

    # ============ Business Calls ============

    async def create_account(self, account: str, kms_id: str, gas: int) -> str:
        """Create a chain account managed under ``kms_id``."""
        return await self.chain_call_for_biz(
            Method.CREATE_ACCOUNT,
            with_param("newAccountId", account),
            with_param("newAccountKmsId", kms_id),
            with_param("gas", _decimal("gas", gas)),
        )

    async def deposit(self, content: str, gas: int) -> str:
        """Notarize ``content``; returns the transaction hash."""
        return await self.chain_call_for_biz(
            Method.DEPOSIT,
            with_param("content", content),
            with_param("gas", _decimal("gas", gas)),
        )

    async def deploy_solidity(self, name: str, code: str, gas: int) -> str:
        return await self.chain_call_for_biz(
            Method.DEPLOY_CONTRACT,
            with_param("contractName", name),
            with_param("contractCode", code),
            with_param("vmTypeEnum", VM_TYPE_EVM),
            with_param("gas", _decimal("gas", gas)),
        )

    async def async_call_solidity(
        self,
        contract_name: str,
        method_sign: str,
        input_params: str,
        out_types: str,
        gas: int,
    ) -> str:
        """
        Invoke a Solidity contract method asynchronously.

        Args:
            contract_name: Deployed contract name
            method_sign: Method signature, e.g. ``"mint(address,uint256)"``
            input_params: JSON array of arguments, as a string
            out_types: JSON array of output types, as a string
            gas: Gas limit

        Returns:
            Transaction hash; the receipt's ``output`` holds the result
        """
        return await self.chain_call_for_biz(
            Method.CALL_CONTRACT_ASYNC,
            with_param("contractName", contract_name),
            with_param("methodSignature", method_sign),
            with_param("inputParamListStr", input_params),
            with_param("outTypes", out_types),
            with_param("vmTypeEnum", VM_TYPE_EVM),
            with_param("gas", _decimal("gas", gas)),
        )

    # ============ Queries ============

    async def query_transaction(self, tx_hash: str) -> str:
        return await self.chain_call(Method.QUERY_TRANSACTION, with_param("hash", tx_hash))

    async def query_receipt(self, tx_hash: str) -> str:
        return await self.chain_call(Method.QUERY_RECEIPT, with_param("hash", tx_hash))

    async def query_block_header(self, block_number: int) -> str:
        return await self.chain_call(
            Method.QUERY_BLOCK,
            with_param("requestStr", _decimal("block_number", block_number)),
        )

    async def query_block_body(self, block_number: int) -> str:
        return await self.chain_call(
            Method.QUERY_BLOCK_BODY,
            with_param("requestStr", _decimal("block_number", block_number)),
        )

    async def query_last_block(self) -> str:
        return await self.chain_call(Method.QUERY_LAST_BLOCK)

    async def query_account(self, account: str) -> str:
        request = json.dumps({"queryAccount": account}, separators=(",", ":"))
        return await self.chain_call(Method.QUERY_ACCOUNT, with_param("requestStr", request))
