"""Tests for AntChainClient operations: remote method names and parameters."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable

import pytest

from antchain.client import AntChainClient
from antchain.config import Config
from antchain.pneuma.errors import ParameterError, RemoteError
from antchain.pneuma.params import with_param
from antchain.pneuma.routes import Route
from antchain.sigil.rsa import PrivateKey

from conftest import FakeGateway

PROTOCOL_FIELDS = {"orderId", "bizid", "account", "mykmsKeyId", "method", "accessId", "tenantid", "token"}


def run_op(
    config: Config,
    signer: PrivateKey,
    gateway: FakeGateway,
    op: Callable[[AntChainClient], Awaitable[str]],
) -> tuple[str, str, dict[str, Any]]:
    async def scenario() -> str:
        async with AntChainClient(config, signer=signer, executor=gateway.executor()) as client:
            return await op(client)

    result = asyncio.run(scenario())
    [(path, body)] = gateway.calls()
    return result, path, body


def operation_fields(body: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if k not in PROTOCOL_FIELDS}


class TestBusinessOperations:
    """chainCallForBiz operations."""

    def test_create_account(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, path, body = run_op(config, signer, gateway, lambda c: c.create_account("bob", "kms-bob", 100000))
        assert path == Route.CHAIN_CALL_FOR_BIZ.value
        assert body["method"] == "TENANTCREATEACCUNT"
        assert operation_fields(body) == {
            "newAccountId": "bob",
            "newAccountKmsId": "kms-bob",
            "gas": "100000",
        }

    def test_deposit(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        gateway.call_response = {"success": True, "code": "200", "data": "0xtxhash"}
        result, path, body = run_op(config, signer, gateway, lambda c: c.deposit("notarize me", 5000))
        assert result == "0xtxhash"
        assert path == Route.CHAIN_CALL_FOR_BIZ.value
        assert body["method"] == "DEPOSIT"
        assert operation_fields(body) == {"content": "notarize me", "gas": "5000"}

    def test_deploy_solidity(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(config, signer, gateway, lambda c: c.deploy_solidity("Token", "6080604052", 0))
        assert body["method"] == "DEPLOYCONTRACTFORBIZ"
        assert operation_fields(body) == {
            "contractName": "Token",
            "contractCode": "6080604052",
            "vmTypeEnum": "EVM",
            "gas": "0",
        }

    def test_async_call_solidity(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(
            config,
            signer,
            gateway,
            lambda c: c.async_call_solidity(
                "Token", "mint(identity,uint256)", '["abc", 1]', '["bool"]', 300000
            ),
        )
        assert body["method"] == "CALLCONTRACTBIZASYNC"
        assert operation_fields(body) == {
            "contractName": "Token",
            "methodSignature": "mint(identity,uint256)",
            "inputParamListStr": '["abc", 1]',
            "outTypes": '["bool"]',
            "vmTypeEnum": "EVM",
            "gas": "300000",
        }


class TestQueryOperations:
    """chainCall operations."""

    @pytest.mark.parametrize(
        "op,method,fields",
        [
            (lambda c: c.query_transaction("0xaa"), "QUERYTRANSACTION", {"hash": "0xaa"}),
            (lambda c: c.query_receipt("0xbb"), "QUERYRECEIPT", {"hash": "0xbb"}),
            (lambda c: c.query_block_header(12), "QUERYBLOCK", {"requestStr": "12"}),
            (lambda c: c.query_block_body(13), "QUERYBLOCKBODY", {"requestStr": "13"}),
            (lambda c: c.query_last_block(), "QUERYLASTBLOCK", {}),
        ],
    )
    def test_query(
        self,
        config: Config,
        signer: PrivateKey,
        gateway: FakeGateway,
        op: Callable[[AntChainClient], Awaitable[str]],
        method: str,
        fields: dict[str, Any],
    ) -> None:
        _, path, body = run_op(config, signer, gateway, op)
        assert path == Route.CHAIN_CALL.value
        assert body["method"] == method
        assert "orderId" not in body
        assert operation_fields(body) == fields

    def test_hash_by_keyword(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(config, signer, gateway, lambda c: c.query_receipt(tx_hash="0xcc"))
        assert body["hash"] == "0xcc"

    def test_query_account(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(config, signer, gateway, lambda c: c.query_account("bob"))
        assert body["method"] == "QUERYACCOUNT"
        assert json.loads(body["requestStr"]) == {"queryAccount": "bob"}

    def test_returns_raw_payload(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        gateway.call_response = {"success": True, "data": '{"height":1024}'}
        result, _, _ = run_op(config, signer, gateway, lambda c: c.query_last_block())
        assert result == '{"height":1024}'

    def test_failure_is_not_a_payload(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        gateway.call_response = {"success": False, "code": "E1", "data": "boom"}
        with pytest.raises(RemoteError, match="E1.*boom"):
            run_op(config, signer, gateway, lambda c: c.query_receipt("0xbb"))


class TestCoercion:
    """Argument coercion happens before any network traffic."""

    @pytest.mark.parametrize("gas", [-1, 1.5, "100", True])
    def test_bad_gas(self, config: Config, signer: PrivateKey, gateway: FakeGateway, gas: Any) -> None:
        async def scenario() -> None:
            client = AntChainClient(config, signer=signer, executor=gateway.executor())
            await client.deposit("x", gas)

        with pytest.raises(ParameterError):
            asyncio.run(scenario())

    def test_bad_block_number(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        async def scenario() -> None:
            client = AntChainClient(config, signer=signer, executor=gateway.executor())
            await client.query_block_header(-5)

        with pytest.raises(ParameterError, match="block_number"):
            asyncio.run(scenario())
        assert gateway.requests == []


class TestConstruction:
    def test_loads_key_from_config(self, config: Config, gateway: FakeGateway) -> None:
        client = AntChainClient(config, executor=gateway.executor())
        assert client.signer.key_size == 2048
        token = asyncio.run(client.handshake())
        assert token == "token-1"

    def test_inline_pem_key(self, config_dict: dict[str, str], pkcs8_pem: bytes, gateway: FakeGateway) -> None:
        config = Config.from_dict({**config_dict, "access_key": pkcs8_pem.decode("ascii")})
        client = AntChainClient(config, executor=gateway.executor())
        assert asyncio.run(client.handshake()) == "token-1"

    def test_generic_call_with_options(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(
            config,
            signer,
            gateway,
            lambda c: c.chain_call("QUERYCONTRACT", with_param("contractName", "Token")),
        )
        assert body["method"] == "QUERYCONTRACT"
        assert body["contractName"] == "Token"

    def test_numeric_options(self, config: Config, signer: PrivateKey, gateway: FakeGateway) -> None:
        _, _, body = run_op(
            config,
            signer,
            gateway,
            lambda c: c.chain_call(
                "QUERYCONTRACT", with_param("tokenId", 2**128 + 1), with_param("ratio", 0.5)
            ),
        )
        assert body["tokenId"] == 2**128 + 1
        assert body["ratio"] == 0.5

    def test_owned_executor_closes(self, config: Config) -> None:
        async def scenario() -> None:
            async with AntChainClient(config) as client:
                assert client.executor is not None

        asyncio.run(scenario())
