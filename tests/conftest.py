"""Shared fixtures: RSA access keys, configs and a fake BaaS gateway."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from antchain.config import Config
from antchain.pneuma.executor import HttpxExecutor
from antchain.pneuma.routes import Route
from antchain.sigil.rsa import PrivateKey

ENDPOINT = "https://rest.baas.example.com"


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def pkcs1_pem(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def pkcs8_pem(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture()
def signer(rsa_key: rsa.RSAPrivateKey) -> PrivateKey:
    return PrivateKey(rsa_key)


@pytest.fixture()
def key_file(tmp_path: Path, pkcs1_pem: bytes) -> Path:
    path = tmp_path / "access.key"
    path.write_bytes(pkcs1_pem)
    return path


@pytest.fixture()
def config_dict(key_file: Path) -> dict[str, str]:
    return {
        "biz_id": "a00e36c5",
        "endpoint": ENDPOINT,
        "tenant_id": "TENANT01",
        "access_id": "ACCESS_ID_01",
        "access_key": str(key_file),
        "account": "alice",
        "mykmskey_id": "kms-alice",
    }


@pytest.fixture()
def config(config_dict: dict[str, str]) -> Config:
    return Config.from_dict(config_dict)


Responder = Callable[[dict[str, Any]], httpx.Response]


class FakeGateway:
    """
    In-memory BaaS gateway behind ``httpx.MockTransport``.

    Handshakes return ``token-1``, ``token-2``, ...; calls answer with
    ``call_response`` (an envelope dict) or the ``responder`` callback.
    """

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict[str, Any], httpx.Headers]] = []
        self.handshakes = 0
        self.handshake_response: Optional[dict[str, Any]] = None
        self.call_response: dict[str, Any] = {"success": True, "code": "200", "data": "ok"}
        self.responder: Optional[Responder] = None

    async def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        path = request.url.path
        self.requests.append((path, body, request.headers))

        if path == Route.SHAKE_HAND.value:
            if self.handshake_response is not None:
                return httpx.Response(200, json=self.handshake_response)
            self.handshakes += 1
            return httpx.Response(
                200, json={"success": True, "code": "200", "data": f"token-{self.handshakes}"}
            )

        if self.responder is not None:
            return self.responder(body)
        return httpx.Response(200, json=self.call_response)

    def executor(self) -> HttpxExecutor:
        return HttpxExecutor(httpx.AsyncClient(transport=httpx.MockTransport(self.handle)))

    def calls(self) -> list[tuple[str, dict[str, Any]]]:
        """Non-handshake requests as (path, body)."""
        return [(p, b) for p, b, _ in self.requests if p != Route.SHAKE_HAND.value]

    def bodies(self, route: Route) -> list[dict[str, Any]]:
        return [b for p, b, _ in self.requests if p == route.value]


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()
