"""
Envelope codec for the AntChain REST gateway.

Requests are a single JSON object serialized with RFC 8785 canonicalization
so the body for a given parameter set is byte-stable. Integers beyond the
IEEE-754 safe range fall outside RFC 8785; a body carrying one is written as
compact JSON with sorted keys instead, integers in full. Responses share one
wrapper::

    {"success": true, "code": "200", "data": "..."}

Only ``success``, ``code`` and ``data`` are read; unknown fields are ignored.
``data`` carries the ledger result on success and the error detail on
failure, so callers must branch on ``success`` before interpreting it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

import rfc8785

from .errors import EnvelopeDecodeError, ParameterError, RemoteError
from .params import CallParams, check_value

CONTENT_TYPE = "application/json; charset=utf-8"

_TRUE_STRINGS = {"1", "t", "true"}


@dataclass(frozen=True)
class Envelope:
    success: bool
    code: str
    data: str
    status_code: int = 200

    def unwrap(self) -> str:
        """Return ``data`` for a successful envelope, raise ``RemoteError`` otherwise."""
        if not self.success:
            raise RemoteError(self.code, self.data, status_code=self.status_code)
        return self.data


def encode_params(params: CallParams | Mapping[str, Any]) -> bytes:
    """Serialize call parameters to the canonical UTF-8 JSON request body."""
    payload = params.to_dict() if isinstance(params, CallParams) else dict(params)
    check_value(payload)
    try:
        return rfc8785.dumps(payload)
    except rfc8785.IntegerDomainError:
        return json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except rfc8785.CanonicalizationError as exc:
        raise ParameterError(f"parameters are not JSON-representable: {exc}") from exc


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # Positional decimal, shortest round-trip digits: 1e16 -> "10000000000000000".
        return format(Decimal(repr(value)), "f")
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def decode_envelope(body: bytes, status_code: int = 200) -> Envelope:
    """
    Parse a gateway response body.

    Args:
        body: Raw response bytes
        status_code: HTTP status, kept for diagnostics only

    Returns:
        Decoded Envelope

    Raises:
        EnvelopeDecodeError: If the body is not a JSON object
    """
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        snippet = body[:200].decode("utf-8", errors="replace")
        raise EnvelopeDecodeError(
            f"malformed response body (HTTP {status_code}): {snippet!r}",
            status_code=status_code,
        ) from exc

    if not isinstance(payload, dict):
        raise EnvelopeDecodeError(
            f"response body must be a JSON object (HTTP {status_code}), "
            f"got {type(payload).__name__}",
            status_code=status_code,
        )

    return Envelope(
        success=_as_bool(payload.get("success")),
        code=_as_text(payload.get("code")),
        data=_as_text(payload.get("data")),
        status_code=status_code,
    )
