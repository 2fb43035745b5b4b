from __future__ import annotations

import base64
import binascii
import hashlib
import re
import time
import uuid
from dataclasses import dataclass
from typing import Optional

_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")


def sha256_bytes(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def new_order_id() -> str:
    """Fresh random (version 4) UUID for one business-scoped call."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Identity:
    data: str

    def to_dict(self) -> dict[str, str]:
        return {"data": self.data}


def identity_by_name(name: str) -> Identity:
    """Identity of a chain account: base64 of the SHA-256 of its name."""
    return Identity(base64.b64encode(sha256_bytes(name.encode("utf-8"))).decode("ascii"))


def token_id(hash_hex: str) -> Optional[int]:
    """
    Token ID (uint256) for a hex hash, md5 recommended.

    Returns None when ``hash_hex`` is not valid hexadecimal.
    """
    if not _HEX.fullmatch(hash_hex):
        return None
    return int(hash_hex, 16)


def parse_output(data: str) -> str:
    """Decode the base64 ``output`` of a contract call into hex."""
    try:
        raw = base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"output is not valid base64: {exc}") from exc
    return raw.hex()
