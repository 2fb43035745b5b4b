"""
Handshake - exchange a signed, time-stamped proof of the access key for a
session token.

The proof is SHA256withRSA over ``accessId + time`` (time in epoch
milliseconds, no separator), sent hex-encoded as ``secret``. The token is
valid for a short window and is never reused across calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping

from ..config import Config
from ..sigil.rsa import Digest, PrivateKey
from ..utils import now_millis
from .envelope import CONTENT_TYPE, Envelope, decode_envelope, encode_params
from .executor import Executor
from .params import CallParams
from .routes import Route

logger = logging.getLogger(__name__)

REQUEST_HEADERS: Mapping[str, str] = {"Content-Type": CONTENT_TYPE}


def _cancelling() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


async def post_envelope(executor: Executor, url: str, params: CallParams) -> Envelope:
    """
    POST ``params`` as a JSON body and decode the response envelope.

    A failure raised by the executor while the calling task is being
    cancelled surfaces as ``CancelledError``, whatever the executor.
    """
    body = encode_params(params)
    try:
        status_code, raw = await executor.do("POST", url, body, REQUEST_HEADERS)
    except Exception as exc:
        if _cancelling():
            raise asyncio.CancelledError() from exc
        raise
    return decode_envelope(raw, status_code=status_code)


def build_handshake_params(config: Config, signer: PrivateKey, time_ms: int) -> CallParams:
    time_str = str(time_ms)
    signature = signer.sign(Digest.SHA256, (config.access_id + time_str).encode("utf-8"))
    return CallParams(
        {
            "accessId": config.access_id,
            "time": time_str,
            "secret": signature.hex(),
        }
    )


async def handshake(config: Config, signer: PrivateKey, executor: Executor) -> str:
    """
    Obtain a fresh session token.

    Raises:
        SigningError: Before anything is sent, if the proof cannot be signed
        TransportError: If the round trip fails
        EnvelopeDecodeError: If the response is not an envelope
        RemoteError: If the gateway rejects the proof
    """
    params = build_handshake_params(config, signer, now_millis())
    url = Route.SHAKE_HAND.url(config.endpoint)

    logger.debug("shakeHand accessId=%s", config.access_id)
    envelope = await post_envelope(executor, url, params)
    return envelope.unwrap()
