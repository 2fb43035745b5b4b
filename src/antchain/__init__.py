__all__ = [
    # Client
    "AntChainClient",
    "Config",
    "ConfigError",
    # Protocol
    "CallAssembler",
    "CallParams",
    "ChainCallOption",
    "Envelope",
    "Executor",
    "HttpxExecutor",
    "Method",
    "Route",
    "decode_envelope",
    "encode_params",
    "handshake",
    "with_param",
    "with_params",
    # Errors
    "ChainCallError",
    "EnvelopeDecodeError",
    "ParameterError",
    "RemoteError",
    "TransportError",
    # Keys
    "CryptoError",
    "Digest",
    "KeyLoadError",
    "PrivateKey",
    "SigningError",
    "UnsupportedDigestError",
    "load_private_key",
    "load_private_key_file",
    "load_private_key_pem",
    # Helpers
    "Identity",
    "identity_by_name",
    "parse_output",
    "token_id",
]

from .sigil.rsa import (
    CryptoError,
    Digest,
    KeyLoadError,
    PrivateKey,
    SigningError,
    UnsupportedDigestError,
    load_private_key,
    load_private_key_file,
    load_private_key_pem,
)
from .config import Config, ConfigError
from .pneuma.errors import (
    ChainCallError,
    EnvelopeDecodeError,
    ParameterError,
    RemoteError,
    TransportError,
)
from .pneuma.envelope import Envelope, decode_envelope, encode_params
from .pneuma.executor import Executor, HttpxExecutor
from .pneuma.params import CallParams, ChainCallOption, with_param, with_params
from .pneuma.routes import Method, Route
from .pneuma.handshake import handshake
from .pneuma.calls import CallAssembler
from .client import AntChainClient
from .utils import Identity, identity_by_name, parse_output, token_id
