"""
RSA Key Management for AntChain REST authentication.

The BaaS gateway identifies a caller by its access ID and verifies a
SHA256withRSA signature made with the matching access key. This module
handles:
- PEM loading (PKCS#1 ``RSA PRIVATE KEY`` and PKCS#8 ``PRIVATE KEY``)
- PKCS#1 v1.5 signing over a selectable digest

Keys are loaded from a file path or from an in-memory PEM block.
"""

from __future__ import annotations

import enum
import re
from pathlib import Path
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa


class CryptoError(ValueError):
    exit_code: int = 3


class KeyLoadError(CryptoError):
    pass


class SigningError(CryptoError):
    pass


class UnsupportedDigestError(SigningError):
    pass


class PemBlockType(str, enum.Enum):
    """PEM block types accepted for the access key, taken from the preamble."""

    RSA_PKCS1 = "RSA PRIVATE KEY"
    RSA_PKCS8 = "PRIVATE KEY"


class Digest(str, enum.Enum):
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    SHA3_256 = "SHA3_256"
    SHA3_512 = "SHA3_512"

    def algorithm(self) -> hashes.HashAlgorithm:
        return getattr(hashes, self.value)()


_PEM_BEGIN = re.compile(r"-----BEGIN ([A-Z0-9 ]+)-----")


def _resolve_digest(digest: Union[Digest, str]) -> hashes.HashAlgorithm:
    if not isinstance(digest, Digest):
        wanted = re.sub(r"[-_]", "", str(digest).upper())
        for member in Digest:
            if member.value.replace("_", "") == wanted:
                digest = member
                break
        else:
            raise UnsupportedDigestError(
                f"requested hash function ({digest}) is unavailable"
            )

    algorithm = digest.algorithm()
    # Probe the backend: some builds (FIPS) refuse MD5/SHA1.
    try:
        hashes.Hash(algorithm)
    except UnsupportedAlgorithm as exc:
        raise UnsupportedDigestError(
            f"requested hash function ({digest.value}) is unavailable"
        ) from exc
    return algorithm


class PrivateKey:
    """RSA private key producing SHA-with-RSA (PKCS#1 v1.5) signatures."""

    def __init__(self, key: rsa.RSAPrivateKey) -> None:
        self._key = key

    def __repr__(self) -> str:
        return f"PrivateKey(bits={self._key.key_size})"

    @property
    def key_size(self) -> int:
        return self._key.key_size

    def public_key(self) -> rsa.RSAPublicKey:
        return self._key.public_key()

    def sign(self, digest: Union[Digest, str], data: bytes) -> bytes:
        """
        Sign ``data`` with PKCS#1 v1.5 over the requested digest.

        Args:
            digest: Digest member or name (e.g. ``"SHA256"``)
            data: Message bytes; hashed before signing

        Returns:
            Raw signature bytes (key-size long)

        Raises:
            UnsupportedDigestError: If the digest is unknown or unavailable
            SigningError: If the backend fails to sign
        """
        algorithm = _resolve_digest(digest)
        try:
            return self._key.sign(data, padding.PKCS1v15(), algorithm)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningError(f"RSA signing failed: {exc}") from exc


def load_private_key_pem(data: Union[bytes, str]) -> PrivateKey:
    """
    Load an RSA private key from a PEM block.

    Raises:
        KeyLoadError: If no PEM block is found, the block type is neither
            PKCS#1 nor PKCS#8, or the key is not an RSA key.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    match = _PEM_BEGIN.search(data.decode("ascii", errors="replace"))
    if match is None:
        raise KeyLoadError("invalid rsa private key: no PEM block found")

    try:
        PemBlockType(match.group(1))
    except ValueError:
        raise KeyLoadError(
            f"invalid rsa private key: unsupported PEM block type {match.group(1)!r}"
        ) from None

    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyLoadError(f"invalid rsa private key: {exc}") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyLoadError("access key must be an RSA private key")

    return PrivateKey(key)


def load_private_key_file(path: Union[str, Path]) -> PrivateKey:
    """Load an RSA private key from a PEM file."""
    key_path = Path(path).expanduser().resolve()
    try:
        data = key_path.read_bytes()
    except OSError as exc:
        raise KeyLoadError(f"cannot read access key file {key_path}: {exc}") from exc
    return load_private_key_pem(data)


def load_private_key(material: Union[str, bytes, Path]) -> PrivateKey:
    """
    Load the access key from either an in-memory PEM block or a file path.

    Material containing a ``-----BEGIN`` marker is parsed directly;
    anything else is treated as a path.
    """
    if isinstance(material, bytes):
        return load_private_key_pem(material)
    if isinstance(material, str) and "-----BEGIN" in material:
        return load_private_key_pem(material)
    return load_private_key_file(material)
