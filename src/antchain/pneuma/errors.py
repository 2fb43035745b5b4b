from __future__ import annotations

from typing import Optional


class ChainCallError(RuntimeError):
    exit_code: int = 1


class TransportError(ChainCallError):
    exit_code = 4


class EnvelopeDecodeError(ChainCallError):
    exit_code = 5

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteError(ChainCallError):
    """The gateway answered with ``success=false``."""

    exit_code = 6

    def __init__(self, code: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"antchain: {code} | {message}")
        self.code = code
        self.message = message
        self.status_code = status_code


class ParameterError(ChainCallError, ValueError):
    exit_code = 7
