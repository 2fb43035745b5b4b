"""
Client configuration.

A ``Config`` is built once and never mutated. It comes from a dict (e.g. a
JSON config file using the field names below) or from the environment,
with ``~/.antchain/.env`` loaded first when it exists.

``access_key`` is the path to the PEM access key, or the PEM block itself.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import jsonschema
from dotenv import load_dotenv

# Default config directory
ANTCHAIN_DIR = Path.home() / ".antchain"
ANTCHAIN_ENV = ANTCHAIN_DIR / ".env"

FIELDS = (
    "biz_id",
    "endpoint",
    "tenant_id",
    "access_id",
    "access_key",
    "account",
    "mykmskey_id",
)

ENV_PREFIX = "ANTCHAIN_"

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": list(FIELDS),
    "properties": {
        "biz_id": {"type": "string"},
        "endpoint": {"type": "string", "minLength": 1, "pattern": "^https?://"},
        "tenant_id": {"type": "string"},
        "access_id": {"type": "string", "minLength": 1},
        "access_key": {"type": "string", "minLength": 1},
        "account": {"type": "string"},
        "mykmskey_id": {"type": "string"},
    },
}


class ConfigError(ValueError):
    exit_code = 2

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message if not errors else f"{message} " + "; ".join(errors))
        self.errors = errors or []


@dataclass(frozen=True)
class Config:
    biz_id: str
    endpoint: str
    tenant_id: str
    access_id: str
    access_key: str
    account: str
    mykmskey_id: str

    def __repr__(self) -> str:
        # access_key may hold an inline PEM block
        return (
            f"Config(biz_id={self.biz_id!r}, endpoint={self.endpoint!r}, "
            f"tenant_id={self.tenant_id!r}, access_id={self.access_id!r}, "
            f"account={self.account!r}, mykmskey_id={self.mykmskey_id!r})"
        )

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Config":
        validator = jsonschema.Draft202012Validator(CONFIG_SCHEMA)
        errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
        if errors:
            formatted = [_format_error(err) for err in errors]
            raise ConfigError("Invalid antchain configuration.", errors=formatted)

        values = {name: payload[name] for name in FIELDS}
        values["endpoint"] = values["endpoint"].rstrip("/")
        return cls(**values)

    @classmethod
    def from_path(cls, path: Path) -> "Config":
        try:
            with Path(path).expanduser().open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
        return cls.from_dict(payload)

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from ANTCHAIN_* environment variables.

        Args:
            env_path: .env file to load first (default: ~/.antchain/.env)
        """
        env_path = env_path or ANTCHAIN_ENV
        if env_path.exists():
            load_dotenv(env_path, override=False)

        payload = {}
        for name in FIELDS:
            value = os.environ.get(ENV_PREFIX + name.upper())
            if value is not None:
                payload[name] = value
        return cls.from_dict(payload)

    @classmethod
    def load(cls, path: Optional[Path] = None, env_path: Optional[Path] = None) -> "Config":
        if path is not None:
            return cls.from_path(path)
        return cls.from_env(env_path)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _format_error(error: jsonschema.ValidationError) -> str:
    if error.validator == "required":
        return f"<root>: {error.message}"
    location = "/".join(str(part) for part in error.path) or "<root>"
    return f"{location}: {error.message}"
