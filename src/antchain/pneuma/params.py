"""
Call parameters - the per-call JSON object sent to the gateway.

Callers contribute operation-specific fields through ``ChainCallOption``
closures; the assembler applies them in order and then injects the
protocol fields. A later write to the same key replaces the earlier one.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Iterator, Mapping

from .errors import ParameterError

# Permitted value kinds: str, int, finite float, bool, None, and lists /
# str-keyed dicts of the same, recursively.
ParamValue = Any


def check_value(value: Any, path: str = "") -> None:
    """Raise ``ParameterError`` unless ``value`` is JSON-representable."""
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParameterError(f"{path or '<root>'}: {value!r} is not a JSON number")
        return
    if isinstance(value, list):
        for i, item in enumerate(value):
            check_value(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ParameterError(f"{path or '<root>'}: object keys must be strings, got {key!r}")
            check_value(item, f"{path}.{key}" if path else key)
        return
    raise ParameterError(
        f"{path or '<root>'}: unsupported parameter type {type(value).__name__}"
    )


class CallParams:
    """Ordered-irrelevant mapping of parameter name to value, built fresh per call."""

    def __init__(self, initial: Mapping[str, ParamValue] | None = None) -> None:
        self._data: dict[str, ParamValue] = {}
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    def set(self, key: str, value: ParamValue) -> "CallParams":
        if not isinstance(key, str) or not key:
            raise ParameterError(f"parameter name must be a non-empty string, got {key!r}")
        check_value(value, key)
        self._data[key] = value
        return self

    def get(self, key: str, default: ParamValue = None) -> ParamValue:
        return self._data.get(key, default)

    def apply(self, options: Iterable["ChainCallOption"]) -> "CallParams":
        for option in options:
            option(self)
        return self

    def to_dict(self) -> dict[str, ParamValue]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"CallParams({sorted(self._data)})"


ChainCallOption = Callable[[CallParams], None]


def with_param(key: str, value: ParamValue) -> ChainCallOption:
    """Option setting a single parameter."""
    check_value(value, key)

    def _apply(params: CallParams) -> None:
        params.set(key, value)

    return _apply


def with_params(values: Mapping[str, ParamValue]) -> ChainCallOption:
    """Option setting several parameters at once, in mapping order."""
    frozen = dict(values)
    check_value(frozen)

    def _apply(params: CallParams) -> None:
        for key, value in frozen.items():
            params.set(key, value)

    return _apply
