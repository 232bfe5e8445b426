# -*- coding: utf-8 -*-
"""Tagged JSON values for heterogeneous association payloads.

Decoding probes the variants in a fixed order: integer, float, boolean,
string, list, map. A JSON number with an integral value therefore always
becomes an integer, even when written as ``3.0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from socialstudio.errors import DecodeError


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class JsonKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class JsonValue:
    kind: JsonKind
    value: Any

    def unwrap(self) -> Any:
        """Return the plain Python value, recursively."""
        if self.kind is JsonKind.LIST:
            return [item.unwrap() for item in self.value]
        if self.kind is JsonKind.MAP:
            return {key: item.unwrap() for key, item in self.value.items()}
        return self.value


def _as_integer(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if _INT64_MIN <= raw <= _INT64_MAX else None
    if isinstance(raw, float) and raw.is_integer() and _INT64_MIN <= raw <= _INT64_MAX:
        return int(raw)
    return None


def _as_float(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    return None


def _as_boolean(raw: Any) -> bool | None:
    return raw if isinstance(raw, bool) else None


def _as_string(raw: Any) -> str | None:
    return raw if isinstance(raw, str) else None


def _as_list(raw: Any) -> list[JsonValue] | None:
    if not isinstance(raw, list):
        return None
    return [decode_json_value(item) for item in raw]


def _as_map(raw: Any) -> dict[str, JsonValue] | None:
    if not isinstance(raw, dict):
        return None
    return {str(key): decode_json_value(item) for key, item in raw.items()}


_PROBES: tuple[tuple[JsonKind, Callable[[Any], Any]], ...] = (
    (JsonKind.INTEGER, _as_integer),
    (JsonKind.FLOAT, _as_float),
    (JsonKind.BOOLEAN, _as_boolean),
    (JsonKind.STRING, _as_string),
    (JsonKind.LIST, _as_list),
    (JsonKind.MAP, _as_map),
)


def decode_json_value(raw: Any) -> JsonValue:
    """Wrap a value produced by ``json.loads`` in its tagged variant."""
    for kind, probe in _PROBES:
        decoded = probe(raw)
        if decoded is not None:
            return JsonValue(kind, decoded)
    raise DecodeError(f"Unsupported JSON value: {raw!r}")


def encode_json_value(value: JsonValue) -> Any:
    """Turn a tagged value back into something ``json.dumps`` accepts."""
    return value.unwrap()
