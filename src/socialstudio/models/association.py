# -*- coding: utf-8 -*-
"""Association data model: typed links from a user to forums, stores, profiles."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from socialstudio.errors import DecodeError
from socialstudio.models.json_value import JsonValue, decode_json_value

logger = logging.getLogger(__name__)


class AssociationType(str, Enum):
    FORUM = "forum"
    STORE = "store"
    PROFILE = "profile"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> AssociationType:
        try:
            return cls(str(raw))
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Association:
    id: str
    type: AssociationType
    label: str
    data: dict[str, JsonValue] = field(default_factory=dict)

    def data_as_dict(self) -> dict[str, Any]:
        return {key: value.unwrap() for key, value in self.data.items()}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Association:
        try:
            raw_data = payload.get("data", {})
            if not isinstance(raw_data, dict):
                raise DecodeError("association data must be an object")
            return cls(
                id=str(payload["id"]),
                type=AssociationType.parse(payload["type"]),
                label=str(payload["label"]),
                data={str(key): decode_json_value(value) for key, value in raw_data.items()},
            )
        except KeyError as exc:
            raise DecodeError(f"association is missing field {exc.args[0]!r}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": self.type.value, "label": self.label, "data": self.data_as_dict()}


def decode_associations(payload: bytes | str | list[Any]) -> list[Association]:
    """Decode a JSON array of associations; any malformed entry discards the whole list."""
    try:
        items = json.loads(payload) if isinstance(payload, (bytes, str)) else payload
        if not isinstance(items, list):
            raise DecodeError("expected a JSON array of associations")
        return [Association.from_dict(item) for item in items]
    except (DecodeError, ValueError, TypeError, AttributeError) as exc:
        logger.error("Decoding associations failed: %s", exc)
        return []
