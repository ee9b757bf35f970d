"""Codec backed by the standard library ``json`` module."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..errors import SerializationError
from .base import BaseCodec


class JsonCodec(BaseCodec):
    """Compact JSON, keys kept in insertion order."""

    name = "json"

    def serialize(self, claims: Mapping[str, Any]) -> bytes:
        try:
            return json.dumps(claims, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize claims: {e}", details={"codec": self.name})

    def load(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except ValueError as e:
            raise SerializationError(f"Failed to parse JSON: {e}", details={"codec": self.name})
