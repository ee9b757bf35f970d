"""Codec backed by ``pydantic_core``'s JSON implementation.

Unlike :class:`~jwtsmith.codecs.stdlib.JsonCodec` this one also accepts
datetimes, UUIDs, enums and pydantic models as claim values; they come back as
their JSON representation after a round trip.
"""

from __future__ import annotations

from typing import Any, Mapping

import pydantic_core

from ..errors import SerializationError
from .base import BaseCodec


class PydanticCodec(BaseCodec):
    name = "pydantic"

    def serialize(self, claims: Mapping[str, Any]) -> bytes:
        try:
            return pydantic_core.to_json(dict(claims))
        except ValueError as e:
            raise SerializationError(f"Failed to serialize claims: {e}", details={"codec": self.name})

    def load(self, data: bytes) -> Any:
        try:
            return pydantic_core.from_json(data)
        except ValueError as e:
            raise SerializationError(f"Failed to parse JSON: {e}", details={"codec": self.name})
