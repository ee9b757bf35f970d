"""Base codec interface for claim serialization."""

from __future__ import annotations

import abc
from typing import Any, Dict, Mapping

from ..errors import SerializationError


class BaseCodec(metaclass=abc.ABCMeta):
    """Turns claim mappings into bytes and back."""

    name: str = ""

    @abc.abstractmethod
    def serialize(self, claims: Mapping[str, Any]) -> bytes:
        """Encode ``claims`` as JSON bytes."""
        raise NotImplementedError

    @abc.abstractmethod
    def load(self, data: bytes) -> Any:
        """Parse JSON bytes into a Python value."""
        raise NotImplementedError

    def deserialize(self, data: bytes) -> Dict[str, Any]:
        """Parse ``data`` and require a JSON object at the top level."""
        value = self.load(data)
        if not isinstance(value, dict):
            raise SerializationError(
                f"Expected a JSON object, got {type(value).__name__}",
                details={"codec": self.name},
            )
        return value
