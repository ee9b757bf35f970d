"""Codec factory and registration."""

from __future__ import annotations

from typing import Dict, Type

from ..constants import DEFAULT_JSON_CODEC
from ..errors import SerializationError
from .base import BaseCodec
from .pydantic import PydanticCodec
from .stdlib import JsonCodec

_CODECS: Dict[str, Type[BaseCodec]] = {
    JsonCodec.name: JsonCodec,
    PydanticCodec.name: PydanticCodec,
}


def register_codec(codec_cls: Type[BaseCodec]) -> None:
    """Make ``codec_cls`` selectable by its ``name``.

    The registry is process-wide and names are case-insensitive. Registering
    an existing name replaces the previous codec for every caller.
    """
    if not codec_cls.name:
        raise ValueError("Codec classes must define a non-empty name")
    _CODECS[codec_cls.name.lower()] = codec_cls


def get_codec(name: str = DEFAULT_JSON_CODEC) -> BaseCodec:
    """Factory function to get the codec registered under ``name``."""
    try:
        return _CODECS[name.lower()]()
    except (KeyError, AttributeError):
        raise SerializationError(
            f"Unsupported JSON codec: {name}", details={"available": sorted(_CODECS)}
        )


__all__ = ["BaseCodec", "JsonCodec", "PydanticCodec", "get_codec", "register_codec"]
