"""Claim names and the validators registered against them."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from .errors import InvalidClaimKey
from .utils import time as clock


class RegisteredClaim(str, Enum):
    """Claim names defined by RFC 7519."""

    EXP = "exp"
    NBF = "nbf"
    IAT = "iat"
    AUD = "aud"
    ISS = "iss"
    SUB = "sub"
    JTI = "jti"


REGISTERED_CLAIMS = tuple(RegisteredClaim)


def claim_key(key: Any) -> str:
    """Return ``key`` as a plain claim name.

    Accepts :class:`RegisteredClaim` members and strings that are valid
    identifiers. Raises :class:`InvalidClaimKey` for anything else.
    """
    if isinstance(key, RegisteredClaim):
        return key.value
    if isinstance(key, str) and key.isidentifier():
        return key
    raise InvalidClaimKey(key)


class Validator(BaseModel):
    """Predicate applied to a decoded claim value, with a description.

    The description is what ends up in the failure reason, so it should read
    as the requirement the value did not meet.
    """

    model_config = ConfigDict(frozen=True)

    predicate: Callable[[Any], bool]
    description: str

    def __call__(self, value: Any) -> bool:
        return bool(self.predicate(value))

    @classmethod
    def of(cls, predicate: Callable[[Any], bool], description: str = "custom validator") -> "Validator":
        return cls(predicate=predicate, description=description)

    @classmethod
    def equals(cls, expected: Any) -> "Validator":
        return cls(predicate=lambda value: value == expected, description=f"must equal {expected!r}")

    @classmethod
    def after_now(cls, leeway: int = 0) -> "Validator":
        """Value must be later than the current time (read at call time)."""
        return cls(
            predicate=lambda value: value > clock.current_time() - leeway,
            description="must be after the current time",
        )

    @classmethod
    def before_now(cls, leeway: int = 0) -> "Validator":
        """Value must be earlier than the current time (read at call time)."""
        return cls(
            predicate=lambda value: value < clock.current_time() + leeway,
            description="must be before the current time",
        )

    @classmethod
    def one_of(cls, allowed: Any) -> "Validator":
        choices = tuple(allowed)
        return cls(predicate=lambda value: value in choices, description=f"must be one of {list(choices)!r}")


def as_validator(key: str, validator: Validator | Callable[[Any], bool]) -> Validator:
    """Wrap a bare callable into a :class:`Validator` for ``key``."""
    if isinstance(validator, Validator):
        return validator
    if not callable(validator):
        raise TypeError(f"Validator for '{key}' must be callable, got {type(validator).__name__}")
    name = getattr(validator, "__name__", "validator")
    return Validator(predicate=validator, description=f"rejected by {name}")


__all__ = ["RegisteredClaim", "REGISTERED_CLAIMS", "Validator", "claim_key", "as_validator"]
