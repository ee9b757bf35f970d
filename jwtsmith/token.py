"""Immutable token configuration and its fluent builder methods."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import signer as _pipeline
from .claims import RegisteredClaim, Validator, as_validator, claim_key
from .codecs import get_codec
from .constants import (
    DEFAULT_AUDIENCE,
    DEFAULT_ISSUER,
    DEFAULT_JSON_CODEC,
    DEFAULT_NOT_BEFORE_SKEW_MS,
    DEFAULT_SUBJECT,
    DEFAULT_TTL_MS,
)
from .errors import TokenError
from .signer import Signer
from .utils import time as clock


class Token(BaseModel):
    """A set of claims plus everything needed to sign or verify them.

    Every ``with_*`` method returns a new token; the receiver is never
    modified. ``sign`` and ``verify`` also return new tokens, with exactly one
    of ``compact`` and ``error`` set.

    Example::

        token = (
            Token.new()
            .with_standard_defaults()
            .with_sub("user-42")
            .with_signer(Signer.hs256(secret))
            .sign()
        )
        token.get_compact()
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    claims: Dict[str, Any] = Field(default_factory=dict)
    validations: Dict[str, Validator] = Field(default_factory=dict)
    signer: Optional[Signer] = None
    json_codec: str = DEFAULT_JSON_CODEC
    compact: Optional[str] = None
    error: Optional[TokenError] = None

    def __init__(self, **data: Any) -> None:
        # Keys are checked before pydantic runs so InvalidClaimKey is not
        # wrapped in a ValidationError.
        if isinstance(data.get("claims"), Mapping):
            data["claims"] = {claim_key(k): v for k, v in data["claims"].items()}
        if isinstance(data.get("validations"), Mapping):
            data["validations"] = {
                claim_key(k): as_validator(claim_key(k), v)
                for k, v in data["validations"].items()
            }
        super().__init__(**data)

    def model_copy(
        self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False
    ) -> "Token":
        """Copy with fresh ``claims`` and ``validations`` dicts.

        A derived token never shares a mutable mapping with its source.
        """
        changes: Dict[str, Any] = {
            "claims": self.claims,
            "validations": self.validations,
            **(update or {}),
        }
        changes["claims"] = dict(changes["claims"])
        changes["validations"] = dict(changes["validations"])
        return super().model_copy(update=changes, deep=deep)

    # Constructors

    @classmethod
    def new(cls) -> "Token":
        return cls()

    @classmethod
    def from_claims(
        cls, claims: Mapping[Any, Any], json_codec: str = DEFAULT_JSON_CODEC
    ) -> "Token":
        """Token holding exactly ``claims``; no defaults are added."""
        get_codec(json_codec)
        return cls(claims=claims, json_codec=json_codec)

    @classmethod
    def from_compact(cls, compact: str, json_codec: str = DEFAULT_JSON_CODEC) -> "Token":
        """Token holding only a compact string, ready for :meth:`verify`."""
        get_codec(json_codec)
        return cls(compact=compact, json_codec=json_codec)

    # Claims

    def with_claim(self, key: Any, value: Any) -> "Token":
        """Set ``key`` to ``value``, replacing any previous value."""
        return self.model_copy(update={"claims": {**self.claims, claim_key(key): value}})

    def with_exp(self, value: Optional[int] = None) -> "Token":
        """Set ``exp``; defaults to two hours from now."""
        if value is None:
            value = clock.current_time() + DEFAULT_TTL_MS
        return self.with_claim(RegisteredClaim.EXP, value)

    def with_iat(self, value: Optional[int] = None) -> "Token":
        """Set ``iat``; defaults to now."""
        if value is None:
            value = clock.current_time()
        return self.with_claim(RegisteredClaim.IAT, value)

    def with_nbf(self, value: Optional[int] = None) -> "Token":
        """Set ``nbf``; defaults to 100 ms ago."""
        if value is None:
            value = clock.current_time() - DEFAULT_NOT_BEFORE_SKEW_MS
        return self.with_claim(RegisteredClaim.NBF, value)

    def with_iss(self, value: Any = DEFAULT_ISSUER) -> "Token":
        return self.with_claim(RegisteredClaim.ISS, value)

    def with_sub(self, value: Any = DEFAULT_SUBJECT) -> "Token":
        return self.with_claim(RegisteredClaim.SUB, value)

    def with_aud(self, value: Any = DEFAULT_AUDIENCE) -> "Token":
        return self.with_claim(RegisteredClaim.AUD, value)

    def with_jti(self, value: Any = None) -> "Token":
        """Set ``jti``; defaults to a random UUID4 string."""
        if value is None:
            value = str(uuid.uuid4())
        return self.with_claim(RegisteredClaim.JTI, value)

    def with_standard_defaults(self) -> "Token":
        """Add ``exp``, ``iat``, ``nbf`` and ``iss`` plus validators for each.

        The validators compare against the time at verification:

        - ``exp`` must be after now
        - ``iat`` and ``nbf`` must be before now
        - ``iss`` must equal :data:`~jwtsmith.constants.DEFAULT_ISSUER`
        """
        return (
            self.with_exp()
            .with_iat()
            .with_nbf()
            .with_iss()
            .with_validation(RegisteredClaim.EXP, Validator.after_now())
            .with_validation(RegisteredClaim.IAT, Validator.before_now())
            .with_validation(RegisteredClaim.NBF, Validator.before_now())
            .with_validation(RegisteredClaim.ISS, Validator.equals(DEFAULT_ISSUER))
        )

    # Configuration

    def with_validation(
        self, key: Any, validator: Validator | Callable[[Any], bool]
    ) -> "Token":
        """Replace the validator for ``key``.

        Claims without a validator are accepted as-is during verification.
        """
        name = claim_key(key)
        return self.model_copy(
            update={"validations": {**self.validations, name: as_validator(name, validator)}}
        )

    def with_signer(self, signer: Signer) -> "Token":
        """Attach ``signer``. Does not sign or verify anything."""
        if not isinstance(signer, Signer):
            raise TypeError(f"Expected a Signer, got {type(signer).__name__}")
        return self.model_copy(update={"signer": signer})

    def with_json_codec(self, name: str) -> "Token":
        get_codec(name)
        return self.model_copy(update={"json_codec": name})

    # Pipeline

    def sign(self, signer: Optional[Signer] = None) -> "Token":
        """See :func:`jwtsmith.signer.sign`."""
        return _pipeline.sign(self, signer)

    def verify(self, signer: Optional[Signer] = None) -> "Token":
        """See :func:`jwtsmith.signer.verify`."""
        return _pipeline.verify(self, signer)

    def get_compact(self) -> Optional[str]:
        return self.compact

    def get_claims(self) -> Dict[str, Any]:
        return dict(self.claims)

    @property
    def is_valid(self) -> bool:
        """``True`` once signed or verified without error."""
        return self.error is None and self.compact is not None


def default_token() -> Token:
    """Shortcut for ``Token.new().with_standard_defaults()``."""
    return Token.new().with_standard_defaults()


__all__ = ["Token", "default_token"]
