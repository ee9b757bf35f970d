"""Signers and the sign/verify pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from jwt.exceptions import InvalidKeyError
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .algorithms import Algorithm, HmacSigner, b64decode, b64encode
from .codecs import get_codec
from .constants import TOKEN_TYPE
from .errors import (
    ClaimValidationFailed,
    ConfigError,
    InvalidSignature,
    MalformedToken,
    MissingSigner,
    MissingToken,
    SerializationError,
    TokenError,
)

if TYPE_CHECKING:
    from .config import JwtSmithConfig
    from .token import Token

logger = logging.getLogger(__name__)


class Signer(BaseModel):
    """Algorithm and secret used to produce and check signatures."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm = Algorithm.HS256
    secret: bytes = Field(..., repr=False)

    @field_validator("secret", mode="before")
    @classmethod
    def _encode_secret(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.encode("utf-8")
        return v

    @model_validator(mode="after")
    def _check_secret(self) -> "Signer":
        if not self.secret:
            raise ValueError("secret must be a non-empty byte string")
        try:
            self.hmac.prepare_key(self.secret)
        except InvalidKeyError as e:
            raise ValueError(f"secret is not usable as an HMAC key: {e}")
        return self

    @property
    def hmac(self) -> HmacSigner:
        return HmacSigner(self.algorithm)

    @classmethod
    def hs256(cls, secret: str | bytes) -> "Signer":
        return cls(algorithm=Algorithm.HS256, secret=secret)

    @classmethod
    def hs384(cls, secret: str | bytes) -> "Signer":
        return cls(algorithm=Algorithm.HS384, secret=secret)

    @classmethod
    def hs512(cls, secret: str | bytes) -> "Signer":
        return cls(algorithm=Algorithm.HS512, secret=secret)

    @classmethod
    def from_config(cls, config: "JwtSmithConfig") -> "Signer":
        """Build a signer from loaded configuration.

        Raises:
            ConfigError: If no secret is configured or it cannot be used.
        """
        secret = config.signer.secret_key
        if not secret:
            raise ConfigError("No secret key configured (set JWTSMITH_SECRET_KEY)")
        try:
            return cls(algorithm=config.signer.algorithm, secret=secret)
        except ValueError as e:
            raise ConfigError(f"Invalid signer configuration: {e}")

    def header(self) -> Dict[str, str]:
        return {"alg": self.algorithm.value, "typ": TOKEN_TYPE}

    def signature_for(self, signing_input: bytes) -> bytes:
        return self.hmac.sign(signing_input, self.secret)


def _resolve_signer(token: "Token", signer: Optional[Signer]) -> Signer:
    resolved = signer if signer is not None else token.signer
    if resolved is None:
        raise MissingSigner()
    return resolved


def _failed(token: "Token", error: TokenError, **changes: Any) -> "Token":
    return token.model_copy(update={"compact": None, "error": error, **changes})


def sign(token: "Token", signer: Optional[Signer] = None) -> "Token":
    """Serialize and sign the claims of ``token``.

    ``signer`` overrides the attached signer for this call only. Returns a new
    token with ``compact`` set, or with ``error`` set when signing fails.
    """
    try:
        resolved = _resolve_signer(token, signer)
        codec = get_codec(token.json_codec)
        payload = codec.serialize(token.claims)
        header = codec.serialize(resolved.header())
    except TokenError as e:
        logger.info(f"Token signing failed: {e.message}")
        return _failed(token, e)

    signing_input = f"{b64encode(header)}.{b64encode(payload)}"
    signature = resolved.signature_for(signing_input.encode("ascii"))
    compact = f"{signing_input}.{b64encode(signature)}"
    logger.debug(
        f"Signed token with {resolved.algorithm.value} ({len(token.claims)} claims)"
    )
    return token.model_copy(update={"compact": compact, "error": None})


def _split(compact: str) -> Tuple[str, str, str]:
    # Extra dots end up in the signature segment, which then fails the
    # signature check rather than the structural one.
    parts = compact.split(".", 2)
    if len(parts) != 3:
        raise MalformedToken(
            f"Expected 3 dot-separated segments, got {len(parts)}",
            details={"segments": len(parts)},
        )
    return parts[0], parts[1], parts[2]


def _decode_segment(segment: str, name: str) -> bytes:
    try:
        return b64decode(segment)
    except ValueError as e:
        raise MalformedToken(f"Segment '{name}' is not valid base64url: {e}")


def _check_signature(signer: Signer, header: Dict[str, Any], signing_input: str, segment: str) -> None:
    if header.get("alg") != signer.algorithm.value:
        raise InvalidSignature(
            f"Token algorithm {header.get('alg')!r} does not match signer {signer.algorithm.value}"
        )
    try:
        signature = b64decode(segment)
    except ValueError:
        raise InvalidSignature()
    # Different spellings of the same bytes would otherwise slip through.
    if b64encode(signature) != segment:
        raise InvalidSignature()
    if not signer.hmac.verify(signing_input.encode("ascii"), signature, signer.secret):
        raise InvalidSignature()


def _run_validations(token: "Token", claims: Dict[str, Any]) -> None:
    for key, validator in token.validations.items():
        if key not in claims:
            continue
        try:
            passed = validator(claims[key])
        except Exception as e:
            raise ClaimValidationFailed(key, f"{validator.description} (validator raised {e!r})")
        if not passed:
            raise ClaimValidationFailed(key, validator.description)


def verify(token: "Token", signer: Optional[Signer] = None) -> "Token":
    """Check the signature of ``token.compact`` and validate its claims.

    Validators registered on ``token`` run in registration order against the
    decoded claims; the first rejection stops verification. On success the
    returned token holds the decoded claims. On failure it holds no claims and
    ``error`` says why.
    """
    try:
        if not token.compact:
            raise MissingToken()
        resolved = _resolve_signer(token, signer)
        codec = get_codec(token.json_codec)

        header_segment, payload_segment, signature_segment = _split(token.compact)
        header_raw = _decode_segment(header_segment, "header")
        payload_raw = _decode_segment(payload_segment, "payload")
        try:
            header = codec.deserialize(header_raw)
        except SerializationError as e:
            raise MalformedToken(f"Token header is not a JSON object: {e.message}")

        _check_signature(
            resolved, header, f"{header_segment}.{payload_segment}", signature_segment
        )
        claims = codec.deserialize(payload_raw)
        _run_validations(token, claims)
    except TokenError as e:
        logger.info(f"Token verification failed: {e.message}")
        return _failed(token, e, claims={})

    logger.debug(f"Verified token with {resolved.algorithm.value} ({len(claims)} claims)")
    return token.model_copy(update={"claims": claims, "error": None})


__all__ = ["Signer", "sign", "verify"]
