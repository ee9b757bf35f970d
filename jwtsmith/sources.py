"""Claim source driven by :class:`~jwtsmith.config.JwtSmithConfig`."""

from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional

from .config import JwtSmithConfig, load_config
from .errors import ConfigError
from .facade import ClaimSource, Result, error, ok, validate_time_claim
from .utils import time as clock


class ConfiguredClaimSource(ClaimSource):
    """Generate and validate registered claims from configuration.

    Generated claims: ``exp`` (now + ttl), ``nbf`` (now - skew), ``iat``,
    ``iss``, plus ``aud`` when an audience is configured and ``jti`` when
    ``generate_jti`` is set.

    ``validate_claim`` understands the ``audience`` and ``now`` options, which
    override the configured audience and the clock for a single decode.
    """

    def __init__(self, config: Optional[JwtSmithConfig] = None) -> None:
        self.config = config or load_config()
        self.json_codec = self.config.json_codec

    def secret_key(self) -> str:
        secret = self.config.signer.secret_key
        if not secret:
            raise ConfigError("No secret key configured (set JWTSMITH_SECRET_KEY)")
        return secret

    def algorithm(self) -> str:
        return self.config.signer.algorithm

    def claim(self, key: str, payload: Mapping[str, Any]) -> Any:
        claims = self.config.claims
        now = clock.current_time()
        if key == "exp":
            return now + claims.ttl_ms
        if key == "nbf":
            return now - claims.not_before_skew_ms
        if key == "iat":
            return now
        if key == "iss":
            return claims.issuer
        if key == "aud":
            return claims.audience
        if key == "jti" and claims.generate_jti:
            return str(uuid.uuid4())
        return None

    def validate_claim(
        self, key: str, payload: Mapping[str, Any], options: Mapping[str, Any]
    ) -> Result:
        leeway = self.config.claims.leeway_ms
        now = options.get("now")
        if key == "exp":
            return validate_time_claim(
                payload, key, "Token expired", lambda exp, t: exp > t - leeway, now
            )
        if key == "nbf":
            return validate_time_claim(
                payload, key, "Token not yet valid", lambda nbf, t: nbf <= t + leeway, now
            )
        if key == "iat":
            return validate_time_claim(
                payload, key, "Token issued in the future", lambda iat, t: iat <= t + leeway, now
            )
        if key == "iss":
            if payload[key] != self.config.claims.issuer:
                return error("Invalid issuer")
            return ok()
        if key == "aud":
            expected = options.get("audience", self.config.claims.audience)
            if expected is None:
                return ok()
            audience = payload[key]
            accepted = audience if isinstance(audience, list) else [audience]
            if expected not in accepted:
                return error("Invalid audience")
            return ok()
        return ok()


__all__ = ["ConfiguredClaimSource"]
