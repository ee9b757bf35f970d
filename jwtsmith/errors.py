"""Error kinds raised or reported by jwtsmith."""

from __future__ import annotations

from typing import Any, Dict, Optional


class TokenError(Exception):
    """Base error for token building, signing and verification.

    ``code`` is a stable identifier callers can branch on; ``message`` is the
    human-readable reason; ``details`` carries structured context.
    """

    code = "TOKEN_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidClaimKey(TokenError, ValueError):
    """A claim key is not a symbolic identifier."""

    code = "INVALID_CLAIM_KEY"

    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"Claim key must be an identifier, got {key!r}", details={"key": repr(key)}
        )


class MissingSigner(TokenError):
    code = "MISSING_SIGNER"

    def __init__(self, message: str = "No signer attached or supplied"):
        super().__init__(message)


class MissingToken(TokenError):
    code = "MISSING_TOKEN"

    def __init__(self, message: str = "No compact token to verify"):
        super().__init__(message)


class MalformedToken(TokenError):
    code = "MALFORMED_TOKEN"


class InvalidSignature(TokenError):
    code = "INVALID_SIGNATURE"

    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message)


class SerializationError(TokenError):
    code = "SERIALIZATION_ERROR"


class ClaimValidationFailed(TokenError):
    """A registered validator rejected the decoded value of ``key``."""

    code = "CLAIM_VALIDATION_FAILED"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(
            f"Invalid claim '{key}': {reason}", details={"key": key, "reason": reason}
        )


class ConfigError(TokenError):
    """The claim source or configuration could not provide what was asked."""

    code = "CONFIG_ERROR"


__all__ = [
    "TokenError",
    "InvalidClaimKey",
    "MissingSigner",
    "MissingToken",
    "MalformedToken",
    "InvalidSignature",
    "SerializationError",
    "ClaimValidationFailed",
    "ConfigError",
]
