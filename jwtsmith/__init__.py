"""jwtsmith: build, sign and verify compact JSON Web Tokens."""

from .algorithms import Algorithm
from .claims import RegisteredClaim, Validator
from .config import JwtSmithConfig, load_config
from .errors import (
    ClaimValidationFailed,
    ConfigError,
    InvalidClaimKey,
    InvalidSignature,
    MalformedToken,
    MissingSigner,
    MissingToken,
    SerializationError,
    TokenError,
)
from .facade import ClaimSource, Result, decode, encode, validate_time_claim
from .signer import Signer, sign, verify
from .sources import ConfiguredClaimSource
from .token import Token, default_token

__version__ = "0.1.0"
__all__ = [
    "Algorithm",
    "RegisteredClaim",
    "Validator",
    "Token",
    "default_token",
    "Signer",
    "sign",
    "verify",
    "ClaimSource",
    "ConfiguredClaimSource",
    "Result",
    "encode",
    "decode",
    "validate_time_claim",
    "JwtSmithConfig",
    "load_config",
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
