from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    DEFAULT_ISSUER,
    DEFAULT_JSON_CODEC,
    DEFAULT_NOT_BEFORE_SKEW_MS,
    DEFAULT_TTL_MS,
)
from .errors import ConfigError


class SignerConfig(BaseModel):
    """Signing algorithm and secret."""

    model_config = ConfigDict(validate_assignment=True)

    algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    secret_key: Optional[str] = Field(default=None, repr=False)


class ClaimsConfig(BaseModel):
    """How registered claims are generated and checked."""

    issuer: str = DEFAULT_ISSUER
    audience: Optional[str] = None
    ttl_ms: int = DEFAULT_TTL_MS
    not_before_skew_ms: int = DEFAULT_NOT_BEFORE_SKEW_MS
    leeway_ms: int = 0
    generate_jti: bool = False


class JwtSmithConfig(BaseModel):
    """Top-level configuration model."""

    signer: SignerConfig = SignerConfig()
    claims: ClaimsConfig = ClaimsConfig()
    json_codec: Literal["json", "pydantic"] = DEFAULT_JSON_CODEC


def load_config(path: Optional[str] = None) -> JwtSmithConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to JWTSMITH_CONFIG env
            variable or 'jwtsmith.yaml' in the current directory.

    ``JWTSMITH_SECRET_KEY`` and ``JWTSMITH_ALGORITHM`` override whatever the
    file says.
    """

    config_path = path or os.getenv("JWTSMITH_CONFIG", "jwtsmith.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = JwtSmithConfig(**data)
    else:
        config = JwtSmithConfig()

    env_secret = os.getenv("JWTSMITH_SECRET_KEY")
    env_algorithm = os.getenv("JWTSMITH_ALGORITHM")
    if env_secret:
        config.signer.secret_key = env_secret
    if env_algorithm:
        try:
            config.signer.algorithm = env_algorithm.upper()
        except ValidationError:
            raise ConfigError(
                f"Unsupported JWTSMITH_ALGORITHM: {env_algorithm}",
                details={"available": ["HS256", "HS384", "HS512"]},
            )
    return config
