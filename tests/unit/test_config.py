"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from jwtsmith import Signer
from jwtsmith.config import JwtSmithConfig, SignerConfig, load_config
from jwtsmith.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("JWTSMITH_CONFIG", raising=False)
    monkeypatch.delenv("JWTSMITH_SECRET_KEY", raising=False)
    monkeypatch.delenv("JWTSMITH_ALGORITHM", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file():
    config = load_config()
    assert config.signer.algorithm == "HS256"
    assert config.signer.secret_key is None
    assert config.claims.issuer == "jwtsmith"
    assert config.claims.ttl_ms == 2 * 60 * 60 * 1000
    assert config.json_codec == "json"


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "custom.yaml"
    config_path.write_text(
        """
signer:
  algorithm: HS512
  secret_key: from-file
claims:
  issuer: auth.example.com
  audience: api
  leeway_ms: 500
json_codec: pydantic
"""
    )
    monkeypatch.setenv("JWTSMITH_CONFIG", str(config_path))

    config = load_config()
    assert config.signer.algorithm == "HS512"
    assert config.signer.secret_key == "from-file"
    assert config.claims.issuer == "auth.example.com"
    assert config.claims.audience == "api"
    assert config.claims.leeway_ms == 500
    assert config.json_codec == "pydantic"


def test_default_file_in_working_directory(tmp_path):
    (tmp_path / "jwtsmith.yaml").write_text("claims:\n  issuer: local\n")
    assert load_config().claims.issuer == "local"


def test_env_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("signer:\n  algorithm: HS384\n  secret_key: from-file\n")
    monkeypatch.setenv("JWTSMITH_SECRET_KEY", "from-env")
    monkeypatch.setenv("JWTSMITH_ALGORITHM", "hs512")

    config = load_config(str(config_path))
    assert config.signer.secret_key == "from-env"
    assert config.signer.algorithm == "HS512"


def test_empty_file_gives_defaults(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_config(str(config_path)) == JwtSmithConfig()


def test_signer_from_config():
    config = JwtSmithConfig()
    config.signer.secret_key = "configured-secret-" * 3
    config.signer.algorithm = "HS384"

    signer = Signer.from_config(config)
    assert signer.algorithm.value == "HS384"


def test_signer_from_config_requires_secret():
    with pytest.raises(ConfigError):
        Signer.from_config(JwtSmithConfig())


def test_signer_from_config_rejects_unknown_algorithm():
    config = JwtSmithConfig()
    config.signer = SignerConfig.model_construct(
        algorithm="none", secret_key="configured-secret-" * 3
    )
    with pytest.raises(ConfigError):
        Signer.from_config(config)


def test_algorithm_assignment_is_validated():
    config = JwtSmithConfig()
    with pytest.raises(ValidationError):
        config.signer.algorithm = "RS256"
    assert config.signer.algorithm == "HS256"


def test_bad_algorithm_from_env(monkeypatch):
    monkeypatch.setenv("JWTSMITH_ALGORITHM", "rs256")
    with pytest.raises(ConfigError, match="Unsupported JWTSMITH_ALGORITHM"):
        load_config()
