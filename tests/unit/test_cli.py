import json

import pytest
from typer.testing import CliRunner

from jwtsmith.cli import app

SECRET = "cli-test-secret-value-" * 3


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("JWTSMITH_CONFIG", raising=False)
    monkeypatch.delenv("JWTSMITH_SECRET_KEY", raising=False)
    monkeypatch.delenv("JWTSMITH_ALGORITHM", raising=False)
    monkeypatch.chdir(tmp_path)


def _encode(runner, *args):
    result = runner.invoke(app, ["encode", "--secret", SECRET, *args])
    assert result.exit_code == 0, f"Command failed: {result.output}"
    return result.stdout.strip()


def test_encode_then_decode():
    runner = CliRunner()
    token = _encode(runner, "-c", "sub=alice", "-c", 'roles=["admin"]', "-c", "count=3")

    result = runner.invoke(app, ["decode", "--secret", SECRET, token])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    claims = json.loads(result.stdout)
    assert claims["sub"] == "alice"
    assert claims["roles"] == ["admin"]
    assert claims["count"] == 3
    assert claims["iss"] == "jwtsmith"
    assert {"exp", "iat", "nbf"} <= set(claims)


def test_decode_with_wrong_secret_fails():
    runner = CliRunner()
    token = _encode(runner, "-c", "sub=alice")

    result = runner.invoke(app, ["decode", "--secret", "wrong-" + SECRET, token])

    assert result.exit_code == 1
    assert "Signature verification failed" in result.stdout


def test_decode_skip_option(monkeypatch):
    runner = CliRunner()
    monkeypatch.setattr("jwtsmith.utils.time.current_time", lambda: 1_000)
    token = _encode(runner, "-c", "sub=alice")
    monkeypatch.setattr("jwtsmith.utils.time.current_time", lambda: 10**13)

    expired = runner.invoke(app, ["decode", "--secret", SECRET, token])
    skipped = runner.invoke(app, ["decode", "--secret", SECRET, "--skip", "exp", token])

    assert expired.exit_code == 1
    assert "Token expired" in expired.stdout
    assert skipped.exit_code == 0, f"Command failed: {skipped.output}"


def test_encode_without_secret_fails():
    result = CliRunner().invoke(app, ["encode", "-c", "sub=alice"])
    assert result.exit_code == 1
    assert "No secret key configured" in result.stdout


def test_encode_rejects_malformed_claim():
    result = CliRunner().invoke(app, ["encode", "--secret", SECRET, "-c", "novalue"])
    assert result.exit_code != 0


def test_encode_uses_config_file(tmp_path):
    config_path = tmp_path / "jwtsmith.yaml"
    config_path.write_text(
        f"signer:\n  algorithm: HS384\n  secret_key: {SECRET}\nclaims:\n  audience: api\n"
    )
    runner = CliRunner()
    token = runner.invoke(app, ["encode", "--config", str(config_path)]).stdout.strip()

    result = runner.invoke(app, ["decode", "--config", str(config_path), token])
    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert json.loads(result.stdout)["aud"] == "api"

    wrong_audience = runner.invoke(
        app, ["decode", "--config", str(config_path), "--audience", "other", token]
    )
    assert wrong_audience.exit_code == 1
    assert "Invalid audience" in wrong_audience.stdout


def test_encode_rejects_unknown_algorithm():
    result = CliRunner().invoke(app, ["encode", "--secret", SECRET, "--algorithm", "rs256"])
    assert result.exit_code == 2


def test_encode_reports_bad_algorithm_from_env(monkeypatch):
    monkeypatch.setenv("JWTSMITH_ALGORITHM", "rs256")
    result = CliRunner().invoke(app, ["encode", "--secret", SECRET])
    assert result.exit_code == 1
    assert "Unsupported JWTSMITH_ALGORITHM" in result.stdout
