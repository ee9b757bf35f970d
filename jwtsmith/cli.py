"""Command line interface for issuing and checking tokens."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError

from jwtsmith.config import JwtSmithConfig, load_config
from jwtsmith.errors import ConfigError
from jwtsmith.facade import decode, encode
from jwtsmith.sources import ConfiguredClaimSource

app = typer.Typer(help="CLI for jwtsmith tokens")


@app.callback()
def main(
    log_level: str = typer.Option("warning", help="Logging level for jwtsmith"),
) -> None:
    """jwtsmith CLI entry point."""
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.WARNING))


def _parse_claim(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"Expected key=value, got {raw!r}", param_hint="--claim")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def _build_config(
    config_path: Optional[str], secret: Optional[str], algorithm: Optional[str]
) -> JwtSmithConfig:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        typer.secho(f"Configuration error: {e.message}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if secret:
        config.signer.secret_key = secret
    if algorithm:
        try:
            config.signer.algorithm = algorithm.upper()
        except ValidationError:
            raise typer.BadParameter(
                f"Unsupported algorithm {algorithm!r}, expected HS256, HS384 or HS512",
                param_hint="--algorithm",
            )
    return config


@app.command("encode")
def encode_command(
    claim: Optional[List[str]] = typer.Option(
        None, "--claim", "-c", help="Claim as key=value; values are parsed as JSON when possible"
    ),
    config: Optional[str] = typer.Option(None, help="Path to a YAML config file"),
    secret: Optional[str] = typer.Option(None, help="Secret key, overrides config"),
    algorithm: Optional[str] = typer.Option(None, help="HS256, HS384 or HS512"),
) -> None:
    """
    Issue a signed token.

    Registered claims (exp, nbf, iat, iss and optionally aud/jti) are generated
    from configuration and merged with the given claims.

    Example:
        jwtsmith encode --secret s3cr3t -c sub=alice -c roles='["admin"]'
    """
    payload: Dict[str, Any] = dict(_parse_claim(raw) for raw in claim or [])
    source = ConfiguredClaimSource(_build_config(config, secret, algorithm))
    status, value = encode(source, payload)
    if status != "ok":
        typer.secho(f"Encoding failed: {value}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(value)


@app.command("decode")
def decode_command(
    token: str,
    skip: Optional[List[str]] = typer.Option(None, help="Claim keys to skip when validating"),
    audience: Optional[str] = typer.Option(None, help="Expected audience"),
    config: Optional[str] = typer.Option(None, help="Path to a YAML config file"),
    secret: Optional[str] = typer.Option(None, help="Secret key, overrides config"),
    algorithm: Optional[str] = typer.Option(None, help="HS256, HS384 or HS512"),
) -> None:
    """
    Verify a token and print its claims as JSON.

    Example:
        jwtsmith decode --secret s3cr3t eyJhbGciOi...
        jwtsmith decode --secret s3cr3t --skip exp eyJhbGciOi...
    """
    source = ConfiguredClaimSource(_build_config(config, secret, algorithm))
    options: Dict[str, Any] = {"skip": skip or []}
    if audience:
        options["audience"] = audience
    status, value = decode(source, token, options)
    if status != "ok":
        typer.secho(f"Decoding failed: {value}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(value, indent=2, sort_keys=True))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
