"""Declarative encode/decode driven by a pluggable claim source.

A :class:`ClaimSource` supplies the secret, the algorithm and, per registered
claim, how to generate and validate it. It is passed explicitly to
:func:`encode` and :func:`decode`; nothing is looked up from global state.

Example::

    class MySource(ClaimSource):
        def secret_key(self):
            return os.environ["APP_SECRET"]

        def algorithm(self):
            return "HS256"

        def claim(self, key, payload):
            if key == "exp":
                return current_time() + 300_000
            return None

        def validate_claim(self, key, payload, options):
            if key == "exp":
                return validate_time_claim(payload, "exp", "Token expired", operator.gt)
            return ok()

    status, token = encode(MySource(), {"username": "johndoe"})
    status, claims = decode(MySource(), token, {"skip": ["exp"]})
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, NamedTuple, Optional

from .claims import REGISTERED_CLAIMS, RegisteredClaim
from .constants import DEFAULT_JSON_CODEC
from .errors import ConfigError, TokenError
from .signer import Signer
from .token import Token
from .utils import time as clock

logger = logging.getLogger(__name__)

OK = "ok"
ERROR = "error"


class Result(NamedTuple):
    """``(status, value)`` pair; ``value`` is the reason when status is error."""

    status: str
    value: Any = None

    @property
    def is_ok(self) -> bool:
        return self.status == OK


def ok(value: Any = None) -> Result:
    return Result(OK, value)


def error(reason: str) -> Result:
    return Result(ERROR, reason)


class ClaimSource(metaclass=abc.ABCMeta):
    """Application hook that drives :func:`encode` and :func:`decode`."""

    json_codec: str = DEFAULT_JSON_CODEC

    @abc.abstractmethod
    def secret_key(self) -> str | bytes:
        """Return the HMAC secret."""
        raise NotImplementedError

    @abc.abstractmethod
    def algorithm(self) -> str:
        """Return one of ``HS256``, ``HS384`` or ``HS512``."""
        raise NotImplementedError

    def claim(self, key: str, payload: Mapping[str, Any]) -> Any:
        """Return the value to add for ``key``, or ``None`` to leave it out."""
        return None

    def validate_claim(
        self, key: str, payload: Mapping[str, Any], options: Mapping[str, Any]
    ) -> Result:
        """Return :func:`ok` when ``payload[key]`` is acceptable."""
        return ok()


def validate_time_claim(
    payload: Mapping[str, Any],
    key: str,
    message: str,
    compare: Callable[[Any, int], bool],
    now: Optional[int] = None,
) -> Result:
    """Check a time claim with ``compare(claim_value, now)``.

    A missing claim is reported as an error as well.
    """
    if key not in payload:
        return error(f"Missing {key} claim")
    current = clock.current_time() if now is None else now
    try:
        passed = compare(payload[key], current)
    except TypeError:
        return error(f"Claim {key} is not a timestamp")
    return ok() if passed else error(message)


def _claim_name(key: Any) -> str:
    return key.value if isinstance(key, RegisteredClaim) else str(key)


def _signer_for(source: ClaimSource) -> Signer:
    try:
        return Signer(algorithm=source.algorithm(), secret=source.secret_key())
    except ValueError as e:
        raise ConfigError(f"Invalid claim source configuration: {e}")


def encode(source: ClaimSource, payload: Mapping[str, Any]) -> Result:
    """Sign ``payload`` plus the claims generated by ``source``.

    Generated claims are added in registration order (exp, nbf, iat, aud,
    iss, sub, jti) and take precedence over values already in ``payload``.
    """
    try:
        signer = _signer_for(source)
        claims: Dict[str, Any] = dict(payload)
        for key in REGISTERED_CLAIMS:
            value = source.claim(key.value, dict(payload))
            if value is not None:
                claims[key.value] = value
        token = Token.from_claims(claims, json_codec=source.json_codec).sign(signer)
    except TokenError as e:
        logger.info(f"Encoding failed: {e.message}")
        return error(e.message)
    except Exception as e:
        logger.warning(f"Claim source {type(source).__name__} failed during encode: {e!r}")
        return error(f"Claim source failed: {e}")

    if token.error is not None:
        return error(token.error.message)
    return ok(token.compact)


def decode(
    source: ClaimSource, compact: str, options: Optional[Mapping[str, Any]] = None
) -> Result:
    """Verify ``compact`` and validate each claim through ``source``.

    ``options["skip"]`` lists claim keys that are not validated. Every other
    option is forwarded to :meth:`ClaimSource.validate_claim`.
    """
    if options is not None and not isinstance(options, Mapping):
        return error(f"Decode options must be a mapping, got {type(options).__name__}")
    forwarded: Dict[str, Any] = dict(options or {})
    raw_skip = forwarded.pop("skip", None)
    try:
        skip = {_claim_name(k) for k in _as_iterable(raw_skip)}
    except TypeError:
        return error(f"Option 'skip' must be a claim key or a list of them, got {raw_skip!r}")

    try:
        signer = _signer_for(source)
        token = Token.from_compact(compact, json_codec=source.json_codec).verify(signer)
        if token.error is not None:
            return error(token.error.message)

        claims = token.get_claims()
        for key in claims:
            if key in skip:
                continue
            result = _as_result(source.validate_claim(key, claims, forwarded))
            if not result.is_ok:
                logger.info(f"Claim {key} rejected: {result.value}")
                return error(result.value)
    except TokenError as e:
        logger.info(f"Decoding failed: {e.message}")
        return error(e.message)
    except Exception as e:
        logger.warning(f"Claim source {type(source).__name__} failed during decode: {e!r}")
        return error(f"Claim source failed: {e}")

    return ok(claims)


def _as_result(value: Any) -> Result:
    if isinstance(value, Result):
        return value
    if value == OK:
        return ok()
    if isinstance(value, tuple) and len(value) == 2 and value[0] in (OK, ERROR):
        return Result(*value)
    raise ConfigError(f"validate_claim must return ok() or error(reason), got {value!r}")


def _as_iterable(value: Any) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, RegisteredClaim)):
        return (value,)
    return value


__all__ = [
    "ClaimSource",
    "Result",
    "ok",
    "error",
    "encode",
    "decode",
    "validate_time_claim",
]
