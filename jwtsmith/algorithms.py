"""HMAC algorithms and the PyJWT primitives behind them."""

from __future__ import annotations

from enum import Enum

from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode, base64url_encode


class Algorithm(str, Enum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"


_HASHES = {
    Algorithm.HS256: HMACAlgorithm.SHA256,
    Algorithm.HS384: HMACAlgorithm.SHA384,
    Algorithm.HS512: HMACAlgorithm.SHA512,
}


class HmacSigner:
    """Thin adapter over :class:`jwt.algorithms.HMACAlgorithm`.

    ``verify`` compares digests with :func:`hmac.compare_digest` inside PyJWT.
    """

    def __init__(self, algorithm: Algorithm) -> None:
        self.algorithm = Algorithm(algorithm)
        self._impl = HMACAlgorithm(_HASHES[self.algorithm])

    def prepare_key(self, secret: str | bytes) -> bytes:
        """Normalize ``secret`` to bytes, rejecting asymmetric key material."""
        return self._impl.prepare_key(secret)

    def sign(self, message: bytes, secret: bytes) -> bytes:
        return self._impl.sign(message, self.prepare_key(secret))

    def verify(self, message: bytes, signature: bytes, secret: bytes) -> bool:
        return self._impl.verify(message, self.prepare_key(secret), signature)


def b64encode(data: bytes) -> str:
    """base64url without padding."""
    return base64url_encode(data).decode("ascii")


def b64decode(segment: str) -> bytes:
    """Inverse of :func:`b64encode`; raises ``ValueError`` on bad input."""
    return base64url_decode(segment.encode("ascii"))


__all__ = ["Algorithm", "HmacSigner", "b64encode", "b64decode"]
