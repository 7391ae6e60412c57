"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
The payload carries ``email``, ``userId`` and ``exp`` (unix seconds).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode
from dataclasses import dataclass
from typing import Callable, Optional


class InvalidTokenError(ValueError):
    """Token is malformed, tampered with, or expired."""


@dataclass(frozen=True)
class TokenClaims:
    email: str
    user_id: str


class TokenIssuer:
    """Mints and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        short_ttl: int,
        extended_ttl: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret.encode()
        self.short_ttl = short_ttl
        self.extended_ttl = extended_ttl
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenIssuer(short_ttl={self.short_ttl}, extended_ttl={self.extended_ttl})"

    def ttl_for(self, keep_signed_in: bool) -> int:
        return self.extended_ttl if keep_signed_in else self.short_ttl

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, claims: TokenClaims, ttl: Optional[int] = None) -> str:
        """Create a signed token for ``claims`` expiring ``ttl`` seconds from now."""
        payload = {
            "email": claims.email,
            "userId": claims.user_id,
            "exp": int(self._clock()) + (self.short_ttl if ttl is None else ttl),
        }
        raw = json.dumps(payload).encode()
        return b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the embedded claims.

        Raises ``InvalidTokenError`` on any failure.
        """
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise InvalidTokenError("bad format")
        try:
            raw = b64decode(parts[0], validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("bad encoding") from exc
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidTokenError("bad signature")
        try:
            payload = json.loads(raw)
            claims = TokenClaims(email=payload["email"], user_id=payload["userId"])
            exp = float(payload["exp"])
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidTokenError("bad payload") from exc
        if exp < self._clock():
            raise InvalidTokenError("token expired")
        return claims
