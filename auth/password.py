"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  bcrypt only accepts
passwords up to ``MAX_PASSWORD_BYTES`` once UTF-8 encoded.
"""

from __future__ import annotations

import bcrypt

MAX_PASSWORD_BYTES = 72


class PasswordHashError(ValueError):
    """The stored hash is not a usable bcrypt hash."""


def password_fits(password: str) -> bool:
    return len(password.encode()) <= MAX_PASSWORD_BYTES


class PasswordHasher:
    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted)."""
        if not password_fits(password):
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Constant-time comparison against a bcrypt hash.

        Returns ``False`` on mismatch (an over-long password can never have
        been stored, so it is a mismatch too) and raises ``PasswordHashError``
        when bcrypt cannot parse ``password_hash``.
        """
        if not password_fits(password):
            return False
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError, AttributeError) as exc:
            raise PasswordHashError(str(exc)) from exc
