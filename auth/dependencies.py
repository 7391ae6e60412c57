"""
FastAPI dependencies for authentication.

Provides the DB session, the credential store, the token issuer and password
hasher built once from ``config``, and ``get_current_identity``, the bearer
token gate used by every protected route.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import InvalidTokenError, TokenClaims, TokenIssuer
from auth.password import PasswordHasher
from config.settings import config
from database.session import get_db_session
from database.users import UserStore

logger = logging.getLogger(__name__)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        secret=config.jwt_secret,
        short_ttl=config.jwt_expiry_seconds,
        extended_ttl=config.jwt_extended_expiry_seconds,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=config.bcrypt_rounds)


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Extract and verify the Bearer token from the Authorization header.

    Missing, empty or non-Bearer header → 401, invalid or expired token → 403.
    The decoded claims are returned and attached to ``request.state.identity``.
    """
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Bearer token",
        )
    try:
        claims = issuer.verify(token)
    except InvalidTokenError as exc:
        logger.info("Rejected token on %s: %s", request.url.path, exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    request.state.identity = claims
    return claims
