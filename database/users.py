"""
Credential store — user record lookups and writes.

Email lookups assume at most one record per email.  The handlers enforce
that with a read-then-write check, so concurrent signups can still race;
a second match surfaces as ``DuplicateEmailError`` instead of being
silently ignored.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(RuntimeError):
    """More than one user record shares an email."""


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        try:
            return result.scalar_one_or_none()
        except MultipleResultsFound as exc:
            logger.error("Multiple user records found for one email")
            raise DuplicateEmailError(email) from exc

    async def get(self, user_id: str | uuid.UUID) -> Optional[User]:
        try:
            uid = _to_uuid(user_id)
        except ValueError:
            return None
        return await self._session.get(User, uid)

    async def insert(self, user: User) -> User:
        """Persist a new record; the store assigns ``user_id`` on flush."""
        self._session.add(user)
        await self._session.flush()
        return user

    async def update_fields(self, user_id: str | uuid.UUID, **fields: Any) -> None:
        await self._session.execute(
            update(User)
            .where(User.user_id == _to_uuid(user_id))
            .values(**fields)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()

    async def delete(self, user_id: str | uuid.UUID) -> None:
        await self._session.execute(
            delete(User)
            .where(User.user_id == _to_uuid(user_id))
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
