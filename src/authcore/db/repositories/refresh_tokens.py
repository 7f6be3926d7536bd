"""
authcore.db.repositories.refresh_tokens

Durable `RefreshTokenStore` backed by SQLAlchemy.

Responsibilities:
- Insert-or-overwrite on store, pure lookup on get.
- Conditional DELETE on revoke: the row count tells exactly one concurrent caller
  that it removed the entry, which keeps rotation single-use across processes.
- Map connectivity failures to `RefreshTokenStoreUnavailable` (retryable by callers).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from sqlalchemy import delete, text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authcore.auth.errors import RefreshTokenStoreUnavailable
from authcore.auth.models import RefreshTokenRecord
from authcore.db.models import RefreshTokenRow
from authcore.observability.logging import get_logger

log = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class SqlRefreshTokenStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (OperationalError, InterfaceError) as e:
            log.warning("refresh_store_unavailable", error=str(e.orig or e))
            raise RefreshTokenStoreUnavailable("refresh token store unavailable") from e

    async def store(self, token: str, username: str, expires_at_utc: datetime) -> None:
        async with self._session() as session:
            await session.merge(
                RefreshTokenRow(token=token, username=username, expires_at=_as_utc(expires_at_utc))
            )
            await session.commit()

    async def get(self, token: str) -> RefreshTokenRecord | None:
        async with self._session() as session:
            row = await session.get(RefreshTokenRow, token)
            if row is None:
                return None
            return RefreshTokenRecord(username=row.username, expires_at_utc=_as_utc(row.expires_at))

    async def revoke(self, token: str) -> bool:
        async with self._session() as session:
            result = await session.execute(delete(RefreshTokenRow).where(RefreshTokenRow.token == token))
            await session.commit()
            return (result.rowcount or 0) > 0

    async def purge_expired(self, now: datetime) -> int:
        async with self._session() as session:
            result = await session.execute(
                delete(RefreshTokenRow).where(RefreshTokenRow.expires_at <= _as_utc(now))
            )
            await session.commit()
            return result.rowcount or 0

    async def ping(self) -> None:
        async with self._session() as session:
            await session.execute(text("SELECT 1"))


# --- Module Notes -----------------------------------------------------------
# Any backend substituted here (Redis, DynamoDB, ...) must keep revoke as an atomic
# conditional delete; a read-then-delete pair would allow double rotation.
