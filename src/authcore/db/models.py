"""
authcore.db.models

Persistence schema for refresh tokens.

Responsibilities:
- Define the `refresh_tokens` table: one row per live (or not yet purged) token.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from authcore.db.base import Base


class RefreshTokenRow(Base):
    __tablename__ = "refresh_tokens"

    # Opaque token string is the key; token_urlsafe(64) is 86 chars.
    token: Mapped[str] = mapped_column(String(256), primary_key=True)
    username: Mapped[str] = mapped_column(String(256), nullable=False)
    # SQLite drops tzinfo on the way back; the repository re-attaches UTC.
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_refresh_tokens_expires_at", "expires_at"),)
