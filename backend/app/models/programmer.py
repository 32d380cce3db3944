"""
Programmers Backend — Programmer SQLAlchemy Model
===================================================

What:  ORM model representing the `programmers` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by ProgrammerService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: Integer auto-increment key; the Angular routes use it in URLs (/view/:id)
    - name: Display name, VARCHAR(128) mirrors the API max-length rule
    - experience: Numeric field (years of experience, fractions allowed)
    - password_hash: argon2 hash; the plaintext never reaches this table
    - created_at / updated_at: UTC bookkeeping
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

NAME_MAX_LENGTH = 128
PASSWORD_HASH_LENGTH = 255
# Largest value an INTEGER primary key holds on PostgreSQL
ID_MAX = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Programmer(Base):
    """A single programmer record. Flat, no relationships."""

    __tablename__ = "programmers"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
        comment="Display name",
    )

    experience: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Years of experience",
    )

    password_hash: Mapped[str] = mapped_column(
        String(PASSWORD_HASH_LENGTH),
        nullable=False,
        comment="argon2 hash computed at write time",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Programmer(id={self.id}, name='{self.name}')>"
