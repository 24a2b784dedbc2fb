"""Base declarative class for SQLAlchemy models."""
from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass


class TenantScoped:
    """Mixin for rows owned by a single tenant."""

    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
