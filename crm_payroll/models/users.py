"""ORM model for staff and white-label workers."""
from __future__ import annotations

from sqlalchemy import Boolean, Float, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TenantScoped


class User(TenantScoped, Base):
    """A worker that can be assigned to event dates.

    Only the columns the payroll engine reads are mapped here.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    user_type: Mapped[str | None] = mapped_column(String(32))
    pay_type: Mapped[str | None] = mapped_column(String(32))
    pay_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False))
    default_flat_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False))
    mileage_enabled: Mapped[bool | None] = mapped_column(Boolean)
    mileage_rate: Mapped[float | None] = mapped_column(Numeric(6, 3, asdecimal=False))
    home_latitude: Mapped[float | None] = mapped_column(Float)
    home_longitude: Mapped[float | None] = mapped_column(Float)
