"""ORM models for events, their dated occurrences and staff assignments."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TenantScoped
from .users import User


class Event(TenantScoped, Base):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)


class Location(TenantScoped, Base):
    """Geocoded venue."""

    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)


class EventDate(TenantScoped, Base):
    """A single calendar occurrence of an event with its own timing and venue."""

    __tablename__ = "event_dates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id"), nullable=False)
    location_id: Mapped[str | None] = mapped_column(ForeignKey("locations.id"))
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    setup_time: Mapped[str | None] = mapped_column(String(8))
    start_time: Mapped[str | None] = mapped_column(String(8))
    end_time: Mapped[str | None] = mapped_column(String(8))

    location: Mapped[Location | None] = relationship()


class EventStaffAssignment(TenantScoped, Base):
    """One worker's participation in one event date."""

    __tablename__ = "event_staff_assignments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    event_date_id: Mapped[str | None] = mapped_column(ForeignKey("event_dates.id"))
    arrival_time: Mapped[str | None] = mapped_column(String(8))
    start_time: Mapped[str | None] = mapped_column(String(8))
    end_time: Mapped[str | None] = mapped_column(String(8))
    pay_type_override: Mapped[str | None] = mapped_column(String(32))
    flat_rate_amount: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False))

    event: Mapped[Event | None] = relationship()
    event_date: Mapped[EventDate | None] = relationship()
    user: Mapped[User | None] = relationship()
