from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class User(Base):
    """Platform user (parent, tutor, staff or admin).

    Account management lives outside this service layer; the table is read
    for name projections and existence checks.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id, index=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True, unique=True, index=True)
    phone_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="parent")  # parent | tutor | staff | admin
    wallet_balance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    last_active: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class Center(Base):
    __tablename__ = "centers"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)


class Child(Base):
    __tablename__ = "children"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    parent_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    center_id: Mapped[str | None] = mapped_column(String, ForeignKey("centers.id"), nullable=True)

    parent: Mapped[User] = relationship(foreign_keys=[parent_id])
    center: Mapped[Center | None] = relationship()


class Curriculum(Base):
    __tablename__ = "curricula"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    curriculum_name: Mapped[str] = mapped_column(String, nullable=False)

    units: Mapped[list[Unit]] = relationship(back_populates="curriculum", order_by="Unit.unit_order")


class Unit(Base):
    """One teachable block of a curriculum.

    unit_order is dense and 1-based within a curriculum.
    """

    __tablename__ = "units"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    curriculum_id: Mapped[str] = mapped_column(String, ForeignKey("curricula.id"), nullable=False, index=True)
    unit_name: Mapped[str] = mapped_column(String, nullable=False)
    unit_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    unit_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    curriculum: Mapped[Curriculum] = relationship(back_populates="units")

    __table_args__ = (UniqueConstraint("curriculum_id", "unit_order", name="uq_units_curriculum_order"),)


class PaymentPackage(Base):
    """Purchased bundle of sessions. Immutable reference data.

    duration_days is only read by the completion forecaster.
    """

    __tablename__ = "payment_packages"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    package_name: Mapped[str] = mapped_column(String, nullable=False)
    curriculum_id: Mapped[str | None] = mapped_column(String, ForeignKey("curricula.id"), nullable=True, index=True)
    session_count: Mapped[int] = mapped_column(Integer, nullable=False)
    max_reschedule: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))


class Contract(Base):
    """Agreement for a child's tutoring over a date range.

    days_of_week is a 7-bit mask (bit 0 = Sunday ... bit 6 = Saturday).
    status holds a ContractStatus literal. Contracts are never deleted.
    """

    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    parent_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    child_id: Mapped[str] = mapped_column(String, ForeignKey("children.id"), nullable=False, index=True)
    package_id: Mapped[str] = mapped_column(String, ForeignKey("payment_packages.id"), nullable=False)
    center_id: Mapped[str | None] = mapped_column(String, ForeignKey("centers.id"), nullable=True)
    main_tutor_id: Mapped[str | None] = mapped_column(String, ForeignKey("users.id"), nullable=True, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    days_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    offline_address: Mapped[str | None] = mapped_column(String, nullable=True)
    video_call_platform: Mapped[str | None] = mapped_column(String, nullable=True)
    reschedule_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    parent: Mapped[User] = relationship(foreign_keys=[parent_id])
    child: Mapped[Child] = relationship()
    package: Mapped[PaymentPackage] = relationship()
    center: Mapped[Center | None] = relationship()
    main_tutor: Mapped[User | None] = relationship(foreign_keys=[main_tutor_id])
    sessions: Mapped[list[TutoringSession]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="TutoringSession.session_date",
    )


class TutoringSession(Base):
    """One scheduled lesson materialized from a contract.

    start_time/end_time are full datetimes composed from session_date and the
    contract's time-of-day window at generation time.
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    contract_id: Mapped[str] = mapped_column(String, ForeignKey("contracts.id"), nullable=False, index=True)
    tutor_id: Mapped[str | None] = mapped_column(String, ForeignKey("users.id"), nullable=True, index=True)
    session_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="scheduled")  # scheduled | completed | cancelled | rescheduled
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    contract: Mapped[Contract] = relationship(back_populates="sessions")

    __table_args__ = (Index("idx_sessions_contract_date", "contract_id", "session_date"),)


class DailyReport(Base):
    """A tutor's record of one session. Sole evidence source for progress."""

    __tablename__ = "daily_reports"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    child_id: Mapped[str] = mapped_column(String, ForeignKey("children.id"), nullable=False, index=True)
    tutor_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    booking_id: Mapped[str] = mapped_column(String, ForeignKey("sessions.id"), nullable=False, index=True)
    unit_id: Mapped[str] = mapped_column(String, ForeignKey("units.id"), nullable=False, index=True)
    created_date: Mapped[date] = mapped_column(Date, nullable=False)
    on_track: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    have_homework: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    child: Mapped[Child] = relationship()
    unit: Mapped[Unit] = relationship()


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    parent_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    contract_id: Mapped[str | None] = mapped_column(String, ForeignKey("contracts.id"), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    transaction_type: Mapped[str] = mapped_column(String, nullable=False)  # deposit | refund | withdrawal | payment
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")  # pending | completed | failed
    payment_method: Mapped[str | None] = mapped_column(String, nullable=True)
    transaction_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    parent: Mapped[User] = relationship()


class SupportRequest(Base):
    __tablename__ = "support_requests"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    assigned_to_user_id: Mapped[str | None] = mapped_column(String, ForeignKey("users.id"), nullable=True)
    subject: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="open", index=True)
    resolution: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    user: Mapped[User] = relationship(foreign_keys=[user_id])
    assigned_to_user: Mapped[User | None] = relationship(foreign_keys=[assigned_to_user_id])


class TestResult(Base):
    __tablename__ = "test_results"
    __test__ = False  # not a pytest test class

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    contract_id: Mapped[str] = mapped_column(String, ForeignKey("contracts.id"), nullable=False, index=True)
    test_type: Mapped[str] = mapped_column(String, nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
