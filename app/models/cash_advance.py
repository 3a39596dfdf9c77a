"""
Cash Advance Models
Tables: cash_advances, cash_advance_attachments
"""
import uuid
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import (
    Date, DateTime, Enum as SQLEnum, Float, ForeignKey, Index, Integer,
    String, Text, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class CashAdvanceStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISBURSED = "disbursed"
    RETIRED = "retired"
    CANCELLED = "cancelled"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    NGN = "NGN"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    CASH = "cash"


# Statuses whose amount counts as committed money in the stats overview
COMMITTED_STATUSES = (
    CashAdvanceStatus.APPROVED,
    CashAdvanceStatus.DISBURSED,
    CashAdvanceStatus.RETIRED,
)

CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
}


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _str_enum(enum_cls, length: int):
    """Stored as the lowercase/uppercase value string, not the member name."""
    return SQLEnum(
        enum_cls,
        values_callable=_enum_values,
        native_enum=False,
        length=length,
        validate_strings=True,
    )


class CashAdvance(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A staff member's request for money ahead of an expense."""
    __tablename__ = "cash_advances"

    # Requester. No FK constraint: deleting a staff record leaves the reference dangling.
    staff_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    # Snapshot of the requester taken at creation, never refreshed
    staff_name: Mapped[str] = mapped_column(String(101), nullable=False)
    staff_email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Request
    purpose: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[Currency] = mapped_column(
        _str_enum(Currency, 3), default=Currency.USD, nullable=False
    )
    needed_by: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    project_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, default="")
    payment_method: Mapped[PaymentMethod] = mapped_column(
        _str_enum(PaymentMethod, 20), default=PaymentMethod.BANK_TRANSFER, nullable=False
    )

    # Lifecycle
    status: Mapped[CashAdvanceStatus] = mapped_column(
        _str_enum(CashAdvanceStatus, 20),
        default=CashAdvanceStatus.PENDING,
        nullable=False,
        index=True,
    )
    approved_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    disbursed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    retired_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    retirement_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Read-only lookups of the referenced staff records
    staff = relationship(
        "Staff",
        primaryjoin="foreign(CashAdvance.staff_id) == Staff.id",
        viewonly=True,
        lazy="selectin",
    )
    approver = relationship(
        "Staff",
        primaryjoin="foreign(CashAdvance.approved_by) == Staff.id",
        viewonly=True,
        lazy="selectin",
    )
    attachments: Mapped[List["CashAdvanceAttachment"]] = relationship(
        back_populates="cash_advance",
        cascade="all, delete-orphan",
        order_by="CashAdvanceAttachment.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_cash_advances_staff_status", "staff_id", "status"),
        Index("idx_cash_advances_staff_email", "staff_email"),
    )

    @property
    def formatted_amount(self) -> str:
        currency = Currency(self.currency)
        symbol = CURRENCY_SYMBOLS.get(currency)
        if symbol:
            return f"{symbol}{self.amount:,.2f}"
        return f"{currency.value} {self.amount:,.2f}"

    def __repr__(self) -> str:
        return f"<CashAdvance id={self.id} staff_id={self.staff_id} status={self.status}>"


class CashAdvanceAttachment(UUIDPrimaryKeyMixin, Base):
    """Metadata for a supporting document; the file itself lives elsewhere."""
    __tablename__ = "cash_advance_attachments"

    cash_advance_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("cash_advances.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    filename: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    original_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    mimetype: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    cash_advance: Mapped["CashAdvance"] = relationship(back_populates="attachments")
