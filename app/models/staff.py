"""
Staff Model

A company employee who can raise cash advance requests and, as an approver,
be referenced from other staff members' requests.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Staff(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "company_staff"

    # Identity (both unique, normalised by the schemas before insert)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    staff_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    # Profile
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    job_role: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Account
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_company_staff_is_active", "is_active"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Staff id={self.id} staff_id={self.staff_id} email={self.email}>"
