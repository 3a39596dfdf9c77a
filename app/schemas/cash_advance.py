"""
Cash Advance Schemas
Request bodies for create / status / retirement and the response shapes.
"""
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.models.cash_advance import CashAdvanceStatus, Currency, PaymentMethod
from app.schemas.common import CamelModel
from app.schemas.staff import StaffSummary


# ─────────────────────── Requests ───────────────────────

class CashAdvanceCreate(CamelModel):
    purpose: str = Field(min_length=1, max_length=200)
    # Positivity is checked by the service so direct callers get the same error
    amount: float = Field(allow_inf_nan=False)
    currency: Currency
    needed_by: date
    description: str = Field(min_length=1, max_length=1000)
    project_code: Optional[str] = Field(default=None, max_length=50)
    payment_method: PaymentMethod
    # Falls back to the acting identity when omitted
    staff_id: Optional[str] = None

    @field_validator("needed_by", mode="before")
    @classmethod
    def truncate_needed_by(cls, value):
        """Browser clients send full ISO timestamps; only the date is kept."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value


class StatusUpdate(CamelModel):
    status: CashAdvanceStatus
    rejection_reason: Optional[str] = Field(default=None, max_length=500)
    # Caller-asserted approver, used when no X-Staff-Id header is sent
    approved_by: Optional[str] = None


class RetirementNotesIn(CamelModel):
    retirement_notes: Optional[str] = Field(default=None, max_length=1000)


# ─────────────────────── Responses ───────────────────────

class AttachmentOut(CamelModel):
    id: UUID
    filename: Optional[str] = None
    original_name: Optional[str] = None
    mimetype: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class CashAdvanceOut(CamelModel):
    id: UUID
    staff_id: UUID
    staff: Optional[StaffSummary] = None
    staff_name: str
    staff_email: str
    purpose: str
    amount: float
    currency: Currency
    formatted_amount: str
    needed_by: date
    description: str
    project_code: Optional[str] = None
    payment_method: PaymentMethod
    status: CashAdvanceStatus
    approved_by: Optional[UUID] = None
    approver: Optional[StaffSummary] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    disbursed_at: Optional[datetime] = None
    retired_at: Optional[datetime] = None
    retirement_notes: Optional[str] = None
    attachments: List[AttachmentOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CashAdvanceStats(CamelModel):
    total_requests: int = 0
    pending_requests: int = 0
    approved_requests: int = 0
    disbursed_requests: int = 0
    total_amount: float = 0
