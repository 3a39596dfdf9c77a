"""
Cash Advance Service
Request creation, lookup and the status lifecycle.

Any status may be set from any other status: update_status() applies the
side-effect fields of the target status and nothing else.
"""
import logging
import math
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.cash_advance import CashAdvance, CashAdvanceStatus
from app.schemas.cash_advance import CashAdvanceCreate
from app.services.staff_service import StaffService, parse_uuid

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_status(value) -> CashAdvanceStatus:
    try:
        return CashAdvanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in CashAdvanceStatus)
        raise ValidationError(f"Invalid status '{value}'. Must be one of: {allowed}")


def _round_amount(value) -> Optional[float]:
    """Two-decimal amount, or None for missing and non-finite input."""
    if value is None or not math.isfinite(value):
        return None
    return round(float(value), 2)


class CashAdvanceService:
    """Create, read and transition cash advance requests."""

    def __init__(self, db: Session):
        self.db = db
        self.staff = StaffService(db)

    # ──────────────────────────── Create ────────────────────────────

    def create(self, data: CashAdvanceCreate, staff_id=None) -> CashAdvance:
        """
        Persist a new pending request for *staff_id*.

        The requester's name and email are copied onto the request here and
        are not refreshed if the staff record later changes.
        """
        amount = _round_amount(data.amount)
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than 0")

        requester_id = data.staff_id or staff_id
        if not requester_id:
            raise ValidationError("Staff information is required")

        requester = self.staff.find(requester_id)
        if requester is None:
            raise NotFoundError("Staff member not found")

        cash_advance = CashAdvance(
            staff_id=requester.id,
            staff_name=requester.full_name,
            staff_email=requester.email,
            purpose=data.purpose,
            amount=amount,
            currency=data.currency,
            needed_by=data.needed_by,
            description=data.description,
            project_code=data.project_code or "",
            payment_method=data.payment_method,
            status=CashAdvanceStatus.PENDING,
        )
        self.db.add(cash_advance)
        self.db.commit()
        self.db.refresh(cash_advance)

        logger.info(
            f"[CASH_ADVANCE] {cash_advance.id} created by {requester.staff_id} "
            f"for {cash_advance.formatted_amount}"
        )
        return cash_advance

    # ──────────────────────────── Read ────────────────────────────

    def get(self, cash_advance_id) -> CashAdvance:
        pk = parse_uuid(cash_advance_id, "Invalid cash advance ID")
        cash_advance = self.db.get(CashAdvance, pk)
        if cash_advance is None:
            raise NotFoundError("Cash advance request not found")
        return cash_advance

    def list(self, status: Optional[str] = None, staff_id=None) -> List[CashAdvance]:
        query = self.db.query(CashAdvance)

        if staff_id:
            query = query.filter(CashAdvance.staff_id == parse_uuid(staff_id, "Invalid staff ID"))
        if status:
            # Unknown statuses match nothing
            if status not in {s.value for s in CashAdvanceStatus}:
                return []
            query = query.filter(CashAdvance.status == CashAdvanceStatus(status))

        return query.order_by(CashAdvance.created_at.desc()).all()

    def list_for_staff(self, staff_id, status: Optional[str] = None) -> List[CashAdvance]:
        """Requests raised by one staff member; the staff record need not exist."""
        parse_uuid(staff_id, "Invalid staff ID")
        return self.list(status=status, staff_id=staff_id)

    # ──────────────────────────── Lifecycle ────────────────────────────

    def update_status(
        self,
        cash_advance_id,
        new_status,
        rejection_reason: Optional[str] = None,
        acting_user_id: Optional[uuid.UUID] = None,
    ) -> CashAdvance:
        """
        Set *new_status* and the fields that go with it.

        approved:  approved_by/approved_at set, rejection_reason cleared
        rejected:  rejection_reason required, approval fields cleared
        disbursed: disbursed_at set
        retired:   retired_at set
        other:     status only
        """
        if not new_status:
            raise ValidationError("Status is required")
        target = _coerce_status(new_status)
        if target == CashAdvanceStatus.REJECTED and not (rejection_reason or "").strip():
            raise ValidationError("Rejection reason is required when rejecting a request")

        cash_advance = self.get(cash_advance_id)

        if target == CashAdvanceStatus.APPROVED:
            cash_advance.approved_by = (
                parse_uuid(acting_user_id, "Invalid approver ID") if acting_user_id else None
            )
            cash_advance.approved_at = _now()
            cash_advance.rejection_reason = ""
        elif target == CashAdvanceStatus.REJECTED:
            cash_advance.rejection_reason = rejection_reason.strip()
            cash_advance.approved_by = None
            cash_advance.approved_at = None
        elif target == CashAdvanceStatus.DISBURSED:
            cash_advance.disbursed_at = _now()
        elif target == CashAdvanceStatus.RETIRED:
            cash_advance.retired_at = _now()

        previous = cash_advance.status
        cash_advance.status = target
        self.db.commit()
        self.db.refresh(cash_advance)

        logger.info(
            f"[CASH_ADVANCE] {cash_advance.id} {CashAdvanceStatus(previous).value} -> {target.value}"
            + (f" by {acting_user_id}" if acting_user_id else "")
        )
        return cash_advance

    def add_retirement_notes(self, cash_advance_id, notes: Optional[str]) -> CashAdvance:
        """Record retirement notes and mark the request retired, whatever its current status."""
        if not notes or not notes.strip():
            raise ValidationError("Retirement notes are required")

        cash_advance = self.get(cash_advance_id)
        cash_advance.retirement_notes = notes.strip()
        cash_advance.status = CashAdvanceStatus.RETIRED
        cash_advance.retired_at = _now()
        self.db.commit()
        self.db.refresh(cash_advance)

        logger.info(f"[CASH_ADVANCE] {cash_advance.id} retired with notes")
        return cash_advance
