"""
Reporting Service
Aggregate counts and committed totals over all cash advance requests.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.cash_advance import COMMITTED_STATUSES, CashAdvance, CashAdvanceStatus
from app.schemas.cash_advance import CashAdvanceStats

logger = logging.getLogger(__name__)


class ReportingService:

    def __init__(self, db: Session):
        self.db = db

    def stats(self) -> CashAdvanceStats:
        """Counts by status plus the summed amount of approved, disbursed and retired requests."""
        by_status = dict(
            self.db.query(CashAdvance.status, func.count(CashAdvance.id))
            .group_by(CashAdvance.status)
            .all()
        )

        total_amount = (
            self.db.query(func.coalesce(func.sum(CashAdvance.amount), 0))
            .filter(CashAdvance.status.in_(COMMITTED_STATUSES))
            .scalar()
        )

        return CashAdvanceStats(
            total_requests=sum(by_status.values()),
            pending_requests=by_status.get(CashAdvanceStatus.PENDING, 0),
            approved_requests=by_status.get(CashAdvanceStatus.APPROVED, 0),
            disbursed_requests=by_status.get(CashAdvanceStatus.DISBURSED, 0),
            total_amount=round(float(total_amount or 0), 2),
        )
