"""
Cash Advance Routes
  POST /api/cash-advance                    – submit a request (status pending)
  GET  /api/cash-advance                    – list, filter by status / staffId
  GET  /api/cash-advance/stats/overview     – counts and committed total
  GET  /api/cash-advance/staff/{staffId}    – one staff member's requests
  GET  /api/cash-advance/{id}               – request detail
  PUT  /api/cash-advance/{id}/status        – status transition
  PUT  /api/cash-advance/{id}/retirement    – retirement notes (marks retired)
"""
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import (
    IdentityResolver,
    get_acting_staff_id,
    get_cash_advance_service,
    get_identity_resolver,
    get_reporting_service,
)
from app.schemas.cash_advance import (
    CashAdvanceCreate,
    CashAdvanceOut,
    RetirementNotesIn,
    StatusUpdate,
)
from app.services.cash_advance_service import CashAdvanceService
from app.services.reporting_service import ReportingService

router = APIRouter(tags=["Cash Advance"])
logger = logging.getLogger(__name__)


def _cash_advance_list(cash_advances) -> dict:
    items = [CashAdvanceOut.model_validate(ca).to_json() for ca in cash_advances]
    return {
        "success": True,
        "count": len(items),
        "cashAdvances": items,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_cash_advance(
    payload: CashAdvanceCreate,
    acting_staff_id: Optional[uuid.UUID] = Depends(get_acting_staff_id),
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """Submit a new cash advance request for the staff member in the body (or the caller)"""
    cash_advance = service.create(payload, staff_id=acting_staff_id)
    return {
        "success": True,
        "message": "Cash advance request submitted successfully",
        "cashAdvance": CashAdvanceOut.model_validate(cash_advance).to_json(),
    }


@router.get("")
@router.get("/", include_in_schema=False)
def get_all_cash_advances(
    status_filter: Optional[str] = Query(None, alias="status"),
    staff_id: Optional[str] = Query(None, alias="staffId"),
    # Accepted for client compatibility; results are not paginated
    page: int = Query(1),
    limit: int = Query(10),
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """List cash advance requests, newest first"""
    return _cash_advance_list(service.list(status=status_filter, staff_id=staff_id))


@router.get("/stats/overview")
def get_stats(service: ReportingService = Depends(get_reporting_service)):
    """Request counts by status and the total approved/disbursed/retired amount"""
    return {
        "success": True,
        "stats": service.stats().to_json(),
    }


@router.get("/staff/{staff_id}")
def get_staff_cash_advances(
    staff_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """List the requests raised by one staff member"""
    return _cash_advance_list(service.list_for_staff(staff_id, status=status_filter))


@router.get("/{cash_advance_id}")
def get_cash_advance(
    cash_advance_id: str,
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """Get a single cash advance request"""
    return {
        "success": True,
        "cashAdvance": CashAdvanceOut.model_validate(service.get(cash_advance_id)).to_json(),
    }


@router.put("/{cash_advance_id}/status")
def update_status(
    cash_advance_id: str,
    payload: StatusUpdate,
    acting_staff_id: Optional[uuid.UUID] = Depends(get_acting_staff_id),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """Move a request to a new status"""
    acting_id = acting_staff_id
    if acting_id is None and resolver.trusts_caller:
        acting_id = payload.approved_by

    cash_advance = service.update_status(
        cash_advance_id,
        payload.status,
        rejection_reason=payload.rejection_reason,
        acting_user_id=acting_id,
    )
    return {
        "success": True,
        "message": f"Cash advance request {payload.status.value} successfully",
        "cashAdvance": CashAdvanceOut.model_validate(cash_advance).to_json(),
    }


@router.put("/{cash_advance_id}/retirement")
def add_retirement_notes(
    cash_advance_id: str,
    payload: RetirementNotesIn,
    service: CashAdvanceService = Depends(get_cash_advance_service),
):
    """Attach retirement notes and mark the request retired"""
    cash_advance = service.add_retirement_notes(cash_advance_id, payload.retirement_notes)
    return {
        "success": True,
        "message": "Retirement notes added successfully",
        "cashAdvance": CashAdvanceOut.model_validate(cash_advance).to_json(),
    }
