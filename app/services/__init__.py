from app.services.staff_service import StaffService
from app.services.cash_advance_service import CashAdvanceService
from app.services.reporting_service import ReportingService

__all__ = [
    "StaffService",
    "CashAdvanceService",
    "ReportingService",
]
