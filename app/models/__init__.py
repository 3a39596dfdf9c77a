# Import all models so they register with Base.metadata
from app.models.staff import Staff
from app.models.cash_advance import (
    CashAdvance,
    CashAdvanceAttachment,
    CashAdvanceStatus,
    Currency,
    PaymentMethod,
)

__all__ = [
    "Staff",
    "CashAdvance",
    "CashAdvanceAttachment",
    "CashAdvanceStatus",
    "Currency",
    "PaymentMethod",
]
