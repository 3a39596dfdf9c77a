from app.api.routes.staff import router as staff_router
from app.api.routes.cash_advance import router as cash_advance_router

__all__ = [
    "staff_router",
    "cash_advance_router",
]
