"""
Request-scoped dependencies: services bound to a DB session, and the acting
identity of the caller.

Identity is resolved, never enforced. The default resolver trusts whatever
staff id the caller asserts; IDENTITY_MODE=token reads it from the session
token issued at registration instead. Swap resolvers with
app.dependency_overrides[get_identity_resolver].
"""
import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.security import decode_access_token
from app.database import get_db
from app.services import CashAdvanceService, ReportingService, StaffService
from app.services.staff_service import parse_uuid

logger = logging.getLogger(__name__)

STAFF_ID_HEADER = "X-Staff-Id"


# ==================== SERVICES ====================

def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_cash_advance_service(db: Session = Depends(get_db)) -> CashAdvanceService:
    return CashAdvanceService(db)


def get_reporting_service(db: Session = Depends(get_db)) -> ReportingService:
    return ReportingService(db)


# ==================== IDENTITY ====================

class IdentityResolver:
    """Resolves the staff id acting on a request, or None if there is none."""

    # Whether ids asserted in a request body may stand in for a missing identity
    trusts_caller: bool = False

    def resolve(self, request: Request) -> Optional[uuid.UUID]:
        raise NotImplementedError


class CallerAssertedIdentity(IdentityResolver):
    """Trusts the X-Staff-Id header as sent."""

    trusts_caller = True

    def resolve(self, request: Request) -> Optional[uuid.UUID]:
        value = request.headers.get(STAFF_ID_HEADER)
        if not value:
            return None
        return parse_uuid(value, f"Invalid {STAFF_ID_HEADER} header")


class BearerTokenIdentity(IdentityResolver):
    """Reads the staff id from the `sub` claim of a Bearer session token."""

    def resolve(self, request: Request) -> Optional[uuid.UUID]:
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        payload = decode_access_token(auth_header.split(" ", 1)[1])
        if not payload or not payload.get("sub"):
            raise ValidationError("Invalid or expired session token")
        return parse_uuid(payload["sub"], "Invalid session token subject")


def get_identity_resolver() -> IdentityResolver:
    if settings.IDENTITY_MODE.lower() == "token":
        return BearerTokenIdentity()
    return CallerAssertedIdentity()


def get_acting_staff_id(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[uuid.UUID]:
    return resolver.resolve(request)
