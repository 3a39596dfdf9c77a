"""
Staff Service
Registration, lookup, search, update and removal of company staff records.
Email and staff ID uniqueness is checked here before every write; the unique
indexes on company_staff remain the final word and are translated the same way.
"""
import logging
import uuid
from typing import List, Optional, Tuple

from pydantic.alias_generators import to_camel
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateError, InvalidIdError, NotFoundError, ValidationError
from app.core.security import create_access_token
from app.models.staff import Staff
from app.schemas.staff import StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = (
    Staff.first_name,
    Staff.last_name,
    Staff.email,
    Staff.staff_id,
    Staff.job_role,
)

# Columns that may not be set to null through a partial update
REQUIRED_FIELDS = ("email", "first_name", "last_name", "phone", "staff_id", "job_role", "is_active", "is_verified")


def parse_uuid(value, message: str) -> uuid.UUID:
    """Coerce a path/query identifier, raising InvalidIdError if malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdError(message)


class StaffService:
    """CRUD over company staff records."""

    def __init__(self, db: Session):
        self.db = db

    # ──────────────────────────── Public API ────────────────────────────

    def register(self, data: StaffCreate) -> Tuple[Staff, str]:
        """
        Persist a new staff member and issue a session token.

        Returns:
            (staff, token)
        Raises:
            DuplicateError: email or staff ID already taken.
        """
        self._ensure_unique(email=data.email, staff_code=data.staff_id)

        staff = Staff(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            staff_id=data.staff_id,
            job_role=data.job_role,
            department=data.department,
            is_active=True,
            is_verified=False,
        )
        self.db.add(staff)
        self._commit()
        self.db.refresh(staff)

        token = create_access_token({"sub": str(staff.id)})
        logger.info(f"[STAFF] Registered {staff.staff_id} ({staff.email})")
        return staff, token

    def get(self, staff_id) -> Staff:
        pk = parse_uuid(staff_id, "Invalid staff ID")
        staff = self.db.get(Staff, pk)
        if staff is None:
            raise NotFoundError("Staff member not found")
        return staff

    def list(self) -> List[Staff]:
        return (
            self.db.query(Staff)
            .order_by(Staff.created_at.desc())
            .all()
        )

    def search(self, text: str) -> List[Staff]:
        """Case-insensitive substring match over name, email, staff ID and job role."""
        conditions = [column.icontains(text, autoescape=True) for column in SEARCHABLE_COLUMNS]
        return (
            self.db.query(Staff)
            .filter(or_(*conditions))
            .order_by(Staff.created_at.desc())
            .all()
        )

    def update(self, staff_id, data: StaffUpdate) -> Staff:
        staff = self.get(staff_id)
        changes = data.model_dump(exclude_unset=True)

        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{to_camel(field)} cannot be empty")

        self._ensure_unique(
            email=changes.get("email"),
            staff_code=changes.get("staff_id"),
            exclude_id=staff.id,
        )

        for field, value in changes.items():
            setattr(staff, field, value)

        self._commit()
        self.db.refresh(staff)
        logger.info(f"[STAFF] Updated {staff.staff_id}: {sorted(changes)}")
        return staff

    def delete(self, staff_id) -> None:
        # Cash advances referencing this record are left as they are
        staff = self.get(staff_id)
        self.db.delete(staff)
        self.db.commit()
        logger.info(f"[STAFF] Deleted {staff.staff_id}")

    def find(self, staff_id) -> Optional[Staff]:
        """Lookup without raising on a missing record."""
        return self.db.get(Staff, parse_uuid(staff_id, "Invalid staff ID"))

    # ──────────────────────────── Internals ────────────────────────────

    def _ensure_unique(self, email: Optional[str], staff_code: Optional[str], exclude_id=None) -> None:
        if email is not None and self._exists(Staff.email == email, exclude_id):
            raise DuplicateError("Staff already exists with this email", field="email")
        if staff_code is not None and self._exists(Staff.staff_id == staff_code, exclude_id):
            raise DuplicateError("Staff ID already exists", field="staffId")

    def _exists(self, condition, exclude_id) -> bool:
        query = self.db.query(Staff.id).filter(condition)
        if exclude_id is not None:
            query = query.filter(Staff.id != exclude_id)
        return query.first() is not None

    def _commit(self) -> None:
        """Commit, mapping a unique-index violation that slipped past the pre-check."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            message = str(e.orig).lower()
            logger.warning(f"[STAFF] Unique constraint violation: {e.orig}")
            if "email" in message:
                raise DuplicateError("Staff already exists with this email", field="email")
            if "staff_id" in message:
                raise DuplicateError("Staff ID already exists", field="staffId")
            raise DuplicateError("Staff record already exists")
