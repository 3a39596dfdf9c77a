"""
Staff Routes
  POST   /api/staff/register        – register a staff member (returns a session token)
  GET    /api/staff                 – list all staff, newest first
  GET    /api/staff/search/{query}  – case-insensitive search
  GET    /api/staff/{id}            – staff detail
  PUT    /api/staff/{id}            – partial update
  DELETE /api/staff/{id}            – remove
"""
import logging

from fastapi import APIRouter, Depends, status

from app.dependencies import get_staff_service
from app.schemas.staff import StaffCreate, StaffOut, StaffUpdate
from app.services.staff_service import StaffService

router = APIRouter(tags=["Staff"])
logger = logging.getLogger(__name__)


def _staff_list(staff_members) -> dict:
    staff = [StaffOut.model_validate(s).to_json() for s in staff_members]
    return {
        "success": True,
        "count": len(staff),
        "staff": staff,
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_staff(
    staff_data: StaffCreate,
    service: StaffService = Depends(get_staff_service),
):
    """Register a new company staff member"""
    staff, token = service.register(staff_data)
    return {
        "success": True,
        "message": "Staff registered successfully",
        "token": token,
        "staff": StaffOut.model_validate(staff).to_json(),
    }


@router.get("")
@router.get("/", include_in_schema=False)
def get_all_staff(service: StaffService = Depends(get_staff_service)):
    """Get all staff members"""
    return _staff_list(service.list())


@router.get("/search/{query}")
def search_staff(query: str, service: StaffService = Depends(get_staff_service)):
    """Search staff by name, email, staff ID or job role"""
    return _staff_list(service.search(query))


@router.get("/{staff_id}")
def get_staff(staff_id: str, service: StaffService = Depends(get_staff_service)):
    """Get a specific staff member by ID"""
    return {
        "success": True,
        "staff": StaffOut.model_validate(service.get(staff_id)).to_json(),
    }


@router.put("/{staff_id}")
def update_staff(
    staff_id: str,
    staff_data: StaffUpdate,
    service: StaffService = Depends(get_staff_service),
):
    """Update a staff member; fields not in the body are left unchanged"""
    staff = service.update(staff_id, staff_data)
    return {
        "success": True,
        "message": "Staff member updated successfully",
        "staff": StaffOut.model_validate(staff).to_json(),
    }


@router.delete("/{staff_id}")
def delete_staff(staff_id: str, service: StaffService = Depends(get_staff_service)):
    """Delete a staff member"""
    service.delete(staff_id)
    return {
        "success": True,
        "message": "Staff member deleted successfully",
    }
