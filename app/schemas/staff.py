from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class StaffCreate(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone: str = Field(min_length=1, max_length=50)
    staff_id: str = Field(min_length=1, max_length=50)
    job_role: str = Field(min_length=1, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("staff_id")
    @classmethod
    def _upper_staff_id(cls, v: str) -> str:
        return v.upper()


class StaffUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    staff_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    job_role: Optional[str] = Field(default=None, min_length=1, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v

    @field_validator("staff_id")
    @classmethod
    def _upper_staff_id(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v is not None else v


class StaffOut(CamelModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    phone: str
    staff_id: str
    job_role: str
    department: Optional[str] = None
    is_active: bool
    is_verified: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StaffSummary(CamelModel):
    """Fields of a referenced staff record embedded in cash advance responses."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    staff_id: str
    department: Optional[str] = None
    phone: Optional[str] = None
    job_role: Optional[str] = None
