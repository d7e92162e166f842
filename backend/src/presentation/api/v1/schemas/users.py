"""
Profile Schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ProfileUpdateRequest(CamelModel):
    """Partial profile edit. Role, verification and subscription are not accepted here."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=1, le=129)
    gender: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = None
    phone: Optional[str] = None
    cv_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    expected_salary_min: Optional[int] = Field(None, ge=0)
    expected_salary_max: Optional[int] = Field(None, ge=0)
    company_name: Optional[str] = None
    company_description: Optional[str] = None


class JobHistoryCreateRequest(CamelModel):
    # Presence is checked by the entity so the error names the field
    job_title: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    start_date: Optional[str] = Field(None, max_length=50)
    end_date: Optional[str] = Field(None, max_length=50)
    is_current: bool = False
    description: Optional[str] = Field(None, max_length=2000)


class JobHistoryResponse(CamelModel):
    id: int
    user_id: UUID
    job_title: str
    company: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool
    description: Optional[str] = None
    created_at: Optional[datetime] = None
