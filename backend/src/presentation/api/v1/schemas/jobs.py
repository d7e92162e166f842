"""
Job Schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from domain.enums import JobType, Gender
from .common import CamelModel


class JobCreateRequest(CamelModel):
    title: str = Field(..., max_length=255)
    description: str
    category: str = Field(..., max_length=100)
    location: str = Field(..., max_length=255)
    job_type: JobType = JobType.FULL_TIME
    salary_min: int = Field(0, ge=0)
    salary_max: int = Field(0, ge=0)
    wage: Optional[str] = Field(None, max_length=100)
    gender: Gender = Gender.ANY
    age_min: Optional[int] = Field(None, ge=0)
    age_max: Optional[int] = Field(None, ge=0)


class JobUpdateRequest(CamelModel):
    """Partial update; only fields present in the body change"""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    job_type: Optional[JobType] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    wage: Optional[str] = Field(None, max_length=100)
    gender: Optional[Gender] = None
    age_min: Optional[int] = Field(None, ge=0)
    age_max: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class JobResponse(CamelModel):
    id: int
    employer_id: UUID
    title: str
    description: str
    category: str
    location: str
    job_type: JobType
    salary_min: int
    salary_max: int
    wage: Optional[str] = None
    gender: Gender
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None
