"""
Application, Offer and Interview Schemas
"""
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from domain.enums import InterviewType
from domain.value_objects import ApplicationStatus, OfferStatus, InterviewStatus
from application.services.applications import ApplicationDetails
from .common import CamelModel
from .jobs import JobResponse


class ApplyRequest(CamelModel):
    job_id: int
    message: Optional[str] = Field(None, max_length=5000)


class StatusUpdateRequest(CamelModel):
    status: ApplicationStatus
    reason: Optional[str] = Field(None, max_length=1000)


class CancelRequest(CamelModel):
    reason: Optional[str] = Field(None, max_length=1000)


class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    applicant_id: UUID
    status: ApplicationStatus
    message: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicantSummary(CamelModel):
    """What an employer sees about an applicant"""

    id: UUID
    first_name: str
    last_name: str
    email: str
    age: Optional[int] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    cv_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_verified: bool = False


class ApplicationDetailResponse(ApplicationResponse):
    job: Optional[JobResponse] = None
    applicant: Optional[ApplicantSummary] = None

    @classmethod
    def from_details(cls, details: ApplicationDetails) -> "ApplicationDetailResponse":
        applicant = None
        if details.applicant is not None:
            user = details.applicant
            applicant = ApplicantSummary(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=str(user.email),
                age=user.age,
                gender=user.gender,
                location=user.location,
                bio=user.bio,
                cv_url=user.cv_url,
                profile_image_url=user.profile_image_url,
                is_verified=user.is_verified,
            )
        base = ApplicationResponse.model_validate(details.application)
        return cls(
            **base.model_dump(),
            job=JobResponse.model_validate(details.job),
            applicant=applicant,
        )


class TransitionResponse(CamelModel):
    id: Optional[int] = None
    application_id: int
    actor_id: UUID
    from_status: Optional[ApplicationStatus] = None
    to_status: ApplicationStatus
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


class OfferCreateRequest(CamelModel):
    # Optional here so a missing salary is reported by the offer rules with the field name
    salary: Optional[int] = None
    compensation: Optional[str] = Field(None, max_length=1000)
    note: Optional[str] = Field(None, max_length=2000)


class OfferRespondRequest(CamelModel):
    accept: bool


class OfferResponse(CamelModel):
    id: int
    application_id: int
    job_id: int
    employer_id: UUID
    applicant_id: UUID
    salary: int
    compensation: Optional[str] = None
    note: Optional[str] = None
    status: OfferStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OfferDecisionResponse(CamelModel):
    offer: OfferResponse
    application: ApplicationResponse


class InterviewCreateRequest(CamelModel):
    interview_date: date
    interview_time: str = Field(..., min_length=1, max_length=20)
    interview_type: InterviewType = InterviewType.IN_PERSON
    location: Optional[str] = Field(None, max_length=255)
    meeting_link: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=2000)


class InterviewResponse(CamelModel):
    id: int
    application_id: int
    job_id: int
    employer_id: UUID
    applicant_id: UUID
    interview_date: date
    interview_time: str
    interview_type: InterviewType
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    status: InterviewStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
