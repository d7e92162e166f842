"""
Interview Domain Entity
"""
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from core.exceptions import ValidationException, InvalidTransitionException
from ..enums import InterviewType
from ..value_objects import InterviewStatus


@dataclass(frozen=True)
class Interview:
    """Interview scheduled on an application - immutable"""

    id: Optional[int]
    application_id: int
    job_id: int
    employer_id: UUID
    applicant_id: UUID
    interview_date: date
    interview_time: str
    interview_type: InterviewType = InterviewType.IN_PERSON
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    status: InterviewStatus = InterviewStatus.SCHEDULED
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        if self.interview_date is None:
            raise ValidationException("interviewDate", "Interview date is required")
        if not self.interview_time or not self.interview_time.strip():
            raise ValidationException("interviewTime", "Interview time is required")
        if self.interview_type == InterviewType.IN_PERSON and not (self.location and self.location.strip()):
            raise ValidationException("location", "Location is required for in-person interviews")
        if self.interview_type == InterviewType.VIDEO and not (self.meeting_link and self.meeting_link.strip()):
            raise ValidationException("meetingLink", "Meeting link is required for video interviews")

    def is_scheduled(self) -> bool:
        return self.status == InterviewStatus.SCHEDULED

    def cancel(self) -> "Interview":
        if not self.is_scheduled():
            raise InvalidTransitionException("interview", self.status.value, InterviewStatus.CANCELLED.value)
        return replace(self, status=InterviewStatus.CANCELLED)
