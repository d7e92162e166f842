"""
Job History Domain Entity
A past or current position listed on an applicant's profile
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from core.exceptions import ValidationException


@dataclass(frozen=True)
class JobHistoryEntry:
    """Work history entry - immutable"""

    id: Optional[int]
    user_id: UUID
    job_title: str
    company: str
    # Free-form, as typed by the user ("2021-03", "March 2021")
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None
    created_at: datetime = None

    def __post_init__(self):
        if not self.job_title or not self.job_title.strip():
            raise ValidationException("jobTitle", "Job title is required")
        if not self.company or not self.company.strip():
            raise ValidationException("company", "Company is required")

    def belongs_to(self, user_id: UUID) -> bool:
        return self.user_id == user_id
