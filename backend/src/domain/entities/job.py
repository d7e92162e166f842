"""
Job Domain Entity
Immutable job posting business object
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from core.exceptions import ValidationException
from ..enums import JobType, Gender
from ..value_objects import SalaryRange


@dataclass(frozen=True)
class Job:
    """Job posting domain entity - immutable"""

    id: Optional[int]
    employer_id: UUID
    title: str
    description: str
    category: str
    location: str

    job_type: JobType = JobType.FULL_TIME
    salary_min: int = 0
    salary_max: int = 0
    wage: Optional[str] = None

    # Audience constraints
    gender: Gender = Gender.ANY
    age_min: Optional[int] = None
    age_max: Optional[int] = None

    is_active: bool = True
    created_at: datetime = None

    def __post_init__(self):
        """Validate job data"""
        for field_name, value in (
            ("title", self.title),
            ("description", self.description),
            ("category", self.category),
            ("location", self.location),
        ):
            if not value or len(value.strip()) == 0:
                raise ValidationException(field_name, f"{field_name} cannot be empty")

        # Raises on negative or inverted salaries
        SalaryRange(self.salary_min, self.salary_max)

        if self.age_min is not None and self.age_max is not None and self.age_max < self.age_min:
            raise ValidationException("ageMax", "Maximum age cannot be less than minimum age")

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.employer_id == user_id

    def __str__(self) -> str:
        return f"Job({self.id}, {self.title})"
