"""
Salary Range Value Object
Immutable pay range with validation
"""
from dataclasses import dataclass
from typing import Optional

from core.exceptions import ValidationException


@dataclass(frozen=True)
class SalaryRange:
    """Salary range value object (Naira, 0 = not stated)"""

    min_salary: int = 0
    max_salary: Optional[int] = None

    def __post_init__(self):
        """Validate salary range"""
        if self.min_salary < 0:
            raise ValidationException("salaryMin", "Minimum salary cannot be negative")

        if self.max_salary is not None:
            if self.max_salary < 0:
                raise ValidationException("salaryMax", "Maximum salary cannot be negative")
            # 0 means "not stated", so only compare a real maximum
            if self.max_salary and self.max_salary < self.min_salary:
                raise ValidationException("salaryMax", "Maximum salary cannot be less than minimum salary")
