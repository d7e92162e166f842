"""
Offer Domain Entity
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional
from uuid import UUID

from core.exceptions import ValidationException, InvalidTransitionException
from ..value_objects import OfferStatus


@dataclass(frozen=True)
class Offer:
    """Employment offer made on an application - immutable"""

    id: Optional[int]
    application_id: int
    job_id: int
    employer_id: UUID
    applicant_id: UUID
    salary: int
    compensation: Optional[str] = None
    note: Optional[str] = None
    status: OfferStatus = OfferStatus.PENDING
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        if self.salary is None:
            raise ValidationException("salary", "Salary is required")
        if self.salary <= 0:
            raise ValidationException("salary", "Salary must be greater than 0")

    def is_pending(self) -> bool:
        return self.status == OfferStatus.PENDING

    def respond(self, accept: bool) -> "Offer":
        """Accept or decline a pending offer"""
        target = OfferStatus.ACCEPTED if accept else OfferStatus.DECLINED
        if not self.is_pending():
            raise InvalidTransitionException("offer", self.status.value, target.value)
        return replace(self, status=target)

    def is_active(self) -> bool:
        return self.status in (OfferStatus.PENDING, OfferStatus.ACCEPTED)

    def withdraw(self) -> "Offer":
        if not self.is_active():
            raise InvalidTransitionException("offer", self.status.value, OfferStatus.WITHDRAWN.value)
        return replace(self, status=OfferStatus.WITHDRAWN)
