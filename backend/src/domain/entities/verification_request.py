"""
Verification Request Domain Entity
Identity verification submitted by a user and decided by an admin
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from core.exceptions import ValidationException, InvalidTransitionException
from ..value_objects import VerificationStatus


_V = VerificationStatus

ALLOWED_DECISIONS: Dict[VerificationStatus, FrozenSet[VerificationStatus]] = {
    _V.PENDING: frozenset({_V.UNDER_REVIEW, _V.APPROVED, _V.REJECTED}),
    _V.UNDER_REVIEW: frozenset({_V.APPROVED, _V.REJECTED}),
    _V.APPROVED: frozenset(),
    _V.REJECTED: frozenset(),
}


@dataclass(frozen=True)
class VerificationRequest:
    """Verification request - immutable"""

    id: Optional[int]
    user_id: UUID
    id_type: str
    id_number: str
    id_document_url: Optional[str] = None
    selfie_url: Optional[str] = None
    status: VerificationStatus = VerificationStatus.PENDING
    admin_notes: Optional[str] = None
    reviewed_by: Optional[UUID] = None
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        if not self.id_type or not self.id_type.strip():
            raise ValidationException("idType", "ID type is required")
        if not self.id_number or not self.id_number.strip():
            raise ValidationException("idNumber", "ID number is required")

    def is_open(self) -> bool:
        return self.status in (_V.PENDING, _V.UNDER_REVIEW)

    def decide(self, status: VerificationStatus, reviewer_id: UUID,
               admin_notes: Optional[str] = None) -> "VerificationRequest":
        if status not in ALLOWED_DECISIONS[self.status]:
            raise InvalidTransitionException("verification request", self.status.value, status.value)
        return replace(
            self,
            status=status,
            reviewed_by=reviewer_id,
            admin_notes=admin_notes if admin_notes is not None else self.admin_notes,
        )
