"""
Application Domain Entity
Immutable job application business object and its status machine
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
from uuid import UUID

from core.exceptions import InvalidTransitionException
from ..value_objects import ApplicationStatus


class ApplicationAction(str, Enum):
    """Things that can happen to an application"""
    SEND_OFFER = "send_offer"
    REJECT = "reject"
    ACCEPT_OFFER = "accept_offer"
    DECLINE_OFFER = "decline_offer"
    CANCEL = "cancel"
    RESET = "reset"


_S = ApplicationStatus

# action -> (allowed source states, target state)
TRANSITIONS: Dict[ApplicationAction, Tuple[FrozenSet[ApplicationStatus], ApplicationStatus]] = {
    ApplicationAction.SEND_OFFER: (frozenset({_S.PENDING, _S.OFFERED}), _S.OFFERED),
    ApplicationAction.REJECT: (frozenset({_S.PENDING, _S.OFFERED}), _S.REJECTED),
    ApplicationAction.ACCEPT_OFFER: (frozenset({_S.OFFERED}), _S.ACCEPTED),
    ApplicationAction.DECLINE_OFFER: (frozenset({_S.OFFERED}), _S.OFFERED),
    ApplicationAction.CANCEL: (frozenset({_S.PENDING, _S.OFFERED, _S.REJECTED}), _S.CANCELLED),
    ApplicationAction.RESET: (frozenset({_S.OFFERED, _S.ACCEPTED, _S.REJECTED, _S.CANCELLED}), _S.PENDING),
}

OPEN_STATUSES = frozenset({_S.PENDING, _S.OFFERED, _S.ACCEPTED})

# Statuses from which an interview may be booked
SCHEDULABLE_STATUSES = frozenset({_S.PENDING, _S.OFFERED})


@dataclass(frozen=True)
class Application:
    """Job application domain entity - immutable"""

    id: Optional[int]
    job_id: int
    applicant_id: UUID
    status: ApplicationStatus = ApplicationStatus.PENDING
    message: Optional[str] = None

    # Optimistic concurrency counter, bumped on every status change
    version: int = 1

    created_at: datetime = None
    updated_at: datetime = None

    def apply_action(self, action: ApplicationAction) -> "Application":
        """
        Return the application moved along an edge of the status machine.

        Raises:
            InvalidTransitionException: If the edge is not allowed from the current status
        """
        sources, target = TRANSITIONS[action]
        if self.status not in sources:
            raise InvalidTransitionException("application", self.status.value, target.value)
        return replace(self, status=target, version=self.version + 1)

    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def can_schedule_interview(self) -> bool:
        return self.status in SCHEDULABLE_STATUSES

    def __str__(self) -> str:
        return f"Application({self.id}, status={self.status.value})"
