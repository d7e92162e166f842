"""
Application Transition
Audit row recording one status change of an application
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..value_objects import ApplicationStatus


@dataclass(frozen=True)
class ApplicationTransition:
    id: Optional[int]
    application_id: int
    actor_id: UUID
    from_status: Optional[ApplicationStatus]
    to_status: ApplicationStatus
    reason: Optional[str] = None
    created_at: datetime = None
