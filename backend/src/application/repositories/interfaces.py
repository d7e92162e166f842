"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict, Sequence
from uuid import UUID

from domain.entities import (
    User,
    Job,
    Application,
    Offer,
    Interview,
    VerificationRequest,
    ApplicationTransition,
    JobHistoryEntry,
)
from domain.enums import UserRole, SubscriptionTier, JobType
from domain.value_objects import ApplicationStatus, VerificationStatus


@dataclass(frozen=True)
class JobSearchCriteria:
    """Conjunctive filters for the public job listing"""
    category: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None


class IUserRepository(ABC):
    """User repository interface"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if user exists by email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create new user"""
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Insert user or overwrite the row with the same email"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def get_many(self, user_ids: Sequence[UUID]) -> Dict[UUID, User]:
        """Get users keyed by ID (missing IDs are left out)"""
        pass

    @abstractmethod
    async def list_all(
        self,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
    ) -> List[User]:
        """List users, optionally by role and name/email substring"""
        pass

    @abstractmethod
    async def count(
        self,
        role: Optional[UserRole] = None,
        tiers: Optional[Sequence[SubscriptionTier]] = None,
    ) -> int:
        """Count users matching role and subscription tiers"""
        pass


class IJobRepository(ABC):
    """Job repository interface"""

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create new job"""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get job by ID"""
        pass

    @abstractmethod
    async def list_active(self, criteria: JobSearchCriteria) -> List[Job]:
        """Active jobs matching all given filters, newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Job]:
        """All jobs regardless of state, newest first"""
        pass

    @abstractmethod
    async def list_by_employer(self, employer_id: UUID) -> List[Job]:
        """Jobs posted by an employer, newest first"""
        pass

    @abstractmethod
    async def count_active_by_employer(self, employer_id: UUID) -> int:
        """Number of active jobs an employer has"""
        pass

    @abstractmethod
    async def count(self, active_only: bool = False) -> int:
        """Count jobs"""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Update existing job"""
        pass

    @abstractmethod
    async def delete(self, job_id: int) -> bool:
        """Delete job together with its applications, offers, interviews and history"""
        pass


class IApplicationRepository(ABC):
    """Application repository interface"""

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """Create new application"""
        pass

    @abstractmethod
    async def get_by_id(self, application_id: int) -> Optional[Application]:
        """Get application by ID"""
        pass

    @abstractmethod
    async def list_for_job(self, job_id: int) -> List[Application]:
        """Applications received by a job, newest first"""
        pass

    @abstractmethod
    async def list_for_applicant(self, applicant_id: UUID) -> List[Application]:
        """Applications made by an applicant, newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Application]:
        """All applications, newest first"""
        pass

    @abstractmethod
    async def find_open(self, job_id: int, applicant_id: UUID) -> Optional[Application]:
        """Pending, offered or accepted application of an applicant for a job"""
        pass

    @abstractmethod
    async def update_status(self, application: Application, expected_version: int) -> Application:
        """
        Persist status and version if the stored version still equals expected_version.

        Raises:
            ConcurrentModificationException: If the row changed since it was read
        """
        pass

    @abstractmethod
    async def count(self, status: Optional[ApplicationStatus] = None) -> int:
        """Count applications"""
        pass


class IOfferRepository(ABC):
    """Offer repository interface"""

    @abstractmethod
    async def create(self, offer: Offer) -> Offer:
        pass

    @abstractmethod
    async def get_by_id(self, offer_id: int) -> Optional[Offer]:
        pass

    @abstractmethod
    async def get_latest_for_application(self, application_id: int) -> Optional[Offer]:
        """Most recent offer on an application"""
        pass

    @abstractmethod
    async def get_active_for_application(self, application_id: int) -> Optional[Offer]:
        """The pending or accepted offer on an application, if any"""
        pass

    @abstractmethod
    async def update(self, offer: Offer) -> Offer:
        pass


class IInterviewRepository(ABC):
    """Interview repository interface"""

    @abstractmethod
    async def create(self, interview: Interview) -> Interview:
        pass

    @abstractmethod
    async def get_by_id(self, interview_id: int) -> Optional[Interview]:
        pass

    @abstractmethod
    async def list_for_application(self, application_id: int) -> List[Interview]:
        """Interviews of an application, soonest first"""
        pass

    @abstractmethod
    async def get_scheduled_for_application(self, application_id: int) -> Optional[Interview]:
        pass

    @abstractmethod
    async def update(self, interview: Interview) -> Interview:
        pass


class IVerificationRepository(ABC):
    """Verification request repository interface"""

    @abstractmethod
    async def create(self, request: VerificationRequest) -> VerificationRequest:
        pass

    @abstractmethod
    async def get_by_id(self, request_id: int) -> Optional[VerificationRequest]:
        pass

    @abstractmethod
    async def get_latest_for_user(self, user_id: UUID) -> Optional[VerificationRequest]:
        pass

    @abstractmethod
    async def list_all(self, status: Optional[VerificationStatus] = None) -> List[VerificationRequest]:
        """Requests, optionally by status, newest first"""
        pass

    @abstractmethod
    async def update(self, request: VerificationRequest) -> VerificationRequest:
        pass


class ITransitionLogRepository(ABC):
    """Application status history"""

    @abstractmethod
    async def record(self, transition: ApplicationTransition) -> ApplicationTransition:
        pass

    @abstractmethod
    async def list_for_application(self, application_id: int) -> List[ApplicationTransition]:
        """History of an application, oldest first"""
        pass


class IJobHistoryRepository(ABC):
    """Applicant work history"""

    @abstractmethod
    async def create(self, entry: JobHistoryEntry) -> JobHistoryEntry:
        pass

    @abstractmethod
    async def get_by_id(self, entry_id: int) -> Optional[JobHistoryEntry]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[JobHistoryEntry]:
        """Entries of a user, newest first"""
        pass

    @abstractmethod
    async def delete(self, entry_id: int) -> bool:
        pass
